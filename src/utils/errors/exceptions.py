"""Exceções de domínio da prospecção.

Variantes fechadas de falha definidas na fronteira do transporte de IA:
configuração, upstream transitório e upstream definitivo.
"""

from __future__ import annotations


class ProspectingError(RuntimeError):
    """Base para falhas do pipeline de prospecção."""


class ConfigurationError(ProspectingError):
    """Credencial ou configuração obrigatória ausente (fatal, sem retry)."""


class UpstreamError(ProspectingError):
    """Falha do serviço de IA upstream (não recuperável por retry).

    Attributes:
        status_code: Status HTTP retornado (quando disponível)
        status: Código textual do upstream (ex: "INVALID_ARGUMENT")
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        status: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status = status


class UpstreamTransientError(UpstreamError):
    """Falha transitória do upstream (500/503, INTERNAL/UNAVAILABLE)."""


class UpstreamEmptyResponse(ProspectingError):
    """Resposta do modelo sem payload de texto."""


class SearchValidationError(ProspectingError):
    """Parâmetros obrigatórios de busca ausentes (localização/nicho)."""

    def __init__(self, missing_fields: tuple[str, ...]) -> None:
        super().__init__(f"Campos obrigatórios ausentes: {', '.join(missing_fields)}")
        self.missing_fields = missing_fields
