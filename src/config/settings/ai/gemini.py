"""Settings do Gemini.

Configurações para integração com a API Generative Language (Gemini).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class GeminiSettings:
    """Configurações do Gemini.

    Attributes:
        api_key: Chave da API
        base_url: URL base da API REST
        model: Modelo padrão (camada STANDARD)
        fast_model: Modelo da camada FAST
        timeout_seconds: Timeout para chamadas à API
        enabled: Se integração está habilitada
    """

    api_key: str = ""
    base_url: str = GEMINI_API_BASE_URL
    model: str = "gemini-2.5-flash"
    fast_model: str = "gemini-2.5-flash-lite"
    timeout_seconds: float = 120.0
    enabled: bool = True

    def validate(self) -> list[str]:
        """Valida configurações do Gemini.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.enabled and not self.api_key:
            errors.append("GEMINI_API_KEY não configurado mas GEMINI_ENABLED=true")

        if self.timeout_seconds <= 0:
            errors.append("GEMINI_TIMEOUT_SECONDS deve ser > 0")

        if not self.base_url.startswith("http"):
            errors.append("GEMINI_BASE_URL deve ser uma URL http(s)")

        return errors


def _load_gemini_from_env() -> GeminiSettings:
    """Carrega GeminiSettings de variáveis de ambiente."""
    return GeminiSettings(
        api_key=os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", "")),
        base_url=os.getenv("GEMINI_BASE_URL", GEMINI_API_BASE_URL).rstrip("/"),
        model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        fast_model=os.getenv("GEMINI_FAST_MODEL", "gemini-2.5-flash-lite"),
        timeout_seconds=float(os.getenv("GEMINI_TIMEOUT_SECONDS", "120")),
        enabled=os.getenv("GEMINI_ENABLED", "true").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_gemini_settings() -> GeminiSettings:
    """Retorna instância cacheada de GeminiSettings."""
    return _load_gemini_from_env()
