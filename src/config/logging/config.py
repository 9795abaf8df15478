"""Configuração centralizada de logging.

Um único StreamHandler com formatter JSON, filter de contexto
(correlation_id + service) e filter que descarta dados de contato.
Bibliotecas HTTP ruidosas ficam em WARNING.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import ContactDataFilter, CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "prospector_ia"

# httpx/httpcore logam cada request em INFO (inclui URL com modelo)
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id
            do contexto atual (ContextVar de app/observability).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(ContactDataFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo (geralmente __name__)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    collected: int | None = None,
) -> None:
    """Registra caminho degradado sem PII.

    Usado quando o pipeline segue com resultado parcial ou vazio
    (ex: resposta sem JSON, rodada descartada por erro).

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "contact_parser").
        reason: Causa curta (ex: "no_json_array").
        collected: Quantidade de contatos preservados, quando aplicável.
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if collected is not None:
        extra["collected"] = collected

    logger.warning(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
