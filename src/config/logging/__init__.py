"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (app/bootstrap)
    configure_logging(level="INFO", service_name="prospector_ia")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("batch_round_completed", extra={"round": 1, "accepted": 12})

Todo log sai em JSON com correlation_id, service, level, logger, message
e asctime. Nomes de empresas não vão para os logs.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CONTACT_DATA_KEYS, ContactDataFilter, CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    LOG_FIELDS,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "CONTACT_DATA_KEYS",
    "FIELD_RENAME_MAP",
    "LOG_FIELDS",
    "REQUIRED_LOG_FIELDS",
    "ContactDataFilter",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
