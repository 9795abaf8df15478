"""Composition root do Prospector IA.

Configura logging, valida settings no startup e expõe os singletons
(transporte Gemini, store de histórico, registro de sessões) usados
pelas rotas.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_gemini_settings, get_history_settings
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from app.infra.ai.gemini_client import GeminiClient
    from app.protocols.history_store import HistoryStoreProtocol
    from app.sessions.registry import SessionRegistry

STRICT_VALIDATION_ENVS = frozenset({"staging", "production"})

logger = logging.getLogger(__name__)


def resolve_log_level() -> str:
    """LOG_LEVEL explícito vence; sem ele, DEBUG=true liga nível DEBUG."""
    explicit = os.getenv("LOG_LEVEL", "").strip()
    if explicit:
        return explicit.upper()
    return "DEBUG" if get_base_settings().debug else "INFO"


def initialize_app() -> None:
    """Configura logging JSON com correlation_id (uma vez, no import do app)."""
    configure_logging(
        level=resolve_log_level(),
        service_name=get_base_settings().service_name,
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> list[str]:
    """Erros de todas as settings, prefixados pela origem."""
    base = get_base_settings()
    errors = [f"base: {error}" for error in base.validate()]
    errors += [f"gemini: {error}" for error in get_gemini_settings().validate()]
    errors += [f"history: {error}" for error in get_history_settings().validate(base)]
    return errors


def validate_runtime_settings() -> None:
    """Valida settings no startup.

    Staging/production: qualquer erro impede o boot (ConfigurationError).
    Development: apenas loga o alerta.
    """
    environment = get_base_settings().environment
    errors = collect_settings_errors()
    log_extra = {"component": "bootstrap", "environment": environment}

    if not errors:
        logger.info("settings_validated", extra=log_extra)
        return

    logger.warning(
        "settings_validation_failed",
        extra={**log_extra, "error_count": len(errors), "errors": errors},
    )
    if environment in STRICT_VALIDATION_ENVS:
        details = "; ".join(errors)
        raise ConfigurationError(f"Configuração inválida para {environment}: {details}")


@lru_cache(maxsize=1)
def get_history_store() -> HistoryStoreProtocol:
    from app.bootstrap.dependencies import create_history_store

    return create_history_store()


@lru_cache(maxsize=1)
def get_transport() -> GeminiClient:
    from app.bootstrap.dependencies import create_transport

    return create_transport()


@lru_cache(maxsize=1)
def get_session_registry() -> SessionRegistry:
    """Registro de sessões ligado ao acumulador e ao histórico singletons."""
    from app.bootstrap.dependencies import create_batch_accumulator, create_session_registry

    return create_session_registry(
        create_batch_accumulator(get_transport()),
        get_history_store(),
    )
