"""Factories de dependências — criação de implementações concretas.

Centraliza o wiring entre protocolos e implementações com base nas
configurações de ambiente.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from ai.config.settings import get_prospecting_settings
from ai.services.batch_accumulator import BatchAccumulator
from ai.services.prospect_client import ProspectClient
from app.bootstrap.clients import create_async_redis_client
from app.infra.ai.gemini_client import GeminiClient
from app.infra.stores import MemoryHistoryStore, RedisHistoryStore
from app.sessions.registry import SessionRegistry
from app.sessions.search_session import SearchSession
from config.settings import get_base_settings, get_gemini_settings, get_history_settings

if TYPE_CHECKING:
    import httpx

    from ai.config.settings import ProspectingSettings
    from ai.core.client import GroundedGenerationProtocol
    from app.protocols.history_store import HistoryStoreProtocol
    from config.settings import HistorySettings

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# History Store Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_history_store(settings: HistorySettings | None = None) -> HistoryStoreProtocol:
    """Cria store de histórico conforme HISTORY_BACKEND.

    - "memory": MemoryHistoryStore (dev only)
    - "redis": RedisHistoryStore (staging/production)
    """
    cfg = settings or get_history_settings()

    if cfg.backend == "redis":
        store: HistoryStoreProtocol = RedisHistoryStore(
            create_async_redis_client(cfg.redis_url),
            max_items=cfg.max_items,
        )
        logger.info("history_store_created", extra={"backend": "redis"})
        return store

    environment = get_base_settings().environment
    if environment != "development":
        logger.warning(
            "memory_store_in_non_dev",
            extra={"backend": "memory", "environment": environment},
        )
    store = MemoryHistoryStore(max_items=cfg.max_items)
    logger.info("history_store_created", extra={"backend": "memory"})
    return store


# ──────────────────────────────────────────────────────────────────────────────
# Prospecting pipeline
# ──────────────────────────────────────────────────────────────────────────────


def create_transport(http_client: httpx.AsyncClient | None = None) -> GeminiClient:
    """Cria transporte Gemini (ConfigurationError só na primeira chamada)."""
    settings = get_gemini_settings()
    if not settings.api_key:
        logger.warning("gemini_api_key_missing", extra={"component": "bootstrap"})
    return GeminiClient(settings=settings, http_client=http_client)


def create_batch_accumulator(
    transport: GroundedGenerationProtocol,
    settings: ProspectingSettings | None = None,
) -> BatchAccumulator:
    """Monta ProspectClient + BatchAccumulator sobre o transporte."""
    cfg = settings or get_prospecting_settings()
    return BatchAccumulator(ProspectClient(transport, cfg), cfg)


def create_search_session(
    user_id: str,
    *,
    accumulator: BatchAccumulator,
    history_store: HistoryStoreProtocol,
) -> SearchSession:
    return SearchSession(user_id, accumulator, history_store)


def create_session_registry(
    accumulator: BatchAccumulator,
    history_store: HistoryStoreProtocol,
) -> SessionRegistry:
    """Registro de sessões compartilhando acumulador e histórico."""
    return SessionRegistry(
        partial(create_search_session, accumulator=accumulator, history_store=history_store)
    )
