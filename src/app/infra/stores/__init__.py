"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - redis_history_store: Histórico de buscas usando Redis
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryHistoryStore
from app.infra.stores.redis_history_store import RedisHistoryStore

__all__ = [
    # Memory (dev/test)
    "MemoryHistoryStore",
    # Redis
    "RedisHistoryStore",
]
