"""Redis History Store — histórico de buscas por usuário.

Cada usuário tem uma lista Redis (LPUSH + LTRIM): mais recentes primeiro,
limitada a `max_items`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from app.protocols.history_store import (
    DEFAULT_HISTORY_LIMIT,
    HistoryStoreProtocol,
    SearchHistoryItem,
)

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from ai.models.search_params import SearchParams

logger = logging.getLogger(__name__)

# Prefixo para namespace do histórico
HISTORY_PREFIX = "history:"


class RedisHistoryStore(HistoryStoreProtocol):
    """Store de histórico usando redis.asyncio.

    Args:
        redis_client: Cliente Redis assíncrono
        max_items: Limite de itens por usuário
    """

    def __init__(
        self,
        redis_client: AsyncRedis,
        max_items: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self._redis = redis_client
        self._max_items = max_items

    def _key(self, user_id: str) -> str:
        """Gera chave Redis com namespace."""
        return f"{HISTORY_PREFIX}{user_id}"

    async def list(self, user_id: str) -> list[SearchHistoryItem]:
        raw_items = await self._redis.lrange(self._key(user_id), 0, self._max_items - 1)
        items: list[SearchHistoryItem] = []
        for raw in raw_items:
            try:
                items.append(SearchHistoryItem.model_validate_json(raw))
            except ValidationError as e:
                logger.warning(
                    "history_item_load_error",
                    extra={"user_id": user_id, "error": str(e)[:200]},
                )
        return items

    async def add(self, user_id: str, params: SearchParams, count: int) -> SearchHistoryItem:
        item = SearchHistoryItem(params=params, result_count=count)
        key = self._key(user_id)
        await self._redis.lpush(key, item.model_dump_json())
        await self._redis.ltrim(key, 0, self._max_items - 1)
        logger.debug("history_item_saved", extra={"user_id": user_id, "item_id": item.id})
        return item

    async def delete(self, user_id: str, item_id: str) -> bool:
        key = self._key(user_id)
        raw_items = await self._redis.lrange(key, 0, -1)
        for raw in raw_items:
            try:
                item = SearchHistoryItem.model_validate_json(raw)
            except ValidationError:
                continue
            if item.id == item_id:
                removed = await self._redis.lrem(key, 1, raw)
                return bool(removed)
        return False

    async def clear(self, user_id: str) -> None:
        await self._redis.delete(self._key(user_id))
