"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.history_store import (
    DEFAULT_HISTORY_LIMIT,
    HistoryStoreProtocol,
    SearchHistoryItem,
)

if TYPE_CHECKING:
    from ai.models.search_params import SearchParams


class MemoryHistoryStore(HistoryStoreProtocol):
    """Histórico de buscas em memória — apenas para dev/test."""

    def __init__(self, max_items: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._items: dict[str, list[SearchHistoryItem]] = {}  # user_id -> mais recentes primeiro
        self._max_items = max_items

    async def list(self, user_id: str) -> list[SearchHistoryItem]:
        return list(self._items.get(user_id, []))

    async def add(self, user_id: str, params: SearchParams, count: int) -> SearchHistoryItem:
        item = SearchHistoryItem(params=params, result_count=count)
        items = self._items.setdefault(user_id, [])
        items.insert(0, item)
        del items[self._max_items :]
        return item

    async def delete(self, user_id: str, item_id: str) -> bool:
        items = self._items.get(user_id, [])
        for index, item in enumerate(items):
            if item.id == item_id:
                del items[index]
                return True
        return False

    async def clear(self, user_id: str) -> None:
        self._items.pop(user_id, None)
