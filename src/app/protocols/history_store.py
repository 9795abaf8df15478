"""Protocolo de persistência do histórico de buscas."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from ai.models.search_params import SearchParams

# Itens mais antigos são descartados além deste limite (por usuário)
DEFAULT_HISTORY_LIMIT = 50


class SearchHistoryItem(BaseModel):
    """Registro imutável de uma busca bem-sucedida."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    params: SearchParams
    result_count: int = Field(ge=0)


class HistoryStoreProtocol(ABC):
    """Contrato assíncrono do histórico (mais recentes primeiro)."""

    @abstractmethod
    async def list(self, user_id: str) -> list[SearchHistoryItem]: ...

    @abstractmethod
    async def add(self, user_id: str, params: SearchParams, count: int) -> SearchHistoryItem: ...

    @abstractmethod
    async def delete(self, user_id: str, item_id: str) -> bool: ...

    @abstractmethod
    async def clear(self, user_id: str) -> None: ...
