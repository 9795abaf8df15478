"""Modelos expostos pela sessão de busca (somente leitura)."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from ai.models.contact import ContactRecord
from ai.models.search_params import SearchParams
from fsm.states import SearchState


class LoadMoreStatus(StrEnum):
    """Desfecho de uma chamada de "carregar mais"."""

    COMPLETED = "completed"  # novos contatos mesclados
    EMPTY = "empty"  # nenhum contato novo (aviso informativo)
    CANCELLED = "cancelled"  # chamada cancelou uma paginação em andamento
    STALE = "stale"  # resultado descartado (substituído por outra ação)
    ERROR = "error"  # falha; resultados anteriores preservados
    IGNORED = "ignored"  # sessão fora de RESULTS


class SessionSnapshot(BaseModel):
    """Visão imutável do estado corrente da sessão."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    state: SearchState
    request_id: int
    elapsed_seconds: int
    loading_more: bool
    params: SearchParams | None = None
    results: tuple[ContactRecord, ...] = ()
    error_message: str | None = None
    notice: str | None = None

    @property
    def result_count(self) -> int:
        return len(self.results)


class LoadMoreOutcome(BaseModel):
    """Resultado de `SearchSession.load_more`."""

    model_config = ConfigDict(frozen=True)

    status: LoadMoreStatus
    added: int = 0
    total: int = 0
    notice: str | None = None
