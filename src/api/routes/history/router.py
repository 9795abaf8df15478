"""Endpoints do histórico de buscas do usuário."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from api.routes.dependencies import CurrentUser, History
from app.protocols.history_store import SearchHistoryItem

router = APIRouter()


@router.get("", response_model=list[SearchHistoryItem])
async def list_history(user_id: CurrentUser, store: History) -> list[SearchHistoryItem]:
    """Histórico do usuário (mais recentes primeiro)."""
    return await store.list(user_id)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_history_item(item_id: str, user_id: CurrentUser, store: History) -> None:
    if not await store.delete(user_id, item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item não encontrado")


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(user_id: CurrentUser, store: History) -> None:
    await store.clear(user_id)
