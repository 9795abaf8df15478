"""Dependências FastAPI compartilhadas pelas rotas.

A identidade do usuário chega já autenticada no header `X-User-Id`;
requisições sem ele são recusadas (401).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from app.bootstrap import get_history_store, get_session_registry
from app.protocols.auth_service import AuthServiceProtocol, HeaderAuthService
from app.protocols.history_store import HistoryStoreProtocol
from app.sessions.registry import SessionRegistry

USER_ID_HEADER = "X-User-Id"


def get_auth_service(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> AuthServiceProtocol:
    return HeaderAuthService(x_user_id)


def get_current_user(
    auth: Annotated[AuthServiceProtocol, Depends(get_auth_service)],
) -> str:
    """Usuário corrente; 401 quando ausente."""
    user_id = auth.current_user()
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Header {USER_ID_HEADER} obrigatório",
        )
    return user_id


def get_registry() -> SessionRegistry:
    return get_session_registry()


def get_history() -> HistoryStoreProtocol:
    return get_history_store()


CurrentUser = Annotated[str, Depends(get_current_user)]
Registry = Annotated[SessionRegistry, Depends(get_registry)]
History = Annotated[HistoryStoreProtocol, Depends(get_history)]
