"""Módulo de sessões de busca.

Exporta a sessão, o registro por usuário e os modelos de leitura.
"""

from app.sessions.models import LoadMoreOutcome, LoadMoreStatus, SessionSnapshot
from app.sessions.registry import SessionRegistry
from app.sessions.search_session import (
    NO_NEW_CONTACTS_NOTICE,
    SearchSession,
)

__all__ = [
    "NO_NEW_CONTACTS_NOTICE",
    "LoadMoreOutcome",
    "LoadMoreStatus",
    "SearchSession",
    "SessionRegistry",
    "SessionSnapshot",
]
