"""Registro de sessões de busca (uma por usuário, criada sob demanda)."""

from __future__ import annotations

import logging
from collections.abc import Callable

from app.sessions.search_session import SearchSession

logger = logging.getLogger(__name__)

SessionFactory = Callable[[str], SearchSession]


class SessionRegistry:
    """Mantém as sessões ativas em memória do processo."""

    def __init__(self, factory: SessionFactory) -> None:
        self._factory = factory
        self._sessions: dict[str, SearchSession] = {}

    def get(self, user_id: str) -> SearchSession | None:
        return self._sessions.get(user_id)

    def get_or_create(self, user_id: str) -> SearchSession:
        session = self._sessions.get(user_id)
        if session is None:
            session = self._factory(user_id)
            self._sessions[user_id] = session
            logger.debug("search_session_created", extra={"user_id": user_id})
        return session

    async def discard(self, user_id: str) -> bool:
        session = self._sessions.pop(user_id, None)
        if session is None:
            return False
        await session.close()
        return True

    async def close_all(self) -> None:
        for user_id in list(self._sessions):
            await self.discard(user_id)

    def __len__(self) -> int:
        return len(self._sessions)
