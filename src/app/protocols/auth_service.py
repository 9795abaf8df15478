"""Protocolo do serviço de autenticação (colaborador opaco)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AuthServiceProtocol(ABC):
    """Expõe o usuário corrente; a sessão de busca exige um usuário não nulo."""

    @abstractmethod
    def current_user(self) -> str | None: ...


class HeaderAuthService(AuthServiceProtocol):
    """Identidade já resolvida a partir de um header da requisição."""

    __slots__ = ("_user_id",)

    def __init__(self, user_id: str | None) -> None:
        self._user_id = (user_id or "").strip() or None

    def current_user(self) -> str | None:
        return self._user_id
