"""Rotas do histórico de buscas."""

from api.routes.history.router import router

__all__ = ["router"]
