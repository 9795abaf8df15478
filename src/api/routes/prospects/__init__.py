"""Rotas da sessão de busca de prospects."""

from api.routes.prospects.router import router

__all__ = ["router"]
