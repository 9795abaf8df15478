"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (prospecção, histórico, health)
- Identificar o usuário (header X-User-Id)
- Delegar para a sessão de busca e para os stores
- Respostas HTTP apropriadas

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
