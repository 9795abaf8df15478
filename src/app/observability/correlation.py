"""Gerenciamento de correlation_id para rastreamento de requisições.

O correlation_id chega pelo header `X-Correlation-Id` (ou é gerado) e é
injetado em todos os logs da requisição, inclusive nas rodadas de busca
disparadas por ela. Usa ContextVar (async-safe).

Uso:
    token = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

CORRELATION_ID_HEADER = "X-Correlation-Id"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual (gera UUID se None).

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = (correlation_id or "").strip() or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (hex de UUID v4)."""
    return uuid.uuid4().hex
