"""Normalização de erros para mensagens legíveis ao usuário.

Erros opacos (objeto vazio, mensagem vazia) viram uma mensagem genérica
em vez de `{}` ou similares.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from utils.errors import ConfigurationError, UpstreamError

GENERIC_UPSTREAM_MESSAGE = "Ocorreu um erro interno na API. Tente novamente."
CONFIGURATION_MESSAGE = "Chave de API não configurada. Contate o administrador."
LOAD_MORE_PREFIX = "Erro ao carregar mais: "

_OPAQUE_MESSAGES = frozenset({"", "{}", "[]", "[object Object]", "None", "null"})


def _message_from_mapping(data: Mapping[str, Any]) -> str | None:
    message = data.get("message")
    if message:
        return str(message)
    nested = data.get("error")
    if isinstance(nested, Mapping) and nested.get("message"):
        return str(nested["message"])
    if isinstance(nested, str) and nested:
        return nested
    return None


def _raw_message(error: object) -> str:
    if error is None:
        return ""
    if isinstance(error, str):
        return error
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, Mapping):
        message = _message_from_mapping(error)
        if message is not None:
            return message
        try:
            return json.dumps(error, ensure_ascii=False)
        except (TypeError, ValueError):
            return ""
    message = getattr(error, "message", None)
    if message:
        return str(message)
    return str(error)


def normalize_error_message(error: object) -> str:
    """Reduz qualquer erro capturado a uma mensagem legível.

    Args:
        error: Exceção, string, dict ou objeto arbitrário

    Returns:
        Mensagem não vazia
    """
    if isinstance(error, ConfigurationError) and not str(error).strip():
        return CONFIGURATION_MESSAGE
    message = _raw_message(error).strip()
    if message in _OPAQUE_MESSAGES:
        return GENERIC_UPSTREAM_MESSAGE
    if isinstance(error, UpstreamError) and message.startswith("{"):
        return GENERIC_UPSTREAM_MESSAGE
    return message


def load_more_notice(error: object) -> str:
    """Mensagem de aviso para falha na paginação."""
    return f"{LOAD_MORE_PREFIX}{normalize_error_message(error)}"
