"""Retry com backoff exponencial para falhas transitórias do upstream.

Único mecanismo de retry do sistema; usado apenas na chamada de IA.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

from utils.errors import UpstreamTransientError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_STATUS_CODES = frozenset({500, 503})
TRANSIENT_STATUS_NAMES = frozenset({"INTERNAL", "UNAVAILABLE"})


def is_transient_error(error: BaseException) -> bool:
    """Verifica se o erro sinaliza falha transitória do servidor.

    Aceita a variante tipada (UpstreamTransientError) e erros que exponham
    status HTTP-like (`status_code`/`code`) ou código textual (`status`).
    """
    if isinstance(error, UpstreamTransientError):
        return True

    for attr in ("status_code", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and value in TRANSIENT_STATUS_CODES:
            return True

    status = getattr(error, "status", None)
    if isinstance(status, int):
        return status in TRANSIENT_STATUS_CODES
    return isinstance(status, str) and status.upper() in TRANSIENT_STATUS_NAMES


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    initial_delay_ms: int = 1000,
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> T:
    """Executa operação com retry para erros transitórios.

    Em falha transitória com retries disponíveis, aguarda
    `initial_delay_ms` e tenta de novo dobrando o atraso. Erros não
    transitórios, ou retries esgotados, propagam sem alteração.

    Args:
        operation: Fábrica da corrotina a executar
        max_retries: Retries restantes
        initial_delay_ms: Atraso antes do próximo retry
        sleep: Função de espera (injetável em testes)

    Returns:
        Valor retornado pela operação
    """
    retries_left = max_retries
    delay_ms = initial_delay_ms
    while True:
        try:
            return await operation()
        except Exception as e:
            if retries_left <= 0 or not is_transient_error(e):
                raise
            logger.warning(
                "upstream_retry_scheduled",
                extra={
                    "delay_ms": delay_ms,
                    "retries_left": retries_left - 1,
                    "error_type": type(e).__name__,
                },
            )
            await sleep(delay_ms / 1000)
            retries_left -= 1
            delay_ms *= 2
