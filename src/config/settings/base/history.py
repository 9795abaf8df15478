"""Settings do histórico de buscas.

Configurações para persistência do histórico por usuário.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

HistoryBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class HistorySettings:
    """Configurações do histórico de buscas.

    Attributes:
        backend: Backend de armazenamento (memory|redis)
        redis_url: URL de conexão Redis (quando backend=redis)
        max_items: Itens mantidos por usuário (mais recentes primeiro)
    """

    backend: HistoryBackend = "memory"
    redis_url: str = ""
    max_items: int = 50

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do histórico.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.max_items < 1:
            errors.append("HISTORY_MAX_ITEMS deve ser >= 1")

        if self.backend == "redis" and not self.redis_url:
            errors.append("REDIS_URL obrigatório quando HISTORY_BACKEND=redis")

        if self.backend == "memory" and not base.is_development:
            errors.append("HISTORY_BACKEND=memory proibido em staging/production")

        return errors


def _load_history_from_env() -> HistorySettings:
    """Carrega HistorySettings de variáveis de ambiente."""
    backend_str = os.getenv("HISTORY_BACKEND", "memory").lower()
    backend: HistoryBackend = backend_str if backend_str in ("memory", "redis") else "memory"
    return HistorySettings(
        backend=backend,
        redis_url=os.getenv("REDIS_URL", ""),
        max_items=int(os.getenv("HISTORY_MAX_ITEMS", "50")),
    )


@lru_cache(maxsize=1)
def get_history_settings() -> HistorySettings:
    """Retorna instância cacheada de HistorySettings."""
    return _load_history_from_env()
