"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.history import (
    HistoryBackend,
    HistorySettings,
    get_history_settings,
)

__all__ = [
    # Core
    "BaseSettings",
    # Types
    "Environment",
    "HistoryBackend",
    # History
    "HistorySettings",
    "get_base_settings",
    "get_history_settings",
]
