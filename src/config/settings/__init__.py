"""Agregador de settings do Prospector IA.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# AI/LLM settings
from config.settings.ai import (
    GEMINI_API_BASE_URL,
    GeminiSettings,
    get_gemini_settings,
)

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    HistoryBackend,
    HistorySettings,
    get_base_settings,
    get_history_settings,
)

__all__ = [
    "GEMINI_API_BASE_URL",
    # Base
    "BaseSettings",
    "Environment",
    # AI
    "GeminiSettings",
    "HistoryBackend",
    "HistorySettings",
    "get_base_settings",
    "get_gemini_settings",
    "get_history_settings",
]
