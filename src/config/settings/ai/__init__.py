"""Agregador de settings de IA.

Re-exporta todas as settings de IA para uso externo.
"""

from __future__ import annotations

from config.settings.ai.gemini import (
    GEMINI_API_BASE_URL,
    GeminiSettings,
    get_gemini_settings,
)

__all__ = [
    "GEMINI_API_BASE_URL",
    # Gemini
    "GeminiSettings",
    "get_gemini_settings",
]
