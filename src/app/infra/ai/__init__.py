"""Implementações concretas de IO para IA."""

from app.infra.ai.gemini_client import GeminiClient

__all__ = [
    "GeminiClient",
]
