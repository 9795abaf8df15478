"""Core do módulo AI.

Exporta o protocolo do transporte. A implementação Gemini está em
app/infra/ai/ (IO).
"""

from ai.core.client import GroundedGenerationProtocol

__all__ = [
    "GroundedGenerationProtocol",
]
