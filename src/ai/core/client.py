"""Protocolo do transporte de geração com grounding.

ai/ não faz IO direto: a chamada HTTP ao modelo fica em app/infra/ai.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ai.models.grounded_query import GroundedQuery, GroundedResponse


class GroundedGenerationProtocol(Protocol):
    """Contrato do transporte de IA (Gemini, mock, etc.).

    Falhas devem chegar já classificadas:
    - ConfigurationError: credencial ausente (antes de qualquer IO)
    - UpstreamTransientError: 500/503, INTERNAL/UNAVAILABLE, timeout
    - UpstreamError: demais falhas
    """

    @abstractmethod
    async def generate(self, query: GroundedQuery) -> GroundedResponse:
        """Executa uma chamada de geração com grounding.

        Args:
            query: Prompt, ferramentas, modelo e temperatura

        Returns:
            Texto bruto e citações de grounding
        """
        ...
