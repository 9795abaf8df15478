"""Serviços do módulo AI.

Exporta o cliente de prospecção e o acumulador de lotes.
"""

from ai.services.batch_accumulator import BatchAccumulator
from ai.services.prospect_client import ProspectClient

__all__ = [
    "BatchAccumulator",
    "ProspectClient",
]
