"""
Exports públicos do módulo fsm/types.

Tipos para transições da sessão de busca.
"""

from fsm.types.transition import StateTransition, TransitionResult

__all__ = [
    "StateTransition",
    "TransitionResult",
]
