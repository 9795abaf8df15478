"""
Exports públicos do módulo fsm/states.

Estados da sessão de busca.
"""

from fsm.states.search import (
    DEFAULT_INITIAL_STATE,
    SETTLED_STATES,
    SearchState,
    is_settled,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "SETTLED_STATES",
    "SearchState",
    "is_settled",
]
