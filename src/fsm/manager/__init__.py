"""
Exports públicos do módulo fsm/manager.

Máquina de estados (SearchStateMachine) da sessão de busca.
"""

from fsm.manager.machine import (
    MAX_HISTORY,
    SearchStateMachine,
    create_search_fsm,
)

__all__ = [
    "MAX_HISTORY",
    "SearchStateMachine",
    "create_search_fsm",
]
