"""
Módulo FSM — Máquina de Estados da sessão de busca.

Estrutura:
    - states/: Estados (SearchState enum)
    - transitions/: Regras de transição (VALID_TRANSITIONS)
    - manager/: Máquina de estados (SearchStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

from fsm.manager import (
    MAX_HISTORY,
    SearchStateMachine,
    create_search_fsm,
)
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    SETTLED_STATES,
    SearchState,
    is_settled,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "MAX_HISTORY",
    "SETTLED_STATES",
    "VALID_TRANSITIONS",
    "SearchState",
    "SearchStateMachine",
    "StateTransition",
    "TransitionResult",
    "create_search_fsm",
    "get_valid_targets",
    "is_settled",
    "is_transition_valid",
    "validate_transition_map",
]
