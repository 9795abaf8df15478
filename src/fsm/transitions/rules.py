"""
Regras de transição válidas entre estados da sessão de busca.

Uma nova busca pode começar a partir de qualquer estado, inclusive
durante outra busca (a anterior é invalidada pelo request id).
"""

from fsm.states.search import SearchState

TransitionMap = dict[SearchState, frozenset[SearchState]]

VALID_TRANSITIONS: TransitionMap = {
    SearchState.IDLE: frozenset({
        SearchState.SEARCHING,
    }),
    SearchState.SEARCHING: frozenset({
        SearchState.SEARCHING,  # nova busca substitui a corrente
        SearchState.RESULTS,
        SearchState.ERROR,
    }),
    SearchState.RESULTS: frozenset({
        SearchState.SEARCHING,
    }),
    SearchState.ERROR: frozenset({
        SearchState.SEARCHING,
    }),
}


def get_valid_targets(state: SearchState) -> frozenset[SearchState]:
    """
    Retorna os estados de destino válidos para um estado de origem.

    Args:
        state: Estado de origem

    Returns:
        Conjunto de estados de destino permitidos
    """
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: SearchState, to_state: SearchState) -> bool:
    """Verifica se uma transição é permitida."""
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in SearchState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for from_state, targets in VALID_TRANSITIONS.items():
        for target in targets:
            if not isinstance(target, SearchState):
                errors.append(f"Transição {from_state.name} → {target}: destino inválido")

    # Todo estado precisa permitir recomeçar a busca
    for state in SearchState:
        if SearchState.SEARCHING not in VALID_TRANSITIONS.get(state, frozenset()):
            errors.append(f"Estado {state.name} não permite nova busca")

    return errors
