"""
Estados da sessão de busca de prospecção.

A paginação ("carregar mais") não é um estado próprio: é um sub-estado
sinalizado na sessão enquanto ela permanece em RESULTS.
"""

from enum import StrEnum


class SearchState(StrEnum):
    """
    Estados de uma sessão de busca.

    - IDLE: Nenhuma busca iniciada
    - SEARCHING: Busca inicial em andamento
    - RESULTS: Busca concluída (inclusive com zero resultados)
    - ERROR: Busca falhou (mensagem normalizada na sessão)
    """

    IDLE = "IDLE"
    SEARCHING = "SEARCHING"
    RESULTS = "RESULTS"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


# Estados em que uma busca terminou (com ou sem sucesso)
SETTLED_STATES: frozenset[SearchState] = frozenset({
    SearchState.RESULTS,
    SearchState.ERROR,
})

DEFAULT_INITIAL_STATE: SearchState = SearchState.IDLE


def is_settled(state: SearchState) -> bool:
    """Verifica se a busca já terminou (RESULTS ou ERROR)."""
    return state in SETTLED_STATES
