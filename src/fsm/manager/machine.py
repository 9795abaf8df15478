"""
Máquina de estados (SearchStateMachine) da sessão de busca.

Valida transições e mantém histórico auditável.
"""

import logging
from typing import Any

from fsm.states.search import DEFAULT_INITIAL_STATE, SearchState, is_settled
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult

logger = logging.getLogger(__name__)

# Histórico é limitado para sessões longas
MAX_HISTORY = 100


class SearchStateMachine:
    """
    Máquina de estados de uma sessão de busca.

    Attributes:
        current_state: Estado atual
        history: Transições realizadas (mais antigas primeiro)
    """

    __slots__ = ("_current_state", "_history", "_session_id")

    def __init__(
        self,
        initial_state: SearchState | None = None,
        session_id: str = "",
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._session_id = session_id

    @property
    def current_state(self) -> SearchState:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia)."""
        return list(self._history)

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def is_settled(self) -> bool:
        return is_settled(self._current_state)

    def get_valid_targets(self) -> frozenset[SearchState]:
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: SearchState,
        trigger: str,
        *,
        request_id: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho
            request_id: Request id vigente
            metadata: Dados adicionais (nunca PII)

        Returns:
            TransitionResult com sucesso/falha
        """
        if not is_transition_valid(self._current_state, target):
            reason = f"Transição inválida: {self._current_state.name} → {target.name}"
            logger.warning(
                "search_transition_rejected",
                extra={
                    "session_id": self._session_id,
                    "from_state": self._current_state.name,
                    "to_state": target.name,
                    "trigger": trigger,
                },
            )
            return TransitionResult(success=False, error_reason=reason)

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            request_id=request_id,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)
        if len(self._history) > MAX_HISTORY:
            del self._history[: len(self._history) - MAX_HISTORY]

        logger.debug("search_transition", extra=transition.to_log_dict())
        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo do estado atual para observability."""
        return {
            "session_id": self._session_id,
            "current_state": self._current_state.name,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.name for s in self.get_valid_targets()),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        return [t.to_log_dict() for t in self._history]


def create_search_fsm(
    session_id: str,
    initial_state: SearchState | None = None,
) -> SearchStateMachine:
    """Factory da máquina de estados de busca."""
    return SearchStateMachine(initial_state=initial_state, session_id=session_id)
