"""Sessão de busca — máquina de estados da prospecção por usuário.

Estados: IDLE → SEARCHING → {RESULTS | ERROR}; RESULTS/ERROR voltam a
SEARCHING numa nova busca. A paginação é um sub-estado (`loading_more`)
de RESULTS.

Cancelamento é cooperativo: toda ação incrementa o request id e cada
chamada compara o id capturado ao resolver. Resultado com id antigo é
descartado sem alterar a sessão.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from ai.services.batch_accumulator import filter_new_contacts
from app.services.error_messages import load_more_notice, normalize_error_message
from app.sessions.models import LoadMoreOutcome, LoadMoreStatus, SessionSnapshot
from fsm.manager import SearchStateMachine, create_search_fsm
from fsm.states import SearchState
from utils.errors import SearchValidationError

if TYPE_CHECKING:
    from ai.models.contact import ContactRecord
    from ai.models.search_params import LatLng, SearchParams
    from ai.services.batch_accumulator import BatchAccumulator
    from app.protocols.history_store import HistoryStoreProtocol

logger = logging.getLogger(__name__)

NO_NEW_CONTACTS_NOTICE = "Não foram encontrados novos contatos mesmo expandindo a área."
NOT_READY_NOTICE = "Realize uma busca antes de carregar mais resultados."


class SearchSession:
    """Sessão de busca de um usuário.

    Args:
        user_id: Identidade do usuário (não nula)
        accumulator: Executor da busca em rodadas
        history_store: Persistência do histórico (fire-and-forget)
        tick_seconds: Intervalo do contador de tempo decorrido
    """

    def __init__(
        self,
        user_id: str,
        accumulator: BatchAccumulator,
        history_store: HistoryStoreProtocol,
        *,
        tick_seconds: float = 1.0,
    ) -> None:
        if not user_id:
            raise ValueError("user_id é obrigatório")
        self._user_id = user_id
        self._accumulator = accumulator
        self._history_store = history_store
        self._tick_seconds = tick_seconds

        self._fsm: SearchStateMachine = create_search_fsm(session_id=user_id)
        self._request_id = 0
        self._params: SearchParams | None = None
        self._lat_lng: LatLng | None = None
        self._results: list[ContactRecord] = []
        self._error_message: str | None = None
        self._notice: str | None = None
        self._loading_more = False
        self._elapsed_seconds = 0
        self._ticker: asyncio.Task[None] | None = None
        self._background_tasks: set[asyncio.Task[None]] = set()

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def state(self) -> SearchState:
        return self._fsm.current_state

    @property
    def request_id(self) -> int:
        return self._request_id

    @property
    def loading_more(self) -> bool:
        return self._loading_more

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed_seconds

    @property
    def results(self) -> list[ContactRecord]:
        return list(self._results)

    @property
    def state_machine(self) -> SearchStateMachine:
        return self._fsm

    def snapshot(self) -> SessionSnapshot:
        """Visão somente leitura do estado atual."""
        return SessionSnapshot(
            user_id=self._user_id,
            state=self._fsm.current_state,
            request_id=self._request_id,
            elapsed_seconds=self._elapsed_seconds,
            loading_more=self._loading_more,
            params=self._params,
            results=tuple(self._results),
            error_message=self._error_message,
            notice=self._notice,
        )

    # ──────────────────────────────────────────────────────────────
    # Busca inicial
    # ──────────────────────────────────────────────────────────────

    async def start_search(
        self,
        params: SearchParams,
        *,
        lat_lng: LatLng | None = None,
    ) -> SessionSnapshot:
        """Inicia uma nova busca (invalida qualquer ação em andamento).

        Raises:
            SearchValidationError: location/niche ausentes (sessão inalterada)
        """
        missing = params.missing_required_fields()
        if missing:
            raise SearchValidationError(missing)

        self._request_id += 1
        request_id = self._request_id
        self._params = params
        self._lat_lng = lat_lng
        self._results = []
        self._error_message = None
        self._notice = None
        self._loading_more = False
        self._elapsed_seconds = 0
        self._fsm.transition(SearchState.SEARCHING, "start_search", request_id=request_id)
        self._start_ticker()

        logger.info(
            "search_started",
            extra={
                "user_id": self._user_id,
                "request_id": request_id,
                "fast_mode": params.fast_mode,
                "deep_search": params.deep_search_active,
            },
        )

        try:
            contacts = await self._accumulator.search(params, lat_lng=lat_lng)
        except Exception as e:
            if self._is_stale(request_id):
                return self.snapshot()
            self._stop_ticker()
            self._error_message = normalize_error_message(e)
            self._fsm.transition(
                SearchState.ERROR,
                "search_failed",
                request_id=request_id,
                metadata={"error_type": type(e).__name__},
            )
            logger.warning(
                "search_failed",
                extra={
                    "user_id": self._user_id,
                    "request_id": request_id,
                    "error_type": type(e).__name__,
                },
            )
            return self.snapshot()

        if self._is_stale(request_id):
            return self.snapshot()

        self._stop_ticker()
        self._results = list(contacts)
        self._fsm.transition(
            SearchState.RESULTS,
            "search_completed",
            request_id=request_id,
            metadata={"result_count": len(self._results)},
        )
        logger.info(
            "search_completed",
            extra={
                "user_id": self._user_id,
                "request_id": request_id,
                "result_count": len(self._results),
                "elapsed_seconds": self._elapsed_seconds,
            },
        )
        if self._results:
            self._record_history(params, len(self._results))
        return self.snapshot()

    # ──────────────────────────────────────────────────────────────
    # Paginação
    # ──────────────────────────────────────────────────────────────

    async def load_more(self) -> LoadMoreOutcome:
        """Busca mais contatos excluindo os já exibidos.

        Chamado durante uma paginação em andamento, cancela-a.
        """
        if self._loading_more:
            self._request_id += 1
            self._finish_loading_more()
            logger.info(
                "load_more_cancelled",
                extra={"user_id": self._user_id, "request_id": self._request_id},
            )
            return LoadMoreOutcome(status=LoadMoreStatus.CANCELLED, total=len(self._results))

        if self._fsm.current_state is not SearchState.RESULTS or self._params is None:
            return LoadMoreOutcome(
                status=LoadMoreStatus.IGNORED,
                total=len(self._results),
                notice=NOT_READY_NOTICE,
            )

        self._request_id += 1
        request_id = self._request_id
        base_params = self._params
        self._notice = None
        self._loading_more = True
        self._start_ticker()

        params = base_params.with_excluded_names(c.name for c in self._results)
        try:
            contacts = await self._accumulator.search(params, lat_lng=self._lat_lng)
        except Exception as e:
            if self._is_stale(request_id):
                return LoadMoreOutcome(status=LoadMoreStatus.STALE, total=len(self._results))
            self._finish_loading_more()
            self._notice = load_more_notice(e)
            logger.warning(
                "load_more_failed",
                extra={
                    "user_id": self._user_id,
                    "request_id": request_id,
                    "error_type": type(e).__name__,
                },
            )
            return LoadMoreOutcome(
                status=LoadMoreStatus.ERROR,
                total=len(self._results),
                notice=self._notice,
            )

        if self._is_stale(request_id):
            return LoadMoreOutcome(status=LoadMoreStatus.STALE, total=len(self._results))

        self._finish_loading_more()
        fresh = filter_new_contacts(contacts, {c.name for c in self._results})
        if not fresh:
            self._notice = NO_NEW_CONTACTS_NOTICE
            return LoadMoreOutcome(
                status=LoadMoreStatus.EMPTY,
                total=len(self._results),
                notice=self._notice,
            )

        self._results.extend(fresh)
        logger.info(
            "load_more_completed",
            extra={
                "user_id": self._user_id,
                "request_id": request_id,
                "added": len(fresh),
                "total": len(self._results),
            },
        )
        self._record_history(base_params, len(self._results))
        return LoadMoreOutcome(
            status=LoadMoreStatus.COMPLETED,
            added=len(fresh),
            total=len(self._results),
        )

    # ──────────────────────────────────────────────────────────────
    # Ciclo de vida
    # ──────────────────────────────────────────────────────────────

    async def wait_for_background_tasks(self) -> None:
        """Aguarda gravações pendentes de histórico."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)

    async def close(self) -> None:
        """Invalida ações em andamento e encerra o contador."""
        self._request_id += 1
        self._loading_more = False
        self._stop_ticker()
        await self.wait_for_background_tasks()

    # ──────────────────────────────────────────────────────────────
    # Internos
    # ──────────────────────────────────────────────────────────────

    def _is_stale(self, request_id: int) -> bool:
        if request_id == self._request_id:
            return False
        logger.info(
            "stale_result_discarded",
            extra={
                "user_id": self._user_id,
                "request_id": request_id,
                "current_request_id": self._request_id,
            },
        )
        return True

    def _finish_loading_more(self) -> None:
        self._loading_more = False
        self._stop_ticker()

    def _is_ticking(self) -> bool:
        return self._fsm.current_state is SearchState.SEARCHING or self._loading_more

    def _start_ticker(self) -> None:
        if self._ticker is None or self._ticker.done():
            self._ticker = asyncio.create_task(self._tick())

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    async def _tick(self) -> None:
        with contextlib.suppress(asyncio.CancelledError):
            while True:
                await asyncio.sleep(self._tick_seconds)
                if not self._is_ticking():
                    return
                self._elapsed_seconds += 1

    def _record_history(self, params: SearchParams, count: int) -> None:
        task = asyncio.create_task(self._add_history(params, count))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _add_history(self, params: SearchParams, count: int) -> None:
        try:
            await self._history_store.add(self._user_id, params, count)
        except Exception as e:
            logger.warning(
                "history_add_failed",
                extra={"user_id": self._user_id, "error_type": type(e).__name__},
            )
