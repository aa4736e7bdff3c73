"""Search orchestrator - debounced query execution with stale-result dropping."""

import asyncio
import logging
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, Optional

from ..errors import DimensionalityMismatchError, QueryExecutionError
from ..models.document import SourceKind
from ..models.search import (
    HistoryEntry,
    SearchAnalytics,
    SearchFilters,
    SearchHistory,
    SearchHit,
    SearchResponse,
    SearchState,
)
from ..protocols.backend import SearchBackendProtocol
from ..protocols.listener import SearchListener
from ..protocols.scheduler import SchedulerProtocol, TimerHandle

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Drives a search backend from query-text changes.

    Only the most recent keystroke schedules a query, and only the response
    to the most recently dispatched query is ever applied. Responses to older
    dispatches are dropped whatever order they complete in.
    """

    def __init__(
        self,
        backend: SearchBackendProtocol,
        scheduler: Optional[SchedulerProtocol] = None,
        debounce_seconds: float = 0.3,
        history_limit: int = 10,
        listener: Optional[SearchListener] = None,
        filters: Optional[SearchFilters] = None,
    ):
        """Initialize orchestrator.

        Args:
            backend: Backend that answers queries.
            scheduler: Timer source. Defaults to the running asyncio loop.
            debounce_seconds: Quiet interval before a query is dispatched.
            history_limit: Maximum number of remembered queries.
            listener: Display collaborator notified of updates.
            filters: Initial content filters and ranking options.
        """
        self._backend = backend
        self._scheduler = scheduler
        self._debounce_seconds = debounce_seconds
        self._listener = listener
        self._filters = filters or SearchFilters()
        self._history = SearchHistory(max_entries=history_limit)

        self._state = SearchState.IDLE
        self._query = ""
        self._timer: Optional[TimerHandle] = None
        self._last_dispatched_id = 0
        self._awaited_id: Optional[int] = None
        self._in_flight: set[asyncio.Task] = set()

        self._results: list[SearchHit] = []
        self._analytics: Optional[SearchAnalytics] = None
        self._error: Optional[str] = None

    @property
    def scheduler(self) -> SchedulerProtocol:
        """Lazy default scheduler."""
        if self._scheduler is None:
            from docsearch.infrastructure.scheduling.asyncio_scheduler import (
                AsyncioScheduler,
            )

            self._scheduler = AsyncioScheduler()
        return self._scheduler

    @property
    def listener(self) -> Optional[SearchListener]:
        return self._listener

    @listener.setter
    def listener(self, listener: Optional[SearchListener]) -> None:
        self._listener = listener

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def query(self) -> str:
        return self._query

    @property
    def results(self) -> list[SearchHit]:
        return list(self._results)

    @property
    def analytics(self) -> Optional[SearchAnalytics]:
        return self._analytics

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def filters(self) -> SearchFilters:
        return self._filters

    @property
    def last_dispatched_id(self) -> int:
        return self._last_dispatched_id

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    def set_query(self, text: str) -> None:
        """Handle a query-text change.

        A blank query clears the results immediately and dispatches nothing.
        Any other text (re)starts the debounce timer.
        """
        self._query = text
        self._cancel_timer()

        if not text.strip():
            self._clear()
            return

        self._schedule()

    def set_filters(
        self, source_kinds: Optional[Iterable[SourceKind | str]] = None
    ) -> None:
        """Restrict results to the given source kinds; None lifts the restriction.

        A non-blank query is searched again after the debounce interval.
        """
        kinds = tuple(source_kinds) if source_kinds is not None else None
        self._update_filters(replace(self._filters, source_kinds=kinds))

    def set_options(self, use_vector: bool = True) -> None:
        """Toggle vector similarity in ranking.

        A non-blank query is searched again after the debounce interval.
        """
        self._update_filters(replace(self._filters, use_vector=use_vector))

    async def search_now(self, text: str) -> None:
        """Dispatch immediately, skipping the debounce, and wait for the outcome."""
        self._query = text
        self._cancel_timer()

        if not text.strip():
            self._clear()
            return

        await self._dispatch(text)

    def reset(self) -> None:
        """Clear query, results, errors and filters.

        History and ranking options are kept.
        """
        self._query = ""
        self._filters = SearchFilters(use_vector=self._filters.use_vector)
        self._cancel_timer()
        self._clear()

    async def drain(self) -> None:
        """Wait until no dispatched query is in flight."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight))

    def get_history(self) -> list[str]:
        return self._history.queries()

    def history_entries(self) -> list[HistoryEntry]:
        return list(self._history.entries)

    def clear_history(self) -> None:
        self._history.clear()

    def _update_filters(self, filters: SearchFilters) -> None:
        if filters == self._filters:
            return
        self._filters = filters
        logger.debug(f"Filters changed: {filters}")

        if self._query.strip():
            self._cancel_timer()
            self._schedule()

    def _schedule(self) -> None:
        self._timer = self.scheduler.call_later(self._debounce_seconds, self._on_timer)
        self._set_state(SearchState.DEBOUNCING)

    def _on_timer(self) -> None:
        self._timer = None
        self._dispatch(self._query)

    def _dispatch(self, query: str) -> asyncio.Task:
        self._last_dispatched_id += 1
        query_id = self._last_dispatched_id
        self._awaited_id = query_id
        self._set_state(SearchState.QUERYING)

        task = asyncio.get_running_loop().create_task(
            self._execute(query_id, query, self._filters)
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

        logger.debug(f"Dispatched query #{query_id}: '{query[:50]}'")
        return task

    async def _execute(self, query_id: int, query: str, filters: SearchFilters) -> None:
        started = time.perf_counter()
        try:
            response = await self._backend.search(query, filters)
        except QueryExecutionError as e:
            self._on_failure(query_id, query, e.message)
            return
        except DimensionalityMismatchError as e:
            # Programmer error: surface it, but do not leave the session querying.
            self._on_failure(query_id, query, e.message)
            raise
        except Exception as e:
            logger.exception(f"Unexpected backend error for query #{query_id}")
            self._on_failure(query_id, query, str(e) or type(e).__name__)
            return

        if self._is_stale(query_id):
            logger.debug(
                f"Dropped stale result of query #{query_id} "
                f"(latest is #{self._last_dispatched_id})"
            )
            return

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._apply(query, response, elapsed_ms)

    def _is_stale(self, query_id: int) -> bool:
        return query_id != self._awaited_id

    def _on_failure(self, query_id: int, query: str, message: str) -> None:
        if self._is_stale(query_id):
            logger.debug(f"Dropped stale failure of query #{query_id}: {message}")
            return
        self._fail(query, message)

    def _apply(self, query: str, response: SearchResponse, elapsed_ms: float) -> None:
        self._results = list(response.hits)
        self._analytics = response.analytics
        self._error = None

        self._history.add(
            HistoryEntry(
                query=query.strip(),
                timestamp=datetime.now(timezone.utc),
                result_count=len(response.hits),
                execution_time_ms=(
                    response.analytics.execution_time_ms
                    if response.analytics
                    else elapsed_ms
                ),
            )
        )
        self._settle(SearchState.IDLE)

        if self._listener:
            self._listener.on_results(query, response)

    def _fail(self, query: str, message: str) -> None:
        logger.error(f"Search failed for '{query[:50]}': {message}")
        self._error = message
        self._settle(SearchState.ERROR)

        if self._listener:
            self._listener.on_error(query, message)

    def _clear(self) -> None:
        # Responses still in flight must not repopulate cleared results.
        self._awaited_id = None
        self._results = []
        self._analytics = None
        self._error = None
        self._set_state(SearchState.IDLE)

        if self._listener:
            self._listener.on_clear()

    def _settle(self, state: SearchState) -> None:
        # A newer keystroke is already waiting on the timer.
        self._set_state(SearchState.DEBOUNCING if self._timer else state)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _set_state(self, state: SearchState) -> None:
        if state is not self._state:
            logger.debug(f"State: {self._state.value} -> {state.value}")
            self._state = state
