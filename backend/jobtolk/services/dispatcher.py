import logging
from enum import Enum
from typing import Awaitable, Callable

from jobtolk.config import settings
from jobtolk.schemas.search import EntityKind, SearchFilters
from jobtolk.services.coarse_filter import FetchFailure
from jobtolk.services.debounce import debounce
from jobtolk.services.ranking import ScoredEntity
from jobtolk.services.search_service import SearchOutcome

logger = logging.getLogger(__name__)

FetchFn = Callable[[SearchFilters, EntityKind], Awaitable[list]]
RankFn = Callable[[SearchFilters, list, EntityKind], list[ScoredEntity]]
ResultsFn = Callable[[SearchOutcome], Awaitable[None]]


class SearchState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"
    SCORING = "scoring"
    RENDERED = "rendered"


class SearchDispatcher:
    """Debounced live search with stale-result suppression.

    Every dispatch bumps a generation counter. A fetch that resolves after a
    newer dispatch is discarded instead of overwriting the newer results, even
    though the superseded fetch itself is not aborted.
    """

    def __init__(
        self,
        fetch: FetchFn,
        rank: RankFn,
        on_results: ResultsFn,
        delay: float | None = None,
    ):
        self._fetch = fetch
        self._rank = rank
        self._on_results = on_results
        if delay is None:
            delay = settings.search_debounce_seconds
        self._debouncer = debounce(self._run, delay)
        self.state = SearchState.IDLE
        self.generation = 0

    def dispatch(self, filters: SearchFilters, kind: EntityKind) -> None:
        self.generation += 1
        self.state = SearchState.DEBOUNCING
        self._debouncer(self.generation, filters, kind)

    def cancel(self) -> None:
        """Drop any pending search and ignore any search still in flight."""
        self._debouncer.cancel()
        self.generation += 1
        self.state = SearchState.IDLE

    def _is_stale(self, generation: int) -> bool:
        if generation != self.generation:
            logger.debug(
                "Discarding stale search (generation %d, current %d)",
                generation, self.generation,
            )
            return True
        return False

    async def _run(self, generation: int, filters: SearchFilters, kind: EntityKind) -> None:
        self.state = SearchState.FETCHING
        try:
            entities = await self._fetch(filters, kind)
            if self._is_stale(generation):
                return
            self.state = SearchState.SCORING
            results = self._rank(filters, entities, kind)
        except FetchFailure as exc:
            logger.error("Error searching %s: %s", kind.value, exc.__cause__ or exc)
            error = str(exc)
        except Exception as exc:
            logger.error("Unexpected error searching %s: %s", kind.value, exc, exc_info=exc)
            error = "Search failed"
        else:
            self.state = SearchState.RENDERED
            await self._on_results(SearchOutcome(kind=kind, query=filters.query, results=results))
            return

        if self._is_stale(generation):
            return
        self.state = SearchState.IDLE
        await self._on_results(SearchOutcome(kind=kind, query=filters.query, error=error))
