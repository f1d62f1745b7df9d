"""Catalog browser - the intent boundary between the UI and the filter engine.

Hey future me - this is what the presentation layer talks to! It owns the two pieces of
session state:
- the normalized catalog (immutable, set once at startup)
- the current FilterState (REPLACED on every intent, never mutated)

Every intent method follows the same pattern:
    1. build the new FilterState
    2. swap it in
    3. refresh(): evaluate + sort -> adapter.render(), facet counts -> adapter.render_facet()

Intents run synchronously to completion; the UI's own event loop serializes them, so there
is no locking anywhere.
"""

import logging
import time
from collections.abc import Iterable

from songshelf.application.services.facet_index import FacetIndex
from songshelf.application.services.filter_evaluator import evaluate
from songshelf.application.services.sorting import sort_songs
from songshelf.domain.dtos import NO_RESULTS_MESSAGE, FacetOption, SongView
from songshelf.domain.entities import Song
from songshelf.domain.exceptions import EntityNotFoundException
from songshelf.domain.ports import IPresentationAdapter
from songshelf.domain.value_objects.facets import get_facet
from songshelf.domain.value_objects.filter_state import FilterState, SortKey, YearBound
from songshelf.infrastructure.observability import log_slow_operation, set_session_id

logger = logging.getLogger(__name__)


class CatalogBrowser:
    """One browse session over a normalized catalog."""

    def __init__(
        self,
        index: FacetIndex,
        adapter: IPresentationAdapter | None = None,
        state: FilterState | None = None,
        session_id: str | None = None,
        slow_refresh_ms: int = 100,
    ) -> None:
        """Create a browse session.

        Args:
            index: Facet index over the normalized catalog
            adapter: Optional presentation adapter (None = headless, e.g. tests)
            state: Initial filter state (default: nothing selected, title ascending)
            session_id: Session ID for logs (generated when None)
            slow_refresh_ms: Refreshes slower than this are logged as warnings
        """
        self._index = index
        self._adapter = adapter
        self._state = state or FilterState()
        self._songs_by_id = {song.id: song for song in index.songs}
        self._slow_refresh_ms = slow_refresh_ms
        self.session_id = set_session_id(session_id)

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def songs(self) -> tuple[Song, ...]:
        return self._index.songs

    @property
    def index(self) -> FacetIndex:
        return self._index

    # =========================================================================
    # QUERIES
    # =========================================================================

    def results(self) -> list[Song]:
        """Filtered and sorted results for the current state."""
        matched = evaluate(self._index.songs, self._state, self._index.facets)
        return sort_songs(matched, self._state.sort_key, self._state.ascending)

    def result_views(self) -> list[SongView]:
        return [SongView.from_song(song) for song in self.results()]

    def status_message(self) -> str | None:
        """Message to show instead of the result list, or None when there are results."""
        return None if self.results() else NO_RESULTS_MESSAGE

    def facet_options(self, facet_name: str) -> list[FacetOption]:
        return self._index.facet_options(facet_name, self._state)

    def option_counts(self, facet_name: str) -> dict[str, int]:
        return self._index.option_counts(facet_name, self._state)

    def find_song(self, song_id: str) -> Song:
        """Look up a song for the detail page.

        Raises:
            EntityNotFoundException: If no song has this id
        """
        song = self._songs_by_id.get(song_id)
        if song is None:
            raise EntityNotFoundException("Song", song_id)
        return song

    # =========================================================================
    # INTENTS
    # =========================================================================

    def set_facet_selection(self, facet_name: str, values: Iterable[str]) -> None:
        """Replace a facet's selection (raises ValidationError for unknown facets)."""
        get_facet(facet_name, self._index.facets)
        self._apply(self._state.with_selection(facet_name, values), "set_facet_selection")

    def toggle_facet_value(self, facet_name: str, value: str) -> None:
        """Tick/untick a single checkbox."""
        get_facet(facet_name, self._index.facets)
        self._apply(self._state.toggled(facet_name, value), "toggle_facet_value")

    def set_year_bound(self, bound: "str | YearBound", value: int | None) -> None:
        self._apply(self._state.with_year_bound(bound, value), "set_year_bound")

    def set_text_query(self, query: str | None) -> None:
        self._apply(self._state.with_text_query(query), "set_text_query")

    def set_sort(self, key: "str | SortKey", ascending: bool = True) -> None:
        self._apply(self._state.with_sort(key, ascending), "set_sort")

    def toggle_sort_direction(self) -> None:
        self._apply(self._state.with_sort_direction_flipped(), "toggle_sort_direction")

    def clear_all(self) -> None:
        """Drop every selection, year bound and query, and reset sort to title ascending."""
        self._apply(self._state.cleared(), "clear_all")

    # =========================================================================
    # RENDERING
    # =========================================================================

    def refresh(self) -> list[Song]:
        """Recompute results and facet counts and push them to the adapter.

        Returns the rendered results (handy for headless callers).
        """
        start = time.perf_counter()
        results = self.results()
        if self._adapter is not None:
            self._adapter.render(results)
            for facet in self._index.facets:
                self._adapter.render_facet(facet.name, self.facet_options(facet.name))
        duration_ms = int((time.perf_counter() - start) * 1000)
        log_slow_operation(
            logger,
            "browser_refresh",
            duration_ms,
            threshold_ms=self._slow_refresh_ms,
            result_count=len(results),
        )
        return results

    def _apply(self, new_state: FilterState, intent: str) -> None:
        self._state = new_state
        logger.debug("Intent applied: %s", intent, extra={"intent": intent})
        self.refresh()
