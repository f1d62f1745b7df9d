"""Facet index - distinct facet values and live "what if I click this" counts.

Hey future me - the count next to each checkbox is NOT "how many songs have this value"!
It's the OVERRIDE COUNT: how many results there would be if the user toggled this one
checkbox right now, with everything else unchanged:
- unticked option -> count with the value ADDED to that facet's selection
- ticked option   -> count with the value REMOVED from that facet's selection

We answer it by building a hypothetical FilterState (the real one is immutable, so nothing
leaks) and running the normal evaluator. Costs O(options x songs) per facet, which is fine
for a static catalog of a few thousand songs.

Two deployment policies (they differed between versions of the old UI, so they're flags):
- count_respects_text_query: include the search text when counting (default True)
- hide_zero_count_options: drop options that would lead to zero results (default False)
"""

import logging
from collections.abc import Sequence

from songshelf.application.services.filter_evaluator import evaluate
from songshelf.domain.dtos import FacetOption
from songshelf.domain.entities import Song
from songshelf.domain.value_objects.facets import FACETS, FacetDescriptor, get_facet
from songshelf.domain.value_objects.filter_state import FilterState

logger = logging.getLogger(__name__)


def distinct_values(facet: FacetDescriptor, songs: Sequence[Song]) -> list[str]:
    """All values of a facet across the catalog, sorted lexicographically."""
    values: set[str] = set()
    for song in songs:
        values.update(facet.values(song))
    return sorted(values)


def override_count(
    facet: FacetDescriptor,
    value: str,
    songs: Sequence[Song],
    state: FilterState,
    facets: Sequence[FacetDescriptor] = FACETS,
    count_respects_text_query: bool = True,
) -> int:
    """Result count if `value` were toggled in `facet`, everything else unchanged."""
    hypothetical = state.toggled(facet.name, value)
    if not count_respects_text_query:
        hypothetical = hypothetical.with_text_query("")
    return len(evaluate(songs, hypothetical, facets))


def option_counts(
    facet_name: str,
    songs: Sequence[Song],
    state: FilterState,
    *,
    facets: Sequence[FacetDescriptor] = FACETS,
    count_respects_text_query: bool = True,
) -> dict[str, int]:
    """Override count for every distinct value of a facet, keys in lexicographic order."""
    facet = get_facet(facet_name, facets)
    return {
        value: override_count(facet, value, songs, state, facets, count_respects_text_query)
        for value in distinct_values(facet, songs)
    }


class FacetIndex:
    """Facet values and counts over one immutable, normalized catalog.

    Distinct values are computed once in __init__ - the catalog never changes during a
    session, only the FilterState passed into each call does.
    """

    def __init__(
        self,
        songs: Sequence[Song],
        facets: Sequence[FacetDescriptor] = FACETS,
        *,
        count_respects_text_query: bool = True,
        hide_zero_count_options: bool = False,
    ) -> None:
        self._songs = tuple(songs)
        self._facets = tuple(facets)
        self.count_respects_text_query = count_respects_text_query
        self.hide_zero_count_options = hide_zero_count_options
        self._values: dict[str, list[str]] = {
            facet.name: distinct_values(facet, self._songs) for facet in self._facets
        }
        logger.debug(
            "Facet index built",
            extra={
                "facet_value_counts": {
                    name: len(values) for name, values in self._values.items()
                }
            },
        )

    @property
    def songs(self) -> tuple[Song, ...]:
        return self._songs

    @property
    def facets(self) -> tuple[FacetDescriptor, ...]:
        return self._facets

    def distinct_values(self, facet_name: str) -> list[str]:
        """Sorted distinct values of a facet (raises ValidationError for unknown facets)."""
        get_facet(facet_name, self._facets)
        return list(self._values[facet_name])

    def option_counts(self, facet_name: str, state: FilterState) -> dict[str, int]:
        """Override count per value, lexicographic key order. Never hides anything."""
        facet = get_facet(facet_name, self._facets)
        return {
            value: override_count(
                facet,
                value,
                self._songs,
                state,
                self._facets,
                self.count_respects_text_query,
            )
            for value in self._values[facet_name]
        }

    def facet_options(self, facet_name: str, state: FilterState) -> list[FacetOption]:
        """Checkbox options for rendering, honoring hide_zero_count_options.

        A selected option is always kept, even at zero, so the user can untick it.
        """
        selection = state.selection(facet_name)
        options: list[FacetOption] = []
        for value, count in self.option_counts(facet_name, state).items():
            selected = value in selection
            if self.hide_zero_count_options and count == 0 and not selected:
                continue
            options.append(FacetOption(value=value, count=count, selected=selected))
        return options
