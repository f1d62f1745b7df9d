"""Filter evaluator - which songs match the current FilterState.

Hey future me - the predicate is:
    (every facet clause) AND year clause AND text clause
where each facet clause is OR over that facet's selected values, and an EMPTY selection
means "no constraint" (always true). Output keeps CATALOG order; sorting is a separate step
(see sorting.py) so the facet index can count without paying for a sort.
"""

from collections.abc import Iterable, Sequence

from songshelf.domain.entities import Song
from songshelf.domain.value_objects.facets import FACETS, FacetDescriptor
from songshelf.domain.value_objects.filter_state import FilterState


def matches_year(song: Song, state: FilterState) -> bool:
    """Inclusive year range check.

    A song without release_year fails as soon as EITHER bound is set - unknown years are
    never treated as 0 here.
    """
    if not state.has_year_bounds:
        return True
    if song.release_year is None:
        return False
    if state.year_min is not None and song.release_year < state.year_min:
        return False
    if state.year_max is not None and song.release_year > state.year_max:
        return False
    return True


def matches_text(song: Song, query: str) -> bool:
    """Case-insensitive substring match on title, artist and keywords."""
    if not query:
        return True
    needle = query.lower()
    if needle in song.title.lower() or needle in song.artist.lower():
        return True
    return any(needle in keyword.lower() for keyword in song.keywords)


def matches(
    song: Song,
    state: FilterState,
    facets: Iterable[FacetDescriptor] = FACETS,
) -> bool:
    """Check one song against the complete filter state."""
    for facet in facets:
        if not facet.matches(song, state.selection(facet.name)):
            return False
    return matches_year(song, state) and matches_text(song, state.text_query)


def evaluate(
    songs: Sequence[Song],
    state: FilterState,
    facets: Sequence[FacetDescriptor] = FACETS,
) -> list[Song]:
    """Return the songs matching the state, in catalog order."""
    return [song for song in songs if matches(song, state, facets)]
