"""Facet descriptors.

Hey future me - this is why there's no "if facet == 'tags' ... elif facet == 'countries'"
anywhere! Each filterable dimension is a FacetDescriptor: a name (also the key in
FilterState.selections) plus an accessor returning the song's values for that facet. The
evaluator and the facet index just loop over FACETS. Adding a facet = adding one line here.

Year range and text search are NOT facets - they have their own clauses in the evaluator.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from songshelf.domain.entities import Song
from songshelf.domain.exceptions import ValidationError


class MatchMode(str, Enum):
    """How a song's values are matched against a facet selection."""

    # Song matches when ANY of its values is selected (OR within the facet)
    ANY_OF = "any_of"


@dataclass(frozen=True)
class FacetDescriptor:
    """A filterable dimension of the catalog."""

    name: str
    accessor: Callable[[Song], Iterable[str]]
    match_mode: MatchMode = MatchMode.ANY_OF

    def values(self, song: Song) -> frozenset[str]:
        return frozenset(self.accessor(song))

    def matches(self, song: Song, selection: frozenset[str]) -> bool:
        """Check the song against a selection; an empty selection matches everything."""
        if not selection:
            return True
        return not selection.isdisjoint(self.accessor(song))


FACETS: tuple[FacetDescriptor, ...] = (
    FacetDescriptor("tags", lambda song: song.filter_tags),
    FacetDescriptor("countries", lambda song: song.countries),
    FacetDescriptor("artists", lambda song: song.artists),
    FacetDescriptor("labels", lambda song: song.labels),
    FacetDescriptor("genres", lambda song: song.genres),
    FacetDescriptor("subgenres", lambda song: song.subgenres),
    FacetDescriptor("moods", lambda song: song.moods),
)

FACET_NAMES: tuple[str, ...] = tuple(facet.name for facet in FACETS)


def get_facet(name: str, facets: Iterable[FacetDescriptor] = FACETS) -> FacetDescriptor:
    """Look up a facet descriptor by name, raising ValidationError for unknown names."""
    for facet in facets:
        if facet.name == name:
            return facet
    raise ValidationError(f"Unknown facet: {name!r}")
