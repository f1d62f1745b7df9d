"""Filter state for one browse session.

Hey future me - FilterState is IMMUTABLE! Every user intent (tick a checkbox, type in the
search bar, change the sort) produces a NEW FilterState via the with_*/toggled/cleared
helpers; nothing ever mutates one in place. That's what lets the facet index ask "what if
this checkbox were toggled?" by simply building a hypothetical state next to the real one,
and it means tests need no UI at all.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum

from songshelf.domain.exceptions import ValidationError


class SortKey(str, Enum):
    """Sortable result columns."""

    TITLE = "title"
    ARTIST = "artist"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "str | SortKey") -> "SortKey":
        """Convert user input to a SortKey, raising ValidationError for unknown keys."""
        if isinstance(value, SortKey):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown sort key: {value!r}") from exc


class YearBound(str, Enum):
    """Which end of the year range an intent targets."""

    MIN = "min"
    MAX = "max"


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_year_bound(text: str | None) -> int | None:
    """Parse free-form year input the way a browser number field does.

    Leading integer wins ("1993abc" -> 1993); anything else clears the bound.

    Examples:
        >>> parse_year_bound("1993")
        1993
        >>> parse_year_bound("")
        >>> parse_year_bound("abc")
    """
    if text is None:
        return None
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class FilterState:
    """Complete filter/sort state: selections per facet, year range, text query, sort."""

    selections: Mapping[str, frozenset[str]] = field(default_factory=dict)
    year_min: int | None = None
    year_max: int | None = None
    text_query: str = ""
    sort_key: SortKey = SortKey.TITLE
    ascending: bool = True

    def selection(self, facet: str) -> frozenset[str]:
        """Selected values for a facet (empty set means "no constraint")."""
        return self.selections.get(facet, frozenset())

    @property
    def has_year_bounds(self) -> bool:
        return self.year_min is not None or self.year_max is not None

    @property
    def is_empty(self) -> bool:
        """True when no facet, year or text constraint is active (sort doesn't count)."""
        return (
            not any(self.selections.values())
            and not self.has_year_bounds
            and not self.text_query
        )

    def with_selection(self, facet: str, values: Iterable[str]) -> "FilterState":
        """Replace one facet's selection.

        Raises:
            ValidationError: If values is a bare string (it would select single characters)
        """
        if isinstance(values, str):
            raise ValidationError(
                f"Selection for facet {facet!r} must be a collection of values, got {values!r}"
            )
        selections = dict(self.selections)
        selections[facet] = frozenset(values)
        return replace(self, selections=selections)

    def toggled(self, facet: str, value: str) -> "FilterState":
        """Add the value to the facet's selection if absent, remove it if present."""
        current = self.selection(facet)
        if value in current:
            return self.with_selection(facet, current - {value})
        return self.with_selection(facet, current | {value})

    def with_year_bound(self, bound: "str | YearBound", value: int | None) -> "FilterState":
        """Set or clear (value=None) the lower or upper year bound."""
        try:
            which = YearBound(bound)
        except ValueError as exc:
            raise ValidationError(f"Unknown year bound: {bound!r}") from exc
        if which is YearBound.MIN:
            return replace(self, year_min=value)
        return replace(self, year_max=value)

    def with_text_query(self, query: str | None) -> "FilterState":
        """Set the search text (trimmed; None clears it)."""
        return replace(self, text_query=(query or "").strip())

    def with_sort(self, key: "str | SortKey", ascending: bool = True) -> "FilterState":
        return replace(self, sort_key=SortKey.parse(key), ascending=ascending)

    def with_sort_direction_flipped(self) -> "FilterState":
        return replace(self, ascending=not self.ascending)

    def cleared(self) -> "FilterState":
        """Reset everything, including sort back to title ascending."""
        return FilterState()
