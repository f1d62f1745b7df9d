"""Domain value objects."""

from songshelf.domain.value_objects.facets import (
    FACET_NAMES,
    FACETS,
    FacetDescriptor,
    MatchMode,
    get_facet,
)
from songshelf.domain.value_objects.filter_state import (
    FilterState,
    SortKey,
    YearBound,
    parse_year_bound,
)
from songshelf.domain.value_objects.normalizer_rules import DEFAULT_RULES, NormalizerRules

__all__ = [
    "DEFAULT_RULES",
    "FACETS",
    "FACET_NAMES",
    "FacetDescriptor",
    "FilterState",
    "MatchMode",
    "NormalizerRules",
    "SortKey",
    "YearBound",
    "get_facet",
    "parse_year_bound",
]
