"""Application services: normalization, filtering, facet counts, sorting, sessions."""

from songshelf.application.services.catalog_browser import CatalogBrowser
from songshelf.application.services.facet_index import FacetIndex, option_counts
from songshelf.application.services.filter_evaluator import evaluate, matches
from songshelf.application.services.normalizer import NormalizationReport, SongNormalizer
from songshelf.application.services.sorting import sort_songs

__all__ = [
    "CatalogBrowser",
    "FacetIndex",
    "NormalizationReport",
    "SongNormalizer",
    "evaluate",
    "matches",
    "option_counts",
    "sort_songs",
]
