"""Catalog source adapters."""

from songshelf.config.settings import CatalogSettings
from songshelf.domain.ports import ICatalogSource
from songshelf.infrastructure.catalog.file_catalog_source import JsonFileCatalogSource
from songshelf.infrastructure.catalog.http_catalog_source import HttpCatalogSource
from songshelf.infrastructure.catalog.rules_file import load_normalizer_rules


def create_catalog_source(settings: CatalogSettings) -> ICatalogSource:
    """Pick the catalog adapter for the configured location (http(s) URL or file path)."""
    if settings.is_remote:
        return HttpCatalogSource(settings.location, timeout=settings.timeout_seconds)
    return JsonFileCatalogSource(settings.location)


__all__ = [
    "HttpCatalogSource",
    "JsonFileCatalogSource",
    "create_catalog_source",
    "load_normalizer_rules",
]
