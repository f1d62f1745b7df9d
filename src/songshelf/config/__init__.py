"""Configuration module for SongShelf."""

from .settings import (
    CatalogSettings,
    FacetSettings,
    ObservabilitySettings,
    Settings,
    get_settings,
)

__all__ = [
    "CatalogSettings",
    "FacetSettings",
    "ObservabilitySettings",
    "Settings",
    "get_settings",
]
