"""Ports (interfaces) to the browser's external collaborators.

Hey future me - the core never talks to files, HTTP or a UI toolkit directly! It depends on
these two PORTS, and the adapters live elsewhere:
- ICatalogSource: where the raw songs come from (infrastructure/catalog)
- IPresentationAdapter: whatever draws results and facet widgets (provided by the host app)

This follows the Hexagonal Architecture pattern for dependency inversion.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from songshelf.domain.dtos import FacetOption
from songshelf.domain.entities import Song


class ICatalogSource(ABC):
    """Interface for catalog sources.

    The catalog is read ONCE at startup - there is no write path. fetch_raw_songs() is the
    only suspending operation in the whole system.

    Implementations must:
    1. Return the records as a list, in catalog order, WITHOUT validating them
       (the normalizer deals with messy records)
    2. Raise CatalogLoadError when the catalog can't be read or isn't a JSON array
    """

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable location of the catalog (for logs and error messages)."""
        ...

    @abstractmethod
    async def fetch_raw_songs(self) -> list[Any]:
        """Fetch the raw song records.

        Raises:
            CatalogLoadError: If the catalog can't be fetched or parsed
        """
        ...


class IPresentationAdapter(ABC):
    """Interface for the presentation layer.

    The browser calls render() and render_facet() after every intent. Implementations
    should redraw from scratch - the browser always sends the complete current picture.
    """

    @abstractmethod
    def render(self, results: Sequence[Song]) -> None:
        """Draw the (filtered, sorted) result list. May be empty."""
        ...

    @abstractmethod
    def render_facet(self, facet_name: str, options: Sequence[FacetOption]) -> None:
        """Draw one facet widget with its options, already in display order."""
        ...


__all__ = ["ICatalogSource", "IPresentationAdapter"]
