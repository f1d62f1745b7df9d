"""
View DTOs handed to the presentation layer.

Hey future me - these are "dumb data carriers" for whatever renders the browser (HTML
templates, a terminal UI, a test double). The presentation adapter gets FacetOption lists
and SongView rows and never has to know how Song stores its facet sets or how counts are
computed.
"""

from dataclasses import dataclass
from urllib.parse import quote

from songshelf.domain.entities import Song

NO_RESULTS_MESSAGE = "No songs match the current filters."


# Hey future me - count is the "override count": how many results there would be if the user
# clicked this checkbox right now (toggle ON for unselected, toggle OFF for selected options).
# selected mirrors the checkbox state.
@dataclass(frozen=True)
class FacetOption:
    """One checkbox in a facet widget."""

    value: str
    count: int
    selected: bool = False

    @property
    def display_label(self) -> str:
        return f"{self.value} ({self.count})"


@dataclass(frozen=True)
class SongView:
    """One row of the result list."""

    id: str
    title: str
    artist: str
    release_year: int | None
    tags: tuple[str, ...]

    @property
    def display_label(self) -> str:
        return f"{self.title} – {self.artist}"

    @property
    def detail_href(self) -> str:
        """Link to the song detail page, id URL-encoded."""
        return f"song.html?id={quote(self.id, safe='')}"

    @classmethod
    def from_song(cls, song: Song) -> "SongView":
        return cls(
            id=song.id,
            title=song.title,
            artist=song.artist,
            release_year=song.release_year,
            tags=song.tags,
        )


__all__ = ["NO_RESULTS_MESSAGE", "FacetOption", "SongView"]
