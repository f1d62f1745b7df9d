"""Domain entities."""

from dataclasses import dataclass
from typing import Any


# Yo, Song is the NORMALIZED catalog entry - the normalizer is the only thing that builds one!
# Every field is already clean: countries/labels are canonical sets, genres/subgenres are
# tuples (kept as-is, matched case-sensitively), and the derived sets (normalized_tags,
# filter_tags, moods) are computed ONCE at load time and cached here for the whole session.
# frozen=True because the normalized catalog is immutable after startup - only FilterState
# changes. release_year stays None when unknown; never turn it into 0 here (sorting does
# that on its own, filtering must not).
@dataclass(frozen=True)
class Song:
    """A normalized song from the catalog."""

    id: str
    title: str
    artist: str
    release_year: int | None = None
    tags: tuple[str, ...] = ()
    countries: frozenset[str] = frozenset()
    labels: frozenset[str] = frozenset()
    genres: tuple[str, ...] = ()
    subgenres: tuple[str, ...] = ()
    description: str | None = None
    keywords: tuple[str, ...] = ()
    # Derived facet values
    normalized_tags: frozenset[str] = frozenset()
    filter_tags: frozenset[str] = frozenset()
    moods: frozenset[str] = frozenset()

    @property
    def artists(self) -> frozenset[str]:
        """Artist as a facet value set (empty when the record had no artist)."""
        return frozenset({self.artist}) if self.artist else frozenset()

    # Hey future me - to_raw() writes the song back in songs.json shape, with the CANONICAL
    # values in place of the raw ones. Normalizing that record again must give the exact same
    # derived sets (idempotence) - the tests rely on this, so keep both sides in sync!
    def to_raw(self) -> dict[str, Any]:
        """Serialize back to a raw catalog record."""
        raw: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "tags": sorted(self.normalized_tags),
            "country": sorted(self.countries),
            "label": sorted(self.labels),
            "genre": list(self.genres),
            "subgenre": list(self.subgenres),
            "keywords": list(self.keywords),
        }
        if self.release_year is not None:
            raw["releaseYear"] = self.release_year
        if self.description is not None:
            raw["description"] = self.description
        return raw


__all__ = ["Song"]
