"""Shared fixtures for SongShelf tests."""

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from songshelf.application.services.normalizer import SongNormalizer
from songshelf.domain.dtos import FacetOption
from songshelf.domain.entities import Song
from songshelf.domain.ports import ICatalogSource, IPresentationAdapter


class RecordingAdapter(IPresentationAdapter):
    """Presentation adapter that just remembers what it was asked to draw."""

    def __init__(self) -> None:
        self.renders: list[list[Song]] = []
        self.facet_renders: list[tuple[str, list[FacetOption]]] = []

    def render(self, results: Sequence[Song]) -> None:
        self.renders.append(list(results))

    def render_facet(self, facet_name: str, options: Sequence[FacetOption]) -> None:
        self.facet_renders.append((facet_name, list(options)))

    def last_facet(self, facet_name: str) -> list[FacetOption]:
        for name, options in reversed(self.facet_renders):
            if name == facet_name:
                return options
        raise AssertionError(f"facet {facet_name} was never rendered")


class InMemoryCatalogSource(ICatalogSource):
    """Catalog source serving a fixed list of raw records."""

    def __init__(self, records: list[Any]) -> None:
        self.records = records
        self.fetch_count = 0

    @property
    def description(self) -> str:
        return "memory"

    async def fetch_raw_songs(self) -> list[Any]:
        self.fetch_count += 1
        return list(self.records)


@pytest.fixture
def normalizer() -> SongNormalizer:
    """Normalizer with the default rule tables."""
    return SongNormalizer()


@pytest.fixture
def make_song() -> Callable[..., Song]:
    """Build a Song directly, with sensible defaults for the required fields."""

    def _make(song_id: str, title: str = "", artist: str = "", **fields: Any) -> Song:
        return Song(
            id=song_id,
            title=title or f"Title {song_id}",
            artist=artist or f"Artist {song_id}",
            **fields,
        )

    return _make


@pytest.fixture
def raw_catalog() -> list[dict[str, Any]]:
    """A small, deliberately messy raw catalog in songs.json shape."""
    return [
        {
            "id": "1",
            "title": "Love Theme",
            "artist": "Aurora Drive",
            "releaseYear": 1993,
            "tags": ["Acid Trance 1993", "Original Mix"],
            "country": "Great Britain",
            "label": "Warner (UK) / Licensed to Sony",
            "genre": ["Electronic"],
            "subgenre": ["Trance"],
            "description": "Euphoric, soaring anthem",
            "keywords": ["classic"],
        },
        {
            "id": "2",
            "title": "Night Drive",
            "artist": "Kraftwerk Kids",
            "releaseYear": 1998,
            "tags": ["house/techno", "Deutschland"],
            "country": "Deutschland/UK",
            "label": "Kontor, Zeitgeist",
            "genre": ["Electronic"],
            "subgenre": ["Techno"],
            "description": "Dark and pounding",
        },
        {
            "id": "3",
            "title": "Sunday Morning",
            "artist": "The Loungers",
            "tags": ["Chill Out", "UK"],
            "country": "UK",
            "genre": "Downtempo",
            "keywords": "lazy sunday",
        },
        {
            "id": "4",
            "title": "beta Wave",
            "artist": "aurora drive",
            "releaseYear": "2004",
            "tags": ["Deep House", "Radio Edit"],
            "country": ["USA"],
            "label": ["Defected (UK)"],
            "genre": ["Electronic", "Dance"],
            "subgenre": ["Deep House"],
            "description": "Mellow and warm",
        },
    ]


@pytest.fixture
def catalog(normalizer: SongNormalizer, raw_catalog: list[dict[str, Any]]) -> tuple[Song, ...]:
    """The raw catalog, normalized."""
    return normalizer.normalize_catalog(raw_catalog).songs


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def memory_source() -> Callable[[list[Any]], InMemoryCatalogSource]:
    """Factory for in-memory catalog sources."""
    return InMemoryCatalogSource
