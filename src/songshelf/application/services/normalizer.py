"""Song normalizer - raw catalog records in, canonical Song entities out.

Hey future me - this is the ONLY place raw songs.json records are interpreted! Everything
downstream (evaluator, facet index, sorting) trusts Song completely, so all the defensive
coercion lives here:
- country/label/genre/subgenre/keywords may be absent, a string or a list
- title may be missing or not a string
- releaseYear may be a number, a numeric string, or garbage

normalize() is TOTAL: it never raises. Every surprise becomes a MalformedRecordWarning
(logged + collected) and an exclusion-safe default (empty set, "", no year). One broken
record must not take down the other 4999.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from songshelf.domain.entities import Song
from songshelf.domain.exceptions import MalformedRecordWarning
from songshelf.domain.value_objects.label_parsing import parse_labels
from songshelf.domain.value_objects.mood_lexicon import infer_moods
from songshelf.domain.value_objects.normalizer_rules import DEFAULT_RULES, NormalizerRules
from songshelf.domain.value_objects.tag_normalization import (
    derive_filter_tags,
    normalize_tag_values,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizationReport:
    """Outcome of normalizing a whole catalog."""

    songs: tuple[Song, ...]
    warnings: tuple[MalformedRecordWarning, ...] = ()
    skipped: int = 0


@dataclass
class _RecordContext:
    """Per-record scratch state: which record we're on and what went wrong."""

    record_id: str | None
    warnings: list[MalformedRecordWarning] = field(default_factory=list)

    def warn(self, field_name: str, reason: str) -> None:
        self.warnings.append(MalformedRecordWarning(self.record_id, field_name, reason))


class SongNormalizer:
    """Turns raw catalog records into normalized Song entities.

    Rule tables (synonyms, buckets, moods) come in through NormalizerRules - the
    normalizer itself has no hard-coded vocabulary.
    """

    def __init__(self, rules: NormalizerRules = DEFAULT_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> NormalizerRules:
        return self._rules

    def normalize(self, raw: Any, fallback_id: str | None = None) -> Song:
        """Normalize a single raw record. Never raises; problems are logged as warnings."""
        song, warnings = self.normalize_with_warnings(raw, fallback_id)
        for warning in warnings:
            logger.warning("Malformed catalog record: %s", warning)
        return song

    def normalize_with_warnings(
        self, raw: Any, fallback_id: str | None = None
    ) -> tuple[Song, list[MalformedRecordWarning]]:
        """Normalize a single raw record and return the warnings instead of logging them."""
        if not isinstance(raw, Mapping):
            ctx = _RecordContext(fallback_id)
            ctx.warn("<record>", f"is {type(raw).__name__}, expected an object")
            return Song(id=fallback_id or "", title="", artist=""), ctx.warnings

        ctx = _RecordContext(None)
        song_id = self._coerce_id(raw.get("id"), fallback_id, ctx)
        ctx.record_id = song_id

        title = self._coerce_text(raw.get("title"), "title", ctx, required=True)
        artist = self._coerce_text(raw.get("artist"), "artist", ctx, required=True)
        description = self._coerce_text(raw.get("description"), "description", ctx) or None
        release_year = self._coerce_year(raw.get("releaseYear"), ctx)

        tags = self._coerce_string_list(raw.get("tags"), "tags", ctx)
        countries = normalize_tag_values(
            self._coerce_string_list(raw.get("country"), "country", ctx),
            self._rules.synonyms,
        )
        labels = parse_labels(self._coerce_string_list(raw.get("label"), "label", ctx))
        genres = self._coerce_string_list(raw.get("genre"), "genre", ctx)
        subgenres = self._coerce_string_list(raw.get("subgenre"), "subgenre", ctx)
        keywords = self._coerce_string_list(raw.get("keywords"), "keywords", ctx)

        normalized_tags = normalize_tag_values(tags, self._rules.synonyms)
        filter_tags = derive_filter_tags(
            normalized_tags,
            labels,
            self._rules.descriptor_pattern,
            self._rules.tag_buckets,
        )
        # Hey future me - moods scan the CANONICAL tags (not the raw ones) so that normalizing
        # an already-normalized record gives the same moods. Sorted for a deterministic text.
        mood_text = " ".join([description or "", *sorted(normalized_tags), *subgenres])
        moods = infer_moods(mood_text, self._rules.mood_patterns)

        song = Song(
            id=song_id,
            title=title,
            artist=artist,
            release_year=release_year,
            tags=tuple(tags),
            countries=countries,
            labels=labels,
            genres=tuple(genres),
            subgenres=tuple(subgenres),
            description=description,
            keywords=tuple(keywords),
            normalized_tags=normalized_tags,
            filter_tags=filter_tags,
            moods=moods,
        )
        return song, ctx.warnings

    def normalize_catalog(self, records: Iterable[Any]) -> NormalizationReport:
        """Normalize a whole catalog, keeping catalog order.

        - records that aren't objects are skipped
        - records without an id get "song-<index>"
        - a repeated id keeps the FIRST record; later ones are skipped
        """
        songs: list[Song] = []
        warnings: list[MalformedRecordWarning] = []
        seen_ids: set[str] = set()
        skipped = 0

        for index, raw in enumerate(records):
            fallback_id = f"song-{index}"
            if not isinstance(raw, Mapping):
                warnings.append(
                    MalformedRecordWarning(
                        fallback_id, "<record>", f"is {type(raw).__name__}, expected an object"
                    )
                )
                skipped += 1
                continue

            song, record_warnings = self.normalize_with_warnings(raw, fallback_id)
            warnings.extend(record_warnings)
            if song.id in seen_ids:
                warnings.append(
                    MalformedRecordWarning(song.id, "id", "duplicates an earlier record, skipped")
                )
                skipped += 1
                continue
            seen_ids.add(song.id)
            songs.append(song)

        for warning in warnings:
            logger.warning("Malformed catalog record: %s", warning)
        logger.info(
            "Normalized %d songs (%d skipped, %d warnings)",
            len(songs),
            skipped,
            len(warnings),
        )
        return NormalizationReport(songs=tuple(songs), warnings=tuple(warnings), skipped=skipped)

    # =========================================================================
    # FIELD COERCION
    # =========================================================================

    @staticmethod
    def _coerce_id(value: Any, fallback_id: str | None, ctx: _RecordContext) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        ctx.record_id = fallback_id
        ctx.warn("id", "is missing or invalid, using positional id")
        return fallback_id or ""

    @staticmethod
    def _coerce_text(
        value: Any, field_name: str, ctx: _RecordContext, required: bool = False
    ) -> str:
        if isinstance(value, str):
            return value
        if value is None:
            if required:
                ctx.warn(field_name, "is missing")
            return ""
        ctx.warn(field_name, f"is {type(value).__name__}, expected a string")
        return ""

    @staticmethod
    def _coerce_year(value: Any, ctx: _RecordContext) -> int | None:
        # Listen future me - bool is an int subclass in Python; True must NOT become year 1!
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            ctx.warn("releaseYear", "is a boolean")
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        # isdecimal, not isdigit: "²" is a digit but int() rejects it. int() also refuses
        # strings past the interpreter's max digit count.
        if isinstance(value, str) and value.strip().isdecimal():
            try:
                return int(value.strip())
            except ValueError:
                ctx.warn("releaseYear", "is not a usable year")
                return None
        ctx.warn("releaseYear", f"is not a year: {value!r:.40}")
        return None

    @staticmethod
    def _coerce_string_list(value: Any, field_name: str, ctx: _RecordContext) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, (list, tuple)):
            items: list[str] = []
            for item in value:
                if isinstance(item, str):
                    if item.strip():
                        items.append(item)
                elif item is not None:
                    ctx.warn(field_name, f"contains a {type(item).__name__} entry")
            return items
        ctx.warn(field_name, f"is {type(value).__name__}, expected a string or list")
        return []
