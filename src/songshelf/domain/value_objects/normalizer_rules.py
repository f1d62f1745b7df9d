"""Rule tables that drive song normalization.

Hey future me - NormalizerRules is the ONE place the normalizer gets its heuristics from:
synonyms, the descriptor regex, tag buckets and the mood lexicon. Everything is compiled
once in from_tables() so normalizing a few thousand songs doesn't recompile regexes per
record. Want different buckets for a deployment? Build a new NormalizerRules (or point
SONGSHELF_CATALOG_RULES_PATH at a JSON rules file) - don't add branches to the normalizer.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from songshelf.domain.exceptions import ConfigurationError
from songshelf.domain.value_objects.mood_lexicon import (
    DEFAULT_MOOD_KEYWORDS,
    compile_mood_table,
)
from songshelf.domain.value_objects.tag_normalization import (
    DEFAULT_DESCRIPTOR_PATTERN,
    DEFAULT_SYNONYMS,
    DEFAULT_TAG_BUCKETS,
    tag_lookup_key,
)


@dataclass(frozen=True)
class NormalizerRules:
    """Compiled normalization tables."""

    synonyms: Mapping[str, str]
    descriptor_pattern: re.Pattern[str]
    tag_buckets: Mapping[str, re.Pattern[str]]
    mood_patterns: Mapping[str, re.Pattern[str]]

    @classmethod
    def from_tables(
        cls,
        synonyms: Mapping[str, str] | None = None,
        descriptor_pattern: str | None = None,
        tag_buckets: Mapping[str, str] | None = None,
        mood_keywords: Mapping[str, Iterable[str]] | None = None,
    ) -> "NormalizerRules":
        """Compile rule tables, falling back to the defaults for anything not given.

        Synonym keys are re-keyed through tag_lookup_key() so a table written as
        {"Great Britain": "UK"} still works, and every canonical value maps to itself.
        That self-mapping is what makes normalization idempotent: feeding "UK" back in
        always yields "UK".

        Raises:
            ConfigurationError: If a canonical value is itself a variant of another
                canonical value ("A" -> "B" plus "B" -> "C"), or two canonical values
                share a lookup key
        """
        raw_synonyms = DEFAULT_SYNONYMS if synonyms is None else synonyms
        table: dict[str, str] = {}
        for variant, canonical in raw_synonyms.items():
            key = tag_lookup_key(variant)
            if key and canonical.strip():
                table[key] = canonical.strip()
        for canonical in sorted(set(table.values())):
            key = tag_lookup_key(canonical)
            # Chains are not followed: the self-mapping would silently drop B -> C.
            if table.get(key, canonical) != canonical:
                raise ConfigurationError(
                    f"Synonym chain: canonical value {canonical!r} is itself mapped to "
                    f"{table[key]!r}; map every variant straight to its final spelling"
                )
            table[key] = canonical

        buckets = DEFAULT_TAG_BUCKETS if tag_buckets is None else tag_buckets
        moods = DEFAULT_MOOD_KEYWORDS if mood_keywords is None else mood_keywords
        return cls(
            synonyms=table,
            descriptor_pattern=re.compile(
                DEFAULT_DESCRIPTOR_PATTERN if descriptor_pattern is None else descriptor_pattern
            ),
            tag_buckets={name: re.compile(pattern) for name, pattern in buckets.items()},
            mood_patterns=compile_mood_table(moods),
        )


DEFAULT_RULES = NormalizerRules.from_tables()
