"""Tag and country canonicalization for facet values.

Hey future me - this module turns the messy tag strings in songs.json into facet values!
The same thing shows up under many spellings across records:
- "Great Britain", "United Kingdom", "UK", "U.K." -> "UK"
- "Deutschland", "Germany" -> "Germany"
- "house/techno" -> two tags, "house" and "techno"

On top of the canonical tags we build a COARSER set for the tag facet ("filter tags"):
- mix/edit/version descriptors are dropped ("Original Mix" is not a style)
- a tag with a year in it collapses to its decade ("Acid Trance 1993" -> "1990s")
- style patterns group related tags ("Acid Trance", "Trance Classics" -> "trance")
- label names never show up as tags (the label facet already covers them)

All tables here are DEFAULTS - the normalizer receives them via NormalizerRules so they
can be swapped out or extended without touching control flow.

Examples:
    >>> canonicalize_tag("Great Britain", DEFAULT_SYNONYMS)
    'UK'
    >>> canonicalize_tag("Acid Trance 1993", DEFAULT_SYNONYMS)
    'Acid Trance 1993'
    >>> sorted(decade_buckets("1995-2003"))
    ['1990s', '2000s']
"""

import re
from collections.abc import Iterable, Mapping

# =============================================================================
# SYNONYMS
# Hey future me - keys are LOOKUP KEYS (see tag_lookup_key), values are the canonical
# spelling shown in the UI. Keep keys lowercase, no punctuation, "&" already spelled "and".
# Canonical values map to themselves automatically (NormalizerRules takes care of that).
# =============================================================================

DEFAULT_SYNONYMS: dict[str, str] = {
    # United Kingdom
    "great britain": "UK",
    "britain": "UK",
    "united kingdom": "UK",
    "england": "UK",
    "gb": "UK",
    # Germany
    "deutschland": "Germany",
    "west germany": "Germany",
    # United States
    "us": "USA",
    "united states": "USA",
    "united states of america": "USA",
    "america": "USA",
    # Netherlands
    "holland": "Netherlands",
    "the netherlands": "Netherlands",
    "nederland": "Netherlands",
    # Belgium
    "belgie": "Belgium",
    "belgique": "Belgium",
    # Southern Europe
    "italia": "Italy",
    "espana": "Spain",
    # Nordics
    "sverige": "Sweden",
    "norge": "Norway",
    "suomi": "Finland",
    # Asia
    "nippon": "Japan",
    # Styles with many spellings
    "drum n bass": "drum and bass",
    "drum bass": "drum and bass",
    "dnb": "drum and bass",
    "hiphop": "hip hop",
    "rnb": "r&b",
    "r n b": "r&b",
    "drumnbass": "drum and bass",
}

# Hey future me - these are TRACK VERSION descriptors, not styles! "Original Mix", "Radio Edit",
# "Extended Version", "2012 Remaster" say nothing about what the music sounds like, so they
# never become filter tags. Matched against the lowercased tag.
DEFAULT_DESCRIPTOR_PATTERN = (
    r"\b(?:re)?mix(?:es|ed)?\b"
    r"|\bedit\b"
    r"|\bversion\b"
    r"|\bremaster(?:ed)?\b"
    r"|\brework\b"
)

# =============================================================================
# TAG BUCKETS
# Bucket name -> regex searched in the lowercased tag. A tag may hit SEVERAL buckets
# ("acid trance" -> acid + trance). Tags that hit nothing fall back to themselves.
# =============================================================================

DEFAULT_TAG_BUCKETS: dict[str, str] = {
    "trance": r"trance",
    "house": r"house",
    "techno": r"techno",
    "acid": r"\bacid\b",
    "ambient": r"ambient",
    "drum and bass": r"drum\s*(?:and|n)?\s*bass|\bdnb\b|jungle",
    "breakbeat": r"\bbreak(?:beat|s)\b",
    "hardcore": r"hardcore|gabber",
    "electro": r"\belectro\b",
    "downtempo": r"downtempo|trip\s*hop|chill\s*out",
    "disco": r"disco",
    "eurodance": r"euro\s*dance|eurobeat",
    "synthpop": r"synth\s*pop",
    "hip hop": r"hip\s*hop|\brap\b",
    "garage": r"garage",
    "dub": r"\bdub\b|dubstep",
    "industrial": r"industrial|\bebm\b",
}

# Year tokens 1900-2099 not glued to other digits ("1993", "1995-2003", "1990s").
YEAR_TOKEN = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")

_NON_ALNUM = re.compile(r"[^0-9a-z\s]")
_WHITESPACE = re.compile(r"\s+")


def tag_lookup_key(text: str) -> str:
    """Build the synonym-table lookup key for a tag.

    Lowercase, "&" spelled out as "and", everything but letters/digits/spaces removed,
    whitespace collapsed.

    Examples:
        >>> tag_lookup_key("U.K.")
        'uk'
        >>> tag_lookup_key("Drum & Bass")
        'drum and bass'
    """
    key = text.lower().replace("&", " and ")
    key = _NON_ALNUM.sub("", key)
    return _WHITESPACE.sub(" ", key).strip()


def canonicalize_tag(tag: str, synonyms: Mapping[str, str]) -> str | None:
    """Map a single tag to its canonical spelling.

    Known variants are replaced by the table value; unknown tags keep their original
    casing and spelling (only surrounding whitespace is trimmed). Returns None for tags
    that are empty after trimming.
    """
    stripped = tag.strip()
    if not stripped:
        return None
    return synonyms.get(tag_lookup_key(stripped), stripped)


def split_combined(value: str) -> list[str]:
    """Split a slash-combined value ("house/techno") into trimmed, non-empty parts."""
    return [part.strip() for part in value.split("/") if part.strip()]


def normalize_tag_values(
    values: Iterable[str], synonyms: Mapping[str, str]
) -> frozenset[str]:
    """Split and canonicalize a sequence of raw tag/country strings into a set."""
    result: set[str] = set()
    for value in values:
        for part in split_combined(value):
            canonical = canonicalize_tag(part, synonyms)
            if canonical:
                result.add(canonical)
    return frozenset(result)


def decade_buckets(tag: str) -> frozenset[str]:
    """Return the decade buckets for every year token in a tag.

    Hey future me - a range like "1995-2003" spans two decades and lands in BOTH buckets.
    Empty set means the tag has no year in it.

    Examples:
        >>> sorted(decade_buckets("Acid Trance 1993"))
        ['1990s']
        >>> decade_buckets("Acid Trance")
        frozenset()
    """
    decades: set[str] = set()
    for match in YEAR_TOKEN.finditer(tag):
        year = int(match.group(1))
        decades.add(f"{year // 10 * 10}s")
    return frozenset(decades)


def is_descriptor(tag: str, descriptor_pattern: re.Pattern[str]) -> bool:
    """Check whether a tag is a mix/edit/version descriptor."""
    return descriptor_pattern.search(tag.lower()) is not None


def bucket_tag(tag: str, buckets: Mapping[str, re.Pattern[str]]) -> frozenset[str]:
    """Return every bucket a tag belongs to, or the tag itself when none match."""
    lowered = tag.lower()
    hits = {name for name, pattern in buckets.items() if pattern.search(lowered)}
    return frozenset(hits) if hits else frozenset({tag})


def overlaps_label(entry: str, labels: Iterable[str]) -> bool:
    """Check whether a filter-tag entry equals or contains a label name (case-insensitive)."""
    lowered = entry.lower()
    return any(label.lower() in lowered for label in labels if label)


def derive_filter_tags(
    normalized_tags: Iterable[str],
    labels: Iterable[str],
    descriptor_pattern: re.Pattern[str],
    buckets: Mapping[str, re.Pattern[str]],
) -> frozenset[str]:
    """Derive the coarse filter-tag set from canonical tags.

    Order of the steps matters:
    1. descriptors are dropped
    2. a dated tag becomes its decade(s) and NOTHING else
    3. undated tags go to their pattern buckets (or stay as-is)
    4. anything equal to / containing a label name is removed

    Examples:
        >>> import re
        >>> pattern = re.compile(DEFAULT_DESCRIPTOR_PATTERN)
        >>> compiled = {k: re.compile(v) for k, v in DEFAULT_TAG_BUCKETS.items()}
        >>> sorted(derive_filter_tags(["Acid Trance 1993"], [], pattern, compiled))
        ['1990s']
        >>> sorted(derive_filter_tags(["Acid Trance"], [], pattern, compiled))
        ['acid', 'trance']
    """
    label_list = [label for label in labels if label]
    result: set[str] = set()
    for tag in normalized_tags:
        if is_descriptor(tag, descriptor_pattern):
            continue
        decades = decade_buckets(tag)
        if decades:
            result.update(decades)
            continue
        result.update(bucket_tag(tag, buckets))
    return frozenset(entry for entry in result if not overlaps_label(entry, label_list))
