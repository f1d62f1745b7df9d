"""Mood inference from free text.

Hey future me - moods are NOT in the catalog! We guess them by scanning the song's
description, tags and subgenres for keywords. It's a best-effort heuristic: a song can
end up with zero moods or several ("dark" AND "energetic" is totally normal for techno).

The table is data, not code. NormalizerRules carries it into the normalizer, and a rules
file can replace it entirely.

Examples:
    >>> compiled = compile_mood_table(DEFAULT_MOOD_KEYWORDS)
    >>> sorted(infer_moods("A dark, pounding warehouse anthem", compiled))
    ['dark', 'energetic']
"""

import re
from collections.abc import Iterable, Mapping

# Mood category -> keywords (lowercase). Matched on word boundaries so "sad" doesn't fire
# on "crusade".
DEFAULT_MOOD_KEYWORDS: dict[str, list[str]] = {
    "energetic": [
        "energetic", "energy", "pounding", "driving", "banger", "anthem",
        "peak time", "hard", "fast", "rave", "uptempo",
    ],
    "dark": ["dark", "sinister", "haunting", "eerie", "menacing", "industrial", "gritty"],
    "melancholic": [
        "melancholic", "melancholy", "sad", "bittersweet", "heartbreak", "longing",
        "wistful", "lonely",
    ],
    "uplifting": ["uplifting", "euphoric", "euphoria", "anthemic", "soaring", "hopeful", "bright"],
    "chill": ["chill", "chillout", "relaxed", "relaxing", "mellow", "laid back", "calm", "lounge"],
    "dreamy": ["dreamy", "ethereal", "hypnotic", "floating", "atmospheric", "spacey", "ambient"],
    "happy": ["happy", "joyful", "fun", "feel good", "cheerful", "sunny", "party"],
    "romantic": ["romantic", "love", "sensual", "tender", "passionate"],
    "nostalgic": ["nostalgic", "nostalgia", "retro", "classic", "throwback", "old school"],
    "aggressive": ["aggressive", "angry", "brutal", "harsh", "rage", "distorted"],
}


def compile_mood_table(table: Mapping[str, Iterable[str]]) -> dict[str, re.Pattern[str]]:
    """Compile each mood's keyword list into a single word-boundary regex.

    Moods with no usable keywords are dropped.
    """
    compiled: dict[str, re.Pattern[str]] = {}
    for mood, keywords in table.items():
        words = sorted({kw.strip().lower() for kw in keywords if kw and kw.strip()})
        if not words:
            continue
        alternation = "|".join(re.escape(word) for word in words)
        compiled[mood] = re.compile(rf"(?<!\w)(?:{alternation})(?!\w)")
    return compiled


def infer_moods(text: str, compiled_table: Mapping[str, re.Pattern[str]]) -> frozenset[str]:
    """Return every mood whose keywords appear in the (lowercased) text."""
    if not text:
        return frozenset()
    lowered = text.lower()
    return frozenset(
        mood for mood, pattern in compiled_table.items() if pattern.search(lowered)
    )
