"""Record label parsing.

Hey future me - the label field in songs.json is the wild west:
- absent
- "Warner"
- "Warner (UK) / Licensed to Sony"
- "Kontor, Zeitgeist"
- ["Warner", "Sony Music (Germany)"]

We want a clean set of label NAMES: parenthetical notes like "(UK)" or "(Germany)" are
dropped, licensing boilerplate ("Licensed to", "under exclusive license from") is stripped,
and combined values are split on "/" and ",".

Examples:
    >>> sorted(parse_labels("Warner (UK) / Licensed to Sony"))
    ['Sony', 'Warner']
    >>> sorted(parse_labels(["Kontor, Zeitgeist", None]))
    ['Kontor', 'Zeitgeist']
"""

import re
from typing import Any

_PARENTHETICAL = re.compile(r"\([^)]*\)")
_SEPARATORS = re.compile(r"[/,]")
_LICENSING = re.compile(
    r"\b(?:under\s+(?:exclusive\s+)?licen[cs]e\s+(?:to|from)"
    r"|(?:exclusively\s+)?licen[cs]ed\s+(?:to|from))\b",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")


def clean_label(part: str) -> str:
    """Strip licensing boilerplate and collapse whitespace in one label fragment."""
    cleaned = _LICENSING.sub(" ", part)
    return _WHITESPACE.sub(" ", cleaned).strip()


def parse_label_string(value: str) -> list[str]:
    """Split one label string into clean names, in order of appearance.

    Parentheticals go first so commas inside "(UK, EU)" don't split anything.
    """
    without_notes = _PARENTHETICAL.sub(" ", value)
    names: list[str] = []
    for part in _SEPARATORS.split(without_notes):
        name = clean_label(part)
        if name and name not in names:
            names.append(name)
    return names


def parse_labels(value: Any) -> frozenset[str]:
    """Parse a raw label field (absent, string or sequence of strings) into a name set.

    Non-string entries inside a sequence are ignored; the normalizer reports them.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset(parse_label_string(value))
    if isinstance(value, (list, tuple)):
        names: set[str] = set()
        for item in value:
            if isinstance(item, str):
                names.update(parse_label_string(item))
        return frozenset(names)
    return frozenset()
