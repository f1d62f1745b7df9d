"""Result ordering."""

from collections.abc import Callable, Iterable

from songshelf.domain.entities import Song
from songshelf.domain.value_objects.filter_state import SortKey

_SORT_KEYS: dict[SortKey, Callable[[Song], str | int]] = {
    SortKey.TITLE: lambda song: song.title.lower(),
    SortKey.ARTIST: lambda song: song.artist.lower(),
    # Unknown year sorts as 0 (earliest). Only here - filtering never does this.
    SortKey.YEAR: lambda song: song.release_year or 0,
}


def sort_songs(
    songs: Iterable[Song], key: "SortKey | str" = SortKey.TITLE, ascending: bool = True
) -> list[Song]:
    """Stable sort by title, artist (lowercased, code point order) or year.

    Hey future me - sorted(reverse=True) flips the KEY ordering but keeps equal elements
    in their original order (Python guarantees this), so ties never reorder in either
    direction. Don't "optimize" this into sorted(...)[::-1] - that reverses the ties too!
    """
    sort_key = SortKey.parse(key)
    return sorted(songs, key=_SORT_KEYS[sort_key], reverse=not ascending)
