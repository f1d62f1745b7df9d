"""Unit tests for result sorting."""

from collections.abc import Callable

import pytest

from songshelf.application.services.sorting import sort_songs
from songshelf.domain.entities import Song
from songshelf.domain.exceptions import ValidationError
from songshelf.domain.value_objects.filter_state import SortKey


def ids(songs: list[Song]) -> list[str]:
    return [song.id for song in songs]


class TestSortSongs:
    """Tests for sort_songs function."""

    def test_title_case_insensitive(self, make_song: Callable[..., Song]) -> None:
        """Test titles sort without regard to case."""
        songs = [make_song("1", title="beta"), make_song("2", title="Alpha"), make_song("3", title="gamma")]
        assert ids(sort_songs(songs)) == ["2", "1", "3"]
        assert ids(sort_songs(songs, SortKey.TITLE, ascending=False)) == ["3", "1", "2"]

    def test_artist(self, make_song: Callable[..., Song]) -> None:
        """Test sorting by artist accepts a string key."""
        songs = [make_song("1", artist="Zed"), make_song("2", artist="abba")]
        assert ids(sort_songs(songs, "artist")) == ["2", "1"]

    def test_year_unknown_sorts_first(self, make_song: Callable[..., Song]) -> None:
        """Test a missing year counts as 0 when sorting."""
        songs = [
            make_song("1", release_year=1998),
            make_song("2"),
            make_song("3", release_year=1993),
        ]
        assert ids(sort_songs(songs, SortKey.YEAR)) == ["2", "3", "1"]
        assert ids(sort_songs(songs, SortKey.YEAR, ascending=False)) == ["1", "3", "2"]

    @pytest.mark.parametrize("ascending", [True, False])
    def test_ties_keep_catalog_order(
        self, make_song: Callable[..., Song], ascending: bool
    ) -> None:
        """Test equal keys keep their relative order in both directions."""
        songs = [
            make_song("a", title="Same"),
            make_song("b", title="Other"),
            make_song("c", title="same"),
            make_song("d", title="SAME"),
        ]
        result = ids(sort_songs(songs, SortKey.TITLE, ascending=ascending))
        ties = [song_id for song_id in result if song_id != "b"]
        assert ties == ["a", "c", "d"]

    def test_input_not_modified(self, make_song: Callable[..., Song]) -> None:
        """Test sorting returns a new list."""
        songs = [make_song("1", title="b"), make_song("2", title="a")]
        sort_songs(songs)
        assert ids(songs) == ["1", "2"]

    def test_unknown_key(self, make_song: Callable[..., Song]) -> None:
        """Test unknown sort keys raise ValidationError."""
        with pytest.raises(ValidationError):
            sort_songs([make_song("1")], "rating")
