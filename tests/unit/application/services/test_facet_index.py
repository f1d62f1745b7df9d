"""Unit tests for FacetIndex override counts.

Hey future me - the key property: for an UNSELECTED option, the count must equal the number
of results you'd actually get after ticking it. test_override_count_matches_real_results
checks exactly that for every facet and every option.
"""

from collections.abc import Callable

import pytest

from songshelf.application.services.facet_index import FacetIndex, option_counts
from songshelf.application.services.filter_evaluator import evaluate
from songshelf.domain.entities import Song
from songshelf.domain.exceptions import ValidationError
from songshelf.domain.value_objects.filter_state import FilterState


@pytest.fixture
def ten_songs(make_song: Callable[..., Song]) -> list[Song]:
    """Ten songs, four of them tagged 'house', the rest 'ambient'."""
    return [
        make_song(str(i), filter_tags=frozenset({"house" if i < 4 else "ambient"}))
        for i in range(10)
    ]


@pytest.fixture
def mixed_songs(make_song: Callable[..., Song]) -> list[Song]:
    return [
        make_song(
            "1",
            filter_tags=frozenset({"trance", "1990s"}),
            countries=frozenset({"UK"}),
            genres=("Electronic",),
            moods=frozenset({"uplifting"}),
            release_year=1993,
        ),
        make_song(
            "2",
            filter_tags=frozenset({"house", "techno"}),
            countries=frozenset({"Germany", "UK"}),
            genres=("Electronic",),
            moods=frozenset({"dark", "energetic"}),
            release_year=1998,
        ),
        make_song(
            "3",
            filter_tags=frozenset({"downtempo"}),
            countries=frozenset({"UK"}),
            genres=("Downtempo",),
            moods=frozenset({"chill"}),
        ),
        make_song(
            "4",
            filter_tags=frozenset({"house"}),
            countries=frozenset({"USA"}),
            genres=("Electronic", "Dance"),
            moods=frozenset({"chill"}),
            release_year=2004,
        ),
        make_song(
            "5",
            filter_tags=frozenset({"techno"}),
            countries=frozenset({"Germany"}),
            genres=("Rock",),
            release_year=1998,
        ),
    ]


class TestOverrideCounts:
    """Tests for the 'what if I click this' counts."""

    def test_selected_option_counts_without_itself(self, ten_songs: list[Song]) -> None:
        """Test a ticked option's count is the result count after unticking it."""
        index = FacetIndex(ten_songs)
        state = FilterState().with_selection("tags", {"house"})
        assert len(evaluate(ten_songs, state)) == 4
        assert index.option_counts("tags", state)["house"] == 10

    def test_unselected_option_counts_with_itself(self, ten_songs: list[Song]) -> None:
        """Test an unticked option's count includes it in the OR set."""
        index = FacetIndex(ten_songs)
        state = FilterState().with_selection("tags", {"house"})
        assert index.option_counts("tags", state)["ambient"] == 10
        assert index.option_counts("tags", FilterState())["ambient"] == 6

    def test_counts_across_facets(self, mixed_songs: list[Song]) -> None:
        """Test another facet's selection narrows the counts."""
        index = FacetIndex(mixed_songs)
        state = FilterState().with_selection("countries", {"Germany"})
        counts = index.option_counts("tags", state)
        assert counts["techno"] == 2
        assert counts["house"] == 1
        assert counts["trance"] == 0

    def test_override_count_matches_real_results(self, mixed_songs: list[Song]) -> None:
        """Test every unticked option's count equals the results after ticking it."""
        index = FacetIndex(mixed_songs)
        state = (
            FilterState()
            .with_selection("countries", {"UK"})
            .with_selection("genres", {"Electronic"})
            .with_year_bound("min", 1990)
        )
        for facet in index.facets:
            current = state.selection(facet.name)
            for value, count in index.option_counts(facet.name, state).items():
                if value in current:
                    continue
                ticked = state.with_selection(facet.name, current | {value})
                assert count == len(evaluate(mixed_songs, ticked)), (facet.name, value)

    def test_keys_sorted(self, mixed_songs: list[Song]) -> None:
        """Test option keys come back in lexicographic order."""
        counts = FacetIndex(mixed_songs).option_counts("tags", FilterState())
        assert list(counts) == sorted(counts)

    def test_module_function_matches_index(self, mixed_songs: list[Song]) -> None:
        """Test the free function gives the same numbers as the index."""
        state = FilterState().with_selection("moods", {"chill"})
        assert option_counts("genres", mixed_songs, state) == FacetIndex(
            mixed_songs
        ).option_counts("genres", state)

    def test_unknown_facet(self, mixed_songs: list[Song]) -> None:
        """Test unknown facet names raise ValidationError."""
        index = FacetIndex(mixed_songs)
        with pytest.raises(ValidationError):
            index.option_counts("colour", FilterState())
        with pytest.raises(ValidationError):
            index.distinct_values("colour")


class TestTextQueryPolicy:
    """Tests for count_respects_text_query."""

    def test_text_query_respected_by_default(self, make_song: Callable[..., Song]) -> None:
        """Test counts include the search text by default."""
        songs = [
            make_song("1", title="Love Theme", countries=frozenset({"UK"})),
            make_song("2", title="Night Drive", countries=frozenset({"UK"})),
        ]
        state = FilterState().with_text_query("love")
        assert FacetIndex(songs).option_counts("countries", state) == {"UK": 1}

    def test_text_query_ignored_when_disabled(self, make_song: Callable[..., Song]) -> None:
        """Test counts ignore the search text when the policy is off."""
        songs = [
            make_song("1", title="Love Theme", countries=frozenset({"UK"})),
            make_song("2", title="Night Drive", countries=frozenset({"UK"})),
        ]
        state = FilterState().with_text_query("love")
        index = FacetIndex(songs, count_respects_text_query=False)
        assert index.option_counts("countries", state) == {"UK": 2}


class TestFacetOptions:
    """Tests for rendered facet options."""

    def test_options_carry_selection(self, mixed_songs: list[Song]) -> None:
        """Test selected flags mirror the state."""
        state = FilterState().with_selection("countries", {"UK"})
        options = FacetIndex(mixed_songs).facet_options("countries", state)
        assert [(o.value, o.selected) for o in options] == [
            ("Germany", False),
            ("UK", True),
            ("USA", False),
        ]
        assert options[1].display_label == "UK (5)"

    def test_zero_count_options_shown_by_default(self, mixed_songs: list[Song]) -> None:
        """Test zero-count options are kept unless hiding is enabled."""
        state = FilterState().with_selection("genres", {"Rock"})
        options = FacetIndex(mixed_songs).facet_options("countries", state)
        assert {o.value: o.count for o in options} == {"Germany": 1, "UK": 0, "USA": 0}

    def test_hide_zero_count_options(self, mixed_songs: list[Song]) -> None:
        """Test unselected zero-count options are hidden when enabled."""
        state = FilterState().with_selection("genres", {"Rock"})
        index = FacetIndex(mixed_songs, hide_zero_count_options=True)
        assert [o.value for o in index.facet_options("countries", state)] == ["Germany"]

    def test_selected_zero_count_option_kept(self, mixed_songs: list[Song]) -> None:
        """Test a selected option stays visible at zero so it can be unticked."""
        state = FilterState().with_selection("countries", {"UK"}).with_text_query("zzz")
        index = FacetIndex(mixed_songs, hide_zero_count_options=True)
        options = index.facet_options("countries", state)
        assert [(o.value, o.count, o.selected) for o in options] == [("UK", 0, True)]

    def test_distinct_values(self, mixed_songs: list[Song]) -> None:
        """Test distinct values are sorted and cover the whole catalog."""
        index = FacetIndex(mixed_songs)
        assert index.distinct_values("genres") == ["Dance", "Downtempo", "Electronic", "Rock"]
        assert index.distinct_values("artists") == [f"Artist {i}" for i in range(1, 6)]
