"""Unit tests for tag canonicalization and filter-tag derivation."""

import re

import pytest

from songshelf.domain.value_objects.normalizer_rules import DEFAULT_RULES
from songshelf.domain.value_objects.tag_normalization import (
    DEFAULT_DESCRIPTOR_PATTERN,
    DEFAULT_TAG_BUCKETS,
    bucket_tag,
    canonicalize_tag,
    decade_buckets,
    derive_filter_tags,
    is_descriptor,
    normalize_tag_values,
    split_combined,
    tag_lookup_key,
)

DESCRIPTORS = re.compile(DEFAULT_DESCRIPTOR_PATTERN)
BUCKETS = {name: re.compile(pattern) for name, pattern in DEFAULT_TAG_BUCKETS.items()}
SYNONYMS = DEFAULT_RULES.synonyms


def derive(tags: list[str], labels: list[str] | None = None) -> frozenset[str]:
    return derive_filter_tags(tags, labels or [], DESCRIPTORS, BUCKETS)


class TestTagLookupKey:
    """Tests for tag_lookup_key function."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("U.K.", "uk"),
            ("Drum & Bass", "drum and bass"),
            ("  Great   Britain ", "great britain"),
            ("Hip-Hop", "hiphop"),
        ],
    )
    def test_lookup_keys(self, text: str, expected: str) -> None:
        """Test keys are lowercase, punctuation-free and whitespace-collapsed."""
        assert tag_lookup_key(text) == expected


class TestCanonicalizeTag:
    """Tests for canonicalize_tag function."""

    @pytest.mark.parametrize(
        "variant",
        ["Great Britain", "United Kingdom", "UK", "U.K.", "  uk  ", "England"],
    )
    def test_uk_variants(self, variant: str) -> None:
        """Test every spelling of the United Kingdom maps to 'UK'."""
        assert canonicalize_tag(variant, SYNONYMS) == "UK"

    def test_germany(self) -> None:
        """Test 'Deutschland' maps to 'Germany'."""
        assert canonicalize_tag("Deutschland", SYNONYMS) == "Germany"

    def test_unknown_tag_keeps_spelling(self) -> None:
        """Test unknown tags are only trimmed, never re-cased."""
        assert canonicalize_tag("  Acid Trance ", SYNONYMS) == "Acid Trance"

    def test_empty_tag(self) -> None:
        """Test whitespace-only tags are dropped."""
        assert canonicalize_tag("   ", SYNONYMS) is None

    def test_canonical_value_is_stable(self) -> None:
        """Test canonicalizing a canonical value gives it back unchanged."""
        for canonical in set(SYNONYMS.values()):
            assert canonicalize_tag(canonical, SYNONYMS) == canonical


class TestNormalizeTagValues:
    """Tests for splitting and canonicalizing tag lists."""

    def test_split_combined(self) -> None:
        """Test slash-combined values are split and trimmed."""
        assert split_combined("house / techno/") == ["house", "techno"]

    def test_dedupes_across_spellings(self) -> None:
        """Test 'Great Britain' and 'UK' collapse into one value."""
        assert normalize_tag_values(["Great Britain", "UK"], SYNONYMS) == {"UK"}

    def test_combined_countries(self) -> None:
        """Test combined country strings yield each canonical country."""
        assert normalize_tag_values(["Deutschland/Great Britain"], SYNONYMS) == {
            "Germany",
            "UK",
        }

    def test_empty_input(self) -> None:
        """Test nothing in gives an empty set."""
        assert normalize_tag_values([], SYNONYMS) == frozenset()


class TestDecadeBuckets:
    """Tests for decade_buckets function."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("1993", {"1990s"}),
            ("Acid Trance 1993", {"1990s"}),
            ("1995-2003", {"1990s", "2000s"}),
            ("2000s", {"2000s"}),
            ("Acid Trance", set()),
            ("Track 12345", set()),
            ("1899", set()),
        ],
    )
    def test_decades(self, tag: str, expected: set[str]) -> None:
        """Test year tokens collapse to their decades."""
        assert decade_buckets(tag) == expected


class TestDescriptorsAndBuckets:
    """Tests for descriptor detection and pattern buckets."""

    @pytest.mark.parametrize(
        "tag", ["Original Mix", "Radio Edit", "Extended Version", "2012 Remaster", "Remix"]
    )
    def test_descriptors(self, tag: str) -> None:
        """Test version descriptors are recognized."""
        assert is_descriptor(tag, DESCRIPTORS)

    def test_style_is_not_descriptor(self) -> None:
        """Test ordinary style tags are not descriptors."""
        assert not is_descriptor("Deep House", DESCRIPTORS)

    def test_tag_hits_several_buckets(self) -> None:
        """Test 'Acid Trance' lands in both acid and trance."""
        assert bucket_tag("Acid Trance", BUCKETS) == {"acid", "trance"}

    def test_unmatched_tag_falls_back_to_itself(self) -> None:
        """Test tags without a bucket keep their canonical spelling."""
        assert bucket_tag("Italo", BUCKETS) == {"Italo"}


class TestDeriveFilterTags:
    """Tests for derive_filter_tags function."""

    def test_dated_tag_becomes_only_its_decade(self) -> None:
        """Test a dated tag yields its decade and nothing else."""
        assert derive(["Acid Trance 1993"]) == {"1990s"}

    def test_undated_tag_goes_to_buckets(self) -> None:
        """Test undated tags are grouped by pattern."""
        assert derive(["Acid Trance", "Deep House"]) == {"acid", "trance", "house"}

    def test_descriptors_are_dropped(self) -> None:
        """Test mix/edit descriptors never become filter tags."""
        assert derive(["Original Mix", "Radio Edit"]) == frozenset()

    def test_label_names_are_removed(self) -> None:
        """Test entries equal to or containing a label are dropped."""
        result = derive(["Kontor", "Kontor Records", "Italo"], labels=["Kontor"])
        assert result == {"Italo"}

    def test_label_match_is_case_insensitive(self) -> None:
        """Test label removal ignores case."""
        assert derive(["sony classics"], labels=["Sony"]) == frozenset()

    def test_country_tag_survives(self) -> None:
        """Test canonical country tags stay in the tag facet."""
        assert derive(["UK", "house"]) == {"UK", "house"}
