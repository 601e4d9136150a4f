"""Tests for counter resolution.

Verifies the exact → substring → keyword tiers and that ties go to the
first counter in the caller's list.
"""

import pytest

from stitchcount.voice.models import CounterRef
from stitchcount.voice.parser.entity_resolver import (
    match_exact,
    match_keyword,
    match_substring,
    resolve_counter,
)


class TestResolveCounter:
    """Test the full three-tier resolution."""

    def test_no_query_returns_none(self, sample_counters):
        assert resolve_counter(sample_counters) is None
        assert resolve_counter(sample_counters, "") is None

    def test_empty_list_returns_none(self):
        assert resolve_counter([], "row") is None

    def test_substring_match(self):
        counters = [CounterRef(id="1", label="Row Counter")]
        assert resolve_counter(counters, "row") == counters[0]

    def test_no_tier_matches(self):
        assert resolve_counter([CounterRef(id="1", label="Sleeve")], "stitches") is None

    @pytest.mark.parametrize("query,expected_id", [
        ("row counter", "1"),
        ("ROUND", "2"),
        ("stitches", "3"),
        ("the round please", "2"),
        ("rnd", "2"),
        ("rows", "1"),
    ])
    def test_sample_project(self, sample_counters, query: str, expected_id: str):
        found = resolve_counter(sample_counters, query)
        assert found is not None
        assert found.id == expected_id


class TestTiers:
    """Each tier in isolation, and tier precedence."""

    def test_exact_is_case_insensitive(self):
        counters = [CounterRef(id="a", label="Sleeve Rows")]
        assert match_exact(counters, "sleeve rows") == counters[0]

    def test_exact_beats_earlier_substring(self):
        counters = [
            CounterRef(id="a", label="Body Rows"),
            CounterRef(id="b", label="Rows"),
        ]
        assert resolve_counter(counters, "rows").id == "b"

    def test_substring_query_contains_label(self):
        counters = [CounterRef(id="a", label="Sleeve")]
        assert match_substring(counters, "left sleeve counter") == counters[0]

    def test_keyword_uses_category(self):
        counters = [
            CounterRef(id="a", label="Body"),
            CounterRef(id="b", label="Round tracker"),
        ]
        assert match_keyword(counters, "rnds") == counters[1]
        assert resolve_counter(counters, "rnd") == counters[1]

    def test_keyword_abbreviation(self):
        counters = [CounterRef(id="a", label="Stitch markers")]
        assert resolve_counter(counters, "sts") == counters[0]


class TestListOrder:
    """First match in list order wins within a tier."""

    def test_substring_tie_goes_to_first(self):
        counters = [
            CounterRef(id="a", label="Front Row"),
            CounterRef(id="b", label="Back Row"),
        ]
        assert resolve_counter(counters, "row").id == "a"
        assert resolve_counter(list(reversed(counters)), "row").id == "b"

    def test_keyword_tie_goes_to_first(self):
        counters = [
            CounterRef(id="a", label="Stitch A"),
            CounterRef(id="b", label="Stitch B"),
        ]
        assert match_keyword(counters, "stitches").id == "a"

    def test_resolver_does_not_mutate(self, sample_counters):
        before = list(sample_counters)
        resolve_counter(sample_counters, "rows")
        assert sample_counters == before
