"""
Test cases for auto-complete ranking in lexical-only and hybrid modes.
"""

import pytest

from shelfsense.core.autocomplete import AutocompleteConfig, lexical_matches, merge_candidates, suggest
from shelfsense.core.errors import DimensionMismatch
from shelfsense.vector.types import Category, Suggestion

from conftest import build_catalog


@pytest.fixture
def apple_catalog():
    return build_catalog([
        ("apple", Category.PRODUCE, 0.7),
        ("apple juice", Category.BEVERAGES, 0.95),
        ("pineapple", Category.PRODUCE, 0.3),
        ("pear", Category.PRODUCE, 0.85),
    ])


def _names(suggestions):
    return [s.name for s in suggestions]


def test_prefix_matches_fill_slots_first():
    """Test that prefix matches in catalog order take precedence over contains matches."""
    catalog = build_catalog([
        ("apple", Category.PRODUCE, 0.5),
        ("apple juice", Category.BEVERAGES, 0.5),
        ("pineapple", Category.PRODUCE, 0.5),
    ])

    suggestions = suggest("app", catalog, limit=2)

    assert _names(suggestions) == ["apple", "apple juice"]
    assert all(s.score == 1.0 and s.is_lexical_match for s in suggestions)


def test_contains_matches_fill_remaining_slots(apple_catalog):
    """Test that contains-only matches follow prefix matches with a lower score."""
    suggestions = suggest("app", apple_catalog, limit=5)

    assert _names(suggestions) == ["apple", "apple juice", "pineapple"]
    assert suggestions[2].score == 0.8
    assert suggestions[2].is_lexical_match
    assert suggestions[2].category is Category.PRODUCE


def test_lexical_matching_is_case_insensitive_and_trimmed(apple_catalog):
    """Test that case and surrounding whitespace are ignored."""
    assert _names(suggest("  APPLE ", apple_catalog, limit=5)) == ["apple", "apple juice", "pineapple"]


def test_blank_input_returns_nothing(apple_catalog):
    """Test that empty and whitespace-only input produce no suggestions."""
    assert suggest("", apple_catalog) == []
    assert suggest("   ", apple_catalog) == []


def test_empty_catalog_returns_nothing(query):
    """Test that a missing catalog is a valid degenerate input."""
    assert suggest("apple", None, limit=5, query_vector=query) == []


def test_limit_is_respected(apple_catalog):
    """Test that output never exceeds the limit."""
    assert len(suggest("p", apple_catalog, limit=1)) == 1
    assert suggest("p", apple_catalog, limit=0) == []


def test_short_input_stays_lexical(apple_catalog, query):
    """Test that fragments below the minimum length ignore the query vector."""
    suggestions = suggest("ap", apple_catalog, limit=5, query_vector=query)

    assert _names(suggestions) == ["apple", "apple juice", "pineapple"]
    assert all(s.is_lexical_match for s in suggestions)


def test_hybrid_boosts_prefix_matches(apple_catalog, query):
    """Test similarity ranking with a capped boost for prefix matches."""
    suggestions = suggest("app", apple_catalog, limit=5, query_vector=query)

    assert _names(suggestions) == ["apple juice", "pear", "apple", "pineapple"]

    by_name = {s.name: s for s in suggestions}
    assert by_name["apple juice"].score == 1.0
    assert by_name["apple juice"].is_lexical_match
    assert by_name["pear"].score == pytest.approx(0.85, abs=1e-6)
    assert not by_name["pear"].is_lexical_match
    assert by_name["apple"].score == pytest.approx(0.8, abs=1e-6)
    assert by_name["apple"].is_lexical_match
    assert not by_name["pineapple"].is_lexical_match


def test_hybrid_cuts_at_limit(apple_catalog, query):
    """Test that hybrid mode returns only the best limit candidates."""
    suggestions = suggest("app", apple_catalog, limit=2, query_vector=query)
    assert _names(suggestions) == ["apple juice", "pear"]


def test_no_duplicate_names(query):
    """Test that repeated catalog names appear only once in either mode."""
    catalog = build_catalog([
        ("milk", Category.DAIRY, 0.9),
        ("milk", Category.DAIRY, 0.8),
        ("milkshake", Category.FROZEN, 0.7),
    ])

    lexical = suggest("mil", catalog, limit=5)
    hybrid = suggest("milk", catalog, limit=5, query_vector=query)

    assert _names(lexical) == ["milk", "milkshake"]
    assert _names(hybrid) == ["milk", "milkshake"]
    assert hybrid[0].score == pytest.approx(1.0, abs=1e-6)


def test_custom_scores():
    """Test that scoring constants come from configuration."""
    catalog = build_catalog([
        ("bagels", Category.BAKERY, 0.5),
        ("sesame bagels", Category.BAKERY, 0.5),
    ])
    config = AutocompleteConfig(prefix_score=0.9, contains_score=0.4)

    suggestions = suggest("bagel", catalog, limit=5, config=config)

    assert [s.score for s in suggestions] == [0.9, 0.4]


def test_contains_score_must_be_lower():
    """Test that prefix matches must always outrank contains matches."""
    with pytest.raises(ValueError):
        AutocompleteConfig(prefix_score=0.8, contains_score=0.8)


def test_hybrid_dimension_mismatch_raises(apple_catalog):
    """Test that a wrongly sized query vector is surfaced."""
    with pytest.raises(DimensionMismatch):
        suggest("apple", apple_catalog, limit=3, query_vector=[1.0, 0.0])


def test_lexical_matches_partition(apple_catalog):
    """Test the prefix / contains split."""
    prefix, contains = lexical_matches("app", apple_catalog)
    assert prefix == [0, 1]
    assert contains == [2]


def test_merge_is_stable_on_ties():
    """Test that equal scores keep their generator order."""
    candidates = [
        Suggestion(name="bagels", category=Category.BAKERY, score=0.5, is_lexical_match=False),
        Suggestion(name="muffins", category=Category.BAKERY, score=0.7, is_lexical_match=False),
        Suggestion(name="croissants", category=Category.BAKERY, score=0.5, is_lexical_match=False),
    ]

    assert _names(merge_candidates(candidates, limit=3)) == ["muffins", "bagels", "croissants"]
