"""
Tests for configuration policies and vocabulary tables.
"""

import dataclasses

import pytest

from seo_content_analyzer.config import (
    DEFAULT_VOCABULARY,
    DensityPolicy,
    LinkGraphPolicy,
    LSIPolicy,
    PrecisionVocabulary,
)


class TestDensityPolicy:
    """Tests for DensityPolicy validation."""

    def test_defaults(self):
        """Test default thresholds."""
        policy = DensityPolicy()

        assert policy.low_density_threshold == 0.5
        assert policy.high_density_threshold == 2.0
        assert policy.long_sentence_words == 30
        assert policy.min_word_count == 300

    def test_low_must_be_below_high(self):
        """Test that inverted thresholds are rejected."""
        with pytest.raises(ValueError, match="must be <"):
            DensityPolicy(low_density_threshold=3.0, high_density_threshold=2.0)

    @pytest.mark.parametrize("kwargs", [
        {"low_density_threshold": -1},
        {"long_sentence_words": 0},
        {"min_word_count": -5},
        {"optimal_range": (3.0, 1.0)},
        {"max_contexts": -1},
    ])
    def test_invalid_values(self, kwargs):
        """Test that out-of-range values are rejected."""
        with pytest.raises(ValueError):
            DensityPolicy(**kwargs)


class TestLSIPolicy:
    """Tests for LSIPolicy validation."""

    @pytest.mark.parametrize("kwargs", [
        {"min_semantic_score": 1.5},
        {"max_integrations_per_sentence": 0},
        {"context_window": 0},
        {"max_insertions_per_term": 0},
    ])
    def test_invalid_values(self, kwargs):
        """Test that out-of-range values are rejected."""
        with pytest.raises(ValueError):
            LSIPolicy(**kwargs)


class TestLinkGraphPolicy:
    """Tests for LinkGraphPolicy presets and validation."""

    def test_presets(self):
        """Test the strict and lenient presets."""
        assert LinkGraphPolicy.strict().max_accessible_depth == 2
        assert LinkGraphPolicy.lenient().max_accessible_depth == 4
        assert LinkGraphPolicy().max_accessible_depth == 3

    def test_preset_overrides(self):
        """Test that preset values can be overridden."""
        policy = LinkGraphPolicy.strict(max_accessible_depth=5)

        assert policy.max_accessible_depth == 5
        assert policy.hub_multiplier == 1.5

    @pytest.mark.parametrize("kwargs", [
        {"hub_multiplier": 0},
        {"authority_multiplier": -1},
        {"max_accessible_depth": -1},
    ])
    def test_invalid_values(self, kwargs):
        """Test that out-of-range values are rejected."""
        with pytest.raises(ValueError):
            LinkGraphPolicy(**kwargs)


class TestPrecisionVocabulary:
    """Tests for the immutable vocabulary tables."""

    def test_default_tables(self):
        """Test that default tables hold the expected entries."""
        assert DEFAULT_VOCABULARY.vague_terms["very"] == ("",)
        assert DEFAULT_VOCABULARY.clarity_phrases["in order to"] == ("to",)
        assert "help" in DEFAULT_VOCABULARY.semantic_enhancements

    def test_tables_read_only(self):
        """Test that tables cannot be modified in place."""
        with pytest.raises(TypeError):
            DEFAULT_VOCABULARY.vague_terms["synergy"] = ("collaboration",)

    def test_vocabulary_frozen(self):
        """Test that vocabulary attributes cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_VOCABULARY.vague_terms = {}

    def test_extend_returns_new_vocabulary(self):
        """Test that extend merges entries without changing the original."""
        extended = DEFAULT_VOCABULARY.extend(
            clarity_phrases={"At The End Of The Day": ("ultimately",)}
        )

        assert extended.clarity_phrases["at the end of the day"] == ("ultimately",)
        assert "at the end of the day" not in DEFAULT_VOCABULARY.clarity_phrases
        assert extended.vague_terms == DEFAULT_VOCABULARY.vague_terms

    def test_plain_dicts_frozen(self):
        """Test that plain dicts passed in are stored read-only."""
        vocabulary = PrecisionVocabulary(vague_terms={"stuff": ["items"]})

        assert vocabulary.vague_terms["stuff"] == ("items",)
        with pytest.raises(TypeError):
            vocabulary.vague_terms["new"] = ("x",)
