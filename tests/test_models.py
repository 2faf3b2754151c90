"""Tests for result models and serialization."""

import json

from seo_content_analyzer.models import (
    LinkDistributionAnalysisResult,
    OverallDensity,
    PageDepth,
    Severity,
    Suggestion,
    SuggestionType,
    to_dict,
)


class TestToDict:
    """Tests for to_dict."""

    def test_enums_become_values(self):
        """Test that enum fields serialize to their string values."""
        suggestion = Suggestion(
            type=SuggestionType.KEYWORD,
            severity=Severity.HIGH,
            title="Low keyword density",
            message="Use the keyword more often.",
            keyword="seo",
            density=0.0,
        )

        data = to_dict(suggestion)

        assert data["type"] == "keyword"
        assert data["severity"] == "high"
        assert data["keyword"] == "seo"

    def test_tuples_become_lists(self):
        """Test that tuples serialize as JSON lists."""
        data = to_dict(OverallDensity(total_keyword_density=1.5, optimal_range=(1.0, 3.0), is_optimal=True))

        assert data["optimal_range"] == [1.0, 3.0]

    def test_list_of_records(self):
        """Test that lists of records are serialized item by item."""
        data = to_dict([PageDepth(url="https://example.com/", depth=0)])

        assert data == [{"url": "https://example.com/", "depth": 0}]

    def test_json_serializable(self):
        """Test that nested results dump to JSON."""
        result = LinkDistributionAnalysisResult(
            total_pages=1,
            link_depth_analysis=[PageDepth(url="https://example.com/", depth=0)],
        )

        payload = json.dumps(to_dict(result))

        assert '"link_depth_analysis"' in payload


class TestDepthOf:
    """Tests for LinkDistributionAnalysisResult.depth_of."""

    def test_depth_lookup(self):
        """Test depth lookup for reached and unreached pages."""
        result = LinkDistributionAnalysisResult(
            link_depth_analysis=[PageDepth(url="https://example.com/a", depth=2)]
        )

        assert result.depth_of("https://example.com/a") == 2
        assert result.depth_of("https://example.com/b") is None
