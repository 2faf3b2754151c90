"""
Tests for keyword_loader module.
"""

from pathlib import Path

import pandas as pd
import pytest

from seo_content_analyzer.keyword_loader import (
    KeywordLoadError,
    load_keyword_list,
    load_lsi_keywords,
)


class TestLoadLsiKeywords:
    """Tests for load_lsi_keywords function."""

    def test_load_csv(self, lsi_terms_csv: Path):
        """Test loading terms with all score columns."""
        keywords = load_lsi_keywords(lsi_terms_csv)

        assert [k.term for k in keywords] == ["search optimization", "keyword research", "backlinks"]
        first = keywords[0]
        assert first.relevance == 0.8
        assert first.semantic_score == 0.9
        assert first.context_strength == 0.7

    def test_percentage_scores(self, lsi_terms_csv: Path):
        """Test that scores above 1 are read as percentages."""
        backlinks = load_lsi_keywords(lsi_terms_csv)[2]

        assert backlinks.relevance == pytest.approx(0.7)
        assert backlinks.semantic_score == pytest.approx(0.5)
        assert backlinks.context_strength == pytest.approx(0.2)

    def test_load_excel(self, lsi_terms_excel: Path):
        """Test loading an Excel file with alternate column names."""
        keywords = load_lsi_keywords(lsi_terms_excel)

        assert [k.term for k in keywords] == ["content strategy", "editorial calendar"]
        assert keywords[0].semantic_score == 0.9
        assert keywords[0].relevance == 1.0
        assert keywords[0].context_strength == 0.0

    def test_terms_only(self, tmp_path: Path):
        """Test defaults when only a term column exists."""
        csv_path = tmp_path / "terms.csv"
        csv_path.write_text("Terms\nsite speed\nSite Speed\n\ncore web vitals\n")

        keywords = load_lsi_keywords(csv_path)

        assert [k.term for k in keywords] == ["site speed", "core web vitals"]
        assert all(k.relevance == 1.0 and k.semantic_score == 1.0 for k in keywords)

    def test_file_not_found(self, tmp_path: Path):
        """Test that a missing file raises an error."""
        with pytest.raises(KeywordLoadError, match="File not found"):
            load_lsi_keywords(tmp_path / "missing.csv")

    def test_unsupported_format(self, tmp_path: Path):
        """Test that unsupported extensions are rejected."""
        txt_path = tmp_path / "terms.txt"
        txt_path.write_text("term\nseo\n")

        with pytest.raises(KeywordLoadError, match="Unsupported file format"):
            load_lsi_keywords(txt_path)

    def test_no_term_column(self, tmp_path: Path):
        """Test that a file without a recognizable term column raises an error."""
        csv_path = tmp_path / "bad.csv"
        csv_path.write_text("name,value\nfoo,1\n")

        with pytest.raises(KeywordLoadError, match="No keyword column found"):
            load_lsi_keywords(csv_path)

    def test_no_valid_terms(self, tmp_path: Path):
        """Test that a term column with only blanks raises an error."""
        csv_path = tmp_path / "blank.csv"
        pd.DataFrame({"term": [None, "  "], "score": [0.5, 0.6]}).to_csv(csv_path, index=False)

        with pytest.raises(KeywordLoadError, match="No valid keywords"):
            load_lsi_keywords(csv_path)


class TestLoadKeywordList:
    """Tests for load_keyword_list function."""

    def test_load_list(self, tmp_path: Path):
        """Test loading a plain keyword list with de-duplication."""
        csv_path = tmp_path / "keywords.csv"
        csv_path.write_text("keyword,volume\nSEO tools,100\nseo tools,50\nlink building,30\n")

        assert load_keyword_list(csv_path) == ["SEO tools", "link building"]

    def test_load_excel_list(self, lsi_terms_excel: Path):
        """Test loading keywords from an Excel file."""
        assert load_keyword_list(lsi_terms_excel) == ["content strategy", "editorial calendar"]
