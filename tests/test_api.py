"""
Tests for the FastAPI wrapper.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent / "api"))

from index import app  # noqa: E402

from conftest import HOME  # noqa: E402


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    """Tests for the informational endpoints."""

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_info_lists_endpoints(self, client):
        """Test that the info endpoint lists the link endpoints."""
        endpoints = client.get("/api/info").json()["endpoints"]

        assert "POST /api/links/analyze" in endpoints


class TestContentEndpoints:
    """Tests for the content analysis endpoints."""

    def test_keyword_density(self, client, sample_article):
        """Test density suggestions with a detailed report."""
        response = client.post("/api/keyword-density", json={
            "content": sample_article,
            "target_keywords": ["pricing"],
            "primary_keyword": "content marketing",
            "competitors": [{"url": "https://a.example", "content": "content marketing tips"}],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["suggestions"][0]["keyword"] == "pricing"
        assert data["suggestions"][0]["severity"] == "high"
        assert data["report"]["primary_keyword"]["frequency"] == 3
        assert data["report"]["competitor_comparison"]["ranking"] >= 1

    def test_keyword_density_invalid_thresholds(self, client):
        """Test that inverted thresholds return 422."""
        response = client.post("/api/keyword-density", json={
            "content": "text",
            "low_density_threshold": 5,
            "high_density_threshold": 1,
        })

        assert response.status_code == 422

    def test_precision(self, client):
        """Test precision enhancement with scores."""
        data = client.post("/api/precision", json={"content": "This is very good."}).json()

        assert data["content"] == "This is effective."
        assert len(data["changes"]) == 2
        assert data["score_after"] > data["score_before"]

    def test_precision_score(self, client):
        """Test the precision score endpoint."""
        data = client.post("/api/precision/score", json={"content": "very very very"}).json()

        assert data["score"] == 0.0
        assert data["analysis"]["vague_words"] == ["very", "very", "very"]

    def test_lsi_integrate(self, client):
        """Test LSI integration."""
        response = client.post("/api/lsi/integrate", json={
            "content": "SEO is important.",
            "lsi_keywords": [{"term": "optimization", "relevance": 0.8, "semantic_score": 0.9}],
        })

        assert response.json()["optimized_content"] == "SEO is important with optimization."

    def test_lsi_competitors(self, client):
        """Test competitor LSI analysis."""
        response = client.post("/api/lsi/competitors", json={
            "competitor_contents": ["Keyword research matters. Keyword research wins."],
        })

        terms = [t["term"] for t in response.json()["terms"]]
        assert "keyword" in terms

    def test_alignment(self, client):
        """Test problem-solution alignment."""
        data = client.post("/api/alignment", json={
            "content": "Slow pages are a problem. The solution is caching.",
            "user_problems": ["slow pages", "broken links"],
        }).json()

        assert data["analysis"]["gap_analysis"] == ["broken links"]
        assert data["stats"]["gaps_count"] == 1


class TestLinkEndpoints:
    """Tests for the internal link endpoints."""

    PAGES = [
        {"url": HOME, "internalLinksTo": [f"{HOME}a", f"{HOME}b"]},
        {"url": f"{HOME}a", "internalLinksTo": [HOME]},
        {"url": f"{HOME}b", "internalLinksTo": []},
    ]

    def test_analyze_with_derived_incoming(self, client):
        """Test link graph analysis with incoming links derived."""
        response = client.post("/api/links/analyze", json={
            "pages": self.PAGES,
            "homepage_url": HOME,
            "derive_incoming": True,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["total_pages"] == 3
        assert data["orphan_pages"] == []
        assert {d["url"]: d["depth"] for d in data["link_depth_analysis"]}[f"{HOME}b"] == 1

    def test_analyze_without_incoming_reports_orphans(self, client):
        """Test that pages without supplied incoming links are orphans."""
        data = client.post("/api/links/analyze", json={
            "pages": self.PAGES,
            "homepage_url": HOME,
        }).json()

        assert data["orphan_pages"] == [f"{HOME}a", f"{HOME}b"]

    def test_analyze_malformed_pages(self, client):
        """Test that a malformed page record returns 422."""
        response = client.post("/api/links/analyze", json={
            "pages": [{"internalLinksTo": []}],
            "homepage_url": HOME,
        })

        assert response.status_code == 422
        assert "url" in response.json()["detail"]

    def test_analyze_unknown_policy(self, client):
        """Test that an unknown policy name is rejected."""
        response = client.post("/api/links/analyze", json={
            "pages": self.PAGES,
            "homepage_url": HOME,
            "policy": "extreme",
        })

        assert response.status_code == 422

    def test_broken_links(self, client):
        """Test broken link detection with mocked requests."""
        not_found = MagicMock()
        not_found.status_code = 404

        with patch("seo_content_analyzer.broken_links.requests.head", return_value=not_found):
            response = client.post("/api/links/broken", json={
                "pages": [{"url": HOME, "internalLinksTo": [f"{HOME}gone"]}],
            })

        data = response.json()
        assert data["count"] == 1
        assert data["broken_links"][0]["status_code"] == 404

    def test_place_links(self, client):
        """Test link placement."""
        content = "Our seo audit finds issues. " + " ".join(["guidance"] * 60)

        data = client.post("/api/links/place", json={
            "content": content,
            "links": [{"keyword": "seo audit", "url": "/audit"}],
            "options": {"max_links_per_paragraph": 1},
        }).json()

        assert len(data["placed_links"]) == 1
        assert 'href="/audit"' in data["optimized_content"]
