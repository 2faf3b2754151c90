"""Tests for broken link detection.

Network access is mocked; no real requests are sent.
"""

import threading
from unittest.mock import MagicMock, patch

import pytest
import requests

from seo_content_analyzer.broken_links import DEADLINE_REASON, detect_broken_links
from seo_content_analyzer.config import BrokenLinkPolicy
from seo_content_analyzer.models import InvalidPageDataError, PageLinkData

from conftest import HOME


HEAD_PATH = "seo_content_analyzer.broken_links.requests.head"


def _response(status_code: int) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    return response


def _by_url(statuses: dict[str, int], default: int = 200):
    def head(url, **kwargs):
        return _response(statuses.get(url, default))
    return head


class TestDetectBrokenLinks:
    """Tests for detect_broken_links with mocked HEAD requests."""

    def test_not_found_reported(self):
        """Test that a 404 target produces one broken link."""
        pages = [PageLinkData(url=HOME, internal_links_to=[f"{HOME}gone"])]

        with patch(HEAD_PATH, return_value=_response(404)):
            broken = detect_broken_links(pages)

        assert len(broken) == 1
        assert broken[0].source_url == HOME
        assert broken[0].target_url == f"{HOME}gone"
        assert broken[0].status_code == 404
        assert broken[0].reason == "HTTP 404"
        assert "existing page" in broken[0].suggestion

    @pytest.mark.parametrize("status", [200, 204, 301, 399])
    def test_success_and_redirect_statuses_ok(self, status):
        """Test that 2xx and 3xx final statuses are not broken."""
        pages = [PageLinkData(url=HOME, internal_links_to=[f"{HOME}ok"])]

        with patch(HEAD_PATH, return_value=_response(status)):
            assert detect_broken_links(pages) == []

    def test_server_error(self):
        """Test that a 5xx status is broken with a server suggestion."""
        pages = [PageLinkData(url=HOME, internal_links_to=[f"{HOME}error"])]

        with patch(HEAD_PATH, return_value=_response(503)):
            broken = detect_broken_links(pages)

        assert broken[0].status_code == 503
        assert "server" in broken[0].suggestion

    def test_connection_error(self):
        """Test that an unreachable host is broken with no status code."""
        pages = [PageLinkData(url=HOME, internal_links_to=["https://down.example/"])]

        with patch(HEAD_PATH, side_effect=requests.ConnectionError("refused")):
            broken = detect_broken_links(pages)

        assert broken[0].status_code is None
        assert broken[0].reason.startswith("Request failed")
        assert broken[0].suggestion.startswith("Could not reach")

    def test_request_timeout(self):
        """Test that a per-request timeout is reported as broken."""
        pages = [PageLinkData(url=HOME, internal_links_to=[f"{HOME}slow"])]

        with patch(HEAD_PATH, side_effect=requests.Timeout("too slow")):
            broken = detect_broken_links(pages, BrokenLinkPolicy(request_timeout=2.0))

        assert broken[0].status_code is None
        assert broken[0].reason == "Timed out after 2.0s"

    def test_request_options(self):
        """Test that requests follow redirects and use the policy timeout."""
        pages = [PageLinkData(url=HOME, internal_links_to=[f"{HOME}a"])]

        with patch(HEAD_PATH, return_value=_response(200)) as mock_head:
            detect_broken_links(pages, BrokenLinkPolicy(request_timeout=3.0))

        _, kwargs = mock_head.call_args
        assert kwargs["allow_redirects"] is True
        assert kwargs["timeout"] == 3.0
        assert "User-Agent" in kwargs["headers"]

    def test_each_url_checked_once(self):
        """Test that a target linked from two pages is requested once and reported twice."""
        target = f"{HOME}gone"
        pages = [
            PageLinkData(url=HOME, internal_links_to=[target]),
            PageLinkData(url=f"{HOME}about", internal_links_to=[target]),
        ]

        with patch(HEAD_PATH, return_value=_response(404)) as mock_head:
            broken = detect_broken_links(pages)

        assert mock_head.call_count == 1
        assert [b.source_url for b in broken] == [HOME, f"{HOME}about"]

    def test_results_in_page_then_link_order(self):
        """Test that results follow page order and then link order."""
        pages = [
            PageLinkData(url=HOME, internal_links_to=[f"{HOME}x", f"{HOME}fine", f"{HOME}y"]),
            PageLinkData(url=f"{HOME}blog", internal_links_to=[f"{HOME}z"]),
        ]
        statuses = {f"{HOME}x": 404, f"{HOME}y": 500, f"{HOME}z": 410}

        with patch(HEAD_PATH, side_effect=_by_url(statuses)):
            broken = detect_broken_links(pages)

        assert [(b.source_url, b.target_url) for b in broken] == [
            (HOME, f"{HOME}x"),
            (HOME, f"{HOME}y"),
            (f"{HOME}blog", f"{HOME}z"),
        ]

    def test_relative_links_resolved(self):
        """Test that relative links are resolved against their page but reported as written."""
        pages = [PageLinkData(url=f"{HOME}blog/post", internal_links_to=["/missing#top"])]

        with patch(HEAD_PATH, return_value=_response(404)) as mock_head:
            broken = detect_broken_links(pages)

        assert mock_head.call_args[0][0] == "https://example.com/missing"
        assert broken[0].target_url == "/missing#top"

    def test_non_http_links_skipped(self):
        """Test that mailto and javascript links are not checked."""
        pages = [PageLinkData(
            url=HOME,
            internal_links_to=["mailto:team@example.com", "javascript:void(0)"],
        )]

        with patch(HEAD_PATH) as mock_head:
            assert detect_broken_links(pages) == []

        mock_head.assert_not_called()

    def test_no_links(self, star_graph):
        """Test that pages without outgoing links send no requests."""
        leaves = star_graph[1:]

        with patch(HEAD_PATH) as mock_head:
            assert detect_broken_links(leaves) == []

        mock_head.assert_not_called()

    def test_overall_deadline(self):
        """Test that links still pending at the deadline are reported as broken."""
        release = threading.Event()
        pages = [PageLinkData(url=HOME, internal_links_to=[f"{HOME}hang"])]

        def hang(url, **kwargs):
            release.wait(timeout=5)
            return _response(200)

        try:
            with patch(HEAD_PATH, side_effect=hang):
                broken = detect_broken_links(pages, BrokenLinkPolicy(overall_timeout=0.05))
        finally:
            release.set()

        assert len(broken) == 1
        assert broken[0].reason == DEADLINE_REASON
        assert broken[0].status_code is None

    def test_session_used(self):
        """Test that a supplied session sends the requests."""
        session = MagicMock()
        session.head.return_value = _response(404)
        pages = [PageLinkData(url=HOME, internal_links_to=[f"{HOME}gone"])]

        with patch(HEAD_PATH) as mock_head:
            broken = detect_broken_links(pages, session=session)

        mock_head.assert_not_called()
        session.head.assert_called_once()
        assert broken[0].status_code == 404

    def test_dict_pages(self):
        """Test that plain dict page records are accepted."""
        pages = [{"url": HOME, "internalLinksTo": [f"{HOME}gone"]}]

        with patch(HEAD_PATH, return_value=_response(404)):
            assert len(detect_broken_links(pages)) == 1

    def test_invalid_pages_raise(self):
        """Test that malformed page records raise before any request."""
        with patch(HEAD_PATH) as mock_head:
            with pytest.raises(InvalidPageDataError):
                detect_broken_links([{"internal_links_to": []}])

        mock_head.assert_not_called()


class TestBrokenLinkPolicy:
    """Tests for BrokenLinkPolicy validation."""

    @pytest.mark.parametrize("kwargs", [
        {"request_timeout": 0},
        {"overall_timeout": -1},
        {"max_workers": 0},
    ])
    def test_invalid_values(self, kwargs):
        """Test that non-positive settings are rejected."""
        with pytest.raises(ValueError):
            BrokenLinkPolicy(**kwargs)
