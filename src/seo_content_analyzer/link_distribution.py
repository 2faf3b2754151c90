"""
Internal link graph analysis.

Given the internal links of every page on a site, computes:
- Link totals and the average number of outgoing links per page
- Orphan pages (nothing links to them)
- How evenly incoming links (link equity) are spread
- Hub pages (many outgoing links) and authority pages (many incoming links)
- Click depth from the homepage, and pages that are too deep or unreachable
"""

import logging
from collections import deque
from typing import Iterable, Optional, Union

import numpy as np

from .config import LinkGraphPolicy
from .models import (
    InvalidPageDataError,
    LinkCountEntry,
    LinkDistributionAnalysisResult,
    PageDepth,
    PageLinkData,
)

logger = logging.getLogger(__name__)

PageInput = Union[PageLinkData, dict]


def coerce_pages(pages: Iterable[PageInput]) -> list[PageLinkData]:
    """
    Validate and convert page records.

    Args:
        pages: PageLinkData instances or plain dicts.

    Returns:
        List of PageLinkData.

    Raises:
        InvalidPageDataError: If a record is malformed or a URL is duplicated.
    """
    records = []
    seen: set[str] = set()
    for page in pages:
        if isinstance(page, PageLinkData):
            record = page
        elif isinstance(page, dict):
            record = PageLinkData.from_dict(page)
        else:
            raise InvalidPageDataError(
                f"Page must be a PageLinkData or dict, got {type(page).__name__}"
            )
        key = url_key(record.url)
        if key in seen:
            raise InvalidPageDataError(f"Duplicate page url: {record.url}")
        seen.add(key)
        records.append(record)
    return records


def url_key(url: str) -> str:
    """Normalize a URL for matching (a trailing slash is ignored)."""
    return url.rstrip("/") or url


class LinkDistributionAnalyzer:
    """Analyzes how internal links are distributed across a site."""

    def __init__(self, policy: Optional[LinkGraphPolicy] = None):
        """
        Initialize the analyzer.

        Args:
            policy: Hub/authority and depth thresholds. Defaults to LinkGraphPolicy().
        """
        self.policy = policy or LinkGraphPolicy()

    def analyze(self, pages: Iterable[PageInput], homepage_url: str) -> LinkDistributionAnalysisResult:
        """
        Analyze the internal link graph.

        Args:
            pages: Every page with its outgoing (internal_links_to) and
                incoming (internal_links_from) internal links.
            homepage_url: URL the click depth is measured from.

        Returns:
            LinkDistributionAnalysisResult. Pages that cannot be reached
            from the homepage are left out of link_depth_analysis and
            listed in unreachable_pages.

        Raises:
            InvalidPageDataError: If a page record is malformed.
        """
        records = coerce_pages(pages)
        if not records:
            return LinkDistributionAnalysisResult(
                recommendations=["No pages supplied - nothing to analyze."]
            )

        homepage_key = url_key(homepage_url or "")
        page_count = len(records)

        outgoing = np.array([len(p.internal_links_to) for p in records], dtype=float)
        incoming = np.array([len(p.internal_links_from) for p in records], dtype=float)

        total_links = int(outgoing.sum())
        average = total_links / page_count

        orphans = [
            p.url for p in records
            if url_key(p.url) != homepage_key and not p.internal_links_from
        ]

        hub_threshold = self.policy.hub_multiplier * average
        authority_threshold = self.policy.authority_multiplier * average
        hubs = sorted(
            (LinkCountEntry(p.url, len(p.internal_links_to))
             for p in records if len(p.internal_links_to) > hub_threshold),
            key=lambda e: e.count,
            reverse=True,
        )
        authorities = sorted(
            (LinkCountEntry(p.url, len(p.internal_links_from))
             for p in records if len(p.internal_links_from) > authority_threshold),
            key=lambda e: e.count,
            reverse=True,
        )

        depths = self._link_depths(records, homepage_key)
        reached = {url_key(d.url) for d in depths}
        unreachable = [p.url for p in records if url_key(p.url) not in reached]
        deep_pages = [d for d in depths if d.depth > self.policy.max_accessible_depth]

        result = LinkDistributionAnalysisResult(
            total_pages=page_count,
            total_internal_links=total_links,
            average_links_per_page=round(average, 2),
            orphan_pages=orphans,
            link_equity_distribution_score=self._equity_score(incoming),
            hub_pages=hubs,
            authority_pages=authorities,
            link_depth_analysis=depths,
            unreachable_pages=unreachable,
            accessibility_issues=deep_pages,
        )
        result.recommendations = self._recommendations(result)

        logger.info(
            f"Analyzed {page_count} pages: {total_links} internal links, "
            f"{len(orphans)} orphan(s), {len(unreachable)} unreachable"
        )
        return result

    def _equity_score(self, incoming: np.ndarray) -> float:
        mean = float(incoming.mean())
        if mean == 0:
            return 0.0
        std = float(incoming.std())
        score = (1 - std / mean) * 100
        return round(max(0.0, min(100.0, score)), 2)

    def _link_depths(self, records: list[PageLinkData], homepage_key: str) -> list[PageDepth]:
        pages_by_key = {url_key(p.url): p for p in records}
        if homepage_key not in pages_by_key:
            logger.warning(f"Homepage {homepage_key!r} is not in the page set; no depths computed")
            return []

        depths = {homepage_key: 0}
        queue = deque([homepage_key])
        while queue:
            current = queue.popleft()
            for target in pages_by_key[current].internal_links_to:
                key = url_key(target)
                if key in pages_by_key and key not in depths:
                    depths[key] = depths[current] + 1
                    queue.append(key)

        return [PageDepth(url=pages_by_key[key].url, depth=depth) for key, depth in depths.items()]

    def _recommendations(self, result: LinkDistributionAnalysisResult) -> list[str]:
        recommendations = []

        if result.orphan_pages:
            recommendations.append(
                f"{len(result.orphan_pages)} orphan page(s) detected. "
                "Add internal links pointing to these pages."
            )
        if result.unreachable_pages:
            recommendations.append(
                f"{len(result.unreachable_pages)} page(s) cannot be reached from the homepage. "
                "Link to them from navigation or related content."
            )
        if result.accessibility_issues:
            recommendations.append(
                f"{len(result.accessibility_issues)} page(s) are more than "
                f"{self.policy.max_accessible_depth} clicks from the homepage. "
                "Flatten the site structure or add shortcuts from hub pages."
            )
        if result.total_internal_links and result.link_equity_distribution_score < 50:
            recommendations.append(
                "Link equity is concentrated on a few pages. "
                "Spread internal links more evenly across important pages."
            )
        if result.average_links_per_page < 3:
            recommendations.append(
                "Pages average fewer than 3 internal links. "
                "Add contextual links between related pages."
            )

        return recommendations


def analyze_link_distribution(
    pages: Iterable[PageInput],
    homepage_url: str,
    policy: Optional[LinkGraphPolicy] = None,
) -> LinkDistributionAnalysisResult:
    """Analyze an internal link graph with the given (or default) policy."""
    return LinkDistributionAnalyzer(policy).analyze(pages, homepage_url)
