"""
Internal link placement.

Wraps keyword occurrences in markdown/HTML content with internal links,
spreading them across sections and paragraphs so that:
- Each paragraph gets at most one link per 50 words (minus existing links)
- Each section stays near the preferred link density
- Higher priority links are placed first
- Paragraphs next to existing links are avoided
"""

import html
import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union
from urllib.parse import urlparse

from .config import LinkPlacementOptions
from .models import (
    DistributionStatistics,
    LinkPlacement,
    LinkPlacementResult,
    LinkToPlace,
    SkippedLink,
)

logger = logging.getLogger(__name__)

HEADING_LINE = re.compile(r"^(#{1,6})[ \t]+(.+)$", re.MULTILINE)
PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
ANCHOR_ELEMENT = re.compile(r"<a\s[^>]*>.*?</a>", re.IGNORECASE | re.DOTALL)
EXISTING_LINK = re.compile(
    r"<a\s+[^>]*href\s*=\s*[\"']([^\"']+)[\"'][^>]*>(.*?)</a>", re.IGNORECASE | re.DOTALL
)
HTML_TAG = re.compile(r"<[^>]+>")

WORDS_PER_LINK = 50
CHARS_PER_WORD = 5
ANCHOR_TYPES = ("exact", "partial", "branded", "generic", "lsi")
IMPORTANT_SECTION_WORDS = ("introduction", "overview", "main", "key", "important", "primary")

LinkInput = Union[LinkToPlace, dict]


@dataclass
class _Paragraph:
    text: str
    start: int
    end: int
    word_count: int
    existing_links: int
    capacity: int
    placed: int = 0


@dataclass
class _Section:
    title: str
    text: str
    start: int
    importance: float
    paragraphs: list[_Paragraph] = field(default_factory=list)
    budget: int = 0


@dataclass
class _Planned:
    link: LinkToPlace
    section: _Section
    paragraph_index: int
    start: int
    end: int
    confidence: float


def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(r"(?<!\w)" + re.escape(keyword) + r"(?!\w)", re.IGNORECASE)


def _coerce_link(link: LinkInput) -> LinkToPlace:
    if isinstance(link, LinkToPlace):
        return link
    if not isinstance(link, dict):
        raise ValueError(f"Link must be a LinkToPlace or dict, got {type(link).__name__}")
    if not link.get("keyword") or not link.get("url"):
        raise ValueError(f"Link requires 'keyword' and 'url': {link!r}")
    return LinkToPlace(
        keyword=str(link["keyword"]),
        url=str(link["url"]),
        priority=float(link.get("priority", 1.0)),
        anchor_text_type=link.get("anchor_text_type", link.get("anchorTextType", "exact")),
        target_section=link.get("target_section", link.get("targetSection")),
    )


def sanitize_url(url: str) -> str:
    """
    Make a URL safe to embed in an href attribute.

    Absolute http(s) URLs and root-relative paths are kept (HTML-escaped);
    anything else becomes "#".
    """
    url = (url or "").strip()
    parsed = urlparse(url)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return html.escape(url, quote=True)
    if not parsed.scheme and not parsed.netloc and url.startswith("/"):
        return html.escape(url, quote=True)
    return "#"


def _link_html(url: str, keyword: str, anchor_text: str) -> str:
    return (
        f'<a href="{sanitize_url(url)}" title="{html.escape(keyword, quote=True)}">'
        f"{anchor_text}</a>"
    )


def _section_importance(title: str, text: str, position: int) -> float:
    importance = 0.5
    importance += max(0.0, 0.3 - position / 10000)
    importance += min(0.2, len(text) / 5000)
    if any(w in title.lower() for w in IMPORTANT_SECTION_WORDS):
        importance += 0.2
    return min(1.0, importance)


class LinkPlacementOptimizer:
    """Places internal links into content with an even distribution."""

    def optimize(
        self,
        content: str,
        links: Iterable[LinkInput],
        options: Optional[LinkPlacementOptions] = None,
    ) -> LinkPlacementResult:
        """
        Place links into content.

        Args:
            content: Markdown or HTML-flavored text.
            links: Links to place, as LinkToPlace or dicts.
            options: Placement limits. Defaults to LinkPlacementOptions().

        Returns:
            LinkPlacementResult. Positions in placed_links are character
            offsets into the original content.

        Raises:
            ValueError: If a link is missing its keyword or URL.
        """
        options = options or LinkPlacementOptions()
        content = content or ""
        ordered = sorted(
            (_coerce_link(link) for link in links), key=lambda link: link.priority, reverse=True
        )

        sections = self._analyze_structure(content, options)
        existing = [(m.group(1), m.start()) for m in EXISTING_LINK.finditer(content)]
        existing_urls = {url for url, _ in existing}
        blocked = [(m.start(), m.end()) for m in ANCHOR_ELEMENT.finditer(content)]
        blocked += [(m.start(), m.end()) for m in HTML_TAG.finditer(content)]

        plan: list[_Planned] = []
        skipped: list[SkippedLink] = []
        for link in ordered:
            if options.respect_existing_links and link.url in existing_urls:
                skipped.append(SkippedLink(link, "URL is already linked in the content"))
                continue
            if len(plan) >= options.max_links_per_page:
                skipped.append(SkippedLink(link, "Maximum links per page reached"))
                continue

            planned = self._plan_link(link, sections, existing, blocked, options)
            if planned is None:
                if not _keyword_pattern(link.keyword).search(content):
                    reason = "Keyword not found in content"
                else:
                    reason = "No paragraph with remaining link capacity contains the keyword"
                skipped.append(SkippedLink(link, reason))
                continue

            plan.append(planned)
            blocked.append((planned.start, planned.end))

        optimized = content
        for item in sorted(plan, key=lambda p: p.start, reverse=True):
            anchor_text = content[item.start:item.end]
            optimized = (
                optimized[:item.start]
                + _link_html(item.link.url, item.link.keyword, anchor_text)
                + optimized[item.end:]
            )

        placed = [
            LinkPlacement(
                keyword=item.link.keyword,
                url=item.link.url,
                position=item.start,
                paragraph=item.paragraph_index,
                section=item.section.title,
                confidence=item.confidence,
                reason=f'Placed in "{item.section.title}" where the keyword appears naturally',
            )
            for item in sorted(plan, key=lambda p: p.start)
        ]

        statistics = self._statistics(plan, content)
        result = LinkPlacementResult(
            optimized_content=optimized,
            placed_links=placed,
            skipped_links=skipped,
            distribution_score=self._distribution_score(statistics, options),
            recommendations=self._recommendations(statistics, skipped, options),
            statistics=statistics,
        )
        logger.info(f"Placed {len(placed)} link(s), skipped {len(skipped)}")
        return result

    def optimize_simple(self, content: str, links: Iterable[LinkInput]) -> str:
        """
        Place links with one link per paragraph and return only the content.

        Args:
            content: Text to link.
            links: Links as LinkToPlace or {"keyword": ..., "url": ...} dicts.

        Returns:
            Content with links inserted.
        """
        result = self.optimize(content, links, LinkPlacementOptions(max_links_per_paragraph=1))
        return result.optimized_content

    def _analyze_structure(self, content: str, options: LinkPlacementOptions) -> list[_Section]:
        headings = list(HEADING_LINE.finditer(content))
        spans: list[tuple[str, int, int]] = []
        if not headings:
            spans.append(("Main Content", 0, len(content)))
        else:
            if headings[0].start() > 0:
                spans.append(("Introduction", 0, headings[0].start()))
            for i, heading in enumerate(headings):
                end = headings[i + 1].start() if i + 1 < len(headings) else len(content)
                spans.append((heading.group(2).strip(), heading.start(), end))

        sections = []
        for title, start, end in spans:
            text = content[start:end]
            if not text.strip():
                continue
            section = _Section(
                title=title,
                text=text,
                start=start,
                importance=_section_importance(title, text, start),
                paragraphs=self._analyze_paragraphs(content, start, end),
            )
            capacity = sum(p.capacity for p in section.paragraphs)
            density_limit = int(len(text.split()) * options.preferred_link_density / 100)
            section.budget = min(capacity, density_limit)
            sections.append(section)
        return sections

    def _analyze_paragraphs(self, content: str, start: int, end: int) -> list[_Paragraph]:
        paragraphs = []
        bounds = []
        block_start = start
        for b in PARAGRAPH_BREAK.finditer(content, start, end):
            bounds.append((block_start, b.start()))
            block_start = b.end()
        bounds.append((block_start, end))

        for b_start, b_end in bounds:
            raw = content[b_start:b_end]
            # Heading lines are never linked; text directly below one still is
            if raw.lstrip().startswith("#"):
                newline = raw.find("\n", len(raw) - len(raw.lstrip()))
                if newline == -1:
                    continue
                b_start += newline + 1
                raw = content[b_start:b_end]
            text = raw.strip()
            if not text:
                continue
            p_start = b_start + (len(raw) - len(raw.lstrip()))
            word_count = len(text.split())
            existing_links = len(EXISTING_LINK.findall(text))
            paragraphs.append(_Paragraph(
                text=text,
                start=p_start,
                end=p_start + len(text),
                word_count=word_count,
                existing_links=existing_links,
                capacity=max(0, word_count // WORDS_PER_LINK - existing_links),
            ))
        return paragraphs

    def _plan_link(
        self,
        link: LinkToPlace,
        sections: list[_Section],
        existing: list[tuple[str, int]],
        blocked: list[tuple[int, int]],
        options: LinkPlacementOptions,
    ) -> Optional[_Planned]:
        pattern = _keyword_pattern(link.keyword)
        cluster_distance = options.min_distance_between_links * CHARS_PER_WORD
        best: Optional[tuple[float, _Planned]] = None

        for section in sections:
            if section.budget <= 0:
                continue
            if link.target_section and link.target_section.lower() not in section.title.lower():
                continue

            for index, paragraph in enumerate(section.paragraphs):
                if paragraph.capacity <= 0:
                    continue
                if paragraph.placed >= options.max_links_per_paragraph:
                    continue
                if options.avoid_link_clusters and any(
                    abs(pos - paragraph.start) < cluster_distance for _, pos in existing
                ):
                    continue

                matches = [
                    m for m in pattern.finditer(paragraph.text)
                    if not any(
                        s < paragraph.start + m.end() and paragraph.start + m.start() < e
                        for s, e in blocked
                    )
                ]
                if not matches:
                    continue

                score = (
                    paragraph.capacity * 10
                    + min(len(matches) * 5, 20)
                    + min(paragraph.word_count / 10, 15)
                    - paragraph.existing_links * 5
                    + section.importance * 10
                )
                if best is None or score > best[0]:
                    first = matches[0]
                    best = (score, _Planned(
                        link=link,
                        section=section,
                        paragraph_index=index,
                        start=paragraph.start + first.start(),
                        end=paragraph.start + first.end(),
                        confidence=round(min(1.0, 0.5 + score / 200), 2),
                    ))

        if best is None:
            return None

        planned = best[1]
        paragraph = planned.section.paragraphs[planned.paragraph_index]
        paragraph.capacity -= 1
        paragraph.placed += 1
        planned.section.budget -= 1
        return planned

    def _statistics(self, plan: list[_Planned], content: str) -> DistributionStatistics:
        total_words = len(content.split())
        positions = sorted(p.start for p in plan)
        gaps = [b - a for a, b in zip(positions, positions[1:])]

        distribution = {t: 0 for t in ANCHOR_TYPES}
        for item in plan:
            distribution[item.link.anchor_text_type] = distribution.get(item.link.anchor_text_type, 0) + 1

        return DistributionStatistics(
            total_links_placed=len(plan),
            link_density=round(len(plan) / total_words * 100, 2) if total_words else 0.0,
            average_distance_between_links=round(sum(gaps) / len(gaps), 2) if gaps else 0.0,
            paragraphs_with_links=len({(p.section.start, p.paragraph_index) for p in plan}),
            sections_with_links=len({p.section.start for p in plan}),
            anchor_text_type_distribution=distribution,
        )

    def _recommendations(
        self,
        stats: DistributionStatistics,
        skipped: list[SkippedLink],
        options: LinkPlacementOptions,
    ) -> list[str]:
        recommendations = []
        min_chars = options.min_distance_between_links * CHARS_PER_WORD

        if stats.link_density > options.preferred_link_density * 1.5:
            recommendations.append(
                "Link density is higher than recommended. Consider reducing the number of links."
            )
        if stats.link_density < options.preferred_link_density * 0.5:
            recommendations.append(
                "Link density is lower than optimal. Consider adding more internal links."
            )
        if stats.total_links_placed > 1 and stats.average_distance_between_links < min_chars:
            recommendations.append(
                "Links are too close together. Increase spacing between links."
            )
        if skipped:
            recommendations.append(
                f"{len(skipped)} link(s) could not be placed. "
                "Review content for better keyword integration."
            )
        if stats.total_links_placed and stats.sections_with_links < 2:
            recommendations.append(
                "Links are concentrated in few sections. Distribute links more evenly across content."
            )
        return recommendations

    def _distribution_score(self, stats: DistributionStatistics, options: LinkPlacementOptions) -> float:
        score = 100.0
        density_gap = abs(stats.link_density - options.preferred_link_density)
        score -= min(density_gap * 5, 30)

        if stats.sections_with_links < 2:
            score -= 20
        if (stats.total_links_placed > 1
                and stats.average_distance_between_links
                < options.min_distance_between_links * CHARS_PER_WORD):
            score -= 15
        if stats.paragraphs_with_links > 3:
            score += 10
        if stats.sections_with_links > 2:
            score += 10

        return round(max(0.0, min(100.0, score)), 2)


def optimize_link_placement(
    content: str,
    links: Iterable[LinkInput],
    options: Optional[LinkPlacementOptions] = None,
) -> LinkPlacementResult:
    """Place internal links with a default optimizer."""
    return LinkPlacementOptimizer().optimize(content, links, options)
