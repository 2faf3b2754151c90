"""
Data models for SEO Content Analyzer.

This module defines all the core data structures used throughout the application.
"""

from dataclasses import asdict, dataclass, field, is_dataclass
from enum import Enum
from typing import Any, Optional


class InvalidPageDataError(ValueError):
    """Raised when a page link record is missing required fields or is malformed."""
    pass


class SuggestionType(Enum):
    """Category of a content suggestion."""
    KEYWORD = "keyword"
    STRUCTURE = "structure"
    READABILITY = "readability"
    ENGAGEMENT = "engagement"


class Severity(Enum):
    """Severity of a suggestion or problem."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class Suggestion:
    """A single improvement suggestion for a piece of content."""
    type: SuggestionType
    severity: Severity
    title: str
    message: str
    keyword: Optional[str] = None  # Set for keyword density suggestions
    density: Optional[float] = None  # Percent, for keyword density suggestions


# =============================================================================
# Keyword density analysis
# =============================================================================

@dataclass
class KeywordProminence:
    """Where a keyword appears in the prominent parts of a page."""
    in_title: bool = False
    in_headings: int = 0  # Number of headings containing the keyword
    in_first_paragraph: bool = False
    in_last_paragraph: bool = False
    in_meta_description: bool = False
    prominence_score: int = 0  # 0-100


@dataclass
class KeywordDistribution:
    """How keyword occurrences are spread across the content."""
    first_half: int = 0
    second_half: int = 0
    even_distribution: bool = False
    distribution_score: int = 0  # 0-100


@dataclass
class KeywordContext:
    """A keyword occurrence with its surrounding text."""
    position: int  # Word index
    sentence: str
    surrounding: str


@dataclass
class KeywordDensityResult:
    """Density statistics for a single keyword."""
    keyword: str
    variations: list[str] = field(default_factory=list)
    frequency: int = 0
    density: float = 0.0  # Percent
    positions: list[int] = field(default_factory=list)
    prominence: KeywordProminence = field(default_factory=KeywordProminence)
    distribution: KeywordDistribution = field(default_factory=KeywordDistribution)
    context: list[KeywordContext] = field(default_factory=list)


@dataclass
class OverallDensity:
    """Combined density of the primary keyword and its variations."""
    total_keyword_density: float
    optimal_range: tuple[float, float]
    is_optimal: bool
    recommendations: list[str] = field(default_factory=list)


@dataclass
class CompetitorDensity:
    """Primary keyword density measured on a competitor page."""
    url: str
    density: float
    frequency: int


@dataclass
class CompetitorComparison:
    """Primary keyword density compared with competitor pages."""
    average_density: float
    ranking: int  # 1-based; 1 = highest density
    competitor_data: list[CompetitorDensity] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class KeywordDensityReport:
    """Full keyword density analysis of a page."""
    total_words: int
    total_characters: int
    analyzed_text: str
    primary_keyword: KeywordDensityResult
    keyword_variations: list[KeywordDensityResult] = field(default_factory=list)
    related_keywords: list[KeywordDensityResult] = field(default_factory=list)
    overall_density: Optional[OverallDensity] = None
    competitor_comparison: Optional[CompetitorComparison] = None


# =============================================================================
# Language precision
# =============================================================================

@dataclass
class PrecisionChange:
    """A single substitution made by the precision engine."""
    original: str
    optimized: str
    reason: str
    type: str = "precision"


@dataclass
class PrecisionResult:
    """Content after precision enhancement and the list of changes made."""
    content: str
    changes: list[PrecisionChange] = field(default_factory=list)


@dataclass
class WordSuggestion:
    """Replacement candidates for a vague word or unclear phrase."""
    word: str
    suggestions: list[str]
    context: str  # "vague term" or "unclear phrase"


@dataclass
class WordChoiceAnalysis:
    """Vague words and unclear phrases found in content."""
    vague_words: list[str] = field(default_factory=list)
    unclear_phrases: list[str] = field(default_factory=list)
    suggestions: list[WordSuggestion] = field(default_factory=list)


# =============================================================================
# LSI (semantic term) integration
# =============================================================================

@dataclass
class LSIKeyword:
    """A semantically related keyword supplied by the caller."""
    term: str
    relevance: float = 1.0
    semantic_score: float = 1.0
    context_strength: float = 0.0

    def __post_init__(self) -> None:
        """Normalize the term."""
        self.term = self.term.strip()


@dataclass
class LSIPattern:
    """Usage pattern of a term across competitor documents."""
    term: str
    frequency: int = 0
    positions: list[int] = field(default_factory=list)
    context_words: list[str] = field(default_factory=list)
    semantic_weight: float = 0.0


@dataclass
class SemanticContext:
    """A candidate sentence for term insertion."""
    sentence: str
    position: int
    relevance_score: float
    integration_opportunities: list[str] = field(default_factory=list)


@dataclass
class LSIIntegrationResult:
    """Outcome of integrating semantic terms into content."""
    original_content: str
    optimized_content: str
    integrated_terms: int = 0
    semantic_coverage: float = 0.0  # Percent of keywords present
    naturalness_score: float = 0.0  # 0-100
    context_preservation: float = 0.0  # Percent of original vocabulary kept


@dataclass
class CompetitorLSIAnalysis:
    """Aggregated semantic term usage across competitor documents."""
    terms: list[LSIKeyword] = field(default_factory=list)
    patterns: list[LSIPattern] = field(default_factory=list)
    semantic_density: float = 0.0
    context_mapping: dict[str, list[str]] = field(default_factory=dict)


# =============================================================================
# Problem-solution alignment
# =============================================================================

@dataclass
class ProblemStatement:
    """A sentence that states a problem."""
    text: str
    type: str  # challenge, difficulty, issue, pain-point, obstacle
    severity: Severity
    location: int  # Sentence index


@dataclass
class SolutionStatement:
    """A sentence that offers a solution."""
    text: str
    type: str  # direct-solution, workaround, best-practice, recommendation
    completeness: float
    location: int  # Sentence index
    related_problems: list[str] = field(default_factory=list)


@dataclass
class AlignmentAnalysis:
    """How well content covers the user's problems and offers solutions."""
    problem_coverage: float
    solution_completeness: float
    alignment_score: float
    gap_analysis: list[str] = field(default_factory=list)
    solution_effectiveness: float = 0.0
    identified_problems: list[ProblemStatement] = field(default_factory=list)
    provided_solutions: list[SolutionStatement] = field(default_factory=list)
    processing_time_ms: float = 0.0


@dataclass
class AlignmentStats:
    """Summary counts for reporting an alignment analysis."""
    problems_identified: int
    solutions_provided: int
    average_solution_completeness: float
    critical_problems_count: int
    gaps_count: int


# =============================================================================
# Internal link graph
# =============================================================================

def _coerce_links(value: Any, field_name: str, url: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidPageDataError(
            f"Page '{url}': {field_name} must be a list of URLs, got {type(value).__name__}"
        )
    links = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise InvalidPageDataError(
                f"Page '{url}': {field_name} contains an invalid URL: {item!r}"
            )
        links.append(item.strip())
    return links


@dataclass
class PageLinkData:
    """A page in the internal link graph."""
    url: str
    internal_links_to: list[str] = field(default_factory=list)
    internal_links_from: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the record."""
        if not isinstance(self.url, str) or not self.url.strip():
            raise InvalidPageDataError(f"Page url must be a non-empty string, got {self.url!r}")
        self.url = self.url.strip()
        self.internal_links_to = _coerce_links(self.internal_links_to, "internal_links_to", self.url)
        self.internal_links_from = _coerce_links(
            self.internal_links_from, "internal_links_from", self.url
        )

    @classmethod
    def from_dict(cls, data: dict) -> "PageLinkData":
        """
        Build a page record from a plain dict.

        Accepts snake_case keys or the camelCase keys used by JSON APIs
        (url, internalLinksTo, internalLinksFrom).

        Args:
            data: Mapping with at least a "url" key.

        Returns:
            Validated PageLinkData.

        Raises:
            InvalidPageDataError: If the record is malformed.
        """
        if not isinstance(data, dict):
            raise InvalidPageDataError(
                f"Page record must be an object, got {type(data).__name__}"
            )
        if "url" not in data:
            raise InvalidPageDataError(f"Page record is missing 'url': {data!r}")

        links_to = data.get("internal_links_to", data.get("internalLinksTo"))
        links_from = data.get("internal_links_from", data.get("internalLinksFrom"))
        return cls(url=data["url"], internal_links_to=links_to, internal_links_from=links_from)


@dataclass
class PageDepth:
    """Click depth of a page from the homepage."""
    url: str
    depth: int


@dataclass
class LinkCountEntry:
    """A page with its outgoing or incoming internal link count."""
    url: str
    count: int


@dataclass
class LinkDistributionAnalysisResult:
    """Internal link graph statistics."""
    total_pages: int = 0
    total_internal_links: int = 0
    average_links_per_page: float = 0.0
    orphan_pages: list[str] = field(default_factory=list)
    link_equity_distribution_score: float = 0.0
    hub_pages: list[LinkCountEntry] = field(default_factory=list)
    authority_pages: list[LinkCountEntry] = field(default_factory=list)
    link_depth_analysis: list[PageDepth] = field(default_factory=list)
    unreachable_pages: list[str] = field(default_factory=list)
    accessibility_issues: list[PageDepth] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def depth_of(self, url: str) -> Optional[int]:
        """Get the click depth of a page, or None if it was not reached."""
        for entry in self.link_depth_analysis:
            if entry.url == url:
                return entry.depth
        return None


@dataclass
class BrokenLink:
    """An outgoing link that could not be fetched successfully."""
    source_url: str
    target_url: str
    status_code: Optional[int]
    reason: str
    suggestion: str


# =============================================================================
# Link placement
# =============================================================================

@dataclass
class LinkToPlace:
    """An internal link the caller wants placed in content."""
    keyword: str
    url: str
    priority: float = 1.0
    anchor_text_type: str = "exact"  # exact, partial, branded, generic, lsi
    target_section: Optional[str] = None


@dataclass
class LinkPlacement:
    """A link that was placed in content."""
    keyword: str
    url: str
    position: int  # Character offset in the original content
    paragraph: int  # Paragraph index within its section
    section: str
    confidence: float
    reason: str


@dataclass
class SkippedLink:
    """A link that could not be placed."""
    link: LinkToPlace
    reason: str


@dataclass
class DistributionStatistics:
    """Statistics about placed links."""
    total_links_placed: int = 0
    link_density: float = 0.0  # Links per 100 words
    average_distance_between_links: float = 0.0  # Characters
    paragraphs_with_links: int = 0
    sections_with_links: int = 0
    anchor_text_type_distribution: dict[str, int] = field(default_factory=dict)


@dataclass
class LinkPlacementResult:
    """Outcome of placing internal links into content."""
    optimized_content: str
    placed_links: list[LinkPlacement] = field(default_factory=list)
    skipped_links: list[SkippedLink] = field(default_factory=list)
    distribution_score: float = 0.0
    recommendations: list[str] = field(default_factory=list)
    statistics: DistributionStatistics = field(default_factory=DistributionStatistics)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def to_dict(record: Any) -> Any:
    """
    Convert a result record (or list of records) to JSON-friendly data.

    Args:
        record: Any dataclass instance from this module, or a list of them.

    Returns:
        Nested dicts/lists with enums replaced by their values.
    """
    if isinstance(record, list):
        return [to_dict(item) for item in record]
    if is_dataclass(record) and not isinstance(record, type):
        return _jsonable(asdict(record))
    return _jsonable(record)
