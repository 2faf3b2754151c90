"""
SEO Content Analyzer

Deterministic, rule-based SEO analysis that:
- Suggests keyword density and content structure improvements
- Replaces vague language and scores word choice precision
- Integrates semantically related (LSI) terms into content
- Checks that content addresses user problems with solutions
- Analyzes internal link graphs and detects broken links
- Places internal links into content
"""

__version__ = "1.0.0"
__author__ = "SEO Content Analyzer Team"

from .config import (
    DEFAULT_VOCABULARY,
    BrokenLinkPolicy,
    DensityPolicy,
    LinkGraphPolicy,
    LinkPlacementOptions,
    LSIPolicy,
    PrecisionVocabulary,
)

from .models import (
    InvalidPageDataError,
    Severity,
    Suggestion,
    SuggestionType,
    KeywordDensityReport,
    PrecisionChange,
    PrecisionResult,
    WordChoiceAnalysis,
    LSIKeyword,
    LSIPattern,
    LSIIntegrationResult,
    CompetitorLSIAnalysis,
    AlignmentAnalysis,
    AlignmentStats,
    PageLinkData,
    LinkDistributionAnalysisResult,
    BrokenLink,
    LinkToPlace,
    LinkPlacementResult,
    to_dict,
)

# Content analysis
from .keyword_density import (
    KeywordDensityAnalyzer,
    analyze_keyword_density,
)

from .language_precision import (
    LanguagePrecisionEngine,
    enhance_precision,
    calculate_precision_score,
    analyze_word_choice,
)

from .lsi_integrator import (
    LSIKeywordIntegrator,
    integrate_semantic_terms,
    analyze_competitor_lsi_patterns,
)

from .problem_solution import (
    ProblemSolutionAligner,
    validate_alignment,
)

# Internal links
from .link_distribution import (
    LinkDistributionAnalyzer,
    analyze_link_distribution,
)

from .broken_links import detect_broken_links

from .link_placement import (
    LinkPlacementOptimizer,
    optimize_link_placement,
)

# Input loaders
from .keyword_loader import (
    KeywordLoadError,
    load_keyword_list,
    load_lsi_keywords,
)

from .page_graph import (
    PageGraphLoadError,
    build_incoming_links,
    load_page_graph,
)

__all__ = [
    # Configuration
    "DEFAULT_VOCABULARY",
    "BrokenLinkPolicy",
    "DensityPolicy",
    "LinkGraphPolicy",
    "LinkPlacementOptions",
    "LSIPolicy",
    "PrecisionVocabulary",
    # Models
    "InvalidPageDataError",
    "Severity",
    "Suggestion",
    "SuggestionType",
    "KeywordDensityReport",
    "PrecisionChange",
    "PrecisionResult",
    "WordChoiceAnalysis",
    "LSIKeyword",
    "LSIPattern",
    "LSIIntegrationResult",
    "CompetitorLSIAnalysis",
    "AlignmentAnalysis",
    "AlignmentStats",
    "PageLinkData",
    "LinkDistributionAnalysisResult",
    "BrokenLink",
    "LinkToPlace",
    "LinkPlacementResult",
    "to_dict",
    # Content analysis
    "KeywordDensityAnalyzer",
    "analyze_keyword_density",
    "LanguagePrecisionEngine",
    "enhance_precision",
    "calculate_precision_score",
    "analyze_word_choice",
    "LSIKeywordIntegrator",
    "integrate_semantic_terms",
    "analyze_competitor_lsi_patterns",
    "ProblemSolutionAligner",
    "validate_alignment",
    # Internal links
    "LinkDistributionAnalyzer",
    "analyze_link_distribution",
    "detect_broken_links",
    "LinkPlacementOptimizer",
    "optimize_link_placement",
    # Input loaders
    "KeywordLoadError",
    "load_keyword_list",
    "load_lsi_keywords",
    "PageGraphLoadError",
    "build_incoming_links",
    "load_page_graph",
]
