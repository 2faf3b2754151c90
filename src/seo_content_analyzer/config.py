# -*- coding: utf-8 -*-
"""
Centralized configuration for SEO Content Analyzer.

This module provides the policy dataclasses that control analyzer
thresholds, plus the immutable vocabulary tables used by the
language precision engine.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass
class DensityPolicy:
    """
    Thresholds for keyword density suggestions.

    Attributes:
        low_density_threshold: Density (percent) below which a keyword is
            flagged as under-used.
        high_density_threshold: Density (percent) above which a keyword is
            flagged as over-optimized.
        long_sentence_words: Sentences with more words than this are flagged.
        min_word_count: Content shorter than this is flagged as too short.
        optimal_range: (min, max) percent range used by the detailed
            KeywordDensityAnalyzer for the combined primary keyword density.
        context_length: Words captured on each side of a keyword occurrence.
        max_contexts: Maximum context snippets kept per keyword.
    """

    low_density_threshold: float = 0.5
    high_density_threshold: float = 2.0
    long_sentence_words: int = 30
    min_word_count: int = 300
    optimal_range: tuple[float, float] = (1.0, 3.0)
    context_length: int = 10
    max_contexts: int = 5

    def __post_init__(self):
        """Validate configuration values."""
        if self.low_density_threshold < 0 or self.high_density_threshold < 0:
            raise ValueError("density thresholds must be >= 0")
        if self.low_density_threshold >= self.high_density_threshold:
            raise ValueError(
                f"low_density_threshold ({self.low_density_threshold}) must be < "
                f"high_density_threshold ({self.high_density_threshold})"
            )
        if self.long_sentence_words < 1:
            raise ValueError(
                f"long_sentence_words must be >= 1, got {self.long_sentence_words}"
            )
        if self.min_word_count < 0:
            raise ValueError(f"min_word_count must be >= 0, got {self.min_word_count}")
        low, high = self.optimal_range
        if low < 0 or low > high:
            raise ValueError(f"optimal_range must satisfy 0 <= min <= max, got {self.optimal_range}")
        if self.max_contexts < 0:
            raise ValueError(f"max_contexts must be >= 0, got {self.max_contexts}")


@dataclass
class LSIPolicy:
    """
    Policy for semantic term integration.

    Attributes:
        min_semantic_score: Keywords scoring below this are never integrated.
        max_integrations_per_sentence: Cap on terms inserted into one sentence.
        min_sentence_words: Preferred minimum length of a host sentence.
        context_window: Tokens on each side searched for competitor context words.
        max_insertions_per_term: Cap on new occurrences added for one term.
    """

    min_semantic_score: float = 0.3
    max_integrations_per_sentence: int = 2
    min_sentence_words: int = 10
    context_window: int = 5
    max_insertions_per_term: int = 3

    def __post_init__(self):
        """Validate configuration values."""
        if not 0.0 <= self.min_semantic_score <= 1.0:
            raise ValueError(
                f"min_semantic_score must be between 0 and 1, got {self.min_semantic_score}"
            )
        if self.max_integrations_per_sentence < 1:
            raise ValueError(
                "max_integrations_per_sentence must be >= 1, "
                f"got {self.max_integrations_per_sentence}"
            )
        if self.context_window < 1:
            raise ValueError(f"context_window must be >= 1, got {self.context_window}")
        if self.max_insertions_per_term < 1:
            raise ValueError(
                f"max_insertions_per_term must be >= 1, got {self.max_insertions_per_term}"
            )


@dataclass
class LinkGraphPolicy:
    """
    Thresholds for internal link graph analysis.

    Attributes:
        hub_multiplier: A page is a hub when its outgoing link count exceeds
            hub_multiplier x average links per page.
        authority_multiplier: A page is an authority when its incoming link
            count exceeds authority_multiplier x average links per page.
        max_accessible_depth: Pages deeper than this (in clicks from the
            homepage) are reported as accessibility issues.
    """

    hub_multiplier: float = 2.0
    authority_multiplier: float = 2.0
    max_accessible_depth: int = 3

    def __post_init__(self):
        """Validate configuration values."""
        if self.hub_multiplier <= 0 or self.authority_multiplier <= 0:
            raise ValueError("hub_multiplier and authority_multiplier must be > 0")
        if self.max_accessible_depth < 0:
            raise ValueError(
                f"max_accessible_depth must be >= 0, got {self.max_accessible_depth}"
            )

    @classmethod
    def strict(cls, **overrides) -> "LinkGraphPolicy":
        """Create a policy that flags hubs/authorities and deep pages earlier."""
        defaults = {
            "hub_multiplier": 1.5,
            "authority_multiplier": 1.5,
            "max_accessible_depth": 2,
        }
        defaults.update(overrides)
        return cls(**defaults)

    @classmethod
    def lenient(cls, **overrides) -> "LinkGraphPolicy":
        """Create a policy suited to large sites with deep hierarchies."""
        defaults = {
            "hub_multiplier": 3.0,
            "authority_multiplier": 3.0,
            "max_accessible_depth": 4,
        }
        defaults.update(overrides)
        return cls(**defaults)


@dataclass
class BrokenLinkPolicy:
    """
    Network policy for broken link detection.

    Attributes:
        request_timeout: Seconds allowed for a single HEAD request.
        overall_timeout: Seconds allowed for the whole check. Links still
            pending at the deadline are reported as broken.
        max_workers: Maximum concurrent HEAD requests.
        user_agent: User-Agent header sent with each request.
    """

    request_timeout: float = 10.0
    overall_timeout: float = 120.0
    max_workers: int = 8
    user_agent: str = "Mozilla/5.0 (compatible; SEOContentAnalyzer/1.0; link-check)"

    def __post_init__(self):
        """Validate configuration values."""
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.overall_timeout <= 0:
            raise ValueError(f"overall_timeout must be > 0, got {self.overall_timeout}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")


def _freeze(table: Mapping[str, tuple[str, ...]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({k.lower(): tuple(v) for k, v in table.items()})


# Replacements never contain a key of any table, so enhanced text
# does not trigger a second round of substitutions.
_VAGUE_TERMS = {
    "things": ("elements", "components", "factors", "aspects"),
    "stuff": ("components", "materials", "elements", "items"),
    "very": ("",),
    "really": ("",),
    "quite": ("",),
    "somewhat": ("",),
    "pretty": ("",),
    "rather": ("",),
    "fairly": ("",),
    "good": ("effective", "valuable", "beneficial", "useful"),
    "bad": ("ineffective", "problematic", "detrimental", "harmful"),
    "big": ("significant", "substantial", "major", "extensive"),
    "small": ("minor", "limited", "minimal", "specific"),
    "nice": ("beneficial", "valuable", "effective", "useful"),
    "great": ("excellent", "outstanding", "exceptional", "superior"),
    "amazing": ("remarkable", "exceptional", "outstanding", "impressive"),
    "awesome": ("impressive", "remarkable", "excellent", "outstanding"),
}

_CLARITY_PHRASES = {
    "a lot of": ("numerous", "many", "multiple", "several"),
    "lots of": ("numerous", "many", "multiple", "several"),
    "tons of": ("numerous", "many", "multiple", "extensive"),
    "bunch of": ("several", "multiple", "numerous", "various"),
    "kind of": ("partially", "moderately"),
    "sort of": ("partially", "moderately"),
    "type of": ("form of", "variety of", "category of"),
    "in order to": ("to",),
    "due to the fact that": ("because",),
    "for the reason that": ("because",),
    "in spite of the fact that": ("although",),
    "at this point in time": ("now", "currently"),
    "in the event that": ("if",),
    "with regard to": ("regarding", "about"),
    "in relation to": ("regarding", "about"),
    "as a matter of fact": ("in fact",),
}

_SEMANTIC_ENHANCEMENTS = {
    "help": ("assist", "support", "facilitate", "enable"),
    "make": ("create", "develop", "generate", "produce"),
    "get": ("obtain", "acquire", "receive", "achieve"),
    "do": ("perform", "execute", "implement", "conduct"),
    "use": ("utilize", "employ", "apply", "implement"),
    "show": ("demonstrate", "illustrate", "display", "reveal"),
    "tell": ("inform", "explain", "communicate", "describe"),
    "give": ("provide", "offer", "supply", "deliver"),
    "take": ("require", "demand", "necessitate", "involve"),
    "put": ("place", "position", "install", "implement"),
}


@dataclass(frozen=True)
class PrecisionVocabulary:
    """
    Immutable lookup tables for the language precision engine.

    Attributes:
        vague_terms: Single vague word -> replacement candidates.
            An empty-string candidate means the word is removed.
        clarity_phrases: Wordy or unclear phrase -> replacement candidates.
        semantic_enhancements: Generic verb -> more specific alternatives.
            Only applied when the verb is used more than twice.
        technical_indicators: Words marking technical content.
        business_indicators: Words marking business content.
    """

    vague_terms: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: _freeze(_VAGUE_TERMS)
    )
    clarity_phrases: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: _freeze(_CLARITY_PHRASES)
    )
    semantic_enhancements: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: _freeze(_SEMANTIC_ENHANCEMENTS)
    )
    technical_indicators: tuple[str, ...] = (
        "system", "process", "method", "algorithm", "data", "analysis",
    )
    business_indicators: tuple[str, ...] = (
        "strategy", "market", "customer", "revenue", "growth", "business",
    )

    def __post_init__(self):
        # Callers may pass plain dicts; store read-only copies.
        object.__setattr__(self, "vague_terms", _freeze(self.vague_terms))
        object.__setattr__(self, "clarity_phrases", _freeze(self.clarity_phrases))
        object.__setattr__(self, "semantic_enhancements", _freeze(self.semantic_enhancements))
        object.__setattr__(self, "technical_indicators", tuple(self.technical_indicators))
        object.__setattr__(self, "business_indicators", tuple(self.business_indicators))

    def extend(
        self,
        vague_terms: Optional[Mapping[str, tuple[str, ...]]] = None,
        clarity_phrases: Optional[Mapping[str, tuple[str, ...]]] = None,
        semantic_enhancements: Optional[Mapping[str, tuple[str, ...]]] = None,
    ) -> "PrecisionVocabulary":
        """Return a new vocabulary with extra entries merged over this one.

        Args:
            vague_terms: Additional or overriding vague-word entries.
            clarity_phrases: Additional or overriding phrase entries.
            semantic_enhancements: Additional or overriding generic-verb entries.

        Returns:
            New PrecisionVocabulary. This instance is not modified.
        """
        return PrecisionVocabulary(
            vague_terms={**self.vague_terms, **(vague_terms or {})},
            clarity_phrases={**self.clarity_phrases, **(clarity_phrases or {})},
            semantic_enhancements={
                **self.semantic_enhancements,
                **(semantic_enhancements or {}),
            },
            technical_indicators=self.technical_indicators,
            business_indicators=self.business_indicators,
        )


DEFAULT_VOCABULARY = PrecisionVocabulary()


@dataclass
class LinkPlacementOptions:
    """
    Options for placing internal links into content.

    Attributes:
        max_links_per_page: Cap on links placed in one document.
        max_links_per_paragraph: Cap on links placed in one paragraph.
        min_distance_between_links: Preferred spacing between links, in words.
        preferred_link_density: Target links per 100 words.
        avoid_link_clusters: Skip paragraphs close to an existing link.
        respect_existing_links: Skip links whose URL is already linked.
    """

    max_links_per_page: int = 100
    max_links_per_paragraph: int = 2
    min_distance_between_links: int = 50
    preferred_link_density: float = 2.0
    avoid_link_clusters: bool = True
    respect_existing_links: bool = True

    def __post_init__(self):
        """Validate configuration values."""
        if self.max_links_per_page < 0:
            raise ValueError(f"max_links_per_page must be >= 0, got {self.max_links_per_page}")
        if self.max_links_per_paragraph < 1:
            raise ValueError(
                f"max_links_per_paragraph must be >= 1, got {self.max_links_per_paragraph}"
            )
        if self.min_distance_between_links < 0:
            raise ValueError(
                f"min_distance_between_links must be >= 0, got {self.min_distance_between_links}"
            )
        if self.preferred_link_density <= 0:
            raise ValueError(
                f"preferred_link_density must be > 0, got {self.preferred_link_density}"
            )
