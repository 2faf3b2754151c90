"""
Keyword density analysis and content suggestions.

This module provides:
- A quick suggestion generator that flags under/over-used keywords and
  basic structural problems (long sentences, missing headings, no
  questions, short content)
- A detailed analyzer measuring frequency, prominence, distribution and
  context of a primary keyword and its variations, with optional
  competitor comparison
"""

import logging
import re
from typing import Iterable, Optional

from .config import DensityPolicy
from .models import (
    CompetitorComparison,
    CompetitorDensity,
    KeywordContext,
    KeywordDensityReport,
    KeywordDensityResult,
    KeywordDistribution,
    KeywordProminence,
    OverallDensity,
    Severity,
    Suggestion,
    SuggestionType,
)
from .text_utils import count_phrase, count_words, has_headings, split_paragraphs, split_sentences

logger = logging.getLogger(__name__)


def analyze_keyword_density(
    content: str,
    target_keywords: Iterable[str],
    policy: Optional[DensityPolicy] = None,
) -> list[Suggestion]:
    """
    Generate keyword density and structure suggestions for content.

    Keyword occurrences are counted case-insensitively as substrings and
    divided by the total word count.

    Args:
        content: Content to analyze.
        target_keywords: Keywords the content should rank for.
        policy: Thresholds. Defaults to DensityPolicy().

    Returns:
        List of suggestions. Empty when content is empty, or when nothing
        needs attention.
    """
    if policy is None:
        policy = DensityPolicy()

    if not content or not content.strip():
        return []

    suggestions: list[Suggestion] = []
    word_count = count_words(content)

    for keyword in target_keywords:
        if not keyword or not keyword.strip():
            continue
        keyword = keyword.strip()
        occurrences = count_phrase(content, keyword)
        density = (occurrences / word_count) * 100 if word_count else 0.0

        if density < policy.low_density_threshold:
            suggestions.append(Suggestion(
                type=SuggestionType.KEYWORD,
                severity=Severity.HIGH if occurrences == 0 else Severity.MEDIUM,
                title="Low keyword density",
                message=(
                    f'"{keyword}" appears {occurrences} time(s) ({density:.2f}%). '
                    f"Use it naturally until it reaches at least "
                    f"{policy.low_density_threshold}%."
                ),
                keyword=keyword,
                density=round(density, 2),
            ))
        elif density > policy.high_density_threshold:
            suggestions.append(Suggestion(
                type=SuggestionType.KEYWORD,
                severity=Severity.MEDIUM,
                title="High keyword density",
                message=(
                    f'"{keyword}" appears {occurrences} time(s) ({density:.2f}%). '
                    f"Reduce it below {policy.high_density_threshold}% or use "
                    f"synonyms to avoid keyword stuffing."
                ),
                keyword=keyword,
                density=round(density, 2),
            ))

    sentences = split_sentences(content)
    for sentence in sentences:
        sentence_words = count_words(sentence)
        if sentence_words > policy.long_sentence_words:
            excerpt = sentence[:80] + "..." if len(sentence) > 80 else sentence
            suggestions.append(Suggestion(
                type=SuggestionType.READABILITY,
                severity=Severity.LOW,
                title="Long sentence",
                message=(
                    f"Sentence has {sentence_words} words (over "
                    f"{policy.long_sentence_words}). Consider splitting it: '{excerpt}'"
                ),
            ))

    if not has_headings(content):
        suggestions.append(Suggestion(
            type=SuggestionType.STRUCTURE,
            severity=Severity.MEDIUM,
            title="Missing headings",
            message="Add headings to structure the content and help readers scan it.",
        ))

    if not any(s.rstrip().endswith("?") for s in sentences):
        suggestions.append(Suggestion(
            type=SuggestionType.ENGAGEMENT,
            severity=Severity.LOW,
            title="No questions",
            message="Add questions your readers ask to improve engagement and match search queries.",
        ))

    if word_count < policy.min_word_count:
        suggestions.append(Suggestion(
            type=SuggestionType.STRUCTURE,
            severity=Severity.MEDIUM,
            title="Content too short",
            message=(
                f"Content has {word_count} words. It should be at least "
                f"{policy.min_word_count} words for better SEO."
            ),
        ))

    logger.debug(f"Keyword density: {len(suggestions)} suggestions for {word_count} words")
    return suggestions


class KeywordDensityAnalyzer:
    """
    Detailed keyword frequency, prominence and distribution analysis.

    Matches keyword phrases against word windows of the content, so
    "seo" does not match inside "seoul" unless partial matching is on.
    """

    def __init__(
        self,
        primary_keyword: str,
        keyword_variations: Iterable[str] = (),
        related_keywords: Iterable[str] = (),
        case_sensitive: bool = False,
        include_partial_matches: bool = False,
        policy: Optional[DensityPolicy] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            primary_keyword: Main keyword to analyze.
            keyword_variations: Variations counted toward the overall density.
            related_keywords: Related keywords reported separately.
            case_sensitive: Whether matching is case-sensitive.
            include_partial_matches: Whether a word window containing the
                keyword (rather than equal to it) counts as a match.
            policy: Density thresholds. Defaults to DensityPolicy().
        """
        self.primary_keyword = primary_keyword.strip()
        self.keyword_variations = [k.strip() for k in keyword_variations if k and k.strip()]
        self.related_keywords = [k.strip() for k in related_keywords if k and k.strip()]
        self.case_sensitive = case_sensitive
        self.include_partial_matches = include_partial_matches
        self.policy = policy or DensityPolicy()

    def analyze_content(
        self,
        content: str,
        title: Optional[str] = None,
        headings: Optional[list[str]] = None,
        meta_description: Optional[str] = None,
    ) -> KeywordDensityReport:
        """
        Analyze keyword density in content.

        Args:
            content: Body text to analyze.
            title: Optional page title.
            headings: Optional list of heading texts.
            meta_description: Optional meta description.

        Returns:
            KeywordDensityReport for the primary keyword, variations and
            related keywords.
        """
        clean_content = _clean_content(content)
        words = self._extract_words(clean_content)
        total_words = len(words)

        primary = self._analyze_keyword(
            self.primary_keyword, clean_content, words, title, headings, meta_description
        )
        variations = [
            self._analyze_keyword(v, clean_content, words, title, headings, meta_description)
            for v in self.keyword_variations
        ]
        related = [
            self._analyze_keyword(r, clean_content, words, title, headings, meta_description)
            for r in self.related_keywords
        ]

        total_frequency = primary.frequency + sum(v.frequency for v in variations)
        total_density = (total_frequency / total_words) * 100 if total_words else 0.0
        low, high = self.policy.optimal_range

        overall = OverallDensity(
            total_keyword_density=round(total_density, 2),
            optimal_range=self.policy.optimal_range,
            is_optimal=low <= total_density <= high,
            recommendations=self._density_recommendations(total_density, primary),
        )

        analyzed_text = clean_content[:500] + ("..." if len(clean_content) > 500 else "")
        return KeywordDensityReport(
            total_words=total_words,
            total_characters=len(clean_content),
            analyzed_text=analyzed_text,
            primary_keyword=primary,
            keyword_variations=variations,
            related_keywords=related,
            overall_density=overall,
        )

    def compare_with_competitors(
        self,
        report: KeywordDensityReport,
        competitors: list[dict],
    ) -> KeywordDensityReport:
        """
        Compare primary keyword density with competitor pages.

        Args:
            report: Report for the page being optimized.
            competitors: Dicts with "url" and "content" plus optional
                "title", "headings" and "meta_description".

        Returns:
            The same report with competitor_comparison filled in.
        """
        competitor_data = []
        for competitor in competitors:
            analysis = self.analyze_content(
                competitor.get("content", ""),
                title=competitor.get("title"),
                headings=competitor.get("headings"),
                meta_description=competitor.get("meta_description"),
            )
            competitor_data.append(CompetitorDensity(
                url=competitor.get("url", ""),
                density=analysis.primary_keyword.density,
                frequency=analysis.primary_keyword.frequency,
            ))

        average = (
            sum(c.density for c in competitor_data) / len(competitor_data)
            if competitor_data else 0.0
        )

        current = report.primary_keyword.density
        all_densities = sorted([current] + [c.density for c in competitor_data], reverse=True)
        ranking = all_densities.index(current) + 1

        report.competitor_comparison = CompetitorComparison(
            average_density=round(average, 2),
            ranking=ranking,
            competitor_data=competitor_data,
            recommendations=_competitor_recommendations(current, average, ranking),
        )
        return report

    def _extract_words(self, text: str) -> list[str]:
        words = re.findall(r"\b\w+\b", text)
        if self.case_sensitive:
            return words
        return [w.lower() for w in words]

    def _normalize(self, text: str) -> str:
        return text if self.case_sensitive else text.lower()

    def _matches(self, window_text: str, keyword: str) -> bool:
        if self.include_partial_matches:
            return self._normalize(keyword) in self._normalize(window_text)
        return self._normalize(window_text) == self._normalize(keyword)

    def _contains(self, text: str, keyword: str) -> bool:
        return self._normalize(keyword) in self._normalize(text)

    def _analyze_keyword(
        self,
        keyword: str,
        content: str,
        words: list[str],
        title: Optional[str],
        headings: Optional[list[str]],
        meta_description: Optional[str],
    ) -> KeywordDensityResult:
        keyword_words = self._extract_words(keyword)
        window = len(keyword_words)
        positions: list[int] = []
        contexts: list[KeywordContext] = []

        if window:
            for i in range(len(words) - window + 1):
                window_text = " ".join(words[i:i + window])
                if not self._matches(window_text, " ".join(keyword_words)):
                    continue
                positions.append(i)
                if len(contexts) < self.policy.max_contexts:
                    start = max(0, i - self.policy.context_length)
                    end = min(len(words), i + window + self.policy.context_length)
                    contexts.append(KeywordContext(
                        position=i,
                        sentence=self._sentence_containing(content, window_text),
                        surrounding=" ".join(words[start:end]),
                    ))

        frequency = len(positions)
        density = (frequency / len(words)) * 100 if words else 0.0

        return KeywordDensityResult(
            keyword=keyword,
            variations=generate_variations(keyword),
            frequency=frequency,
            density=round(density, 2),
            positions=positions,
            prominence=self._prominence(keyword, title, headings, meta_description, content),
            distribution=_distribution(positions, len(words)),
            context=contexts,
        )

    def _prominence(
        self,
        keyword: str,
        title: Optional[str],
        headings: Optional[list[str]],
        meta_description: Optional[str],
        content: str,
    ) -> KeywordProminence:
        in_title = bool(title) and self._contains(title, keyword)
        in_headings = sum(1 for h in headings or [] if self._contains(h, keyword))
        in_meta = bool(meta_description) and self._contains(meta_description, keyword)

        paragraphs = split_paragraphs(content)
        in_first = bool(paragraphs) and self._contains(paragraphs[0], keyword)
        in_last = bool(paragraphs) and self._contains(paragraphs[-1], keyword)

        score = 0
        if in_title:
            score += 30
        if in_headings:
            score += min(25, in_headings * 10)
        if in_first:
            score += 20
        if in_meta:
            score += 15
        if in_last:
            score += 10

        return KeywordProminence(
            in_title=in_title,
            in_headings=in_headings,
            in_first_paragraph=in_first,
            in_last_paragraph=in_last,
            in_meta_description=in_meta,
            prominence_score=min(100, score),
        )

    def _sentence_containing(self, content: str, text: str) -> str:
        for sentence in re.split(r"[.!?]+", content):
            sentence = sentence.strip()
            if sentence and self._contains(sentence, text):
                return sentence[:200] + ("..." if len(sentence) > 200 else "")
        return ""

    def _density_recommendations(self, density: float, primary: KeywordDensityResult) -> list[str]:
        low, high = self.policy.optimal_range
        recommendations = []

        if density < low:
            recommendations.append(
                f"Increase keyword density to at least {low}% (currently {density:.2f}%)"
            )
            recommendations.append(
                "Add more instances of your primary keyword naturally throughout the content"
            )
            if primary.prominence.prominence_score < 50:
                recommendations.append(
                    "Include the keyword in title, headings, and first paragraph for better prominence"
                )
        elif density > high:
            recommendations.append(
                f"Reduce keyword density to below {high}% to avoid over-optimization "
                f"(currently {density:.2f}%)"
            )
            recommendations.append("Replace some keyword instances with synonyms or related terms")
            recommendations.append(
                "Focus on natural language and user experience over keyword stuffing"
            )
        else:
            recommendations.append("Keyword density is within optimal range")
            if not primary.distribution.even_distribution:
                recommendations.append(
                    "Improve keyword distribution throughout the content for better SEO"
                )

        if primary.frequency == 0:
            recommendations.append(
                "Primary keyword not found in content - ensure it appears naturally"
            )

        return recommendations


def generate_variations(keyword: str) -> list[str]:
    """
    Generate simple variations of a keyword.

    Args:
        keyword: Keyword phrase.

    Returns:
        Singular/plural form, plus joined and hyphenated forms for
        multi-word phrases. No duplicates, order preserved.
    """
    if not keyword:
        return []
    variations = [keyword[:-1] if keyword.endswith("s") else keyword + "s"]
    if " " in keyword:
        variations.append(re.sub(r"\s+", "", keyword))
        variations.append(re.sub(r"\s+", "-", keyword))
    return list(dict.fromkeys(variations))


def _clean_content(content: str) -> str:
    # Collapse runs of spaces but keep blank lines so paragraphs survive
    lines = [" ".join(line.split()) for line in (content or "").splitlines()]
    return "\n".join(lines).strip()


def _distribution(positions: list[int], total_words: int) -> KeywordDistribution:
    if not positions or total_words == 0:
        return KeywordDistribution()

    midpoint = total_words / 2
    first_half = sum(1 for p in positions if p < midpoint)
    second_half = len(positions) - first_half

    expected_half = len(positions) / 2
    difference = abs(first_half - expected_half) / expected_half
    even = difference <= 0.2

    score = 100.0
    if not even:
        score -= difference * 50

    if len(positions) > 1:
        distances = [b - a for a, b in zip(positions, positions[1:])]
        average_distance = sum(distances) / len(distances)
        expected_distance = total_words / len(positions)
        if average_distance < expected_distance * 0.5:
            score -= 20  # Clustered occurrences

    return KeywordDistribution(
        first_half=first_half,
        second_half=second_half,
        even_distribution=even,
        distribution_score=max(0, round(score)),
    )


def _competitor_recommendations(current: float, average: float, ranking: int) -> list[str]:
    recommendations = []

    if ranking > 3:
        recommendations.append(
            "Your keyword density is below top competitors - consider optimization"
        )
    if current < average * 0.8:
        recommendations.append(
            f"Increase keyword density to match competitors (average: {average:.2f}%)"
        )
    elif current > average * 1.5:
        recommendations.append(
            "Your keyword density is significantly higher than competitors - ensure natural usage"
        )
    if ranking == 1:
        recommendations.append(
            "Excellent keyword density compared to competitors - maintain this level"
        )

    return recommendations
