"""
Language precision engine.

Replaces vague words and wordy phrases with stronger alternatives and
scores how precise the word choice of a piece of content is.

Lookup tables come from a PrecisionVocabulary injected at construction
time, so engines for other locales or tenants can use their own tables.
"""

import logging
import math
import re
from functools import lru_cache
from typing import Optional

from .config import DEFAULT_VOCABULARY, PrecisionVocabulary
from .models import PrecisionChange, PrecisionResult, WordChoiceAnalysis, WordSuggestion
from .text_utils import extract_words

logger = logging.getLogger(__name__)


@lru_cache(maxsize=512)
def _term_pattern(term: str) -> re.Pattern:
    # Multi-word phrases match across any run of whitespace
    words = [re.escape(w) for w in term.split()]
    return re.compile(r"\b" + r"\s+".join(words) + r"\b", re.IGNORECASE)


@lru_cache(maxsize=512)
def _removal_pattern(term: str) -> re.Pattern:
    # Captures the first letter of the following word so capitalization can move to it
    words = [re.escape(w) for w in term.split()]
    return re.compile(r"\b(" + r"\s+".join(words) + r")\b[ \t]*(\w?)", re.IGNORECASE)


def _match_case(original: str, replacement: str) -> str:
    if not replacement:
        return replacement
    if len(original) > 1 and original.isupper():
        return replacement.upper()
    if original[0].isupper():
        return replacement[0].upper() + replacement[1:]
    return replacement


def _tidy_spacing(text: str) -> str:
    text = re.sub(r"[ \t]{2,}", " ", text)
    text = re.sub(r"[ \t]+([,.;:!?])", r"\1", text)
    return text


class LanguagePrecisionEngine:
    """
    Rule-based word choice improvement.

    enhance_precision() runs three passes in order:
    1. Clarity: wordy or unclear phrases ("in order to" -> "to")
    2. Vague terms: weak words replaced or removed ("very" is dropped)
    3. Semantic value: generic verbs used more than twice are partly
       replaced with more specific ones
    """

    def __init__(self, vocabulary: Optional[PrecisionVocabulary] = None):
        """
        Initialize the engine.

        Args:
            vocabulary: Lookup tables to use. Defaults to DEFAULT_VOCABULARY.
        """
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY

    def enhance_precision(self, content: str) -> PrecisionResult:
        """
        Replace vague and unclear language in content.

        Args:
            content: Text to improve.

        Returns:
            PrecisionResult with the new text and one change record per
            substituted term. Content without known terms comes back unchanged.
        """
        if not content:
            return PrecisionResult(content=content or "", changes=[])

        text = content
        changes: list[PrecisionChange] = []

        text = self._improve_clarity(text, changes)
        text = self._replace_vague_terms(text, changes)
        text = self._maximize_semantic_value(text, changes)

        if changes:
            logger.debug(f"Precision engine applied {len(changes)} change(s)")
        return PrecisionResult(content=text, changes=changes)

    def calculate_precision_score(self, content: str) -> float:
        """
        Score word choice precision from 0 to 100.

        The penalty is the share of words that are vague words or part of
        an unclear phrase, so adding vague language never raises the score.
        Unclear phrases are found after vague words are removed.

        Args:
            content: Text to score.

        Returns:
            Score in [0, 100] rounded to 2 decimals. Empty content scores 100.
        """
        words = extract_words(content)
        if not words:
            return 100.0

        vague_count = sum(1 for w in words if w in self.vocabulary.vague_terms)

        # Phrases are matched with vague words taken out, so a vague word
        # inserted inside a phrase cannot hide it
        remaining = " ".join(w for w in words if w not in self.vocabulary.vague_terms)
        unclear_words = 0
        for phrase in self.vocabulary.clarity_phrases:
            matches = len(_term_pattern(phrase).findall(remaining))
            unclear_words += matches * len(phrase.split())

        imprecision = (vague_count + unclear_words) / len(words)
        score = max(0.0, min(100.0, 100.0 - imprecision * 100))
        return round(score, 2)

    def analyze_word_choice(self, content: str) -> WordChoiceAnalysis:
        """
        Find vague words and unclear phrases without changing the content.

        Args:
            content: Text to inspect.

        Returns:
            WordChoiceAnalysis. vague_words lists every occurrence in order;
            suggestions hold one entry per distinct word or phrase.
        """
        analysis = WordChoiceAnalysis()
        if not content:
            return analysis

        suggested: set[str] = set()
        for word in extract_words(content):
            candidates = self.vocabulary.vague_terms.get(word)
            if candidates is None:
                continue
            analysis.vague_words.append(word)
            if word not in suggested:
                suggested.add(word)
                analysis.suggestions.append(WordSuggestion(
                    word=word,
                    suggestions=[c for c in candidates if c] or ["[remove]"],
                    context="vague term",
                ))

        for phrase, candidates in self.vocabulary.clarity_phrases.items():
            if _term_pattern(phrase).search(content):
                analysis.unclear_phrases.append(phrase)
                analysis.suggestions.append(WordSuggestion(
                    word=phrase,
                    suggestions=list(candidates),
                    context="unclear phrase",
                ))

        return analysis

    def _improve_clarity(self, text: str, changes: list[PrecisionChange]) -> str:
        # Longest phrases first so "in spite of the fact that" wins over shorter overlaps
        for phrase in sorted(self.vocabulary.clarity_phrases, key=len, reverse=True):
            pattern = _term_pattern(phrase)
            if not pattern.search(text):
                continue
            replacement = self._select_replacement(self.vocabulary.clarity_phrases[phrase], text)
            text = pattern.sub(lambda m: _match_case(m.group(0), replacement), text)
            changes.append(PrecisionChange(
                original=phrase,
                optimized=replacement,
                reason=f'Enhanced clarity by replacing "{phrase}" with "{replacement}"',
            ))
        return text

    def _replace_vague_terms(self, text: str, changes: list[PrecisionChange]) -> str:
        removed_any = False
        for word, candidates in self.vocabulary.vague_terms.items():
            if not _term_pattern(word).search(text):
                continue
            replacement = self._select_replacement(candidates, text)

            if replacement:
                text = _term_pattern(word).sub(
                    lambda m: _match_case(m.group(0), replacement), text
                )
                reason = f'Replaced vague term "{word}" with more specific "{replacement}"'
            else:
                text = _removal_pattern(word).sub(
                    lambda m: m.group(2).upper() if m.group(1)[0].isupper() else m.group(2),
                    text,
                )
                removed_any = True
                reason = f'Removed vague intensifier "{word}"'

            changes.append(PrecisionChange(
                original=word,
                optimized=replacement or "[removed]",
                reason=reason,
            ))

        if removed_any:
            text = _tidy_spacing(text)
        return text

    def _maximize_semantic_value(self, text: str, changes: list[PrecisionChange]) -> str:
        for word, candidates in self.vocabulary.semantic_enhancements.items():
            pattern = _term_pattern(word)
            occurrences = len(pattern.findall(text))
            if occurrences <= 2:
                continue

            replacement = self._select_replacement(candidates, text)
            if not replacement:
                continue

            # Replace at least half, and leave no more than two generic uses
            limit = max(math.ceil(occurrences / 2), occurrences - 2)
            text = pattern.sub(lambda m: _match_case(m.group(0), replacement), text, count=limit)
            changes.append(PrecisionChange(
                original=word,
                optimized=replacement,
                reason=(
                    f'Enhanced semantic value by replacing generic "{word}" '
                    f'with specific "{replacement}"'
                ),
            ))
        return text

    def _select_replacement(self, candidates: tuple[str, ...], text: str) -> str:
        if not candidates:
            return ""
        if len(candidates) == 1:
            return candidates[0]

        lowered = text.lower()
        is_technical = any(w in lowered for w in self.vocabulary.technical_indicators)
        is_business = any(w in lowered for w in self.vocabulary.business_indicators)

        if is_technical:
            for preferred in ("implement", "execute"):
                if preferred in candidates:
                    return preferred
        if is_business:
            for preferred in ("facilitate", "enable"):
                if preferred in candidates:
                    return preferred
        return candidates[0]


_default_engine = LanguagePrecisionEngine()


def enhance_precision(content: str) -> PrecisionResult:
    """Enhance precision using the default vocabulary."""
    return _default_engine.enhance_precision(content)


def calculate_precision_score(content: str) -> float:
    """Score precision (0-100) using the default vocabulary."""
    return _default_engine.calculate_precision_score(content)


def analyze_word_choice(content: str) -> WordChoiceAnalysis:
    """Analyze word choice using the default vocabulary."""
    return _default_engine.analyze_word_choice(content)
