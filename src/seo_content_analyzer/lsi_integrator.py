"""
LSI (semantic term) integration.

This module:
- Mines competitor documents for recurring content terms, their
  positions and the words that surround them
- Inserts caller-supplied semantic terms into content where they are
  missing, preferring sentences whose wording matches the context the
  term is typically used in
- Scores the result for semantic coverage, naturalness and how much of
  the original vocabulary survived
"""

import logging
import re
from collections import Counter
from typing import Iterable, Optional, Union

from .config import LSIPolicy
from .models import (
    CompetitorLSIAnalysis,
    LSIIntegrationResult,
    LSIKeyword,
    LSIPattern,
    SemanticContext,
)
from .text_utils import STOP_WORDS, content_words, extract_words, sentence_spans, split_sentences

logger = logging.getLogger(__name__)

# (relative position in sentence, connector) tried in order
INSERTION_POINTS = (
    (0.2, "with"),
    (0.5, "including"),
    (0.7, "through"),
    (0.8, "using"),
)

KeywordInput = Union[LSIKeyword, dict]
PatternInput = Union[LSIPattern, dict]


def _coerce_keyword(keyword: KeywordInput) -> LSIKeyword:
    if isinstance(keyword, LSIKeyword):
        return keyword
    return LSIKeyword(
        term=str(keyword.get("term", "")),
        relevance=float(keyword.get("relevance", 1.0)),
        semantic_score=float(keyword.get("semantic_score", keyword.get("semanticScore", 1.0))),
        context_strength=float(
            keyword.get("context_strength", keyword.get("contextStrength", 0.0))
        ),
    )


def _coerce_pattern(pattern: PatternInput) -> LSIPattern:
    if isinstance(pattern, LSIPattern):
        return pattern
    return LSIPattern(
        term=str(pattern.get("term", "")),
        frequency=int(pattern.get("frequency", 0)),
        positions=list(pattern.get("positions", [])),
        context_words=list(pattern.get("context_words", pattern.get("contextWords", []))),
        semantic_weight=float(pattern.get("semantic_weight", pattern.get("semanticWeight", 0.0))),
    )


def _contains_term(text: str, term: str) -> bool:
    return term.lower() in text.lower()


def _term_frequency(text: str, term: str) -> int:
    pattern = r"\b" + r"\s+".join(re.escape(w) for w in term.split()) + r"\b"
    return len(re.findall(pattern, text, re.IGNORECASE))


class LSIKeywordIntegrator:
    """
    Integrates semantically related terms into content.

    Terms below the policy's minimum semantic score are ignored. A term is
    only inserted into sentences that do not already contain it.
    """

    def __init__(self, policy: Optional[LSIPolicy] = None):
        """
        Initialize the integrator.

        Args:
            policy: Integration policy. Defaults to LSIPolicy().
        """
        self.policy = policy or LSIPolicy()

    def integrate_semantic_terms(
        self,
        content: str,
        lsi_keywords: Iterable[KeywordInput],
        competitor_patterns: Iterable[PatternInput] = (),
    ) -> LSIIntegrationResult:
        """
        Integrate semantic terms throughout content.

        Args:
            content: Content to optimize.
            lsi_keywords: Terms to integrate (LSIKeyword or dicts).
            competitor_patterns: Competitor usage patterns (LSIPattern or
                dicts) used for target frequency and context matching.

        Returns:
            LSIIntegrationResult. Empty content or an empty keyword list
            returns the content unchanged.
        """
        original = content or ""
        if not original.strip():
            return LSIIntegrationResult(original_content=original, optimized_content=original)

        keywords = [
            kw for kw in (_coerce_keyword(k) for k in lsi_keywords)
            if kw.term and kw.semantic_score >= self.policy.min_semantic_score
        ]
        keywords.sort(key=lambda kw: kw.relevance * kw.semantic_score, reverse=True)

        patterns = {}
        for p in (_coerce_pattern(p) for p in competitor_patterns):
            if p.term:
                patterns[p.term.lower()] = p

        optimized = original
        integrated = 0
        insertions: dict[int, int] = {}  # sentence index -> terms inserted into it

        for keyword in keywords:
            pattern = patterns.get(keyword.term.lower())
            target = self._target_frequency(keyword, pattern)
            current = _term_frequency(optimized, keyword.term)
            if current >= target:
                continue

            points = self._find_integration_points(optimized, keyword, pattern, insertions)
            for point in points[:target - current]:
                start, end, sentence = sentence_spans(optimized)[point.position]
                new_sentence = self._integrate_term_in_sentence(
                    sentence, keyword.term, pattern.context_words if pattern else []
                )
                # Splice by position; the same text may also occur inside another sentence
                optimized = optimized[:start] + new_sentence + optimized[end:]
                insertions[point.position] = insertions.get(point.position, 0) + 1
                integrated += 1

        logger.debug(f"LSI integration: {integrated} insertion(s) for {len(keywords)} term(s)")

        return LSIIntegrationResult(
            original_content=original,
            optimized_content=optimized,
            integrated_terms=integrated,
            semantic_coverage=self._semantic_coverage(optimized, keywords),
            naturalness_score=self._naturalness_score(optimized),
            context_preservation=self._context_preservation(original, optimized),
        )

    def analyze_competitor_lsi_patterns(
        self,
        competitor_contents: Iterable[str],
    ) -> CompetitorLSIAnalysis:
        """
        Aggregate semantic term usage across competitor documents.

        A term is a content word (not a stop word, 3+ letters) used more
        than once in a document.

        Args:
            competitor_contents: Plain text of competitor pages.

        Returns:
            CompetitorLSIAnalysis with terms sorted by relevance.
        """
        terms: dict[str, LSIKeyword] = {}
        patterns: dict[str, LSIPattern] = {}
        total_words = 0

        for document in competitor_contents:
            if not document or not document.strip():
                continue
            words = extract_words(document)
            total_words += len(words)

            for term in self._extract_terms(document):
                existing = terms.get(term.term)
                if existing:
                    existing.relevance = max(existing.relevance, term.relevance)
                    existing.semantic_score = max(existing.semantic_score, term.semantic_score)
                    existing.context_strength = max(existing.context_strength, term.context_strength)
                else:
                    terms[term.term] = term

                pattern = self._term_pattern(words, term)
                merged = patterns.get(term.term)
                if merged is None:
                    patterns[term.term] = pattern
                else:
                    merged.frequency += pattern.frequency
                    merged.positions.extend(pattern.positions)
                    merged.context_words.extend(
                        w for w in pattern.context_words if w not in merged.context_words
                    )
                    merged.semantic_weight = max(merged.semantic_weight, pattern.semantic_weight)

        total_frequency = sum(p.frequency for p in patterns.values())
        density = (total_frequency / total_words) * 100 if total_words else 0.0

        return CompetitorLSIAnalysis(
            terms=sorted(terms.values(), key=lambda t: t.relevance, reverse=True),
            patterns=list(patterns.values()),
            semantic_density=round(density, 2),
            context_mapping={term: list(p.context_words) for term, p in patterns.items()},
        )

    def _extract_terms(self, document: str) -> list[LSIKeyword]:
        candidates = content_words(document)
        if not candidates:
            return []
        counts = Counter(candidates)
        sentences = split_sentences(document)

        terms = []
        for term, frequency in counts.items():
            if frequency <= 1:
                continue
            semantic = self._semantic_score(term, sentences)
            if semantic < self.policy.min_semantic_score:
                continue
            terms.append(LSIKeyword(
                term=term,
                relevance=round(frequency / len(candidates), 4),
                semantic_score=semantic,
                context_strength=self._context_strength(term, sentences),
            ))
        return terms

    def _semantic_score(self, term: str, sentences: list[str]) -> float:
        # Terms spread over many sentences carry the topic; longer words are more specific
        score = 0.5
        if sentences:
            spread = sum(1 for s in sentences if term in extract_words(s)) / len(sentences)
            score += 0.3 * spread
        if len(term) >= 6:
            score += 0.2
        return round(min(1.0, score), 4)

    def _context_strength(self, term: str, sentences: list[str]) -> float:
        lengths = [len(extract_words(s)) for s in sentences if term in extract_words(s)]
        return sum(lengths) / len(lengths) if lengths else 0.0

    def _term_pattern(self, words: list[str], term: LSIKeyword) -> LSIPattern:
        positions = []
        context = []
        for index, word in enumerate(words):
            if word != term.term:
                continue
            positions.append(index)
            for neighbor in words[max(0, index - 2):index + 3]:
                if neighbor != term.term and neighbor not in STOP_WORDS and neighbor not in context:
                    context.append(neighbor)
        return LSIPattern(
            term=term.term,
            frequency=len(positions),
            positions=positions,
            context_words=context,
            semantic_weight=term.semantic_score,
        )

    def _target_frequency(self, keyword: LSIKeyword, pattern: Optional[LSIPattern]) -> int:
        if pattern is None:
            target = max(1, round(keyword.relevance * 10))
        else:
            target = max(1, round(pattern.frequency * keyword.semantic_score))
        return min(target, self.policy.max_insertions_per_term)

    def _find_integration_points(
        self,
        content: str,
        keyword: LSIKeyword,
        pattern: Optional[LSIPattern],
        insertions: dict[int, int],
    ) -> list[SemanticContext]:
        context_words = {w.lower() for w in pattern.context_words} if pattern else set()
        candidates = []
        fallback = []

        for index, sentence in enumerate(split_sentences(content)):
            if _contains_term(sentence, keyword.term):
                continue
            if insertions.get(index, 0) >= self.policy.max_integrations_per_sentence:
                continue

            relevance = self._sentence_relevance(sentence)
            if context_words and context_words.intersection(extract_words(sentence)):
                relevance = min(1.0, relevance + 0.25)

            point = SemanticContext(
                sentence=sentence,
                position=index,
                relevance_score=round(relevance, 4),
                integration_opportunities=self._integration_opportunities(sentence, keyword),
            )
            if (len(sentence.split()) >= self.policy.min_sentence_words
                    and relevance >= self.policy.min_semantic_score):
                candidates.append(point)
            else:
                fallback.append(point)

        if not candidates and fallback:
            # Short content: use the longest sentence rather than skipping the term
            candidates = [max(fallback, key=lambda p: len(p.sentence.split()))]

        return sorted(candidates, key=lambda p: p.relevance_score, reverse=True)

    def _integrate_term_in_sentence(
        self,
        sentence: str,
        term: str,
        context_words: list[str],
    ) -> str:
        words = sentence.split(" ")

        if len(words) >= self.policy.min_sentence_words:
            points = list(INSERTION_POINTS)
            anchor = self._context_anchor(words, context_words)
            if anchor is not None:
                # Prefer the insertion point closest to where the term's usual context appears
                points.sort(key=lambda p: abs(int(len(words) * p[0]) - anchor))

            for position, connector in points:
                index = int(len(words) * position)
                if self._is_valid_insertion(words, index, term):
                    return " ".join(words[:index] + [connector, term] + words[index:])

        stripped = sentence.rstrip()
        match = re.search(r"[.!?]+[\"')\]]*$", stripped)
        if match:
            return f"{stripped[:match.start()]} with {term}{stripped[match.start():]}"
        return f"{stripped} with {term}"

    def _context_anchor(self, words: list[str], context_words: list[str]) -> Optional[int]:
        if not context_words:
            return None
        wanted = {w.lower() for w in context_words}
        for index, word in enumerate(words):
            if re.sub(r"\W", "", word).lower() in wanted:
                return index
        return None

    def _is_valid_insertion(self, words: list[str], index: int, term: str) -> bool:
        if index <= 0 or index >= len(words):
            return False
        before = words[max(0, index - self.policy.context_window):index]
        after = words[index:index + self.policy.context_window]
        nearby = " ".join(before + after).lower()
        if term.lower() in nearby:
            return False

        previous = words[index - 1]
        if previous.lower() in STOP_WORDS or re.search(r"[,;:.!?]$", previous):
            return False

        context = [w for w in extract_words(nearby) if w not in STOP_WORDS]
        return bool(context)

    def _sentence_relevance(self, sentence: str) -> float:
        words = extract_words(sentence)
        if not words:
            return 0.0
        length_score = min(1.0, len(words) / 20)
        complexity = min(1.0, (len(content_words(sentence)) / len(words)) * 2)
        return (length_score + complexity) / 2

    def _integration_opportunities(self, sentence: str, keyword: LSIKeyword) -> list[str]:
        term = keyword.term.lower()
        return [w for w in dict.fromkeys(content_words(sentence)) if term not in w]

    def _semantic_coverage(self, content: str, keywords: list[LSIKeyword]) -> float:
        if not keywords:
            return 0.0
        covered = sum(1 for kw in keywords if _contains_term(content, kw.term))
        return round(covered / len(keywords) * 100, 2)

    def _naturalness_score(self, content: str) -> float:
        sentences = split_sentences(content)
        words = extract_words(content)
        if not sentences or not words:
            return 0.0
        average_length = sum(len(s.split()) for s in sentences) / len(sentences)
        diversity = len(set(words)) / len(words)
        sentence_variety = min(1.0, average_length / 20)
        word_variety = min(1.0, diversity * 2)
        return round((sentence_variety + word_variety) * 50, 2)

    def _context_preservation(self, original: str, optimized: str) -> float:
        original_vocabulary = set(extract_words(original))
        if not original_vocabulary:
            return 100.0
        kept = original_vocabulary & set(extract_words(optimized))
        return round(len(kept) / len(original_vocabulary) * 100, 2)


def integrate_semantic_terms(
    content: str,
    lsi_keywords: Iterable[KeywordInput],
    competitor_patterns: Iterable[PatternInput] = (),
) -> LSIIntegrationResult:
    """Integrate semantic terms using the default policy."""
    return LSIKeywordIntegrator().integrate_semantic_terms(content, lsi_keywords, competitor_patterns)


def analyze_competitor_lsi_patterns(competitor_contents: Iterable[str]) -> CompetitorLSIAnalysis:
    """Analyze competitor term usage using the default policy."""
    return LSIKeywordIntegrator().analyze_competitor_lsi_patterns(competitor_contents)
