"""
Problem-solution alignment.

Checks whether content states the problems its readers have and offers
solutions for them:
- Coverage: which of the caller's user problems appear in the content
- Completeness: how actionable the solution sentences are, relative to
  the number of problems raised
- Alignment: whether problems and solutions both exist and match up
"""

import logging
import re
import time
from typing import Iterable

from .models import (
    AlignmentAnalysis,
    AlignmentStats,
    ProblemStatement,
    Severity,
    SolutionStatement,
)

logger = logging.getLogger(__name__)

PROBLEM_INDICATORS = {
    "challenge": ("challenge", "challenging", "challenges", "difficult to", "struggle with"),
    "difficulty": ("difficulty", "difficult", "hard to", "trouble", "problematic"),
    "issue": ("issue", "issues", "problem", "problems", "concern", "concerns"),
    "pain-point": ("pain point", "frustrating", "annoying", "bottleneck"),
    "obstacle": ("obstacle", "barrier", "hurdle", "impediment", "roadblock"),
}

SOLUTION_INDICATORS = {
    "direct-solution": (
        "solution", "solutions", "solve", "solves", "fix", "fixes", "resolve",
        "resolves", "address", "remedy", "approach",
    ),
    "workaround": ("workaround", "alternative", "bypass", "work around", "get around"),
    "best-practice": ("best practice", "recommended", "should", "ought to", "ideal approach"),
    "recommendation": ("recommend", "suggest", "advise", "propose", "consider"),
}

HIGH_SEVERITY_WORDS = ("critical", "urgent", "major", "serious", "severe", "catastrophic")
MEDIUM_SEVERITY_WORDS = ("significant", "important", "considerable", "notable")

# Effectiveness bonus by solution type
TYPE_BONUS = {
    "direct-solution": 0.3,
    "best-practice": 0.2,
    "recommendation": 0.15,
    "workaround": 0.1,
}


def _indicator_pattern(indicators: tuple[str, ...]) -> re.Pattern:
    alternatives = "|".join(
        r"\s+".join(re.escape(w) for w in phrase.split()) for phrase in indicators
    )
    return re.compile(r"\b(?:" + alternatives + r")\b", re.IGNORECASE)


_PROBLEM_PATTERNS = {k: _indicator_pattern(v) for k, v in PROBLEM_INDICATORS.items()}
_SOLUTION_PATTERNS = {k: _indicator_pattern(v) for k, v in SOLUTION_INDICATORS.items()}


def _split_sentences(content: str) -> list[str]:
    return [s.strip() for s in re.split(r"[.!?]+", content) if s.strip()]


def _significant_words(text: str) -> set[str]:
    return {w for w in re.findall(r"\w+", text.lower()) if len(w) > 3}


def _harmonic_mean(a: float, b: float) -> float:
    if a + b == 0:
        return 0.0
    return 2 * a * b / (a + b)


class ProblemSolutionAligner:
    """Validates that content addresses user problems with concrete solutions."""

    def validate_alignment(self, content: str, user_problems: Iterable[str]) -> AlignmentAnalysis:
        """
        Measure problem coverage and solution quality.

        Args:
            content: Content to check.
            user_problems: Problems the audience has, as literal phrases.

        Returns:
            AlignmentAnalysis. gap_analysis lists the user problems that do
            not appear in the content, in input order. With no user
            problems, coverage is 1.0.
        """
        start = time.perf_counter()
        problems = [p for p in user_problems if isinstance(p, str)]
        content = content or ""
        lowered = content.lower()

        gaps = [p for p in problems if p.strip().lower() not in lowered]
        covered = len(problems) - len(gaps)
        # Blank problems are always found but are not problems the content raises
        named_covered = sum(1 for p in problems if p.strip() and p not in gaps)
        coverage = covered / len(problems) if problems else 1.0

        if not content.strip():
            return AlignmentAnalysis(
                problem_coverage=coverage,
                solution_completeness=0.0,
                alignment_score=0.0,
                gap_analysis=gaps,
                solution_effectiveness=0.0,
                processing_time_ms=(time.perf_counter() - start) * 1000,
            )

        sentences = _split_sentences(content)
        identified = self._extract_problems(sentences)
        solutions = self._extract_solutions(sentences, identified)

        problems_raised = max(len(identified), named_covered, 1)
        completeness = self._solution_completeness(solutions, problems_raised)
        effectiveness = self._solution_effectiveness(solutions)

        has_problems = bool(identified) or named_covered > 0
        if has_problems and solutions:
            alignment = _harmonic_mean(coverage, completeness)
        else:
            alignment = 0.0

        analysis = AlignmentAnalysis(
            problem_coverage=round(coverage, 4),
            solution_completeness=round(completeness, 4),
            alignment_score=round(alignment, 4),
            gap_analysis=gaps,
            solution_effectiveness=round(effectiveness, 4),
            identified_problems=identified,
            provided_solutions=solutions,
            processing_time_ms=(time.perf_counter() - start) * 1000,
        )
        logger.debug(
            f"Alignment: coverage={analysis.problem_coverage} "
            f"problems={len(identified)} solutions={len(solutions)} gaps={len(gaps)}"
        )
        return analysis

    def get_alignment_stats(self, analysis: AlignmentAnalysis) -> AlignmentStats:
        """
        Summarize an analysis for reporting.

        Args:
            analysis: Result of validate_alignment().

        Returns:
            AlignmentStats with counts of problems, solutions and gaps.
        """
        return AlignmentStats(
            problems_identified=len(analysis.identified_problems),
            solutions_provided=len(analysis.provided_solutions),
            average_solution_completeness=analysis.solution_completeness,
            critical_problems_count=sum(
                1 for p in analysis.identified_problems if p.severity == Severity.HIGH
            ),
            gaps_count=len(analysis.gap_analysis),
        )

    def _extract_problems(self, sentences: list[str]) -> list[ProblemStatement]:
        problems = []
        for index, sentence in enumerate(sentences):
            for problem_type, pattern in _PROBLEM_PATTERNS.items():
                if pattern.search(sentence):
                    problems.append(ProblemStatement(
                        text=sentence,
                        type=problem_type,
                        severity=self._problem_severity(sentence),
                        location=index,
                    ))
                    break
        return problems

    def _extract_solutions(
        self,
        sentences: list[str],
        problems: list[ProblemStatement],
    ) -> list[SolutionStatement]:
        solutions = []
        for index, sentence in enumerate(sentences):
            for solution_type, pattern in _SOLUTION_PATTERNS.items():
                if pattern.search(sentence):
                    solutions.append(SolutionStatement(
                        text=sentence,
                        type=solution_type,
                        completeness=self._sentence_completeness(sentence),
                        location=index,
                        related_problems=self._related_problems(sentence, index, problems),
                    ))
                    break
        return solutions

    def _problem_severity(self, sentence: str) -> Severity:
        lowered = sentence.lower()
        if any(w in lowered for w in HIGH_SEVERITY_WORDS):
            return Severity.HIGH
        if any(w in lowered for w in MEDIUM_SEVERITY_WORDS):
            return Severity.MEDIUM
        return Severity.LOW

    def _related_problems(
        self,
        sentence: str,
        location: int,
        problems: list[ProblemStatement],
    ) -> list[str]:
        words = _significant_words(sentence)
        return [
            p.text for p in problems
            if p.location != location and words & _significant_words(p.text)
        ]

    def _sentence_completeness(self, sentence: str) -> float:
        lowered = sentence.lower()
        completeness = 0.3  # Base score for offering a solution at all

        if re.search(r"\bsteps?\b|\bhow to\b", lowered):
            completeness += 0.3
        if re.search(r"\b(implement|apply|use|using)\b", lowered):
            completeness += 0.2
        if re.search(r"\bexamples?\b|\bfor instance\b|\bsuch as\b", lowered):
            completeness += 0.2

        return min(completeness, 1.0)

    def _solution_completeness(self, solutions: list[SolutionStatement], problems_raised: int) -> float:
        if not solutions:
            return 0.0
        quality = sum(s.completeness for s in solutions) / len(solutions)
        return quality * min(1.0, len(solutions) / problems_raised)

    def _solution_effectiveness(self, solutions: list[SolutionStatement]) -> float:
        if not solutions:
            return 0.0
        total = 0.0
        for solution in solutions:
            effectiveness = solution.completeness * 0.4
            effectiveness += TYPE_BONUS.get(solution.type, 0.0)
            if solution.related_problems:
                effectiveness += 0.2
            total += min(effectiveness, 1.0)
        return total / len(solutions)


def validate_alignment(content: str, user_problems: Iterable[str]) -> AlignmentAnalysis:
    """Validate problem-solution alignment with a default aligner."""
    return ProblemSolutionAligner().validate_alignment(content, user_problems)
