"""Tests for problem-solution alignment."""

import pytest

from seo_content_analyzer.models import Severity
from seo_content_analyzer.problem_solution import ProblemSolutionAligner, validate_alignment


ALIGNED_CONTENT = (
    "Slow page speed is a major problem for many sites. "
    "The solution is to compress images using a CDN, for example."
)


class TestValidateAlignment:
    """Tests for validate_alignment."""

    def test_empty_content_and_problems(self):
        """Test that no content and no problems is vacuously covered."""
        analysis = validate_alignment("", [])

        assert analysis.problem_coverage == 1.0
        assert analysis.gap_analysis == []
        assert analysis.alignment_score == 0.0

    def test_no_problems_found_in_content(self):
        """Test that unmatched problems are all reported as gaps in order."""
        problems = ["broken links", "thin content", "Slow checkout"]

        analysis = validate_alignment("Our blog covers recipes and travel.", problems)

        assert analysis.gap_analysis == problems
        assert analysis.problem_coverage == 0

    def test_problem_matching_is_case_insensitive(self):
        """Test that user problems match content regardless of case."""
        analysis = validate_alignment(ALIGNED_CONTENT, ["SLOW PAGE SPEED"])

        assert analysis.problem_coverage == 1.0
        assert analysis.gap_analysis == []

    def test_partial_coverage_and_scores(self):
        """Test coverage, completeness, effectiveness and alignment together."""
        analysis = validate_alignment(ALIGNED_CONTENT, ["slow page speed", "broken links"])

        assert analysis.problem_coverage == 0.5
        assert analysis.gap_analysis == ["broken links"]
        assert analysis.solution_completeness == pytest.approx(0.7)
        assert analysis.solution_effectiveness == pytest.approx(0.58)
        assert analysis.alignment_score == pytest.approx(0.5833, abs=1e-4)

    def test_identified_problems_and_solutions(self):
        """Test that problem and solution sentences are classified."""
        analysis = validate_alignment(ALIGNED_CONTENT, [])

        assert len(analysis.identified_problems) == 1
        assert analysis.identified_problems[0].type == "issue"
        assert analysis.identified_problems[0].severity == Severity.HIGH
        assert len(analysis.provided_solutions) == 1
        assert analysis.provided_solutions[0].type == "direct-solution"
        assert analysis.provided_solutions[0].location == 1

    def test_no_solutions(self):
        """Test that content without solution markers scores zero."""
        analysis = validate_alignment(
            "Slow page speed is a serious issue. Visitors leave quickly.", ["slow page speed"]
        )

        assert analysis.problem_coverage == 1.0
        assert analysis.solution_completeness == 0.0
        assert analysis.solution_effectiveness == 0.0
        assert analysis.alignment_score == 0.0

    def test_no_problems_in_content(self):
        """Test that solutions without any problem give zero alignment."""
        analysis = validate_alignment("Our recommended approach uses caching.", [])

        assert analysis.identified_problems == []
        assert analysis.solution_completeness > 0
        assert analysis.alignment_score == 0.0

    def test_related_problems_linked(self):
        """Test that solutions sharing words with a problem are linked to it."""
        content = (
            "Image weight is a common problem. "
            "The fix is to compress image weight with modern formats."
        )

        analysis = validate_alignment(content, [])

        assert analysis.provided_solutions[0].related_problems == [
            "Image weight is a common problem"
        ]

    def test_blank_user_problems_count_as_covered(self):
        """Test that blank problem strings are always found and never reported as gaps."""
        analysis = validate_alignment(ALIGNED_CONTENT, ["", "  "])

        assert analysis.problem_coverage == 1.0
        assert analysis.gap_analysis == []

    def test_blank_user_problem_stays_in_coverage_denominator(self):
        """Test that a blank entry counts toward coverage alongside real problems."""
        analysis = validate_alignment(ALIGNED_CONTENT, ["", "missing"])

        assert analysis.problem_coverage == 0.5
        assert analysis.gap_analysis == ["missing"]

    def test_blank_user_problem_does_not_raise_a_problem(self):
        """Test that a blank entry alone does not make solution-only content aligned."""
        analysis = validate_alignment("Our recommended approach uses caching.", [""])

        assert analysis.problem_coverage == 1.0
        assert analysis.identified_problems == []
        assert analysis.alignment_score == 0.0


class TestAlignmentStats:
    """Tests for get_alignment_stats."""

    def test_stats(self):
        """Test summary counts."""
        aligner = ProblemSolutionAligner()
        analysis = aligner.validate_alignment(ALIGNED_CONTENT, ["slow page speed", "broken links"])

        stats = aligner.get_alignment_stats(analysis)

        assert stats.problems_identified == 1
        assert stats.solutions_provided == 1
        assert stats.critical_problems_count == 1
        assert stats.gaps_count == 1
        assert stats.average_solution_completeness == analysis.solution_completeness
