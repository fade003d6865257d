"""
Evaluation strategies

Each strategy turns a tool's raw output and the case's expected-result definition
into an accuracy score (0-100). Strategies are stateless and never raise: a malformed
expected definition scores 0.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod

from capability_validation.domain.entities import ExpectedResult, ExpectedType
from capability_validation.scoring.text_scorers import (
    extract_keywords,
    jaccard_similarity,
    keyword_coverage,
    levenshtein_similarity,
    normalize_text,
)

logger = logging.getLogger(__name__)


class EvaluationStrategy(ABC):
    """Base class for accuracy scoring strategies"""

    name: str

    @abstractmethod
    def evaluate(self, output: str, expected: ExpectedResult) -> float:
        """Score the output against the expected result (0-100)"""
        pass


class ExactMatchStrategy(EvaluationStrategy):
    """Normalized equality, falling back to edit-distance similarity"""

    name = "exact_match"

    def evaluate(self, output: str, expected: ExpectedResult) -> float:
        if expected.type != ExpectedType.EXACT or expected.content is None:
            return 0.0

        output_normalized = normalize_text(output)
        expected_normalized = normalize_text(expected.content)

        if output_normalized == expected_normalized:
            return 100.0

        similarity = levenshtein_similarity(output_normalized, expected_normalized)
        return max(0.0, similarity * 100)


class PatternMatchStrategy(EvaluationStrategy):
    """
    Case-insensitive regex search

    A match scores 70 plus up to 30 for how much of the output the match covers.
    Without a match (or when the pattern does not compile) the output earns up to
    50 for the pattern keywords it contains.
    """

    name = "pattern_match"

    BASE_SCORE = 70
    COVERAGE_WEIGHT = 30
    PARTIAL_WEIGHT = 50

    def evaluate(self, output: str, expected: ExpectedResult) -> float:
        if expected.type != ExpectedType.PATTERN or not expected.pattern:
            return 0.0

        try:
            regex = re.compile(expected.pattern, re.IGNORECASE)
        except re.error as e:
            logger.warning("Invalid pattern %r, using keyword fallback: %s", expected.pattern, e)
            return self._partial_score(output, expected.pattern)

        match = regex.search(output)
        if match is None:
            return self._partial_score(output, expected.pattern)

        coverage = len(match.group(0)) / len(output) if output else 0.0
        return min(100.0, self.BASE_SCORE + coverage * self.COVERAGE_WEIGHT)

    def _partial_score(self, output: str, pattern: str) -> float:
        keywords = extract_keywords(pattern, min_length=3)
        return keyword_coverage(keywords, output) * self.PARTIAL_WEIGHT


class CriteriaMatchStrategy(EvaluationStrategy):
    """Share of criteria whose keywords mostly appear in the output"""

    name = "criteria_match"

    # Minimum keyword coverage for a criterion to count as satisfied
    SATISFIED_RATIO = 0.6

    def evaluate(self, output: str, expected: ExpectedResult) -> float:
        if expected.type != ExpectedType.CRITERIA or not expected.criteria:
            return 0.0

        satisfied = sum(1 for c in expected.criteria if self.is_satisfied(output, c))
        return satisfied / len(expected.criteria) * 100

    def is_satisfied(self, output: str, criterion: str) -> bool:
        keywords = extract_keywords(criterion, min_length=3)
        if not keywords:
            return False
        return keyword_coverage(keywords, output) >= self.SATISFIED_RATIO


class CreativeEvaluationStrategy(EvaluationStrategy):
    """
    Rubric over length, structure, lexical richness and (optionally) similarity
    to example answers.
    """

    name = "creative_evaluation"

    # (upper bound exclusive, score); lengths beyond the last bound score LENGTH_OVERFLOW
    LENGTH_BANDS = [(50, 30), (200, 60), (1000, 100), (5000, 90)]
    LENGTH_OVERFLOW = 70

    _HEADING_RE = re.compile(r"^#{1,6}\s")
    _BULLET_RE = re.compile(r"^[-*+]\s", re.MULTILINE)
    _NUMBERED_RE = re.compile(r"^\d+\.\s", re.MULTILINE)
    _SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

    def evaluate(self, output: str, expected: ExpectedResult) -> float:
        if expected.type != ExpectedType.CREATIVE:
            return 0.0

        length_score = self.evaluate_length(output)
        structure_score = self.evaluate_structure(output)
        richness_score = self.evaluate_richness(output)

        if expected.examples:
            example_score = self.compare_with_examples(output, expected.examples)
            score = (
                length_score * 0.1
                + structure_score * 0.2
                + richness_score * 0.3
                + example_score * 0.4
            )
        else:
            score = (length_score + structure_score + richness_score) / 3

        return min(100.0, score)

    def evaluate_length(self, output: str) -> float:
        length = len(output)
        for upper, score in self.LENGTH_BANDS:
            if length < upper:
                return score
        return self.LENGTH_OVERFLOW

    def evaluate_structure(self, output: str) -> float:
        score = 0
        # Paragraphs
        if "\n\n" in output:
            score += 30
        # Headings or emphasis (heading only counts at the very start)
        if self._HEADING_RE.match(output) or "**" in output:
            score += 20
        # Lists
        if self._BULLET_RE.search(output) or self._NUMBERED_RE.search(output):
            score += 30
        # Code blocks or inline code
        if "`" in output:
            score += 20
        return min(100, score)

    def evaluate_richness(self, output: str) -> float:
        words = output.split()
        unique_words = set(output.lower().split())
        sentences = [s for s in self._SENTENCE_SPLIT_RE.split(output) if s.strip()]

        score = 0.0
        if len(unique_words) > 50:
            score += 40
        elif len(unique_words) > 20:
            score += 20

        if len(sentences) > 10:
            score += 30
        elif len(sentences) > 5:
            score += 15

        diversity = len(unique_words) / max(len(words), 1)
        score += diversity * 30

        return min(100.0, score)

    def compare_with_examples(self, output: str, examples: list[str]) -> float:
        return max((jaccard_similarity(output, example) * 100 for example in examples), default=0.0)


def default_strategies() -> dict[str, EvaluationStrategy]:
    """Strategy per expected-result type"""
    return {
        ExpectedType.EXACT.value: ExactMatchStrategy(),
        ExpectedType.PATTERN.value: PatternMatchStrategy(),
        ExpectedType.CRITERIA.value: CriteriaMatchStrategy(),
        ExpectedType.CREATIVE.value: CreativeEvaluationStrategy(),
    }
