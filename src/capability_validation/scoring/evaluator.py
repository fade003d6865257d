"""
Result evaluator

Scores a tool's output for a case along four dimensions (accuracy, completeness,
creativity, efficiency) and combines them with the case's weights.
"""

from __future__ import annotations

import logging
import math
import re

from capability_validation.domain.constants import (
    DEFAULT_PASS_THRESHOLD,
    PASS_THRESHOLDS,
    SCORE_DIMENSIONS,
    STRENGTH_THRESHOLD,
    WEAKNESS_THRESHOLD,
)
from capability_validation.domain.entities import Case, Execution, ScoringWeights
from capability_validation.domain.errors import StrategyNotFoundError
from capability_validation.domain.value_objects import EvaluationAnalysis, Scores
from capability_validation.scoring.strategies import EvaluationStrategy, default_strategies
from capability_validation.scoring.text_scorers import extract_keywords, keyword_coverage

logger = logging.getLogger(__name__)

# Creativity markers (English and Chinese)
_APPROACH_RE = re.compile(r"solution|approach|method|option|alternative|方案|方法|方式", re.IGNORECASE)
_EXAMPLE_RE = re.compile(r"for example|for instance|such as|e\.g\.|例如|比如|举例", re.IGNORECASE)
_COMPARISON_RE = re.compile(r"compared to|compared with|versus|\bvs\.?\s|相比|对比", re.IGNORECASE)

# Efficiency lookup: (length upper bound exclusive, score), last entry is the overflow
_CONCISE_BANDS = [(500, 100), (1500, 80), (3000, 60), (None, 40)]
_EXPLANATORY_BANDS = [(200, 50), (1000, 80), (3000, 90), (None, 70)]
_HIGH_ACCURACY = 80

# Analysis messages per dimension: (strength, weakness, suggestion)
_ANALYSIS_MESSAGES = {
    "accuracy": (
        "High accuracy: output matches the expected result",
        "Low accuracy: output deviates from the expected result",
        "Check that the input was understood correctly and refine the prompt",
    ),
    "completeness": (
        "Complete: covers all key points of the task",
        "Incomplete: parts of the task are missing",
        "Make sure the output contains every required element",
    ),
    "creativity": (
        "Creative: offers original insights",
        "Low creativity: lacks novel perspectives",
        "Try offering more creative or alternative solutions",
    ),
    "efficiency": (
        "Efficient: output is concise and effective",
        "Low efficiency: output is too verbose or too terse",
        "Tune the output length to keep information density balanced",
    ),
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def weighted_overall(scores: Scores, weights: ScoringWeights) -> float:
    """Weighted sum of the four sub-scores, each weight expressed out of 100"""
    return sum(scores.get(d) * getattr(weights, d) / 100 for d in SCORE_DIMENSIONS)


class ResultEvaluator:
    """
    Evaluates tool output for a case

    Accuracy is delegated to the strategy registered for the case's expected-result
    type; the other dimensions are computed from the output itself.
    """

    def __init__(
        self,
        strategies: dict[str, EvaluationStrategy] | None = None,
        weight_tolerance: float = 0.01,
    ) -> None:
        self._strategies = strategies if strategies is not None else default_strategies()
        self._weight_tolerance = weight_tolerance

    def register_strategy(self, expected_type: str, strategy: EvaluationStrategy) -> None:
        self._strategies[str(getattr(expected_type, "value", expected_type))] = strategy

    def get_strategy(self, expected_type: str) -> EvaluationStrategy:
        """
        Raises:
            StrategyNotFoundError: When no strategy is registered for the type
        """
        key = str(getattr(expected_type, "value", expected_type))
        strategy = self._strategies.get(key)
        if strategy is None:
            raise StrategyNotFoundError(key)
        return strategy

    def evaluate_result(self, case: Case, output: str) -> Scores:
        """
        Score an output for a case

        Args:
            case: Case definition
            output: Raw tool output

        Returns:
            Scores with each sub-score clamped to 0-100 and rounded, and the weighted overall

        Raises:
            StrategyNotFoundError: When the case's expected type has no strategy
        """
        strategy = self.get_strategy(case.expected.type)

        accuracy = _clamp(strategy.evaluate(output, case.expected))
        completeness = _clamp(self.evaluate_completeness(output, case))
        creativity = _clamp(self.evaluate_creativity(output))
        efficiency = _clamp(self.evaluate_efficiency(output, accuracy))

        weights = case.scoring
        if abs(weights.total - 100) > self._weight_tolerance:
            logger.warning(
                "Case %s scoring weights sum to %s instead of 100; overall is not normalized",
                case.id, weights.total,
            )

        scores = Scores(
            accuracy=_round_half_up(accuracy),
            completeness=_round_half_up(completeness),
            creativity=_round_half_up(creativity),
            efficiency=_round_half_up(efficiency),
        )
        scores.overall = round(weighted_overall(scores, weights), 2)
        return scores

    def score_execution(self, case: Case, execution: Execution) -> Execution:
        """
        Evaluate an execution's output and attach the scores

        Raises:
            ScoresAlreadyAttachedError: If the execution was already scored
        """
        execution.attach_scores(self.evaluate_result(case, execution.output))
        return execution

    def evaluate_completeness(self, output: str, case: Case) -> float:
        """Base 50, plus up to 50 for the task keywords (length > 3) found in the output"""
        keywords = extract_keywords(case.scenario.task, min_length=4)
        if not keywords:
            return 50.0
        return min(100.0, 50 + keyword_coverage(keywords, output) * 50)

    def evaluate_creativity(self, output: str) -> float:
        """Base 50, plus bonuses for multiple approaches, examples and comparisons"""
        score = 50.0
        if len(_APPROACH_RE.findall(output)) > 1:
            score += 20
        if _EXAMPLE_RE.search(output):
            score += 15
        if _COMPARISON_RE.search(output):
            score += 15
        return min(100.0, score)

    def evaluate_efficiency(self, output: str, accuracy: float) -> float:
        """
        Banded lookup on output length

        High accuracy rewards brevity; low accuracy tolerates longer explanatory output.
        """
        bands = _CONCISE_BANDS if accuracy >= _HIGH_ACCURACY else _EXPLANATORY_BANDS
        length = len(output)
        for upper, score in bands:
            if upper is None or length < upper:
                return float(score)

    def analyze_result(self, case: Case, execution: Execution) -> EvaluationAnalysis:
        """
        Derive strengths, weaknesses and suggestions from an execution's scores

        Args:
            case: Case definition (its difficulty selects the pass threshold)
            execution: Scored execution

        Returns:
            EvaluationAnalysis
        """
        analysis = EvaluationAnalysis()
        for dimension in SCORE_DIMENSIONS:
            value = execution.scores.get(dimension)
            strength, weakness, suggestion = _ANALYSIS_MESSAGES[dimension]
            if value >= STRENGTH_THRESHOLD:
                analysis.strengths.append(strength)
            elif value < WEAKNESS_THRESHOLD:
                analysis.weaknesses.append(weakness)
                analysis.suggestions.append(suggestion)

        analysis.pass_threshold = PASS_THRESHOLDS.get(case.difficulty, DEFAULT_PASS_THRESHOLD)
        analysis.passed = execution.scores.overall >= analysis.pass_threshold
        return analysis
