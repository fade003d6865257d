"""
Scoring sub-package

Provides the evaluation strategies and the result evaluator.
"""

from capability_validation.domain.value_objects import EvaluationAnalysis, Scores
from capability_validation.scoring.evaluator import ResultEvaluator, weighted_overall
from capability_validation.scoring.strategies import (
    CreativeEvaluationStrategy,
    CriteriaMatchStrategy,
    EvaluationStrategy,
    ExactMatchStrategy,
    PatternMatchStrategy,
    default_strategies,
)
from capability_validation.scoring.text_scorers import (
    extract_keywords,
    jaccard_similarity,
    keyword_coverage,
    levenshtein_distance,
    levenshtein_similarity,
    normalize_text,
)

__all__ = [
    # value objects (re-exported from domain)
    "EvaluationAnalysis",
    "Scores",
    # evaluator
    "ResultEvaluator",
    "weighted_overall",
    # strategies
    "CreativeEvaluationStrategy",
    "CriteriaMatchStrategy",
    "EvaluationStrategy",
    "ExactMatchStrategy",
    "PatternMatchStrategy",
    "default_strategies",
    # text helpers
    "extract_keywords",
    "jaccard_similarity",
    "keyword_coverage",
    "levenshtein_distance",
    "levenshtein_similarity",
    "normalize_text",
]
