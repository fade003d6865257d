"""
Domain Value Objects

Defines immutable data structures representing values such as evaluation scores
and evaluation analyses.
"""

from dataclasses import dataclass, field


@dataclass
class Scores:
    """Evaluation scores (each 0-100) and the weighted overall score"""
    accuracy: float = 0
    completeness: float = 0
    creativity: float = 0
    efficiency: float = 0
    overall: float = 0
    custom_scores: dict[str, float] | None = None

    def get(self, dimension: str) -> float:
        """Return the score for a dimension name"""
        return getattr(self, dimension)


@dataclass
class EvaluationAnalysis:
    """Human-readable analysis of a scored execution"""
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    pass_threshold: float = 50
    passed: bool = False
