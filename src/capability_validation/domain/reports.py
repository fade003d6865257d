"""
Comparison Report Structures

Derived, non-persistent structures produced by the comparison analyzer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from capability_validation.domain.entities import Execution
from capability_validation.domain.value_objects import Scores


@dataclass
class RankingEntry:
    """One ranked execution"""
    rank: int
    tool: str
    model: str | None
    scores: Scores
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)


@dataclass
class ComparisonInsights:
    """Aggregate insights across executions of one case"""
    best_tool: str
    best_model: str | None
    average_score: float
    score_variance: float
    dimension_leaders: dict[str, str]
    consistency_analysis: str


@dataclass
class ComparisonReport:
    """Ranked comparison of executions for one case"""
    case_id: str
    case_title: str
    case_category: str
    case_difficulty: str
    executions: list[Execution]
    ranking: list[RankingEntry]
    insights: ComparisonInsights
    recommendations: list[str]
    generated_at: datetime


@dataclass
class ToolRanking:
    """A tool's standing across a batch of cases"""
    tool: str
    average_score: float
    win_count: int
    average_rank: float


@dataclass
class CategoryPerformance:
    """Best tool and average score within a case category"""
    best_tool: str
    average_score: float


@dataclass
class BatchSummary:
    """Summary of a batch comparison"""
    total_cases: int
    tool_rankings: list[ToolRanking]
    category_performance: dict[str, CategoryPerformance]
    recommendations: list[str]


@dataclass
class BatchComparisonReport:
    """Comparison reports for several cases plus a summary"""
    cases: list[ComparisonReport]
    summary: BatchSummary
    generated_at: datetime


@dataclass
class TrendPoint:
    """Average overall score on one calendar day"""
    date: date
    average_score: float


@dataclass
class ToolPerformanceHistory:
    """Aggregated history of a tool's executions"""
    tool: str
    total_executions: int
    average_score: float
    pass_rate: float
    score_distribution: dict[str, int]
    trend_data: list[TrendPoint]
