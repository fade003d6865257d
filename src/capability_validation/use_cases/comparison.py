"""
Comparison Analysis

Ranks the executions of a case across tools, derives aggregate insights and
recommendations, aggregates tool history and renders Markdown reports.
"""

from __future__ import annotations

import math
from collections import defaultdict
from datetime import datetime

import pandas as pd

from capability_validation.domain.constants import (
    CLOSE_VARIANCE,
    HISTORY_PASS_SCORE,
    MODERATE_VARIANCE,
    SCORE_BUCKETS,
    SCORE_DIMENSIONS,
)
from capability_validation.domain.entities import Case, Execution
from capability_validation.domain.errors import CaseNotFoundError, NoExecutionsError
from capability_validation.domain.reports import (
    BatchComparisonReport,
    BatchSummary,
    CategoryPerformance,
    ComparisonInsights,
    ComparisonReport,
    RankingEntry,
    ToolPerformanceHistory,
    ToolRanking,
    TrendPoint,
)
from capability_validation.infrastructure.repositories import CaseRepository, ExecutionStore

_BUCKET_EDGES = [-math.inf, 20, 40, 60, 80, math.inf]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _population_variance(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    mean = _mean(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def _tool_label(tool: str, model: str | None) -> str:
    return f"{tool} ({model})" if model else tool


class ComparisonAnalyzer:
    """Cross-tool comparison of scored executions"""

    def __init__(
        self,
        execution_store: ExecutionStore | None = None,
        case_repository: CaseRepository | None = None,
        pass_score: float = HISTORY_PASS_SCORE,
    ):
        """
        Args:
            execution_store: Execution history (required for history and batch reports)
            case_repository: Case lookup (required for batch reports and category filters)
            pass_score: Overall score counted as a pass in tool history
        """
        self.execution_store = execution_store
        self.case_repository = case_repository
        self.pass_score = pass_score

    def generate_report(self, case: Case, executions: list[Execution]) -> ComparisonReport:
        """
        Build a ranked comparison report for one case.

        Executions are ranked by overall score, highest first; ties keep input order.

        Args:
            case: Case definition
            executions: Scored executions of the case

        Returns:
            ComparisonReport

        Raises:
            NoExecutionsError: If executions is empty
        """
        if not executions:
            raise NoExecutionsError(f"No executions to compare for case {case.id}")

        ranked = sorted(executions, key=lambda e: e.scores.overall, reverse=True)
        ranking = [
            self._create_ranking_entry(execution, rank, executions)
            for rank, execution in enumerate(ranked, start=1)
        ]
        insights = self.generate_insights(executions)
        recommendations = self.generate_recommendations(case, executions, insights)

        return ComparisonReport(
            case_id=case.id,
            case_title=case.title,
            case_category=case.category,
            case_difficulty=case.difficulty,
            executions=list(executions),
            ranking=ranking,
            insights=insights,
            recommendations=recommendations,
            generated_at=datetime.now(),
        )

    def _create_ranking_entry(
        self,
        execution: Execution,
        rank: int,
        all_executions: list[Execution],
    ) -> RankingEntry:
        strengths = []
        weaknesses = []
        for dimension in SCORE_DIMENSIONS:
            values = [e.scores.get(dimension) for e in all_executions]
            value = execution.scores.get(dimension)
            if value == max(values):
                strengths.append(f"Best {dimension}")
            if value == min(values):
                weaknesses.append(f"Weakest {dimension}")

        return RankingEntry(
            rank=rank,
            tool=execution.tool,
            model=execution.model,
            scores=execution.scores,
            strengths=strengths,
            weaknesses=weaknesses,
        )

    def generate_insights(self, executions: list[Execution]) -> ComparisonInsights:
        """
        Raises:
            NoExecutionsError: If executions is empty
        """
        if not executions:
            raise NoExecutionsError("No executions to analyze")

        # max() returns the first maximal element, so ties go to the earliest execution
        best = max(executions, key=lambda e: e.scores.overall)
        scores = [e.scores.overall for e in executions]
        variance = _population_variance(scores)

        dimension_leaders = {
            dimension: max(executions, key=lambda e, d=dimension: e.scores.get(d)).tool
            for dimension in SCORE_DIMENSIONS
        }

        if variance < CLOSE_VARIANCE:
            consistency = "Tools perform very close to each other"
        elif variance < MODERATE_VARIANCE:
            consistency = "Tools show some difference in performance"
        else:
            consistency = "Tools show a marked difference in performance"

        return ComparisonInsights(
            best_tool=best.tool,
            best_model=best.model,
            average_score=_mean(scores),
            score_variance=variance,
            dimension_leaders=dimension_leaders,
            consistency_analysis=consistency,
        )

    def generate_recommendations(
        self,
        case: Case,
        executions: list[Execution],
        insights: ComparisonInsights,
    ) -> list[str]:
        """Natural-language suggestions from the best tool and the dimension leaders"""
        recommendations = [
            f"For {case.difficulty} {case.category} tasks, {insights.best_tool} is recommended",
        ]

        if len(executions) > 1:
            if insights.score_variance < CLOSE_VARIANCE:
                recommendations.append("All tools perform similarly; choose based on cost and availability")
            else:
                recommendations.append(f"{insights.best_tool} has a clear advantage on this kind of task")

        for dimension in SCORE_DIMENSIONS:
            leader = insights.dimension_leaders[dimension]
            if leader != insights.best_tool:
                recommendations.append(f"If {dimension} matters most, consider {leader}")

        return recommendations

    def get_tool_performance_history(
        self,
        tool: str,
        category: str | None = None,
        limit: int = 100,
    ) -> ToolPerformanceHistory:
        """
        Aggregate a tool's most recent executions

        Args:
            tool: Tool name
            category: Only count executions of cases in this category
            limit: Maximum number of executions considered (most recent first)

        Returns:
            ToolPerformanceHistory (pass rate in percent, trend oldest day first)

        Raises:
            ValueError: If no execution store is configured, or a category filter is
                requested without a case repository
        """
        if self.execution_store is None:
            raise ValueError("An execution store is required for tool history")

        executions = self.execution_store.find_by_tool(tool)
        if category is not None:
            if self.case_repository is None:
                raise ValueError("A case repository is required to filter by category")
            executions = [e for e in executions if self._category_of(e.case_id) == category]
        executions = executions[:limit]

        if not executions:
            return ToolPerformanceHistory(
                tool=tool,
                total_executions=0,
                average_score=0.0,
                pass_rate=0.0,
                score_distribution={bucket: 0 for bucket in SCORE_BUCKETS},
                trend_data=[],
            )

        df = pd.DataFrame({
            "overall": [e.scores.overall for e in executions],
            "executed_at": pd.to_datetime([e.executed_at for e in executions]),
        })

        buckets = pd.cut(df["overall"], bins=_BUCKET_EDGES, labels=SCORE_BUCKETS, right=False)
        distribution = buckets.value_counts().reindex(SCORE_BUCKETS, fill_value=0)

        daily = df.groupby(df["executed_at"].dt.date)["overall"].mean().sort_index()
        trend = [TrendPoint(date=day, average_score=float(score)) for day, score in daily.items()]

        return ToolPerformanceHistory(
            tool=tool,
            total_executions=len(df),
            average_score=float(df["overall"].mean()),
            pass_rate=float((df["overall"] >= self.pass_score).mean() * 100),
            score_distribution={bucket: int(count) for bucket, count in distribution.items()},
            trend_data=trend,
        )

    def _category_of(self, case_id: str) -> str | None:
        case = self.case_repository.get(case_id)
        return case.category if case is not None else None

    def generate_batch_report(self, case_ids: list[str], tools: list[str]) -> BatchComparisonReport:
        """
        Compare the stored executions of several cases, restricted to the given tools.

        Cases without any matching execution are skipped.

        Raises:
            ValueError: If the execution store or case repository is missing
            CaseNotFoundError: If a case with executions cannot be found
        """
        if self.execution_store is None or self.case_repository is None:
            raise ValueError("Batch reports require an execution store and a case repository")

        reports = []
        for case_id in case_ids:
            executions = [e for e in self.execution_store.find_by_case_id(case_id) if e.tool in tools]
            if not executions:
                continue
            case = self.case_repository.get(case_id)
            if case is None:
                raise CaseNotFoundError(case_id)
            reports.append(self.generate_report(case, executions))

        return BatchComparisonReport(
            cases=reports,
            summary=self._generate_batch_summary(reports, tools),
            generated_at=datetime.now(),
        )

    def _generate_batch_summary(self, reports: list[ComparisonReport], tools: list[str]) -> BatchSummary:
        scores: dict[str, list[float]] = {tool: [] for tool in tools}
        ranks: dict[str, list[int]] = {tool: [] for tool in tools}
        wins: dict[str, int] = {tool: 0 for tool in tools}
        category_scores: dict[str, dict[str, list[float]]] = defaultdict(lambda: defaultdict(list))

        for report in reports:
            wins[report.ranking[0].tool] += 1
            for entry in report.ranking:
                scores[entry.tool].append(entry.scores.overall)
                ranks[entry.tool].append(entry.rank)
                category_scores[report.case_category][entry.tool].append(entry.scores.overall)

        tool_rankings = sorted(
            (
                ToolRanking(
                    tool=tool,
                    average_score=_mean(scores[tool]),
                    win_count=wins[tool],
                    average_rank=_mean(ranks[tool]),
                )
                for tool in tools
            ),
            key=lambda r: r.average_score,
            reverse=True,
        )

        category_performance = {}
        for category, per_tool in category_scores.items():
            best_tool = max(per_tool, key=lambda t: _mean(per_tool[t]))
            all_scores = [s for values in per_tool.values() for s in values]
            category_performance[category] = CategoryPerformance(
                best_tool=best_tool,
                average_score=_mean(all_scores),
            )

        if reports and tool_rankings:
            top = tool_rankings[0]
            recommendations = [
                f"Across {len(reports)} cases, {top.tool} performed best",
                f"Average score: {top.average_score:.2f}",
            ]
        else:
            recommendations = ["No executions found for the requested cases and tools"]

        return BatchSummary(
            total_cases=len(reports),
            tool_rankings=tool_rankings,
            category_performance=category_performance,
            recommendations=recommendations,
        )

    def generate_chart_data(self, report: ComparisonReport) -> dict:
        """Radar (per-dimension) and bar (overall) chart data for a report"""
        return {
            "radar_chart": {
                "labels": [d.capitalize() for d in SCORE_DIMENSIONS],
                "datasets": [
                    {
                        "label": _tool_label(entry.tool, entry.model),
                        "data": [entry.scores.get(d) for d in SCORE_DIMENSIONS],
                    }
                    for entry in report.ranking
                ],
            },
            "bar_chart": {
                "labels": [entry.tool for entry in report.ranking],
                "data": [entry.scores.overall for entry in report.ranking],
            },
        }

    def export_to_markdown(self, report: ComparisonReport) -> str:
        """Render a report as Markdown"""
        insights = report.insights
        lines = [
            "# Case Comparison Report",
            "",
            "## Case",
            "",
            f"- **Title**: {report.case_title or report.case_id}",
            f"- **Category**: {report.case_category}",
            f"- **Difficulty**: {report.case_difficulty}",
            f"- **Generated at**: {report.generated_at:%Y-%m-%d %H:%M:%S}",
            "",
            "## Ranking",
            "",
            "| Rank | Tool | Accuracy | Completeness | Creativity | Efficiency | Overall |",
            "|------|------|----------|--------------|------------|------------|---------|",
        ]
        for entry in report.ranking:
            s = entry.scores
            lines.append(
                f"| {entry.rank} | {_tool_label(entry.tool, entry.model)} "
                f"| {s.accuracy:.1f} | {s.completeness:.1f} | {s.creativity:.1f} "
                f"| {s.efficiency:.1f} | **{s.overall:.1f}** |"
            )

        lines.extend([
            "",
            "## Insights",
            "",
            f"- **Best tool**: {_tool_label(insights.best_tool, insights.best_model)}",
            f"- **Average score**: {insights.average_score:.2f}",
            f"- **Score variance**: {insights.score_variance:.2f}",
            f"- **Consistency**: {insights.consistency_analysis}",
            "",
            "### Dimension leaders",
            "",
        ])
        for dimension in SCORE_DIMENSIONS:
            lines.append(f"- {dimension.capitalize()}: {insights.dimension_leaders[dimension]}")

        lines.extend(["", "## Recommendations", ""])
        lines.extend(f"- {rec}" for rec in report.recommendations)

        return "\n".join(lines) + "\n"
