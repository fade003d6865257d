"""ComparisonAnalyzer tests"""

from datetime import date, datetime

import pytest

from capability_validation.domain.entities import Case, Execution, ExpectedResult, ExpectedType, Scenario
from capability_validation.domain.errors import CaseNotFoundError, NoExecutionsError
from capability_validation.domain.value_objects import Scores
from capability_validation.infrastructure.repositories import InMemoryCaseRepository, InMemoryExecutionStore
from capability_validation.use_cases.comparison import ComparisonAnalyzer


def _case(case_id="c1", category="knowledge_qa", difficulty="beginner"):
    return Case(
        id=case_id,
        title=f"Case {case_id}",
        category=category,
        difficulty=difficulty,
        scenario=Scenario(task="task"),
        expected=ExpectedResult(type=ExpectedType.EXACT, content="x"),
    )


def _exec(tool, overall, acc=50, comp=50, crea=50, eff=50, case_id="c1", model=None,
          executed_at=datetime(2026, 1, 1, 9, 0)):
    return Execution(
        id=f"exec_{tool}_{case_id}_{overall}",
        case_id=case_id,
        tool=tool,
        output="out",
        executed_at=executed_at,
        duration_ms=100,
        model=model,
        scores=Scores(accuracy=acc, completeness=comp, creativity=crea, efficiency=eff, overall=overall),
        scored=True,
    )


@pytest.fixture
def three_tools():
    return [
        _exec("claude", 70, acc=90, comp=60, crea=50, eff=80, model="claude-haiku-4-5-20251001"),
        _exec("gemini", 85, acc=80, comp=90, crea=70, eff=100, model="gemini-2.5-flash"),
        _exec("openai", 60, acc=60, comp=60, crea=90, eff=40),
    ]


class TestGenerateReport:
    """Comparison report, insights and recommendations"""

    def test_ranking_sorted_by_overall(self, three_tools):
        report = ComparisonAnalyzer().generate_report(_case(), three_tools)

        assert [e.tool for e in report.ranking] == ["gemini", "claude", "openai"]
        assert [e.rank for e in report.ranking] == [1, 2, 3]
        overalls = [e.scores.overall for e in report.ranking]
        assert overalls == sorted(overalls, reverse=True)
        assert report.insights.best_tool == report.ranking[0].tool
        assert report.insights.best_model == "gemini-2.5-flash"

    def test_case_metadata(self, three_tools):
        report = ComparisonAnalyzer().generate_report(_case(), three_tools)
        assert report.case_id == "c1"
        assert report.case_title == "Case c1"
        assert report.case_category == "knowledge_qa"
        assert report.case_difficulty == "beginner"
        assert report.executions == three_tools

    def test_strengths_and_weaknesses(self, three_tools):
        report = ComparisonAnalyzer().generate_report(_case(), three_tools)
        by_tool = {e.tool: e for e in report.ranking}

        assert by_tool["claude"].strengths == ["Best accuracy"]
        assert by_tool["gemini"].strengths == ["Best completeness", "Best efficiency"]
        assert by_tool["openai"].strengths == ["Best creativity"]
        assert by_tool["gemini"].weaknesses == []
        # Shared minimum counts for every execution that holds it
        assert "Weakest completeness" in by_tool["claude"].weaknesses
        assert "Weakest completeness" in by_tool["openai"].weaknesses
        assert by_tool["openai"].weaknesses == ["Weakest accuracy", "Weakest completeness", "Weakest efficiency"]

    def test_insights(self, three_tools):
        insights = ComparisonAnalyzer().generate_report(_case(), three_tools).insights

        assert insights.average_score == pytest.approx(215 / 3)
        assert insights.score_variance == pytest.approx(((70 - 215 / 3) ** 2 + (85 - 215 / 3) ** 2 + (60 - 215 / 3) ** 2) / 3)
        assert insights.dimension_leaders == {
            "accuracy": "claude",
            "completeness": "gemini",
            "creativity": "openai",
            "efficiency": "gemini",
        }
        assert "some difference" in insights.consistency_analysis

    def test_recommendations(self, three_tools):
        report = ComparisonAnalyzer().generate_report(_case(), three_tools)
        assert report.recommendations == [
            "For beginner knowledge_qa tasks, gemini is recommended",
            "gemini has a clear advantage on this kind of task",
            "If accuracy matters most, consider claude",
            "If creativity matters most, consider openai",
        ]

    def test_ties_keep_input_order(self):
        executions = [_exec("claude", 75), _exec("gemini", 80), _exec("openai", 75)]
        report = ComparisonAnalyzer().generate_report(_case(), executions)
        assert [e.tool for e in report.ranking] == ["gemini", "claude", "openai"]

    def test_tied_best_is_consistent(self):
        executions = [_exec("claude", 80), _exec("gemini", 80)]
        report = ComparisonAnalyzer().generate_report(_case(), executions)
        assert report.ranking[0].tool == "claude"
        assert report.insights.best_tool == "claude"

    def test_single_execution(self):
        report = ComparisonAnalyzer().generate_report(_case(), [_exec("claude", 70)])
        entry = report.ranking[0]
        assert len(entry.strengths) == 4
        assert len(entry.weaknesses) == 4
        assert report.insights.score_variance == 0.0
        assert "very close" in report.insights.consistency_analysis
        assert report.recommendations == ["For beginner knowledge_qa tasks, claude is recommended"]

    def test_close_scores(self):
        report = ComparisonAnalyzer().generate_report(_case(), [_exec("claude", 70), _exec("gemini", 72)])
        assert "very close" in report.insights.consistency_analysis
        assert "All tools perform similarly; choose based on cost and availability" in report.recommendations

    def test_marked_difference(self):
        report = ComparisonAnalyzer().generate_report(_case(), [_exec("claude", 20), _exec("gemini", 80)])
        assert report.insights.score_variance == pytest.approx(900.0)
        assert "marked difference" in report.insights.consistency_analysis

    def test_no_executions(self):
        with pytest.raises(NoExecutionsError):
            ComparisonAnalyzer().generate_report(_case(), [])


class TestChartAndMarkdown:
    """Chart data and Markdown export"""

    def test_chart_data(self, three_tools):
        analyzer = ComparisonAnalyzer()
        chart = analyzer.generate_chart_data(analyzer.generate_report(_case(), three_tools))

        assert chart["radar_chart"]["labels"] == ["Accuracy", "Completeness", "Creativity", "Efficiency"]
        first = chart["radar_chart"]["datasets"][0]
        assert first == {"label": "gemini (gemini-2.5-flash)", "data": [80, 90, 70, 100]}
        assert chart["bar_chart"] == {"labels": ["gemini", "claude", "openai"], "data": [85, 70, 60]}

    def test_markdown(self, three_tools):
        analyzer = ComparisonAnalyzer()
        markdown = analyzer.export_to_markdown(analyzer.generate_report(_case(), three_tools))

        assert markdown.startswith("# Case Comparison Report\n")
        assert "- **Title**: Case c1" in markdown
        assert "| 1 | gemini (gemini-2.5-flash) | 80.0 | 90.0 | 70.0 | 100.0 | **85.0** |" in markdown
        assert "| 3 | openai | 60.0 | 60.0 | 90.0 | 40.0 | **60.0** |" in markdown
        assert "- Creativity: openai" in markdown
        assert "- If accuracy matters most, consider claude" in markdown
        assert markdown.index("## Ranking") < markdown.index("## Insights") < markdown.index("## Recommendations")


class TestToolPerformanceHistory:
    """Per-tool history, buckets and trend"""

    @pytest.fixture
    def store(self):
        store = InMemoryExecutionStore()
        for day, hour, overall in [(1, 9, 10), (1, 10, 30), (2, 9, 55), (3, 9, 65), (3, 10, 90), (3, 11, 100)]:
            store.save(_exec("claude", overall, executed_at=datetime(2026, 1, day, hour, 0)))
        store.save(_exec("gemini", 99, executed_at=datetime(2026, 1, 4, 9, 0)))
        return store

    def test_aggregates(self, store):
        history = ComparisonAnalyzer(store).get_tool_performance_history("claude")

        assert history.tool == "claude"
        assert history.total_executions == 6
        assert history.average_score == pytest.approx(350 / 6)
        assert history.pass_rate == pytest.approx(50.0)
        assert history.score_distribution == {"0-20": 1, "20-40": 1, "40-60": 1, "60-80": 1, "80-100": 2}

    def test_daily_trend_oldest_first(self, store):
        history = ComparisonAnalyzer(store).get_tool_performance_history("claude")

        assert [p.date for p in history.trend_data] == [date(2026, 1, 1), date(2026, 1, 2), date(2026, 1, 3)]
        assert [p.average_score for p in history.trend_data] == pytest.approx([20.0, 55.0, 85.0])

    def test_limit_keeps_most_recent(self, store):
        history = ComparisonAnalyzer(store).get_tool_performance_history("claude", limit=2)

        assert history.total_executions == 2
        assert history.average_score == pytest.approx(95.0)
        assert len(history.trend_data) == 1

    def test_bucket_lower_bounds_are_inclusive(self):
        store = InMemoryExecutionStore()
        for overall in (0, 20, 40, 60, 80):
            store.save(_exec("claude", overall))
        history = ComparisonAnalyzer(store).get_tool_performance_history("claude")
        assert history.score_distribution == {"0-20": 1, "20-40": 1, "40-60": 1, "60-80": 1, "80-100": 1}
        assert history.pass_rate == pytest.approx(40.0)

    def test_custom_pass_score(self, store):
        history = ComparisonAnalyzer(store, pass_score=50).get_tool_performance_history("claude")
        assert history.pass_rate == pytest.approx(400 / 6)

    def test_category_filter(self):
        store = InMemoryExecutionStore()
        store.save(_exec("claude", 80, case_id="c1"))
        store.save(_exec("claude", 40, case_id="c2"))
        repo = InMemoryCaseRepository([_case("c1", category="knowledge_qa"), _case("c2", category="code_generation")])

        history = ComparisonAnalyzer(store, repo).get_tool_performance_history("claude", category="code_generation")

        assert history.total_executions == 1
        assert history.average_score == 40.0
        assert history.pass_rate == 0.0

    def test_category_filter_requires_repository(self, store):
        with pytest.raises(ValueError, match="case repository"):
            ComparisonAnalyzer(store).get_tool_performance_history("claude", category="custom")

    def test_requires_store(self):
        with pytest.raises(ValueError, match="execution store"):
            ComparisonAnalyzer().get_tool_performance_history("claude")

    def test_no_history(self, store):
        history = ComparisonAnalyzer(store).get_tool_performance_history("openai")
        assert history.total_executions == 0
        assert history.average_score == 0.0
        assert history.pass_rate == 0.0
        assert history.score_distribution == {"0-20": 0, "20-40": 0, "40-60": 0, "60-80": 0, "80-100": 0}
        assert history.trend_data == []


class TestBatchReport:
    """Cross-case batch report"""

    @pytest.fixture
    def analyzer(self):
        store = InMemoryExecutionStore()
        store.save(_exec("claude", 80, case_id="c1"))
        store.save(_exec("gemini", 70, case_id="c1"))
        store.save(_exec("claude", 50, case_id="c2"))
        store.save(_exec("gemini", 90, case_id="c2"))
        store.save(_exec("openai", 95, case_id="c2"))
        repo = InMemoryCaseRepository([
            _case("c1", category="knowledge_qa"),
            _case("c2", category="code_generation"),
            _case("c3"),
        ])
        return ComparisonAnalyzer(store, repo)

    def test_per_case_reports(self, analyzer):
        report = analyzer.generate_batch_report(["c1", "c2", "c3"], ["claude", "gemini"])

        assert [r.case_id for r in report.cases] == ["c1", "c2"]
        assert [e.tool for e in report.cases[1].ranking] == ["gemini", "claude"]
        assert report.summary.total_cases == 2

    def test_tool_rankings(self, analyzer):
        summary = analyzer.generate_batch_report(["c1", "c2"], ["claude", "gemini"]).summary

        gemini, claude = summary.tool_rankings
        assert gemini.tool == "gemini"
        assert gemini.average_score == pytest.approx(80.0)
        assert gemini.win_count == 1
        assert gemini.average_rank == pytest.approx(1.5)
        assert claude.average_score == pytest.approx(65.0)
        assert summary.recommendations == ["Across 2 cases, gemini performed best", "Average score: 80.00"]

    def test_category_performance(self, analyzer):
        summary = analyzer.generate_batch_report(["c1", "c2"], ["claude", "gemini"]).summary

        assert summary.category_performance["knowledge_qa"].best_tool == "claude"
        assert summary.category_performance["knowledge_qa"].average_score == pytest.approx(75.0)
        assert summary.category_performance["code_generation"].best_tool == "gemini"
        assert summary.category_performance["code_generation"].average_score == pytest.approx(70.0)

    def test_no_matching_executions(self, analyzer):
        summary = analyzer.generate_batch_report(["c3"], ["claude"]).summary
        assert summary.total_cases == 0
        assert summary.tool_rankings[0].win_count == 0
        assert summary.recommendations == ["No executions found for the requested cases and tools"]

    def test_unknown_case_with_executions(self):
        store = InMemoryExecutionStore()
        store.save(_exec("claude", 80, case_id="ghost"))
        analyzer = ComparisonAnalyzer(store, InMemoryCaseRepository())
        with pytest.raises(CaseNotFoundError):
            analyzer.generate_batch_report(["ghost"], ["claude"])

    def test_requires_store_and_repository(self):
        with pytest.raises(ValueError):
            ComparisonAnalyzer(InMemoryExecutionStore()).generate_batch_report(["c1"], ["claude"])
