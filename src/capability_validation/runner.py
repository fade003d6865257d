"""
capability-validation CLI Runner

Runs validation cases on several tools, scores the outputs and prints a ranked
comparison per case.

Usage:
    python -m capability_validation.runner --cases cases/sample_cases.json
    python -m capability_validation.runner --cases cases/sample_cases.json --tools claude,gemini --markdown
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from capability_validation.case_loader import load_case_library
from capability_validation.domain.constants import DEFAULT_TOOLS
from capability_validation.domain.errors import NoExecutionsError
from capability_validation.harness_config import load_config
from capability_validation.infrastructure.repositories import InMemoryExecutionStore
from capability_validation.infrastructure.tool_adapters.factory import create_adapter
from capability_validation.scoring.evaluator import ResultEvaluator
from capability_validation.use_cases.comparison import ComparisonAnalyzer
from capability_validation.use_cases.execution import ExecutionEngine
from capability_validation.use_cases.health_check import run_health_check


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="capability-validation: Run and compare tool capability cases",
    )
    parser.add_argument(
        "--cases",
        required=True,
        help="Path to the case library JSON file",
    )
    parser.add_argument(
        "--tools",
        default=None,
        help="Comma-separated list of tools (default: uses DEFAULT_TOOLS)",
    )
    parser.add_argument(
        "--case-ids",
        default=None,
        help="Comma-separated subset of case ids to run (default: all cases)",
    )
    parser.add_argument(
        "--max-concurrency",
        type=int,
        default=None,
        help="Executions in flight (default: CAPVAL_MAX_CONCURRENCY from .env)",
    )
    parser.add_argument(
        "--timeout-seconds",
        type=float,
        default=None,
        help="Per-execution deadline (default: CAPVAL_TIMEOUT_SECONDS from .env)",
    )
    parser.add_argument(
        "--output-dir",
        default="results",
        help="Directory for output files (default: results)",
    )
    parser.add_argument(
        "--markdown",
        action="store_true",
        help="Also write one Markdown comparison report per case",
    )
    parser.add_argument(
        "--skip-probe",
        action="store_true",
        help="Health check only verifies configuration, without sending a probe prompt",
    )
    return parser.parse_args(argv)


def _split(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    config = load_config()
    tools = _split(args.tools) if args.tools else DEFAULT_TOOLS
    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    raw_path = output_dir / f"executions_{run_id}.csv"

    # Load cases
    print(f"\n=== Loading cases: {args.cases} ===\n")
    library = load_case_library(args.cases)
    repository = library.to_repository()
    case_ids = _split(args.case_ids) if args.case_ids else [c.id for c in library.cases]
    unknown = [case_id for case_id in case_ids if repository.get(case_id) is None]
    if unknown:
        print(f"ERROR: Unknown case ids: {unknown}. Exiting.")
        sys.exit(1)
    print(f"  Library: {library.name}")
    print(f"  Cases: {len(case_ids)}")
    print(f"  Tools: {tools}")
    print(f"  Run ID: {run_id}")
    print()

    # Step 1: Health check
    adapters = [create_adapter(tool, config) for tool in tools]
    available_tools, _ = run_health_check(adapters, probe=not args.skip_probe)
    if not available_tools:
        print("ERROR: No tools available. Exiting.")
        sys.exit(1)

    store = InMemoryExecutionStore()
    engine = ExecutionEngine.from_config(config, repository, execution_store=store)
    for adapter in adapters:
        if adapter.name in available_tools:
            engine.register_adapter(adapter)

    # Step 2: Execute
    total = len(case_ids) * len(available_tools)
    print(f"=== Running Executions ({total} total) ===\n")
    batch = engine.batch_execute(
        case_ids,
        available_tools,
        max_concurrency=args.max_concurrency,
        timeout_seconds=args.timeout_seconds,
    )
    for failure in batch.failures:
        print(f"  ERROR: {failure.case_id} | {failure.tool}: {failure.error}")

    # Step 3: Score
    evaluator = ResultEvaluator(weight_tolerance=config.evaluation.weight_tolerance)
    for execution in batch.executions:
        evaluator.score_execution(repository.get(execution.case_id), execution)

    # Step 4: Compare
    analyzer = ComparisonAnalyzer(store, repository, pass_score=config.evaluation.history_pass_score)
    print("=== Rankings ===\n")
    for case_id in case_ids:
        case = repository.get(case_id)
        executions = [e for e in batch.executions if e.case_id == case_id]
        try:
            report = analyzer.generate_report(case, executions)
        except NoExecutionsError:
            print(f"  Case: {case_id} (no successful executions)\n")
            continue

        print(f"  Case: {case_id} [{case.category} / {case.difficulty}]")
        print(f"  {'#':>2} {'Tool':<20} {'Acc':>5} {'Comp':>5} {'Crea':>5} {'Eff':>5} {'Overall':>8}")
        print(f"  {'-'*2} {'-'*20} {'-'*5} {'-'*5} {'-'*5} {'-'*5} {'-'*8}")
        for entry in report.ranking:
            s = entry.scores
            print(
                f"  {entry.rank:>2} {entry.tool:<20} "
                f"{s.accuracy:>5.0f} {s.completeness:>5.0f} {s.creativity:>5.0f} "
                f"{s.efficiency:>5.0f} {s.overall:>8.2f}"
            )
        for rec in report.recommendations:
            print(f"  - {rec}")
        print()

        if args.markdown:
            md_path = output_dir / f"report_{case_id}_{run_id}.md"
            md_path.write_text(analyzer.export_to_markdown(report), encoding="utf-8")

    # Step 5: Batch summary
    summary = analyzer.generate_batch_report(case_ids, available_tools).summary
    print("=== Tool Summary ===\n")
    print(f"  {'Tool':<20} {'Average':>8} {'Wins':>5} {'AvgRank':>8}")
    print(f"  {'-'*20} {'-'*8} {'-'*5} {'-'*8}")
    for ranking in summary.tool_rankings:
        print(
            f"  {ranking.tool:<20} {ranking.average_score:>8.2f} "
            f"{ranking.win_count:>5} {ranking.average_rank:>8.2f}"
        )
    print()

    # Step 6: Save CSV
    store.save_csv(raw_path)
    print("=== Output ===\n")
    print(f"  Executions: {raw_path}")
    if args.markdown:
        print(f"  Reports:    {output_dir}/report_*_{run_id}.md")
    print()


if __name__ == "__main__":
    main()
