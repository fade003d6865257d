"""
Integration test for the CLI runner (using stub adapters).

Verifies the full pipeline works end-to-end:
1. Load the sample case library
2. Health check and batch execution (stub adapters)
3. Scoring and ranking
4. CSV and Markdown output
"""

from pathlib import Path
from unittest.mock import patch

import pandas as pd
import pytest

from capability_validation import runner
from capability_validation.infrastructure.tool_adapters import GenericToolAdapter

SAMPLE_CASES = str(Path(__file__).resolve().parent.parent / "cases" / "sample_cases.json")


def _stub_adapter(tool, config=None):
    outputs = {"claude": "Paris", "gemini": "The answer is Paris, for example."}
    return GenericToolAdapter(tool, lambda prompt, cfg: outputs.get(tool, "no idea"))


def _unavailable_adapter(tool, config=None):
    return GenericToolAdapter(tool, lambda prompt, cfg: "", available_fn=lambda: False)


class TestParseArgs:
    """CLI argument parsing"""

    def test_defaults(self):
        args = runner.parse_args(["--cases", "cases.json"])
        assert args.tools is None
        assert args.output_dir == "results"
        assert args.markdown is False
        assert args.max_concurrency is None

    def test_cases_required(self):
        with pytest.raises(SystemExit):
            runner.parse_args([])


class TestMain:
    """End-to-end runner with stub adapters"""

    @patch("capability_validation.runner.create_adapter", side_effect=_stub_adapter)
    def test_full_run(self, mock_create, tmp_path, capsys):
        runner.main([
            "--cases", SAMPLE_CASES,
            "--tools", "claude,gemini",
            "--output-dir", str(tmp_path),
            "--markdown",
            "--max-concurrency", "2",
        ])

        out = capsys.readouterr().out
        assert "=== Rankings ===" in out
        assert "capital-of-france" in out
        assert "=== Tool Summary ===" in out

        csv_files = list(tmp_path.glob("executions_*.csv"))
        assert len(csv_files) == 1
        df = pd.read_csv(csv_files[0])
        assert len(df) == 8
        assert set(df["tool"]) == {"claude", "gemini"}
        capital = df[(df["case_id"] == "capital-of-france") & (df["tool"] == "claude")].iloc[0]
        assert capital["score_accuracy"] == 100
        assert bool(capital["scored"]) is True

        reports = list(tmp_path.glob("report_*.md"))
        assert len(reports) == 4

    @patch("capability_validation.runner.create_adapter", side_effect=_stub_adapter)
    def test_case_subset(self, mock_create, tmp_path):
        runner.main([
            "--cases", SAMPLE_CASES,
            "--tools", "claude",
            "--case-ids", "iso-date",
            "--output-dir", str(tmp_path),
            "--skip-probe",
        ])

        df = pd.read_csv(next(tmp_path.glob("executions_*.csv")))
        assert list(df["case_id"]) == ["iso-date"]

    @patch("capability_validation.runner.create_adapter", side_effect=_stub_adapter)
    def test_unknown_case_id_exits(self, mock_create, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            runner.main(["--cases", SAMPLE_CASES, "--case-ids", "nope", "--output-dir", str(tmp_path)])
        assert exc_info.value.code == 1

    @patch("capability_validation.runner.create_adapter", side_effect=_unavailable_adapter)
    def test_no_available_tools_exits(self, mock_create, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            runner.main(["--cases", SAMPLE_CASES, "--tools", "claude", "--output-dir", str(tmp_path)])
        assert exc_info.value.code == 1
