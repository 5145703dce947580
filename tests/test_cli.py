"""Tests for the summary and export command line tools."""

import json
from datetime import date

import pandas as pd
import pytest
from pydantic import ValidationError

from subscription_analytics.cli import DashboardQuery, export_cli, summary_cli
from subscription_analytics.foundation.records import DateRange

DATE_RANGE = DateRange(min=date(2024, 1, 1), max=date(2025, 2, 3))


class TestDashboardQuery:
    """Query validation and resolution to filters."""

    def test_defaults_to_last_thirty_days(self):
        filters = DashboardQuery().to_filters(DATE_RANGE)
        assert filters.start_date == date(2025, 1, 4)
        assert filters.end_date == date(2025, 2, 3)
        assert filters.platform == "all"

    def test_quick_range(self):
        filters = DashboardQuery(range_days=90, plan="yearly").to_filters(DATE_RANGE)
        assert filters.start_date == date(2024, 11, 5)
        assert filters.plan_type == "yearly"

    def test_open_ended_windows(self):
        filters = DashboardQuery(start="2025-01-01").to_filters(DATE_RANGE)
        assert filters.end_date == date(2025, 2, 3)

        filters = DashboardQuery(end="2024-06-30").to_filters(DATE_RANGE)
        assert filters.start_date == date(2024, 5, 31)

    def test_inverted_window_rejected(self):
        with pytest.raises(ValidationError, match="end must be on or after start"):
            DashboardQuery(start="2024-02-01", end="2024-01-01")

    def test_unknown_platform_rejected(self):
        with pytest.raises(ValidationError):
            DashboardQuery(platform="web")

    def test_unsupported_range_rejected(self):
        with pytest.raises(ValidationError, match="quick range must be one of"):
            DashboardQuery(range_days=14)

    def test_range_with_dates_rejected(self):
        with pytest.raises(ValidationError, match="cannot be combined"):
            DashboardQuery(range_days=7, start="2024-01-01")


class TestSummaryCLI:
    def test_markdown_report(self, capsys):
        assert summary_cli([]) == 0

        captured = capsys.readouterr()
        assert "## Subscription Dashboard" in captured.out
        assert "2025-01-04 to 2025-02-03" in captured.out
        assert "summary_rendered" in captured.err

    def test_json_output(self, capsys):
        assert summary_cli(["--range", "7", "--platform", "ios", "--format", "json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["record_count"] == 16
        assert payload["filters"]["platform"] == "ios"
        assert payload["platform_breakdown"][1]["value"] == 0

    @pytest.mark.parametrize(
        "argv",
        [
            ["--start", "2024-02-01", "--end", "2024-01-01"],
            ["--platform", "web"],
            ["--range", "14"],
            ["--start", "not-a-date"],
        ],
    )
    def test_invalid_query_returns_2(self, argv, capsys):
        assert summary_cli(argv) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "invalid_query" in captured.err


class TestExportCLI:
    def test_full_dataset_csv(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert export_cli(["--output", "out.csv"]) == 0

        df = pd.read_csv(tmp_path / "out.csv")
        assert len(df) == 1600
        assert df["date"].iloc[0] == "2025-02-03"
        assert df["date"].iloc[-1] == "2024-01-01"

    def test_filtered_json_sorted_ascending(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        argv = [
            "--format", "json",
            "--output", "out.json",
            "--range", "7",
            "--plan", "monthly",
            "--sort-by", "mrr",
            "--ascending",
        ]
        assert export_cli(argv) == 0

        data = json.loads((tmp_path / "out.json").read_text())
        assert len(data) == 16
        assert {row["plan_type"] for row in data} == {"monthly"}
        mrr = [row["mrr"] for row in data]
        assert mrr == sorted(mrr)

    def test_default_filename(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert export_cli(["--format", "json"]) == 0
        assert len(list(tmp_path.glob("subscription_data_*.json"))) == 1

    def test_output_outside_working_directory(self, tmp_path, monkeypatch):
        work = tmp_path / "work"
        work.mkdir()
        monkeypatch.chdir(work)
        assert export_cli(["--output", str(tmp_path / "escape.csv")]) == 2
        assert not (tmp_path / "escape.csv").exists()

    def test_invalid_query(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert export_cli(["--plan", "weekly"]) == 2
        assert list(tmp_path.iterdir()) == []
