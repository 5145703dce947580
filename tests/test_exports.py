"""Tests for CSV and JSON exports of daily metrics."""

import json
from datetime import date

import pandas as pd
import pytest

from subscription_analytics.reporting.exports import (
    EXPORT_COLUMNS,
    default_export_filename,
    export_records,
    export_records_csv,
    export_records_json,
)
from subscription_analytics.synthetic import GeneratorConfig, generate_daily_metrics


@pytest.fixture(scope="module")
def records():
    return generate_daily_metrics(GeneratorConfig(days=3))


class TestExportCSV:
    def test_header_and_rows(self, records, tmp_path):
        output_path = tmp_path / "data.csv"
        export_records_csv(records, output_path)

        lines = output_path.read_text().splitlines()
        assert lines[0] == ",".join(EXPORT_COLUMNS)
        assert len(lines) == len(records) + 1
        assert lines[1].startswith("2024-01-01,ios,monthly,")

    def test_values_round_trip_through_pandas(self, records, tmp_path):
        output_path = tmp_path / "data.csv"
        export_records_csv(records, output_path)

        df = pd.read_csv(output_path)
        assert df["mrr"].tolist() == [r.mrr for r in records]
        assert df["active_subscriptions"].sum() == sum(
            r.active_subscriptions for r in records
        )

    def test_creates_parent_directories(self, records, tmp_path):
        output_path = tmp_path / "nested" / "dir" / "data.csv"
        export_records_csv(records, output_path)
        assert output_path.exists()

    def test_empty_export_has_header_only(self, tmp_path):
        output_path = tmp_path / "empty.csv"
        export_records_csv([], output_path)
        assert output_path.read_text().splitlines() == [",".join(EXPORT_COLUMNS)]


class TestExportJSON:
    def test_array_of_objects(self, records, tmp_path):
        output_path = tmp_path / "data.json"
        export_records_json(records, output_path)

        with open(output_path) as f:
            data = json.load(f)

        assert len(data) == len(records)
        assert data[0] == records[0].as_dict()
        assert list(data[0].keys()) == list(EXPORT_COLUMNS)

    def test_empty_export(self, tmp_path):
        output_path = tmp_path / "empty.json"
        export_records_json([], output_path)
        assert json.loads(output_path.read_text()) == []


def test_export_records_dispatches(records, tmp_path) -> None:
    export_records(records, tmp_path / "a.json", "json")
    export_records(records, tmp_path / "a.csv", "csv")
    assert json.loads((tmp_path / "a.json").read_text())[0]["date"] == "2024-01-01"
    assert (tmp_path / "a.csv").read_text().startswith("date,")


def test_unsupported_format_raises(records, tmp_path) -> None:
    with pytest.raises(ValueError, match="Unsupported export format"):
        export_records(records, tmp_path / "a.xml", "xml")


def test_default_export_filename() -> None:
    assert (
        default_export_filename("csv", today=date(2025, 2, 4))
        == "subscription_data_2025-02-04.csv"
    )
    with pytest.raises(ValueError):
        default_export_filename("xlsx")
