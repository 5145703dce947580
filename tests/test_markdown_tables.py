"""Test markdown formatters for dashboard output."""

from datetime import date

import pytest

from subscription_analytics.analyses.breakdown import BreakdownEntry
from subscription_analytics.analyses.period_summary import AggregatedMetrics
from subscription_analytics.dashboard import build_snapshot
from subscription_analytics.foundation.records import Filters
from subscription_analytics.reporting.markdown_tables import (
    change_direction,
    format_breakdown_table,
    format_change,
    format_dashboard_report,
    format_kpi_table,
    format_value,
)
from subscription_analytics.synthetic import GeneratorConfig, SubscriptionDataset


@pytest.fixture
def metrics():
    return AggregatedMetrics(
        total_active_subscriptions=26000,
        total_new_subscriptions=8100,
        total_churns=1500,
        total_mrr=21500000,
        trial_conversion_rate=38,
        active_subscriptions_change=3,
        new_subscriptions_change=-4,
        churns_change=-10,
        mrr_change=2,
        trial_conversion_rate_change=1,
    )


class TestFormatValue:
    def test_formats(self):
        assert format_value(1234567) == "1,234,567"
        assert format_value(1234567, "currency") == "¥1,234,567"
        assert format_value(34, "percent") == "34%"

    def test_unknown_format_raises(self):
        with pytest.raises(ValueError, match="Unknown value format"):
            format_value(1, "ratio")


def test_format_change() -> None:
    assert format_change(12) == "+12%"
    assert format_change(-3, "pt") == "-3pt"
    assert format_change(0) == "0%"


def test_change_direction() -> None:
    assert change_direction(5) == "favorable"
    assert change_direction(-5) == "unfavorable"
    assert change_direction(-5, invert=True) == "favorable"
    assert change_direction(0, invert=True) == "neutral"


class TestMarkdownTables:
    def test_kpi_table(self, metrics):
        table = format_kpi_table(metrics)

        assert "| Metric | Value | vs Previous Period | Trend |" in table
        assert "| Active Subscriptions | 26,000 | +3% | favorable |" in table
        assert "| New Subscriptions | 8,100 | -4% | unfavorable |" in table
        # Fewer churns is good
        assert "| Churns | 1,500 | -10% | favorable |" in table
        assert "| MRR | ¥21,500,000 | +2% | favorable |" in table
        assert "| Trial Conversion Rate | 38% | +1pt | favorable |" in table

    def test_breakdown_table_shares(self):
        table = format_breakdown_table(
            "Platform Breakdown",
            [
                BreakdownEntry("iOS", 750, "#007aff"),
                BreakdownEntry("Android", 250, "#3ddc84"),
            ],
        )
        assert table.startswith("### Platform Breakdown")
        assert "| iOS | 750 | 75.0% |" in table
        assert "| Android | 250 | 25.0% |" in table

    def test_breakdown_table_all_zero(self):
        table = format_breakdown_table(
            "Plan Breakdown", [BreakdownEntry("Yearly Plan", 0, "#8b5cf6")]
        )
        assert "| Yearly Plan | 0 | 0.0% |" in table

    def test_dashboard_report(self):
        dataset = SubscriptionDataset.generate(GeneratorConfig(days=20))
        filters = Filters(date(2024, 1, 11), date(2024, 1, 20), platform="ios")
        report = format_dashboard_report(build_snapshot(filters, dataset))

        assert report.startswith("## Subscription Dashboard")
        assert "- **Period:** 2024-01-11 to 2024-01-20" in report
        assert "- **Platform:** ios" in report
        assert "- **Plan:** all" in report
        assert "- **Days with data:** 10" in report
        assert "### Platform Breakdown" in report
        assert "### Plan Breakdown" in report
