"""Tests for platform and plan breakdowns."""

from datetime import date

from subscription_analytics.analyses.breakdown import plan_breakdown, platform_breakdown
from subscription_analytics.foundation.records import DailyMetrics


def _record(day: int, platform: str, plan_type: str, active: int) -> DailyMetrics:
    return DailyMetrics(
        date=date(2024, 1, day),
        active_subscriptions=active,
        new_subscriptions=0,
        churns=0,
        mrr=0,
        trial_conversions=0,
        trial_starts=0,
        platform=platform,
        plan_type=plan_type,
    )


class TestPlatformBreakdown:
    def test_uses_latest_date_only(self):
        records = [
            _record(1, "ios", "monthly", 500),
            _record(2, "ios", "monthly", 100),
            _record(2, "ios", "yearly", 20),
            _record(2, "android", "monthly", 70),
            _record(2, "android", "yearly", 10),
        ]
        entries = platform_breakdown(records)
        assert [(e.name, e.value, e.color) for e in entries] == [
            ("iOS", 120, "#007aff"),
            ("Android", 80, "#3ddc84"),
        ]

    def test_zero_latest_falls_back_to_period_total(self):
        records = [
            _record(1, "android", "monthly", 40),
            _record(2, "android", "monthly", 60),
            _record(3, "ios", "monthly", 100),
        ]
        entries = platform_breakdown(records)
        assert entries[0].value == 100
        assert entries[1].value == 100

    def test_empty_records(self):
        entries = platform_breakdown([])
        assert [e.name for e in entries] == ["iOS", "Android"]
        assert all(e.value == 0 for e in entries)


class TestPlanBreakdown:
    def test_uses_latest_date_only(self):
        records = [
            _record(1, "ios", "yearly", 500),
            _record(2, "ios", "monthly", 100),
            _record(2, "android", "monthly", 70),
            _record(2, "ios", "yearly", 30),
        ]
        entries = plan_breakdown(records)
        assert [(e.name, e.value, e.color) for e in entries] == [
            ("Monthly Plan", 170, "#6366f1"),
            ("Yearly Plan", 30, "#8b5cf6"),
        ]

    def test_no_fallback_for_missing_plan(self):
        records = [
            _record(1, "ios", "yearly", 500),
            _record(2, "ios", "monthly", 100),
        ]
        entries = plan_breakdown(records)
        assert entries[1].name == "Yearly Plan"
        assert entries[1].value == 0

    def test_as_dict(self):
        entry = plan_breakdown([_record(1, "ios", "monthly", 5)])[0]
        assert entry.as_dict() == {"name": "Monthly Plan", "value": 5, "color": "#6366f1"}
