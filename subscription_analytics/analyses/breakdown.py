"""Categorical breakdowns of active subscriptions for pie charts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from subscription_analytics.foundation.records import DailyMetrics, Platform, PlanType

PLATFORM_STYLES = (
    (Platform.IOS, "iOS", "#007aff"),
    (Platform.ANDROID, "Android", "#3ddc84"),
)
PLAN_STYLES = (
    (PlanType.MONTHLY, "Monthly Plan", "#6366f1"),
    (PlanType.YEARLY, "Yearly Plan", "#8b5cf6"),
)


@dataclass(frozen=True)
class BreakdownEntry:
    """One slice of a breakdown chart."""

    name: str
    value: int
    color: str

    def as_dict(self) -> dict[str, object]:
        return {"name": self.name, "value": self.value, "color": self.color}


def _latest_records(records: Sequence[DailyMetrics]) -> list[DailyMetrics]:
    if not records:
        return []
    latest = max(record.date for record in records)
    return [record for record in records if record.date == latest]


def platform_breakdown(records: Sequence[DailyMetrics]) -> list[BreakdownEntry]:
    """Active subscriptions per platform on the latest date.

    A platform whose latest-day total is zero falls back to its total over
    the whole filtered period, so an empty latest day still renders a chart
    when older data exists.

    Returns
    -------
    list[BreakdownEntry]
        iOS then Android, always both entries
    """
    latest = _latest_records(records)
    entries = []
    for platform, name, color in PLATFORM_STYLES:
        latest_total = sum(
            r.active_subscriptions for r in latest if r.platform == platform
        )
        period_total = sum(
            r.active_subscriptions for r in records if r.platform == platform
        )
        entries.append(
            BreakdownEntry(name=name, value=latest_total or period_total, color=color)
        )
    return entries


def plan_breakdown(records: Sequence[DailyMetrics]) -> list[BreakdownEntry]:
    """Active subscriptions per plan on the latest date.

    Unlike :func:`platform_breakdown` there is no fallback to the period
    total; a plan with nothing on the latest day reports zero.

    Returns
    -------
    list[BreakdownEntry]
        Monthly then yearly, always both entries
    """
    latest = _latest_records(records)
    return [
        BreakdownEntry(
            name=name,
            value=sum(r.active_subscriptions for r in latest if r.plan_type == plan),
            color=color,
        )
        for plan, name, color in PLAN_STYLES
    ]
