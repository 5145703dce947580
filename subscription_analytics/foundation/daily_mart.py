"""Per-date aggregation of daily metrics into chart points."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from ._utils import round_half_up
from .records import ChartDataPoint, DailyMetrics


def trial_conversion_rate(conversions: int, starts: int) -> int:
    """Rounded percentage of trial starts that converted, 0 without starts."""
    if starts <= 0:
        return 0
    return round_half_up(conversions / starts * 100)


def aggregate_by_date(records: Iterable[DailyMetrics]) -> list[ChartDataPoint]:
    """Collapse records across platform and plan into one point per date.

    Active subscriptions, new subscriptions, churns and MRR are summed.
    The trial conversion rate is derived from the summed conversions and
    starts of the date rather than summed itself.

    Parameters
    ----------
    records:
        Daily metrics in any order, possibly split by platform and plan

    Returns
    -------
    list[ChartDataPoint]
        One point per distinct date, ascending by date

    Examples
    --------
    >>> from datetime import date
    >>> from subscription_analytics.foundation.records import DailyMetrics
    >>> records = [
    ...     DailyMetrics(date(2024, 1, 1), 100, 5, 1, 98000, 3, 10, "ios", "monthly"),
    ...     DailyMetrics(date(2024, 1, 1), 200, 7, 2, 176000, 2, 10, "android", "monthly"),
    ... ]
    >>> points = aggregate_by_date(records)
    >>> points[0].active_subscriptions, points[0].trial_conversion_rate
    (300, 25)
    """
    buckets: dict[date, dict[str, int]] = {}
    for record in records:
        bucket = buckets.setdefault(
            record.date,
            {
                "active_subscriptions": 0,
                "new_subscriptions": 0,
                "churns": 0,
                "mrr": 0,
                "trial_conversions": 0,
                "trial_starts": 0,
            },
        )
        bucket["active_subscriptions"] += record.active_subscriptions
        bucket["new_subscriptions"] += record.new_subscriptions
        bucket["churns"] += record.churns
        bucket["mrr"] += record.mrr
        bucket["trial_conversions"] += record.trial_conversions
        bucket["trial_starts"] += record.trial_starts

    points = [
        ChartDataPoint(
            date=day,
            active_subscriptions=payload["active_subscriptions"],
            new_subscriptions=payload["new_subscriptions"],
            churns=payload["churns"],
            mrr=payload["mrr"],
            trial_conversion_rate=trial_conversion_rate(
                payload["trial_conversions"], payload["trial_starts"]
            ),
        )
        for day, payload in buckets.items()
    ]
    return sorted(points, key=lambda point: point.date)
