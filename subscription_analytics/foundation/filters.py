"""Filtering of daily metrics by date window, platform and plan."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable

from .records import ALL, DailyMetrics, DateRange, Filters

QUICK_RANGE_DAYS = (7, 30, 90, 365)
DEFAULT_RANGE_DAYS = 30


def matches(record: DailyMetrics, filters: Filters) -> bool:
    """Return True when ``record`` satisfies every criterion of ``filters``."""
    if not filters.start_date <= record.date <= filters.end_date:
        return False
    if filters.platform != ALL and record.platform != filters.platform:
        return False
    if filters.plan_type != ALL and record.plan_type != filters.plan_type:
        return False
    return True


def filter_records(
    records: Iterable[DailyMetrics], filters: Filters
) -> list[DailyMetrics]:
    """Narrow ``records`` to those matching ``filters``.

    Parameters
    ----------
    records:
        Source records, typically the full generated dataset
    filters:
        Inclusive date window plus optional platform/plan selectors

    Returns
    -------
    list[DailyMetrics]
        Matching records in their source order
    """
    return [record for record in records if matches(record, filters)]


def quick_range(
    days: int,
    date_range: DateRange,
    *,
    platform: str = ALL,
    plan_type: str = ALL,
) -> Filters:
    """Build filters for the ``days`` leading up to the latest available date.

    The window starts ``days`` before ``date_range.max``, so a 7-day quick
    range covers eight calendar dates with both bounds inclusive.
    """
    if days < 0:
        raise ValueError(f"Quick range must be non-negative: {days}")
    end = date_range.max
    return Filters(
        start_date=end - timedelta(days=days),
        end_date=end,
        platform=platform,
        plan_type=plan_type,
    )


def default_filters(date_range: DateRange) -> Filters:
    """Filters the dashboard opens with: last 30 days, every platform and plan."""
    return quick_range(DEFAULT_RANGE_DAYS, date_range)
