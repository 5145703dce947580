"""Period summary: headline KPIs with period-over-period changes.

Summarizes a filtered window into the values shown on the KPI cards and
compares them with the window of equal length immediately before it:
- How many subscriptions are active on the latest day, and at what MRR?
- How many subscriptions were started and cancelled across the window?
- What share of trials converted?
- How did each of these move compared with the previous window?

Active subscriptions and MRR are point-in-time values taken from the latest
day. New subscriptions and churns are flows summed over the window.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Sequence

from subscription_analytics.foundation._utils import round_half_up
from subscription_analytics.foundation.daily_mart import (
    aggregate_by_date,
    trial_conversion_rate,
)
from subscription_analytics.foundation.filters import filter_records
from subscription_analytics.foundation.records import DailyMetrics, Filters


@dataclass(frozen=True)
class PeriodTotals:
    """Headline values of a single window before comparison.

    Attributes
    ----------
    active_subscriptions:
        Active subscriptions on the latest date with data (0 when empty)
    mrr:
        MRR on the latest date with data (0 when empty)
    new_subscriptions:
        New subscriptions summed over every date in the window
    churns:
        Churns summed over every date in the window
    trial_conversion_rate:
        Rounded percentage of trial starts converted across the window
    """

    active_subscriptions: int
    mrr: int
    new_subscriptions: int
    churns: int
    trial_conversion_rate: int


@dataclass(frozen=True)
class AggregatedMetrics:
    """KPI snapshot of a filtered window with changes versus the prior window.

    Attributes
    ----------
    total_active_subscriptions:
        Active subscriptions on the latest day of the window
    total_new_subscriptions:
        New subscriptions summed over the window
    total_churns:
        Churns summed over the window
    total_mrr:
        MRR on the latest day of the window
    trial_conversion_rate:
        Trial conversion percentage over the window
    active_subscriptions_change:
        Percentage change of latest-day active subscriptions
    new_subscriptions_change:
        Percentage change of the new subscription total
    churns_change:
        Percentage change of the churn total
    mrr_change:
        Percentage change of latest-day MRR
    trial_conversion_rate_change:
        Difference in percentage points, not a relative change
    """

    total_active_subscriptions: int
    total_new_subscriptions: int
    total_churns: int
    total_mrr: int
    trial_conversion_rate: int
    active_subscriptions_change: int
    new_subscriptions_change: int
    churns_change: int
    mrr_change: int
    trial_conversion_rate_change: int

    def as_dict(self) -> dict[str, int]:
        return {
            "total_active_subscriptions": self.total_active_subscriptions,
            "total_new_subscriptions": self.total_new_subscriptions,
            "total_churns": self.total_churns,
            "total_mrr": self.total_mrr,
            "trial_conversion_rate": self.trial_conversion_rate,
            "active_subscriptions_change": self.active_subscriptions_change,
            "new_subscriptions_change": self.new_subscriptions_change,
            "churns_change": self.churns_change,
            "mrr_change": self.mrr_change,
            "trial_conversion_rate_change": self.trial_conversion_rate_change,
        }


def calc_change(current: float, previous: float) -> int:
    """Percentage change from ``previous`` to ``current``, rounded.

    A previous value of zero has no meaningful relative change: any positive
    current value counts as a 100% increase and anything else as no change.

    Examples
    --------
    >>> calc_change(120, 100)
    20
    >>> calc_change(80, 100)
    -20
    >>> calc_change(5, 0)
    100
    >>> calc_change(0, 0)
    0
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return round_half_up((current - previous) / previous * 100)


def summarize_period(records: Sequence[DailyMetrics]) -> PeriodTotals:
    """Compute the headline values of one window without comparison."""
    chart_data = aggregate_by_date(records)
    latest = chart_data[-1] if chart_data else None

    conversions = sum(record.trial_conversions for record in records)
    starts = sum(record.trial_starts for record in records)

    return PeriodTotals(
        active_subscriptions=latest.active_subscriptions if latest else 0,
        mrr=latest.mrr if latest else 0,
        new_subscriptions=sum(point.new_subscriptions for point in chart_data),
        churns=sum(point.churns for point in chart_data),
        trial_conversion_rate=trial_conversion_rate(conversions, starts),
    )


def previous_period_filters(filters: Filters) -> Filters:
    """Filters for the window of equal length ending the day before ``filters``.

    The length is the whole number of days between the bounds, so a window
    of ``2024-03-01`` to ``2024-03-31`` (30 days apart) is compared with
    ``2024-01-31`` to ``2024-02-29``. A single-day window has length zero
    and yields an empty previous window.
    """
    period_days = (filters.end_date - filters.start_date).days
    return filters.with_window(
        start_date=filters.start_date - timedelta(days=period_days),
        end_date=filters.start_date - timedelta(days=1),
    )


def calculate_metrics(
    records: Sequence[DailyMetrics],
    filters: Filters,
    source_records: Iterable[DailyMetrics],
) -> AggregatedMetrics:
    """Summarize a filtered window and compare it with the previous window.

    Parameters
    ----------
    records:
        Records already filtered with ``filters``
    filters:
        The filters that produced ``records``; their platform and plan
        selectors are reused for the previous window
    source_records:
        Full dataset the previous window is filtered from

    Returns
    -------
    AggregatedMetrics
        Current values and their changes. An empty window yields zeros with
        changes computed through the zero-previous branch of
        :func:`calc_change`.

    Examples
    --------
    >>> from datetime import date
    >>> from subscription_analytics.foundation.records import DailyMetrics, Filters
    >>> source = [
    ...     DailyMetrics(date(2024, 1, 1), 100, 10, 2, 98000, 4, 10, "ios", "monthly"),
    ...     DailyMetrics(date(2024, 1, 2), 120, 12, 1, 117600, 5, 10, "ios", "monthly"),
    ... ]
    >>> filters = Filters(date(2024, 1, 2), date(2024, 1, 2))
    >>> metrics = calculate_metrics(source[1:], filters, source)
    >>> metrics.total_active_subscriptions, metrics.active_subscriptions_change
    (120, 100)
    """
    current = summarize_period(records)
    previous = summarize_period(
        filter_records(source_records, previous_period_filters(filters))
    )

    return AggregatedMetrics(
        total_active_subscriptions=current.active_subscriptions,
        total_new_subscriptions=current.new_subscriptions,
        total_churns=current.churns,
        total_mrr=current.mrr,
        trial_conversion_rate=current.trial_conversion_rate,
        active_subscriptions_change=calc_change(
            current.active_subscriptions, previous.active_subscriptions
        ),
        new_subscriptions_change=calc_change(
            current.new_subscriptions, previous.new_subscriptions
        ),
        churns_change=calc_change(current.churns, previous.churns),
        mrr_change=calc_change(current.mrr, previous.mrr),
        trial_conversion_rate_change=(
            current.trial_conversion_rate - previous.trial_conversion_rate
        ),
    )
