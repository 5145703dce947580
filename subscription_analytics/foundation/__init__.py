"""Foundational building blocks for the subscription analytics pipeline.

This package exposes the record types shared by every stage together with
the filter and per-date aggregation steps that feed the analyses.
"""

from .daily_mart import aggregate_by_date, trial_conversion_rate
from .filters import (
    DEFAULT_RANGE_DAYS,
    QUICK_RANGE_DAYS,
    default_filters,
    filter_records,
    quick_range,
)
from .records import (
    ALL,
    ChartDataPoint,
    DailyMetrics,
    DateRange,
    Filters,
    Platform,
    PlanType,
    selector_value,
)

__all__ = [
    "ALL",
    "ChartDataPoint",
    "DailyMetrics",
    "DateRange",
    "Filters",
    "Platform",
    "PlanType",
    "DEFAULT_RANGE_DAYS",
    "QUICK_RANGE_DAYS",
    "aggregate_by_date",
    "default_filters",
    "filter_records",
    "quick_range",
    "selector_value",
    "trial_conversion_rate",
]
