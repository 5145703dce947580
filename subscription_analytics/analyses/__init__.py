"""Dashboard analyses over filtered subscription metrics.

1. Period summary - KPI snapshot with changes versus the previous window
2. Breakdowns - active subscriptions split by platform or plan
"""

from .breakdown import BreakdownEntry, plan_breakdown, platform_breakdown
from .period_summary import (
    AggregatedMetrics,
    PeriodTotals,
    calc_change,
    calculate_metrics,
    previous_period_filters,
    summarize_period,
)

__all__ = [
    # Period summary
    "AggregatedMetrics",
    "PeriodTotals",
    "calc_change",
    "calculate_metrics",
    "previous_period_filters",
    "summarize_period",
    # Breakdowns
    "BreakdownEntry",
    "plan_breakdown",
    "platform_breakdown",
]
