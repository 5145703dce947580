"""Markdown formatters for dashboard KPI cards and breakdowns.

Renders the numbers the dashboard shows on its cards as plain markdown so
they can be printed by the CLI or pasted into reports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from subscription_analytics.foundation.records import selector_value

if TYPE_CHECKING:
    from subscription_analytics.analyses.breakdown import BreakdownEntry
    from subscription_analytics.analyses.period_summary import AggregatedMetrics
    from subscription_analytics.dashboard import DashboardSnapshot

CURRENCY_SYMBOL = "¥"


def format_value(value: int, fmt: str = "number") -> str:
    """Format a KPI value as a number, currency or percentage.

    Examples
    --------
    >>> format_value(1234567)
    '1,234,567'
    >>> format_value(1234567, "currency")
    '¥1,234,567'
    >>> format_value(34, "percent")
    '34%'
    """
    if fmt == "currency":
        return f"{CURRENCY_SYMBOL}{value:,}"
    if fmt == "percent":
        return f"{value}%"
    if fmt == "number":
        return f"{value:,}"
    raise ValueError(f"Unknown value format: {fmt!r}")


def format_change(change: int, unit: str = "%") -> str:
    """Signed change label, e.g. ``+12%``, ``-3pt`` or ``0%``."""
    sign = "+" if change > 0 else ""
    return f"{sign}{change}{unit}"


def change_direction(change: int, *, invert: bool = False) -> str:
    """Classify a change as ``favorable``, ``unfavorable`` or ``neutral``.

    ``invert`` is for metrics where a decrease is good, such as churn.
    """
    if change == 0:
        return "neutral"
    improved = change < 0 if invert else change > 0
    return "favorable" if improved else "unfavorable"


def format_kpi_table(metrics: AggregatedMetrics) -> str:
    """Format the KPI snapshot as a markdown table.

    Parameters
    ----------
    metrics:
        Output of ``calculate_metrics``

    Returns
    -------
    str:
        Markdown table with value, change versus the previous period and
        whether the change is favorable
    """
    rows = [
        (
            "Active Subscriptions",
            format_value(metrics.total_active_subscriptions),
            metrics.active_subscriptions_change,
            "%",
            False,
        ),
        (
            "New Subscriptions",
            format_value(metrics.total_new_subscriptions),
            metrics.new_subscriptions_change,
            "%",
            False,
        ),
        (
            "Churns",
            format_value(metrics.total_churns),
            metrics.churns_change,
            "%",
            True,
        ),
        (
            "MRR",
            format_value(metrics.total_mrr, "currency"),
            metrics.mrr_change,
            "%",
            False,
        ),
        (
            "Trial Conversion Rate",
            format_value(metrics.trial_conversion_rate, "percent"),
            metrics.trial_conversion_rate_change,
            "pt",
            False,
        ),
    ]

    lines = [
        "| Metric | Value | vs Previous Period | Trend |",
        "|--------|-------|--------------------|-------|",
    ]
    for label, value, change, unit, invert in rows:
        lines.append(
            f"| {label} | {value} | {format_change(change, unit)} "
            f"| {change_direction(change, invert=invert)} |"
        )
    return "\n".join(lines) + "\n"


def format_breakdown_table(title: str, entries: Sequence[BreakdownEntry]) -> str:
    """Format a breakdown as a markdown table with each slice's share."""
    total = sum(entry.value for entry in entries)
    table = f"### {title}\n\n"
    table += "| Segment | Active Subscriptions | Share |\n"
    table += "|---------|---------------------|-------|\n"
    for entry in entries:
        share = entry.value / total * 100 if total > 0 else 0.0
        table += f"| {entry.name} | {entry.value:,} | {share:.1f}% |\n"
    return table


def format_dashboard_report(snapshot: DashboardSnapshot) -> str:
    """Format a full dashboard snapshot: window, KPIs and both breakdowns."""
    filters = snapshot.filters
    sections = [
        "## Subscription Dashboard\n",
        f"- **Period:** {filters.start_date.isoformat()} to {filters.end_date.isoformat()}",
        f"- **Platform:** {selector_value(filters.platform)}",
        f"- **Plan:** {selector_value(filters.plan_type)}",
        f"- **Days with data:** {len(snapshot.chart_data)}\n",
        "### Key Metrics\n",
        format_kpi_table(snapshot.metrics),
        format_breakdown_table("Platform Breakdown", snapshot.platform_breakdown),
        format_breakdown_table("Plan Breakdown", snapshot.plan_breakdown),
    ]
    return "\n".join(sections)
