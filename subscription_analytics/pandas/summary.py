"""Pandas DataFrame adapters for KPI summaries and breakdowns."""

from typing import Dict, Optional, Sequence

import pandas as pd  # type: ignore

from subscription_analytics.analyses.breakdown import BreakdownEntry
from subscription_analytics.analyses.period_summary import AggregatedMetrics
from subscription_analytics.dashboard import build_snapshot
from subscription_analytics.foundation.records import Filters
from subscription_analytics.synthetic.dataset import SubscriptionDataset

from .records import chart_data_to_dataframe, records_to_dataframe


def metrics_to_dataframe(metrics: AggregatedMetrics) -> pd.DataFrame:
    """Convert AggregatedMetrics to a single-row DataFrame.

    Example:
        >>> metrics = calculate_metrics(records, filters)
        >>> metrics_to_dataframe(metrics).to_csv("kpis.csv", index=False)
    """
    return pd.DataFrame([metrics.as_dict()])


def breakdown_to_dataframe(entries: Sequence[BreakdownEntry]) -> pd.DataFrame:
    """Convert breakdown entries to a DataFrame with a share column.

    Returns:
        DataFrame with columns: name, value, color, share_pct. ``share_pct``
        is 0.0 for every row when the values sum to zero.
    """
    df = pd.DataFrame(
        [entry.as_dict() for entry in entries], columns=["name", "value", "color"]
    )
    total = df["value"].sum()
    df["share_pct"] = (df["value"] / total * 100).round(2) if total > 0 else 0.0
    return df


def filter_data_df(
    filters: Filters, dataset: Optional[SubscriptionDataset] = None
) -> Dict[str, pd.DataFrame]:
    """Run the dashboard pipeline and return every output as a DataFrame.

    Args:
        filters: Date window and platform/plan selectors
        dataset: Dataset to query; defaults to the process-wide dataset

    Returns:
        Dictionary with keys:
        - 'records': filtered daily metrics
        - 'chart_data': one row per date
        - 'metrics': single-row KPI summary
        - 'platform_breakdown': iOS/Android split
        - 'plan_breakdown': monthly/yearly split

    Example:
        >>> dfs = filter_data_df(Filters(date(2024, 6, 1), date(2024, 6, 30)))
        >>> dfs['chart_data'].plot(x='date', y='mrr')
    """
    snapshot = build_snapshot(filters, dataset)
    return {
        "records": records_to_dataframe(snapshot.records),
        "chart_data": chart_data_to_dataframe(snapshot.chart_data),
        "metrics": metrics_to_dataframe(snapshot.metrics),
        "platform_breakdown": breakdown_to_dataframe(snapshot.platform_breakdown),
        "plan_breakdown": breakdown_to_dataframe(snapshot.plan_breakdown),
    }
