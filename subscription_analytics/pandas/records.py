"""Pandas DataFrame adapters for daily metrics and chart points."""

from typing import List, Sequence

import pandas as pd  # type: ignore

from subscription_analytics.foundation.records import ChartDataPoint, DailyMetrics

RECORD_COLUMNS = [
    "date",
    "platform",
    "plan_type",
    "active_subscriptions",
    "new_subscriptions",
    "churns",
    "mrr",
    "trial_conversions",
    "trial_starts",
]
CHART_COLUMNS = [
    "date",
    "active_subscriptions",
    "new_subscriptions",
    "churns",
    "mrr",
    "trial_conversion_rate",
]
_INT_COLUMNS = [
    "active_subscriptions",
    "new_subscriptions",
    "churns",
    "mrr",
    "trial_conversions",
    "trial_starts",
]


def records_to_dataframe(records: Sequence[DailyMetrics]) -> pd.DataFrame:
    """Convert daily metrics to a pandas DataFrame.

    Args:
        records: Sequence of DailyMetrics objects

    Returns:
        DataFrame with one row per record in source order. ``date`` is a
        datetime64 column; ``platform`` and ``plan_type`` hold plain strings.

    Example:
        >>> df = records_to_dataframe(filter_data(filters))
        >>> df.groupby("platform")["mrr"].sum()
    """
    if not records:
        return pd.DataFrame(columns=RECORD_COLUMNS)

    rows = [
        {
            "date": pd.Timestamp(r.date),
            "platform": r.platform.value,
            "plan_type": r.plan_type.value,
            "active_subscriptions": r.active_subscriptions,
            "new_subscriptions": r.new_subscriptions,
            "churns": r.churns,
            "mrr": r.mrr,
            "trial_conversions": r.trial_conversions,
            "trial_starts": r.trial_starts,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def dataframe_to_records(df: pd.DataFrame) -> List[DailyMetrics]:
    """Convert a pandas DataFrame back to daily metrics.

    Args:
        df: DataFrame with the columns produced by :func:`records_to_dataframe`

    Returns:
        List of validated DailyMetrics objects in row order

    Raises:
        ValueError: If columns are missing, values are null, or a row fails
            DailyMetrics validation (negative counts, unknown platform/plan)
    """
    missing_cols = set(RECORD_COLUMNS) - set(df.columns)
    if missing_cols:
        raise ValueError(f"DataFrame missing required columns: {missing_cols}")

    if df.empty:
        return []

    null_cols = df[RECORD_COLUMNS].isnull().any()
    if null_cols.any():
        null_col_names = null_cols[null_cols].index.tolist()
        raise ValueError(f"Null/NaN values found in columns: {null_col_names}")

    records = []
    for row in df.to_dict("records"):
        records.append(
            DailyMetrics(
                date=pd.to_datetime(row["date"]).date(),
                platform=str(row["platform"]),
                plan_type=str(row["plan_type"]),
                **{col: int(row[col]) for col in _INT_COLUMNS},
            )
        )
    return records


def chart_data_to_dataframe(points: Sequence[ChartDataPoint]) -> pd.DataFrame:
    """Convert aggregated chart points to a DataFrame.

    Args:
        points: Output of ``aggregate_by_date``

    Returns:
        DataFrame with columns: date, active_subscriptions,
        new_subscriptions, churns, mrr, trial_conversion_rate
    """
    if not points:
        return pd.DataFrame(columns=CHART_COLUMNS)

    rows = [
        {
            "date": pd.Timestamp(p.date),
            "active_subscriptions": p.active_subscriptions,
            "new_subscriptions": p.new_subscriptions,
            "churns": p.churns,
            "mrr": p.mrr,
            "trial_conversion_rate": p.trial_conversion_rate,
        }
        for p in points
    ]
    return pd.DataFrame(rows, columns=CHART_COLUMNS)
