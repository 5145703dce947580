"""Pandas DataFrame adapters for subscription analytics components."""

from .records import (
    records_to_dataframe,
    dataframe_to_records,
    chart_data_to_dataframe,
)
from .summary import (
    metrics_to_dataframe,
    breakdown_to_dataframe,
    filter_data_df,
)

__all__ = [
    # Record adapters
    "records_to_dataframe",
    "dataframe_to_records",
    "chart_data_to_dataframe",
    # Summary adapters
    "metrics_to_dataframe",
    "breakdown_to_dataframe",
    "filter_data_df",
]
