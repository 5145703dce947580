"""Export daily metrics to delimited and structured text files.

The exported columns follow the raw-data table: identifying dimensions first,
then the metrics.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Sequence

import pandas as pd

from subscription_analytics.foundation.records import DailyMetrics
from subscription_analytics.pandas import records_to_dataframe

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = (
    "date",
    "platform",
    "plan_type",
    "active_subscriptions",
    "new_subscriptions",
    "churns",
    "mrr",
    "trial_conversions",
    "trial_starts",
)
EXPORT_FORMATS = ("csv", "json")


def default_export_filename(fmt: str, today: date | None = None) -> str:
    """File name offered for downloads, e.g. ``subscription_data_2025-02-04.csv``."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt!r}")
    today = today or date.today()
    return f"subscription_data_{today.isoformat()}.{fmt}"


def export_records_csv(
    records: Sequence[DailyMetrics],
    output_path: str | Path,
) -> None:
    """Export records to CSV with a header row.

    Parameters
    ----------
    records:
        Records to export, written in the given order
    output_path:
        Path where CSV file will be saved
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = records_to_dataframe(records)
    df["date"] = pd.to_datetime(df["date"]).dt.strftime("%Y-%m-%d")
    df.to_csv(output_path, index=False, columns=list(EXPORT_COLUMNS))

    logger.info(f"Exported {len(records)} records to {output_path}")


def export_records_json(
    records: Sequence[DailyMetrics],
    output_path: str | Path,
) -> None:
    """Export records to a JSON array, one object per record.

    Parameters
    ----------
    records:
        Records to export, written in the given order
    output_path:
        Path where JSON file will be saved
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = [record.as_dict() for record in records]
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)

    logger.info(f"Exported {len(records)} records to {output_path}")


def export_records(
    records: Sequence[DailyMetrics],
    output_path: str | Path,
    fmt: str = "csv",
) -> None:
    """Dispatch to the CSV or JSON exporter."""
    if fmt == "csv":
        export_records_csv(records, output_path)
    elif fmt == "json":
        export_records_json(records, output_path)
    else:
        raise ValueError(
            f"Unsupported export format: {fmt!r}; expected one of {EXPORT_FORMATS}"
        )
