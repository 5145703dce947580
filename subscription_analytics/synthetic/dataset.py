"""Read-only holder for the generated dataset.

The dataset is generated once and then only read. Callers can either build a
:class:`SubscriptionDataset` themselves and pass it down, or use
:func:`get_default_dataset`, which generates the default dataset on first
use and hands the same instance to every later caller.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from subscription_analytics.foundation.filters import filter_records
from subscription_analytics.foundation.records import DailyMetrics, DateRange, Filters

from .generator import GeneratorConfig, generate_daily_metrics

logger = logging.getLogger(__name__)


class SubscriptionDataset:
    """Immutable collection of daily metrics with query helpers."""

    def __init__(self, records: Iterable[DailyMetrics]) -> None:
        self._records: tuple[DailyMetrics, ...] = tuple(records)

    @classmethod
    def generate(cls, config: GeneratorConfig | None = None) -> SubscriptionDataset:
        """Generate a dataset from ``config`` (defaults to seed 42, 400 days)."""
        return cls(generate_daily_metrics(config))

    @property
    def records(self) -> tuple[DailyMetrics, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def raw_data(self) -> list[DailyMetrics]:
        """Return the full dataset as a new list in generation order."""
        return list(self._records)

    def filter(self, filters: Filters) -> list[DailyMetrics]:
        return filter_records(self._records, filters)

    def available_date_range(self) -> DateRange:
        """Earliest and latest dates present.

        Raises
        ------
        ValueError
            If the dataset holds no records.
        """
        if not self._records:
            raise ValueError("Dataset is empty; no date range available")
        dates = [record.date for record in self._records]
        return DateRange(min=min(dates), max=max(dates))


_default_dataset: SubscriptionDataset | None = None
_default_lock = threading.Lock()


def get_default_dataset() -> SubscriptionDataset:
    """Get the process-wide dataset, generating it on first access."""
    global _default_dataset
    if _default_dataset is None:
        with _default_lock:
            if _default_dataset is None:
                dataset = SubscriptionDataset.generate()
                logger.info(f"Generated default dataset with {len(dataset)} records")
                _default_dataset = dataset
    return _default_dataset


def reset_default_dataset() -> None:
    """Drop the cached dataset so the next access regenerates it.

    Intended for tests.
    """
    global _default_dataset
    with _default_lock:
        _default_dataset = None
