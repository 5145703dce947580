"""Entry points consumed by the dashboard presentation layer.

Every function reads from the process-wide generated dataset unless a
``dataset`` is passed explicitly, which is how tests and alternative
datasets are plugged in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from subscription_analytics.analyses.breakdown import (
    BreakdownEntry,
    plan_breakdown,
    platform_breakdown,
)
from subscription_analytics.analyses.period_summary import (
    AggregatedMetrics,
    calculate_metrics as _calculate_metrics,
)
from subscription_analytics.foundation.daily_mart import (
    aggregate_by_date as _aggregate_by_date,
)
from subscription_analytics.foundation.records import (
    ChartDataPoint,
    DailyMetrics,
    DateRange,
    Filters,
    selector_value,
)
from subscription_analytics.synthetic.dataset import (
    SubscriptionDataset,
    get_default_dataset,
)


def _resolve(dataset: SubscriptionDataset | None) -> SubscriptionDataset:
    return dataset if dataset is not None else get_default_dataset()


def get_available_date_range(
    dataset: SubscriptionDataset | None = None,
) -> DateRange:
    """Earliest and latest dates available, used to bound date pickers."""
    return _resolve(dataset).available_date_range()


def filter_data(
    filters: Filters, dataset: SubscriptionDataset | None = None
) -> list[DailyMetrics]:
    return _resolve(dataset).filter(filters)


def aggregate_by_date(records: Sequence[DailyMetrics]) -> list[ChartDataPoint]:
    return _aggregate_by_date(records)


def calculate_metrics(
    records: Sequence[DailyMetrics],
    filters: Filters,
    dataset: SubscriptionDataset | None = None,
) -> AggregatedMetrics:
    """KPI values of ``records`` compared with the preceding window.

    The previous window is filtered from ``dataset`` with the same platform
    and plan selectors as ``filters``.
    """
    return _calculate_metrics(records, filters, _resolve(dataset).records)


def get_platform_breakdown(records: Sequence[DailyMetrics]) -> list[BreakdownEntry]:
    return platform_breakdown(records)


def get_plan_breakdown(records: Sequence[DailyMetrics]) -> list[BreakdownEntry]:
    return plan_breakdown(records)


def get_raw_data(dataset: SubscriptionDataset | None = None) -> list[DailyMetrics]:
    """The full, unfiltered dataset for export or inspection."""
    return _resolve(dataset).raw_data()


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard renders for one set of filters."""

    filters: Filters
    records: list[DailyMetrics]
    chart_data: list[ChartDataPoint]
    metrics: AggregatedMetrics
    platform_breakdown: list[BreakdownEntry]
    plan_breakdown: list[BreakdownEntry]

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable representation of the snapshot."""
        return {
            "filters": {
                "start_date": self.filters.start_date.isoformat(),
                "end_date": self.filters.end_date.isoformat(),
                "platform": selector_value(self.filters.platform),
                "plan_type": selector_value(self.filters.plan_type),
            },
            "record_count": len(self.records),
            "chart_data": [point.as_dict() for point in self.chart_data],
            "metrics": self.metrics.as_dict(),
            "platform_breakdown": [entry.as_dict() for entry in self.platform_breakdown],
            "plan_breakdown": [entry.as_dict() for entry in self.plan_breakdown],
        }


def build_snapshot(
    filters: Filters, dataset: SubscriptionDataset | None = None
) -> DashboardSnapshot:
    """Run filter, aggregation, summary and breakdowns for ``filters``."""
    source = _resolve(dataset)
    records = source.filter(filters)
    return DashboardSnapshot(
        filters=filters,
        records=records,
        chart_data=_aggregate_by_date(records),
        metrics=_calculate_metrics(records, filters, source.records),
        platform_breakdown=platform_breakdown(records),
        plan_breakdown=plan_breakdown(records),
    )
