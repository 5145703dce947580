"""Command line entry points for the subscription analytics toolkit."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field, ValidationError, model_validator

from subscription_analytics.dashboard import build_snapshot, get_available_date_range
from subscription_analytics.foundation.filters import (
    DEFAULT_RANGE_DAYS,
    QUICK_RANGE_DAYS,
    default_filters,
    quick_range,
)
from subscription_analytics.foundation.records import ALL, DateRange, Filters
from subscription_analytics.reporting.exports import (
    EXPORT_FORMATS,
    default_export_filename,
    export_records,
)
from subscription_analytics.reporting.markdown_tables import format_dashboard_report
from subscription_analytics.reporting.raw_table import SORTABLE_FIELDS, sort_records
from subscription_analytics.synthetic.dataset import SubscriptionDataset, get_default_dataset

LOG_LEVEL_ENV = "SUBSCRIPTION_ANALYTICS_LOG_LEVEL"

logger = structlog.get_logger(__name__)


def configure_logging(level_name: str | None = None) -> None:
    """Send stdlib and structlog output to stderr as JSON lines.

    stdout stays reserved for the report or export payload so commands can
    be piped.
    """
    level_name = (level_name or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


class DashboardQuery(BaseModel):
    """Filter criteria supplied on the command line."""

    start: date | None = Field(default=None, description="Inclusive start date")
    end: date | None = Field(default=None, description="Inclusive end date")
    range_days: int | None = Field(
        default=None,
        description="Quick range ending at the latest available date",
    )
    platform: Literal["all", "ios", "android"] = Field(default=ALL)
    plan: Literal["all", "monthly", "yearly"] = Field(default=ALL)

    @model_validator(mode="after")
    def _check_window(self) -> DashboardQuery:
        if self.range_days is not None:
            if self.start is not None or self.end is not None:
                raise ValueError("a quick range cannot be combined with start/end")
            if self.range_days not in QUICK_RANGE_DAYS:
                raise ValueError(f"quick range must be one of {QUICK_RANGE_DAYS}")
        if self.start and self.end and self.end < self.start:
            raise ValueError("end must be on or after start")
        return self

    @property
    def has_window(self) -> bool:
        return any(v is not None for v in (self.start, self.end, self.range_days))

    def to_filters(self, date_range: DateRange) -> Filters:
        """Resolve the query against the available dates.

        A missing end defaults to the latest date; a missing start defaults
        to 30 days before the end. Without any window the dashboard default
        (last 30 days) is used.
        """
        if self.range_days is not None:
            return quick_range(
                self.range_days, date_range, platform=self.platform, plan_type=self.plan
            )
        if self.start is None and self.end is None:
            defaults = default_filters(date_range)
            return Filters(
                start_date=defaults.start_date,
                end_date=defaults.end_date,
                platform=self.platform,
                plan_type=self.plan,
            )
        end = self.end or date_range.max
        start = self.start or end - timedelta(days=DEFAULT_RANGE_DAYS)
        return Filters(
            start_date=start, end_date=end, platform=self.platform, plan_type=self.plan
        )


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", help="Start date (ISO format: YYYY-MM-DD)")
    parser.add_argument("--end", help="End date (ISO format: YYYY-MM-DD)")
    parser.add_argument(
        "--range",
        dest="range_days",
        type=int,
        help=f"Quick range in days ending at the latest date {QUICK_RANGE_DAYS}",
    )
    parser.add_argument("--platform", default=ALL, help="ios, android or all")
    parser.add_argument("--plan", default=ALL, help="monthly, yearly or all")
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or INFO)",
    )


def _load_dataset() -> SubscriptionDataset:
    dataset = get_default_dataset()
    date_range = get_available_date_range(dataset)
    logger.info(
        "dataset_generated",
        records=len(dataset),
        start=date_range.min.isoformat(),
        end=date_range.max.isoformat(),
    )
    return dataset


def _parse_query(args: argparse.Namespace) -> DashboardQuery | None:
    try:
        return DashboardQuery(
            start=args.start,
            end=args.end,
            range_days=args.range_days,
            platform=args.platform,
            plan=args.plan,
        )
    except ValidationError as exc:
        logger.error(
            "invalid_query",
            errors=[error["msg"] for error in exc.errors()],
        )
        return None


def summary_cli(argv: list[str] | None = None) -> int:
    """Print the dashboard KPIs and breakdowns for a filter window."""

    parser = argparse.ArgumentParser(description=summary_cli.__doc__)
    _add_filter_arguments(parser)
    parser.add_argument(
        "--format",
        dest="fmt",
        choices=["markdown", "json"],
        default="markdown",
        help="Output format (default: markdown)",
    )
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    query = _parse_query(args)
    if query is None:
        return 2

    dataset = _load_dataset()
    filters = query.to_filters(get_available_date_range(dataset))
    snapshot = build_snapshot(filters, dataset)
    logger.info(
        "summary_rendered",
        start=filters.start_date.isoformat(),
        end=filters.end_date.isoformat(),
        platform=query.platform,
        plan=query.plan,
        records=len(snapshot.records),
    )

    if args.fmt == "json":
        json.dump(snapshot.as_dict(), fp=sys.stdout, indent=2)
        print()
    else:
        print(format_dashboard_report(snapshot))
    return 0


def export_cli(argv: list[str] | None = None) -> int:
    """Export raw or filtered subscription records to CSV or JSON."""

    parser = argparse.ArgumentParser(description=export_cli.__doc__)
    _add_filter_arguments(parser)
    parser.add_argument(
        "--format",
        dest="fmt",
        choices=list(EXPORT_FORMATS),
        default="csv",
        help="Export format (default: csv)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Output file (default: subscription_data_<today>.<format>)",
    )
    parser.add_argument(
        "--sort-by",
        default="date",
        choices=list(SORTABLE_FIELDS),
        help="Field to sort rows by (default: date)",
    )
    order = parser.add_mutually_exclusive_group()
    order.add_argument(
        "--descending",
        dest="descending",
        action="store_true",
        default=True,
        help="Sort newest/largest first (default)",
    )
    order.add_argument(
        "--ascending",
        dest="descending",
        action="store_false",
        help="Sort oldest/smallest first",
    )
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    query = _parse_query(args)
    if query is None:
        return 2

    dataset = _load_dataset()
    date_range = get_available_date_range(dataset)
    if query.has_window or query.platform != ALL or query.plan != ALL:
        filters = query.to_filters(date_range)
    else:
        # No criteria: export the full dataset
        filters = Filters(start_date=date_range.min, end_date=date_range.max)

    records = dataset.filter(filters)
    records = sort_records(records, args.sort_by, descending=args.descending)

    output_path = (args.output or Path(default_export_filename(args.fmt))).resolve()
    cwd = Path.cwd().resolve()
    try:
        output_path.relative_to(cwd)
    except ValueError:
        logger.error(
            "invalid_output_path", path=str(output_path), reason="outside working directory"
        )
        return 2

    export_records(records, output_path, args.fmt)
    logger.info(
        "export_written", path=str(output_path), format=args.fmt, records=len(records)
    )
    return 0


def main() -> None:
    raise SystemExit(summary_cli())


def export_main() -> None:
    raise SystemExit(export_cli())


if __name__ == "__main__":  # pragma: no cover
    main()
