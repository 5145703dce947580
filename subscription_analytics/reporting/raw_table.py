"""Sorting and pagination for the raw-data table."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Sequence

from subscription_analytics.foundation.records import DailyMetrics

PAGE_SIZE = 50
SORTABLE_FIELDS = tuple(f.name for f in fields(DailyMetrics))


@dataclass(frozen=True)
class RawDataPage:
    """One page of the raw-data table.

    Attributes
    ----------
    items:
        Records on this page
    page:
        1-based page number actually returned (after clamping)
    total_pages:
        Number of pages for the whole record set (0 when empty)
    total_records:
        Number of records across all pages
    """

    items: list[DailyMetrics]
    page: int
    total_pages: int
    total_records: int


def sort_records(
    records: Sequence[DailyMetrics],
    field: str = "date",
    *,
    descending: bool = True,
) -> list[DailyMetrics]:
    """Sort records by one of their fields, newest first by default.

    The sort is stable in both directions, so records with equal keys keep
    their source order.

    Raises
    ------
    ValueError
        If ``field`` is not a DailyMetrics field.
    """
    if field not in SORTABLE_FIELDS:
        raise ValueError(
            f"Cannot sort by {field!r}; expected one of {', '.join(SORTABLE_FIELDS)}"
        )
    return sorted(records, key=lambda record: getattr(record, field), reverse=descending)


def paginate(
    records: Sequence[DailyMetrics], page: int = 1, page_size: int = PAGE_SIZE
) -> RawDataPage:
    """Slice ``records`` into the requested 1-based page.

    Pages outside ``1..total_pages`` are clamped to the nearest valid page.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive: {page_size}")

    total_pages = math.ceil(len(records) / page_size)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * page_size
    return RawDataPage(
        items=list(records[start : start + page_size]),
        page=page,
        total_pages=total_pages,
        total_records=len(records),
    )
