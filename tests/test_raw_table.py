"""Tests for raw-data table sorting and pagination."""

from datetime import date

import pytest

from subscription_analytics.reporting.raw_table import PAGE_SIZE, paginate, sort_records
from subscription_analytics.synthetic import GeneratorConfig, generate_daily_metrics


@pytest.fixture(scope="module")
def records():
    # 30 days x 4 groups = 120 records
    return generate_daily_metrics(GeneratorConfig(days=30))


class TestSortRecords:
    def test_default_is_newest_first(self, records):
        result = sort_records(records)
        assert result[0].date == date(2024, 1, 30)
        assert result[-1].date == date(2024, 1, 1)

    def test_ascending_by_metric(self, records):
        result = sort_records(records, "mrr", descending=False)
        values = [r.mrr for r in result]
        assert values == sorted(values)

    def test_sort_is_stable_for_equal_keys(self, records):
        result = sort_records(records, "date", descending=True)
        # Groups within a day keep generation order
        assert [(r.platform.value, r.plan_type.value) for r in result[:4]] == [
            ("ios", "monthly"),
            ("ios", "yearly"),
            ("android", "monthly"),
            ("android", "yearly"),
        ]

    def test_unknown_field_raises_error(self, records):
        with pytest.raises(ValueError, match="Cannot sort by"):
            sort_records(records, "revenue")


class TestPaginate:
    def test_first_page(self, records):
        page = paginate(records)
        assert len(page.items) == PAGE_SIZE
        assert page.page == 1
        assert page.total_pages == 3
        assert page.total_records == 120

    def test_last_page_is_partial(self, records):
        page = paginate(records, page=3)
        assert len(page.items) == 20
        assert page.items[-1] == records[-1]

    def test_out_of_range_pages_are_clamped(self, records):
        assert paginate(records, page=99).page == 3
        assert paginate(records, page=0).page == 1

    def test_empty_records(self):
        page = paginate([])
        assert page.items == []
        assert page.total_pages == 0
        assert page.page == 1

    def test_invalid_page_size(self, records):
        with pytest.raises(ValueError, match="page_size must be positive"):
            paginate(records, page_size=0)
