"""Reporting surfaces: raw-data table, file exports and markdown summaries."""

from subscription_analytics.reporting.exports import (
    EXPORT_COLUMNS,
    EXPORT_FORMATS,
    default_export_filename,
    export_records,
    export_records_csv,
    export_records_json,
)
from subscription_analytics.reporting.markdown_tables import (
    change_direction,
    format_breakdown_table,
    format_change,
    format_dashboard_report,
    format_kpi_table,
    format_value,
)
from subscription_analytics.reporting.raw_table import (
    PAGE_SIZE,
    RawDataPage,
    paginate,
    sort_records,
)

__all__ = [
    "EXPORT_COLUMNS",
    "EXPORT_FORMATS",
    "default_export_filename",
    "export_records",
    "export_records_csv",
    "export_records_json",
    "change_direction",
    "format_breakdown_table",
    "format_change",
    "format_dashboard_report",
    "format_kpi_table",
    "format_value",
    "PAGE_SIZE",
    "RawDataPage",
    "paginate",
    "sort_records",
]
