"""
History service module
"""

from disfagia_monitor.services.history.filters import (
    filter_assessments,
    filter_daily_records,
)
from disfagia_monitor.services.history.export import (
    assessments_to_csv,
    csv_filename,
    build_report_markdown,
    render_report_pdf,
    ReportGenerationError,
)
from disfagia_monitor.services.history.summary import (
    build_patient_summary,
    risk_trend,
)

__all__ = [
    "filter_assessments",
    "filter_daily_records",
    "assessments_to_csv",
    "csv_filename",
    "build_report_markdown",
    "render_report_pdf",
    "ReportGenerationError",
    "build_patient_summary",
    "risk_trend",
]
