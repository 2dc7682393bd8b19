"""
History endpoints

CSV download of triage assessments, a printable PDF report with
assessments and daily records, and the dashboard summary.
"""
import logging
import urllib.parse
from datetime import date
from io import BytesIO
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response, StreamingResponse

from disfagia_monitor.database import storage as database
from disfagia_monitor.database.schemas import InstrumentName, PatientSummary
from disfagia_monitor.services.history import (
    ReportGenerationError,
    assessments_to_csv,
    build_patient_summary,
    build_report_markdown,
    csv_filename,
    filter_assessments,
    filter_daily_records,
    render_report_pdf,
)
from disfagia_monitor.api.utils import get_caregiver_id, require_patient

logger = logging.getLogger(__name__)

router = APIRouter()


def _attachment(filename: str) -> dict:
    quoted = urllib.parse.quote(filename)
    return {"Content-Disposition": f"attachment; filename*=UTF-8''{quoted}"}


@router.get("/patients/{patient_id}/history/export.csv")
async def export_history_csv(
    patient_id: str,
    request: Request,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    risk_level: Optional[str] = None,
):
    """
    Download the assessment history as CSV
    """
    caregiver_id = get_caregiver_id(request)
    patient = require_patient(patient_id, caregiver_id)

    assessments = filter_assessments(database.get_triage_assessments(patient_id), start_date, end_date, risk_level)
    content = assessments_to_csv(assessments)

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers=_attachment(csv_filename(patient['nome'])),
    )


@router.get("/patients/{patient_id}/history/report.pdf")
async def export_history_report(
    patient_id: str,
    request: Request,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
):
    """
    Download a PDF report with assessments and daily records
    """
    caregiver_id = get_caregiver_id(request)
    patient = require_patient(patient_id, caregiver_id)

    assessments = filter_assessments(database.get_triage_assessments(patient_id), start_date, end_date)
    records = filter_daily_records(database.get_daily_records(patient_id), start_date, end_date)

    try:
        pdf_bytes = render_report_pdf(build_report_markdown(patient, assessments, records))
    except ReportGenerationError as e:
        logger.error(f"Report generation failed for patient {patient_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate report")

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers=_attachment(f"relatorio-{patient['nome']}.pdf"),
    )


@router.get("/patients/{patient_id}/summary", response_model=PatientSummary)
async def get_patient_summary(
    patient_id: str,
    request: Request,
    instrument: Optional[InstrumentName] = None,
):
    """
    Current status, last evaluation, risk trend and chart series for the dashboard
    """
    caregiver_id = get_caregiver_id(request)
    patient = require_patient(patient_id, caregiver_id)
    return build_patient_summary(patient, database.get_triage_assessments(patient_id), instrument)
