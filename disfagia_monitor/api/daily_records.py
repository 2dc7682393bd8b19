"""
Daily record endpoints
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request

from disfagia_monitor.database.schemas import DailyRecord, DailyRecordInput, SymptomsUpdate
from disfagia_monitor.database import storage as database
from disfagia_monitor.services.daily_records import create_daily_record, replace_symptoms
from disfagia_monitor.services.history import filter_daily_records
from disfagia_monitor.services.risk import RiskEngineError
from disfagia_monitor.services.utils import convert_datetime_to_iso
from disfagia_monitor.api.utils import get_caregiver_id, require_patient

logger = logging.getLogger(__name__)

router = APIRouter()

DATE_FIELDS = ['record_date', 'created_at', 'updated_at']


@router.post("/patients/{patient_id}/daily-records", response_model=DailyRecord, status_code=201)
async def submit_daily_record(patient_id: str, record_input: DailyRecordInput, request: Request):
    """
    Save a daily record

    Computes the risk score from the symptom checklist and food consistency
    and stores it with the record.
    """
    caregiver_id = get_caregiver_id(request)
    require_patient(patient_id, caregiver_id)

    try:
        record = create_daily_record(record_input, patient_id, caregiver_id)
    except RiskEngineError as e:
        raise HTTPException(status_code=422, detail=str(e))

    database.save_daily_record(convert_datetime_to_iso(record.model_dump(), DATE_FIELDS))
    logger.info(f"Daily record {record.id} saved for patient {patient_id}: score={record.risk_score}")

    return record


@router.get("/patients/{patient_id}/daily-records", response_model=List[DailyRecord])
async def list_daily_records(
    patient_id: str,
    request: Request,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    risk_level: Optional[str] = None,
):
    """
    Daily records for a patient, newest record_date first

    risk_level selects a history band: baixo (0-3), medio (4-6), alto (7+).
    """
    caregiver_id = get_caregiver_id(request)
    require_patient(patient_id, caregiver_id)

    try:
        return filter_daily_records(database.get_daily_records(patient_id), start_date, end_date, risk_level)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.put("/patients/{patient_id}/daily-records/{record_id}/symptoms", response_model=DailyRecord)
async def update_daily_record_symptoms(patient_id: str, record_id: str, payload: SymptomsUpdate, request: Request):
    """
    Replace the symptom list of a record and recompute its risk
    """
    caregiver_id = get_caregiver_id(request)
    require_patient(patient_id, caregiver_id)

    existing = database.get_daily_record(patient_id, record_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Daily record not found")

    updated = replace_symptoms(existing, payload.symptoms)
    database.update_daily_record(convert_datetime_to_iso(updated.model_dump(), DATE_FIELDS))

    return updated
