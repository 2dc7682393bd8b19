"""
Patient management endpoints

Every patient belongs to the caregiver that registered it; other
caregivers get 404 for it.
"""
import logging
import uuid
from datetime import datetime
from typing import List

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError

from disfagia_monitor.database.schemas import Patient, PatientInput, PatientUpdate
from disfagia_monitor.database import storage as database
from disfagia_monitor.services.triage import get_session, drop_session
from disfagia_monitor.services.utils import convert_datetime_to_iso
from disfagia_monitor.api.utils import get_caregiver_id, require_patient

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate_patient(payload: dict) -> Patient:
    try:
        return Patient.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))


@router.post("/patients", response_model=Patient, status_code=201)
async def create_patient(patient: PatientInput, request: Request):
    """
    Register a patient for the caregiver making the request
    """
    caregiver_id = get_caregiver_id(request)
    new_patient = Patient(
        id=str(uuid.uuid4()),
        usuario_cadastro_id=caregiver_id,
        **patient.model_dump(),
    )

    data = convert_datetime_to_iso(new_patient.model_dump(), ['created_at', 'updated_at'])
    database.save_patient(data, caregiver_id)
    logger.info(f"Patient {new_patient.id} created by caregiver {caregiver_id}")

    return new_patient


@router.get("/patients", response_model=List[Patient])
async def list_patients(request: Request):
    """
    List the caregiver's patients, most recently registered first
    """
    caregiver_id = get_caregiver_id(request)
    return database.get_patients(caregiver_id)


@router.get("/patients/{patient_id}", response_model=Patient)
async def get_patient(patient_id: str, request: Request):
    caregiver_id = get_caregiver_id(request)
    return require_patient(patient_id, caregiver_id)


@router.patch("/patients/{patient_id}", response_model=Patient)
async def update_patient(patient_id: str, patient_updates: PatientUpdate, request: Request):
    """
    Update patient details

    Uses latest values for any fields provided in the request.
    """
    caregiver_id = get_caregiver_id(request)
    existing = require_patient(patient_id, caregiver_id)

    updates = patient_updates.model_dump(exclude_unset=True)
    merged = _validate_patient({**existing, **updates, 'updated_at': datetime.now()})
    data = convert_datetime_to_iso(merged.model_dump(), ['created_at', 'updated_at'])
    database.save_patient(data, caregiver_id)

    return merged


@router.delete("/patients/{patient_id}")
async def delete_patient(patient_id: str, request: Request):
    """
    Delete a patient with its assessments and daily records

    Returns 404 if no such patient exists to ensure DELETE never silently fails
    """
    caregiver_id = get_caregiver_id(request)
    if not database.delete_patient(patient_id, caregiver_id):
        raise HTTPException(status_code=404, detail="Patient not found")

    session = get_session(caregiver_id)
    if session is not None and session.patient_id == patient_id:
        drop_session(caregiver_id)

    return {"message": "Patient deleted successfully"}
