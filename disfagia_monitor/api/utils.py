"""
Utility functions for API endpoints
"""
import re
from typing import Any, Dict

from fastapi import Request, HTTPException

from disfagia_monitor.database import storage as database

CAREGIVER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def get_caregiver_id(request: Request) -> str:
    """
    Extract the acting caregiver's ID from request headers

    Raises HTTPException with 400 status if the header is missing or malformed
    """
    caregiver_id = request.headers.get('X-Caregiver-ID')
    if not caregiver_id:
        raise HTTPException(
            status_code=400,
            detail="Missing X-Caregiver-ID header. This header is required for all requests."
        )
    if not CAREGIVER_ID_PATTERN.match(caregiver_id):
        raise HTTPException(
            status_code=400,
            detail="Invalid X-Caregiver-ID header. Use letters, digits, '-' or '_' (max 64 characters)."
        )
    return caregiver_id


def require_patient(patient_id: str, caregiver_id: str) -> Dict[str, Any]:
    """
    Load a patient owned by the caregiver or raise 404
    """
    patient = database.get_patient(patient_id, caregiver_id)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient
