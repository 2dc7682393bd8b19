"""
Triage endpoints

- Question-by-question session for the caregiver's current patient
- Direct scoring of a complete answer map (no persistence)
- Assessment history per patient
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request

from disfagia_monitor.database.schemas import (
    CatalogResponse,
    ScoreRequest,
    ScoreResponse,
    TriageAssessment,
    TriageSessionAnswer,
    TriageSessionStart,
    TriageSessionState,
)
from disfagia_monitor.database import storage as database
from disfagia_monitor.services.risk import RiskEngineError, assess, risk_label
from disfagia_monitor.services.risk.catalog import INSTRUMENTS, ANSWER_LABELS
from disfagia_monitor.services.triage import (
    build_assessment,
    drop_session,
    get_session,
    start_session,
    store_session,
)
from disfagia_monitor.services.history import filter_assessments
from disfagia_monitor.services.utils import convert_datetime_to_iso
from disfagia_monitor.api.utils import get_caregiver_id, require_patient

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_session(caregiver_id: str):
    session = get_session(caregiver_id)
    if session is None:
        raise HTTPException(status_code=404, detail="No triage session in progress")
    return session


@router.get("/triage/instruments", response_model=CatalogResponse)
async def get_instruments(request: Request):
    """
    Question catalogs for both instruments, with answer labels
    """
    get_caregiver_id(request)
    instruments = []
    for instrument in INSTRUMENTS.values():
        instruments.append({
            "name": instrument.name,
            "title": instrument.title,
            "questions": [
                {**q.model_dump(), "answer_labels": ANSWER_LABELS.get(q.legal_values, {})}
                for q in instrument.questions
            ],
        })
    return CatalogResponse(instruments=instruments)


@router.post("/triage/session", response_model=TriageSessionState)
async def begin_triage_session(payload: TriageSessionStart, request: Request):
    """
    Start a triage for a patient

    Selecting a different patient than the one in progress discards the
    cached answers and starts again at the first question.
    """
    caregiver_id = get_caregiver_id(request)
    require_patient(payload.patient_id, caregiver_id)

    session = start_session(caregiver_id, payload.patient_id, payload.instrument)
    return TriageSessionState(**session.snapshot())


@router.get("/triage/session", response_model=TriageSessionState)
async def get_triage_session(request: Request):
    caregiver_id = get_caregiver_id(request)
    session = _require_session(caregiver_id)
    return TriageSessionState(**session.snapshot())


@router.post("/triage/session/answer", response_model=TriageSessionState)
async def answer_triage_question(payload: TriageSessionAnswer, request: Request):
    """
    Answer the current question

    On the last question the assessment is scored and stored, and the
    session is closed.
    """
    caregiver_id = get_caregiver_id(request)
    session = _require_session(caregiver_id)
    require_patient(session.patient_id, caregiver_id)

    try:
        outcome = session.answer(payload.index, payload.value)
    except RiskEngineError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if outcome is None:
        store_session(session)
        return TriageSessionState(**session.snapshot())

    assessment = build_assessment(session, payload.additional_observations)
    data = convert_datetime_to_iso(assessment.model_dump(), ['completed_at'])
    database.save_triage_assessment(data)
    drop_session(caregiver_id)
    logger.info(
        f"Triage {assessment.instrument} completed for patient {assessment.patient_id}: "
        f"score={assessment.total_score} risk={assessment.risk_level}"
    )

    return TriageSessionState(**session.snapshot(), assessment=assessment)


@router.post("/triage/session/previous", response_model=TriageSessionState)
async def previous_triage_question(request: Request):
    """
    Go back one question; answers given so far are kept
    """
    caregiver_id = get_caregiver_id(request)
    session = _require_session(caregiver_id)

    try:
        session.previous()
    except RiskEngineError as e:
        raise HTTPException(status_code=422, detail=str(e))

    store_session(session)
    return TriageSessionState(**session.snapshot())


@router.delete("/triage/session")
async def abandon_triage_session(request: Request):
    caregiver_id = get_caregiver_id(request)
    _require_session(caregiver_id)
    drop_session(caregiver_id)
    return {"message": "Triage session discarded"}


@router.post("/triage/score", response_model=ScoreResponse)
async def score_answers(payload: ScoreRequest, request: Request):
    """
    Score a complete answer map without storing anything
    """
    get_caregiver_id(request)
    try:
        total_score, risk_level = assess(payload.instrument, payload.answers)
    except RiskEngineError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ScoreResponse(
        instrument=payload.instrument,
        total_score=total_score,
        risk_level=risk_level,
        risk_label=risk_label(risk_level),
    )


@router.get("/patients/{patient_id}/assessments", response_model=List[TriageAssessment])
async def list_assessments(
    patient_id: str,
    request: Request,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    risk_level: Optional[str] = None,
):
    """
    Assessment history for a patient, newest first
    """
    caregiver_id = get_caregiver_id(request)
    require_patient(patient_id, caregiver_id)

    return filter_assessments(database.get_triage_assessments(patient_id), start_date, end_date, risk_level)
