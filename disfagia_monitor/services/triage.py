"""
Triage session service

Keeps one in-progress TriageSession per caregiver in the session cache
and turns finished sessions into stored assessments.
"""
import logging
import uuid
from typing import Optional

from disfagia_monitor.database.cache import get_triage_session_cache
from disfagia_monitor.database.schemas import TriageAnswer, TriageAssessment
from disfagia_monitor.services.risk import TriageSession, get_instrument

logger = logging.getLogger(__name__)


def _session_key(caregiver_id: str) -> str:
    return f"triage:{caregiver_id}"


def get_session(caregiver_id: str) -> Optional[TriageSession]:
    return get_triage_session_cache().get(_session_key(caregiver_id))


def store_session(session: TriageSession):
    """Save the session, restarting its idle timeout"""
    get_triage_session_cache().set(_session_key(session.caregiver_id), session)


def drop_session(caregiver_id: str):
    get_triage_session_cache().invalidate(_session_key(caregiver_id))


def start_session(caregiver_id: str, patient_id: str, instrument_name: str = "radi") -> TriageSession:
    """
    Start a triage, or switch the caregiver's current one to another patient

    Re-starting for the same patient and instrument keeps the progress made
    so far unless the previous session already completed. A different
    patient resets all cached answers; a different instrument starts over.
    """
    instrument = get_instrument(instrument_name)
    session = get_session(caregiver_id)

    if session is None or session.is_complete or session.instrument.name != instrument.name:
        session = TriageSession(caregiver_id, patient_id, instrument)
    else:
        if session.patient_id != patient_id:
            logger.info(f"Caregiver {caregiver_id} switched triage from patient {session.patient_id} to {patient_id}")
        session.select_patient(patient_id)

    store_session(session)
    return session


def build_assessment(session: TriageSession, additional_observations: Optional[str] = None) -> TriageAssessment:
    """
    Build the stored assessment for a completed session

    Raises:
        ValueError: session is not complete
    """
    outcome = session.outcome
    if outcome is None:
        raise ValueError("Triage session is not complete")

    return TriageAssessment(
        id=str(uuid.uuid4()),
        patient_id=session.patient_id,
        caregiver_id=session.caregiver_id,
        instrument=session.instrument.name,
        total_score=outcome.total_score,
        risk_level=outcome.risk_level,
        risk_label=outcome.risk_label,
        answers=[TriageAnswer(question_id=key, answer_value=value) for key, value in outcome.answers.items()],
        additional_observations=additional_observations,
        completed_at=outcome.completed_at,
    )
