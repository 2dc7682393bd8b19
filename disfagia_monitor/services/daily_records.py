"""
Daily record service

Builds stored daily records from caregiver input, computing the risk
score once at creation and again when the symptom list is replaced.
"""
import uuid
from datetime import datetime
from typing import Any, Dict, List

from disfagia_monitor.database.schemas import DailyRecord, DailyRecordInput
from disfagia_monitor.services.risk import (
    compute_daily_risk_score,
    classify_daily_risk,
    classify_daily_risk_history,
    risk_label,
)
from disfagia_monitor.services.risk.catalog import SYMPTOMS


def _risk_fields(symptoms: List[str], food_consistency: str) -> Dict[str, Any]:
    score = compute_daily_risk_score(symptoms, food_consistency)
    level = classify_daily_risk(score)
    return {
        'risk_score': score,
        'risk_level': level,
        'risk_label': risk_label(level),
        'history_risk_level': classify_daily_risk_history(score),
    }


def create_daily_record(record_input: DailyRecordInput, patient_id: str, caregiver_id: str) -> DailyRecord:
    """
    Create a daily record for a patient

    Args:
        record_input: Validated form payload
        patient_id: Patient the record belongs to
        caregiver_id: Caregiver recording it

    Returns:
        DailyRecord with generated ID and computed risk
    """
    return DailyRecord(
        id=str(uuid.uuid4()),
        patient_id=patient_id,
        caregiver_id=caregiver_id,
        record_date=record_input.record_date,
        food_consistency=record_input.food_consistency,
        observations=record_input.observations,
        symptoms=record_input.symptoms,
        symptom_labels=[SYMPTOMS[s] for s in record_input.symptoms],
        **_risk_fields(record_input.symptoms, record_input.food_consistency),
    )


def replace_symptoms(record: Dict[str, Any], symptoms: List[str]) -> DailyRecord:
    """
    Replace a record's symptom list wholesale and recompute its risk

    The previous symptom list is discarded, never merged.
    """
    updated = DailyRecord(**record)
    updated.symptoms = list(symptoms)
    updated.symptom_labels = [SYMPTOMS[s] for s in symptoms]
    for field, value in _risk_fields(updated.symptoms, updated.food_consistency).items():
        setattr(updated, field, value)
    updated.updated_at = datetime.now()
    return updated
