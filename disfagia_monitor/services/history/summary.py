"""
Patient summary for the caregiver dashboard

Built from the stored assessment history: current status, last
evaluation, risk trend between the two latest assessments and a short
chart series.
"""
from typing import Any, Dict, List, Optional

from disfagia_monitor.services.history.filters import filter_assessments
from disfagia_monitor.services.history.export import format_date_time
from disfagia_monitor.services.risk import risk_label

NOT_EVALUATED = "Não avaliado"
CHART_SIZE = 7

# Severity rank used to compare assessments from either instrument
RISK_RANK: Dict[str, int] = {
    "normal": 1,
    "baixo": 1,
    "médio": 2,
    "medio": 2,
    "alerta": 3,
    "alto": 3,
}

TREND_UP = "up"
TREND_DOWN = "down"
TREND_STABLE = "stable"


def risk_rank(risk_level: Optional[str]) -> int:
    return RISK_RANK.get(risk_level or "", 0)


def risk_trend(assessments: List[Dict[str, Any]]) -> str:
    """
    Compare the two most recent assessments (newest first)

    Fewer than two assessments is always stable.
    """
    if len(assessments) < 2:
        return TREND_STABLE
    latest = risk_rank(assessments[0].get('risk_level'))
    previous = risk_rank(assessments[1].get('risk_level'))
    if latest > previous:
        return TREND_UP
    if latest < previous:
        return TREND_DOWN
    return TREND_STABLE


def _chart_point(assessment: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'date': format_date_time(assessment['completed_at'])['date'],
        'completed_at': assessment['completed_at'],
        'instrument': assessment.get('instrument', 'radi'),
        'total_score': assessment['total_score'],
        'risk_level': assessment['risk_level'],
        'risk_rank': risk_rank(assessment['risk_level']),
    }


def build_patient_summary(
    patient: Dict[str, Any],
    assessments: List[Dict[str, Any]],
    instrument: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Summarize a patient's assessment history

    Args:
        patient: Stored patient dictionary
        assessments: Stored assessments, any order
        instrument: Only consider assessments of this instrument

    Returns:
        Dictionary with current status, last evaluation, trend and the
        last CHART_SIZE assessments in chronological order
    """
    if instrument is not None:
        assessments = [a for a in assessments if a.get('instrument', 'radi') == instrument]
    ordered = filter_assessments(assessments)
    latest = ordered[0] if ordered else None

    return {
        'patient_id': patient['id'],
        'nome': patient.get('nome', ''),
        'current_risk_level': latest['risk_level'] if latest else None,
        'current_status': risk_label(latest['risk_level']) if latest else NOT_EVALUATED,
        'last_evaluation': latest['completed_at'] if latest else None,
        'total_assessments': len(ordered),
        'trend': risk_trend(ordered),
        'chart': [_chart_point(a) for a in reversed(ordered[:CHART_SIZE])],
    }
