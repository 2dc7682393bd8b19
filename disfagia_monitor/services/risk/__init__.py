"""
Risk engine module
"""

from disfagia_monitor.services.risk.errors import (
    RiskEngineError,
    IncompleteAnswers,
    InvalidAnswerValue,
    InvalidTransition,
)
from disfagia_monitor.services.risk.scoring import (
    score_five_question_screener,
    classify_five_question_screener,
    score_nine_question_radi,
    classify_nine_question_radi,
    compute_daily_risk_score,
    classify_daily_risk,
    classify_daily_risk_history,
    risk_label,
    get_instrument,
    assess,
)
from disfagia_monitor.services.risk.session import TriageSession, TriageOutcome

__all__ = [
    "RiskEngineError",
    "IncompleteAnswers",
    "InvalidAnswerValue",
    "InvalidTransition",
    "score_five_question_screener",
    "classify_five_question_screener",
    "score_nine_question_radi",
    "classify_nine_question_radi",
    "compute_daily_risk_score",
    "classify_daily_risk",
    "classify_daily_risk_history",
    "risk_label",
    "get_instrument",
    "assess",
    "TriageSession",
    "TriageOutcome",
]
