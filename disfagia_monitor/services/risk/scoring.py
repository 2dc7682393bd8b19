"""
Risk scoring and classification

Pure functions, no I/O and no shared state. Two triage instruments and
two daily-record classifiers are kept as separate procedures because the
screens that use them apply different bands to similar scores.
"""
from typing import Dict, Iterable, Mapping, Tuple

from disfagia_monitor.services.risk.catalog import (
    Instrument,
    RADI,
    SCREENER,
    INSTRUMENTS,
    SCREENER_HIGH_THRESHOLD,
    SCREENER_MEDIUM_THRESHOLD,
    HIGH_RISK_SYMPTOMS,
    MEDIUM_RISK_SYMPTOMS,
    HIGH_RISK_WEIGHT,
    MEDIUM_RISK_WEIGHT,
    LOW_RISK_WEIGHT,
    FOOD_CONSISTENCIES,
    CONSISTENCY_ADJUSTMENTS,
    DAILY_HISTORY_BANDS,
    RISK_LABELS,
)
from disfagia_monitor.services.risk.errors import IncompleteAnswers, InvalidAnswerValue


def validate_answers(instrument: Instrument, answers: Mapping[str, int]) -> None:
    """
    Check an answer map against an instrument

    Raises:
        InvalidAnswerValue: unknown question key or value outside the question's domain
        IncompleteAnswers: one or more required questions not answered
    """
    known = set(instrument.keys)
    for key, value in answers.items():
        if key not in known:
            raise InvalidAnswerValue(key, value)
        question = instrument.question(key)
        if isinstance(value, bool) or value not in question.legal_values:
            raise InvalidAnswerValue(key, value, question.legal_values)

    missing = known - set(answers)
    if missing:
        raise IncompleteAnswers(missing)


def score_five_question_screener(answers: Mapping[str, int]) -> int:
    """
    Sum of the screener answers

    Every question takes 0..4 except 'pneumonia', which takes 0 or 4.
    """
    validate_answers(SCREENER, answers)
    return sum(answers.values())


def classify_five_question_screener(score: int) -> str:
    """Map a screener score to 'baixo', 'médio' or 'alto'"""
    if score >= SCREENER_HIGH_THRESHOLD:
        return "alto"
    if score >= SCREENER_MEDIUM_THRESHOLD:
        return "médio"
    return "baixo"


def score_nine_question_radi(answers: Mapping[str, int]) -> int:
    """
    Count of 'Sim' (1) answers over the nine RaDI questions

    All nine must be answered; a partial map is never scored.
    """
    validate_answers(RADI, answers)
    return sum(1 for value in answers.values() if value == 1)


def classify_nine_question_radi(score: int) -> str:
    """'normal' when no symptom was reported, otherwise 'alerta'"""
    return "normal" if score == 0 else "alerta"


def symptom_weight(symptom: str) -> int:
    if symptom in HIGH_RISK_SYMPTOMS:
        return HIGH_RISK_WEIGHT
    if symptom in MEDIUM_RISK_SYMPTOMS:
        return MEDIUM_RISK_WEIGHT
    return LOW_RISK_WEIGHT


def compute_daily_risk_score(symptoms: Iterable[str], consistency: str) -> int:
    """
    Score a daily record from its symptom checklist and food consistency

    High-risk symptoms weigh 3, medium-risk 2, anything else 1. A pastosa
    consistency adds 1. No symptoms on a non-pastosa diet scores 0.
    """
    if consistency not in FOOD_CONSISTENCIES:
        raise InvalidAnswerValue("food_consistency", consistency, FOOD_CONSISTENCIES.keys())

    score = sum(symptom_weight(symptom) for symptom in set(symptoms))
    score += CONSISTENCY_ADJUSTMENTS.get(consistency, 0)
    return score


def classify_daily_risk(score: int) -> str:
    """Classification shown on the daily record form: 'normal' or 'alerta'"""
    return "normal" if score == 0 else "alerta"


def classify_daily_risk_history(score: int) -> str:
    """Classification shown in the history view: the DAILY_HISTORY_BANDS name holding the score"""
    for name, (low, high) in DAILY_HISTORY_BANDS.items():
        if score >= low and (high is None or score <= high):
            return name
    raise ValueError(f"Score {score} is outside every history band")


def risk_label(risk_level: str) -> str:
    """Display label for a risk level"""
    return RISK_LABELS.get(risk_level, risk_level)


_INSTRUMENT_PROCEDURES = {
    RADI.name: (score_nine_question_radi, classify_nine_question_radi),
    SCREENER.name: (score_five_question_screener, classify_five_question_screener),
}


def get_instrument(name: str) -> Instrument:
    """
    Look up an instrument by name

    Raises:
        KeyError: unknown instrument
    """
    return INSTRUMENTS[name]


def assess(instrument_name: str, answers: Mapping[str, int]) -> Tuple[int, str]:
    """
    Score and classify a complete answer map with the named instrument

    Returns:
        (total_score, risk_level)
    """
    score_fn, classify_fn = _INSTRUMENT_PROCEDURES[instrument_name]
    total_score = score_fn(answers)
    return total_score, classify_fn(total_score)


def summarize_answers(instrument: Instrument, answers: Mapping[str, int]) -> Dict[str, int]:
    """Answers in the instrument's question order"""
    return {key: answers[key] for key in instrument.keys if key in answers}
