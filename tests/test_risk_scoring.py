"""
Risk scoring tests - both triage instruments and both daily classifiers
"""
import pytest

from disfagia_monitor.services.risk import (
    IncompleteAnswers,
    InvalidAnswerValue,
    classify_daily_risk,
    classify_daily_risk_history,
    classify_five_question_screener,
    classify_nine_question_radi,
    compute_daily_risk_score,
    score_five_question_screener,
    score_nine_question_radi,
)
from disfagia_monitor.services.risk.catalog import DAILY_HISTORY_BANDS, RADI, SCREENER


def radi_answers(**overrides):
    answers = {key: 0 for key in RADI.keys}
    answers.update(overrides)
    return answers


def screener_answers(**overrides):
    answers = {key: 0 for key in SCREENER.keys}
    answers.update(overrides)
    return answers


def test_radi_has_nine_questions_in_two_parts():
    parts = [q.part for q in RADI.questions]
    assert len(RADI.questions) == 9
    assert parts.count(1) == 5
    assert parts.count(2) == 4


def test_screener_has_five_questions_with_weighted_pneumonia():
    assert len(SCREENER.questions) == 5
    assert SCREENER.question("pneumonia").legal_values == (0, 4)


def test_screener_score_is_sum_of_values():
    answers = screener_answers(cough_during_meals=3, choking_episodes=2, wet_voice=1, pneumonia=4)
    assert score_five_question_screener(answers) == 10


def test_screener_score_ignores_key_order():
    answers = screener_answers(cough_during_meals=4, swallowing_effort=2, pneumonia=4)
    reversed_answers = dict(reversed(list(answers.items())))
    assert score_five_question_screener(answers) == score_five_question_screener(reversed_answers) == 10


@pytest.mark.parametrize("score,expected", [
    (0, "baixo"),
    (5, "baixo"),
    (6, "médio"),
    (11, "médio"),
    (12, "alto"),
    (20, "alto"),
])
def test_screener_classification_bands(score, expected):
    assert classify_five_question_screener(score) == expected


def test_screener_rejects_out_of_range_value():
    with pytest.raises(InvalidAnswerValue) as exc_info:
        score_five_question_screener(screener_answers(wet_voice=5))
    assert exc_info.value.question_id == "wet_voice"


def test_screener_pneumonia_only_accepts_zero_or_four():
    with pytest.raises(InvalidAnswerValue):
        score_five_question_screener(screener_answers(pneumonia=2))


def test_screener_missing_key_raises_incomplete():
    answers = screener_answers()
    del answers["pneumonia"]
    with pytest.raises(IncompleteAnswers) as exc_info:
        score_five_question_screener(answers)
    assert exc_info.value.missing == ["pneumonia"]


def test_screener_rejects_unknown_question():
    with pytest.raises(InvalidAnswerValue):
        score_five_question_screener(screener_answers(fever=1))


def test_radi_all_no_is_normal():
    score = score_nine_question_radi(radi_answers())
    assert score == 0
    assert classify_nine_question_radi(score) == "normal"


def test_radi_single_yes_is_alert():
    score = score_nine_question_radi(radi_answers(pain_when_swallowing=1))
    assert score == 1
    assert classify_nine_question_radi(score) == "alerta"


def test_radi_counts_yes_answers():
    answers = radi_answers(effort_to_swallow=1, choking_after_swallowing=1, pneumonia_after_choking=1)
    assert score_nine_question_radi(answers) == 3


def test_radi_rejects_value_two():
    with pytest.raises(InvalidAnswerValue):
        score_nine_question_radi(radi_answers(effort_to_swallow=2))


def test_radi_partial_answers_raise_incomplete():
    answers = radi_answers()
    del answers["tiredness_after_eating"]
    del answers["effort_to_swallow"]
    with pytest.raises(IncompleteAnswers) as exc_info:
        score_nine_question_radi(answers)
    assert exc_info.value.missing == ["effort_to_swallow", "tiredness_after_eating"]


def test_radi_empty_answers_raise_incomplete():
    with pytest.raises(IncompleteAnswers):
        score_nine_question_radi({})


def test_daily_score_high_risk_symptom():
    assert compute_daily_risk_score({"engasgo"}, "normal") == 3


def test_daily_score_pastosa_adds_one():
    assert compute_daily_risk_score({"engasgo"}, "pastosa") == 4


def test_daily_score_no_symptoms_is_zero():
    assert compute_daily_risk_score(set(), "normal") == 0
    assert classify_daily_risk(0) == "normal"


def test_daily_score_only_pastosa():
    assert compute_daily_risk_score(set(), "pastosa") == 1


def test_daily_score_mixed_weights():
    symptoms = {"tosse", "residuo_oral", "fadiga", "perda_peso"}
    assert compute_daily_risk_score(symptoms, "liquida_fina") == 3 + 2 + 1 + 1


def test_daily_score_rejects_unknown_consistency():
    with pytest.raises(InvalidAnswerValue):
        compute_daily_risk_score({"tosse"}, "gelatinosa")


def test_daily_form_classification():
    assert classify_daily_risk(0) == "normal"
    assert classify_daily_risk(1) == "alerta"
    assert classify_daily_risk(9) == "alerta"


@pytest.mark.parametrize("score,expected", [
    (0, "baixo"),
    (3, "baixo"),
    (4, "medio"),
    (6, "medio"),
    (7, "alto"),
])
def test_daily_history_classification_bands(score, expected):
    assert classify_daily_risk_history(score) == expected


def test_classifiers_disagree_on_small_scores():
    """The form and the history view band the same score differently"""
    assert classify_daily_risk(2) == "alerta"
    assert classify_daily_risk_history(2) == "baixo"


def test_scoring_is_repeatable():
    answers = radi_answers(effort_to_swallow=1)
    assert score_nine_question_radi(answers) == score_nine_question_radi(answers)
    assert compute_daily_risk_score({"tosse"}, "pastosa") == compute_daily_risk_score({"tosse"}, "pastosa")
    assert classify_daily_risk_history(5) == classify_daily_risk_history(5)


def test_daily_history_classification_follows_band_table(monkeypatch):
    monkeypatch.setitem(DAILY_HISTORY_BANDS, "baixo", (0, 2))
    monkeypatch.setitem(DAILY_HISTORY_BANDS, "medio", (3, 6))
    assert classify_daily_risk_history(3) == "medio"
    assert classify_daily_risk_history(250) == "alto"
