"""
Triage endpoint tests - session flow, direct scoring and assessment history
"""
import json

CAREGIVER = {"X-Caregiver-ID": "caregiver-1"}

SCREENER_ANSWERS = {
    "cough_during_meals": 2,
    "choking_episodes": 2,
    "wet_voice": 1,
    "swallowing_effort": 1,
    "pneumonia": 0,
}


def run_radi(client, patient_id, values, observations=None):
    client.post("/api/v1/triage/session", json={"patient_id": patient_id}, headers=CAREGIVER)
    response = None
    for index, value in enumerate(values):
        payload = {"index": index, "value": value}
        if observations and index == len(values) - 1:
            payload["additional_observations"] = observations
        response = client.post("/api/v1/triage/session/answer", json=payload, headers=CAREGIVER)
        assert response.status_code == 200
    return response.json()


def test_instruments_catalog(client):
    response = client.get("/api/v1/triage/instruments", headers=CAREGIVER)
    assert response.status_code == 200
    data = response.json()
    names = [i["name"] for i in data["instruments"]]
    assert names == ["radi", "screener"]
    assert len(data["instruments"][0]["questions"]) == 9
    assert "engasgo" in data["symptoms"]
    assert "pastosa" in data["food_consistencies"]


def test_start_session_for_unknown_patient(client):
    response = client.post("/api/v1/triage/session", json={"patient_id": "nope"}, headers=CAREGIVER)
    assert response.status_code == 404


def test_start_session(client, patient):
    response = client.post("/api/v1/triage/session", json={"patient_id": patient["id"]}, headers=CAREGIVER)
    assert response.status_code == 200
    data = response.json()
    assert data["state"] == "awaiting_question"
    assert data["current_index"] == 0
    assert data["total_questions"] == 9
    assert data["current_question"]["key"] == "multiple_swallows_needed"


def test_get_session_without_one(client):
    response = client.get("/api/v1/triage/session", headers=CAREGIVER)
    assert response.status_code == 404


def test_complete_radi_stores_assessment(client, patient, temp_data_dir):
    data = run_radi(client, patient["id"], [0, 1, 0, 0, 0, 0, 1, 0, 0], observations="Tosse no almoço")

    assert data["state"] == "complete"
    assessment = data["assessment"]
    assert assessment["total_score"] == 2
    assert assessment["risk_level"] == "alerta"
    assert assessment["risk_label"] == "Presença de Sintomas"
    assert assessment["additional_observations"] == "Tosse no almoço"
    assert len(assessment["answers"]) == 9

    stored_file = temp_data_dir / "triage_assessments" / f"{patient['id']}.json"
    with open(stored_file, encoding="utf-8") as f:
        stored = json.load(f)
    assert len(stored) == 1
    assert stored[0]["id"] == assessment["id"]
    assert stored[0]["caregiver_id"] == "caregiver-1"

    # session is closed once stored
    response = client.get("/api/v1/triage/session", headers=CAREGIVER)
    assert response.status_code == 404


def test_all_no_radi_is_normal(client, patient):
    data = run_radi(client, patient["id"], [0] * 9)
    assert data["assessment"]["total_score"] == 0
    assert data["assessment"]["risk_level"] == "normal"


def test_invalid_answer_value_is_rejected(client, patient):
    client.post("/api/v1/triage/session", json={"patient_id": patient["id"]}, headers=CAREGIVER)
    response = client.post("/api/v1/triage/session/answer", json={"index": 0, "value": 2}, headers=CAREGIVER)
    assert response.status_code == 422

    response = client.get("/api/v1/triage/session", headers=CAREGIVER)
    assert response.json()["current_index"] == 0


def test_out_of_order_answer_is_rejected(client, patient):
    client.post("/api/v1/triage/session", json={"patient_id": patient["id"]}, headers=CAREGIVER)
    response = client.post("/api/v1/triage/session/answer", json={"index": 4, "value": 1}, headers=CAREGIVER)
    assert response.status_code == 422


def test_previous_question(client, patient):
    client.post("/api/v1/triage/session", json={"patient_id": patient["id"]}, headers=CAREGIVER)
    client.post("/api/v1/triage/session/answer", json={"index": 0, "value": 1}, headers=CAREGIVER)

    response = client.post("/api/v1/triage/session/previous", headers=CAREGIVER)
    assert response.status_code == 200
    data = response.json()
    assert data["current_index"] == 0
    assert data["answers"] == {"multiple_swallows_needed": 1}

    response = client.post("/api/v1/triage/session/previous", headers=CAREGIVER)
    assert response.status_code == 422


def test_switching_patient_resets_session(client, patient):
    other = client.post("/api/v1/patients", json={"nome": "Rosa Lima"}, headers=CAREGIVER).json()

    client.post("/api/v1/triage/session", json={"patient_id": patient["id"]}, headers=CAREGIVER)
    client.post("/api/v1/triage/session/answer", json={"index": 0, "value": 1}, headers=CAREGIVER)

    response = client.post("/api/v1/triage/session", json={"patient_id": other["id"]}, headers=CAREGIVER)
    data = response.json()
    assert data["patient_id"] == other["id"]
    assert data["current_index"] == 0
    assert data["answers"] == {}


def test_restarting_same_patient_keeps_progress(client, patient):
    client.post("/api/v1/triage/session", json={"patient_id": patient["id"]}, headers=CAREGIVER)
    client.post("/api/v1/triage/session/answer", json={"index": 0, "value": 1}, headers=CAREGIVER)

    response = client.post("/api/v1/triage/session", json={"patient_id": patient["id"]}, headers=CAREGIVER)
    assert response.json()["current_index"] == 1


def test_abandon_session(client, patient):
    client.post("/api/v1/triage/session", json={"patient_id": patient["id"]}, headers=CAREGIVER)
    response = client.delete("/api/v1/triage/session", headers=CAREGIVER)
    assert response.status_code == 200
    assert client.get("/api/v1/triage/session", headers=CAREGIVER).status_code == 404


def test_screener_session_flow(client, patient):
    client.post("/api/v1/triage/session", json={"patient_id": patient["id"], "instrument": "screener"}, headers=CAREGIVER)
    response = None
    for index, value in enumerate([2, 2, 1, 1, 4]):
        response = client.post("/api/v1/triage/session/answer", json={"index": index, "value": value}, headers=CAREGIVER)
    assessment = response.json()["assessment"]
    assert assessment["instrument"] == "screener"
    assert assessment["total_score"] == 10
    assert assessment["risk_level"] == "médio"


def test_score_screener_directly(client):
    response = client.post("/api/v1/triage/score", json={"instrument": "screener", "answers": SCREENER_ANSWERS}, headers=CAREGIVER)
    assert response.status_code == 200
    data = response.json()
    assert data["total_score"] == 6
    assert data["risk_level"] == "médio"


def test_score_with_missing_answers(client):
    answers = dict(SCREENER_ANSWERS)
    del answers["wet_voice"]
    response = client.post("/api/v1/triage/score", json={"instrument": "screener", "answers": answers}, headers=CAREGIVER)
    assert response.status_code == 422
    assert "wet_voice" in response.json()["detail"]


def test_score_radi_rejects_value_two(client):
    answers = {key: 0 for key in [
        "multiple_swallows_needed", "effort_to_swallow", "pain_when_swallowing",
        "weight_loss_difficulty_swallowing", "throat_clearing_after_swallowing",
        "voice_changes_after_swallowing", "choking_after_swallowing",
        "pneumonia_after_choking", "tiredness_after_eating",
    ]}
    answers["effort_to_swallow"] = 2
    response = client.post("/api/v1/triage/score", json={"instrument": "radi", "answers": answers}, headers=CAREGIVER)
    assert response.status_code == 422


def test_assessment_history_filters(client, patient):
    run_radi(client, patient["id"], [0] * 9)
    run_radi(client, patient["id"], [1] * 9)

    response = client.get(f"/api/v1/patients/{patient['id']}/assessments", headers=CAREGIVER)
    assert response.status_code == 200
    assert len(response.json()) == 2

    response = client.get(f"/api/v1/patients/{patient['id']}/assessments", params={"risk_level": "alerta"}, headers=CAREGIVER)
    data = response.json()
    assert len(data) == 1
    assert data[0]["total_score"] == 9

    response = client.get(f"/api/v1/patients/{patient['id']}/assessments", params={"end_date": "2000-01-01"}, headers=CAREGIVER)
    assert response.json() == []


def test_score_rejects_boolean_and_string_answers(client):
    answers = {key: 0 for key in [
        "multiple_swallows_needed", "effort_to_swallow", "pain_when_swallowing",
        "weight_loss_difficulty_swallowing", "throat_clearing_after_swallowing",
        "voice_changes_after_swallowing", "choking_after_swallowing",
        "pneumonia_after_choking", "tiredness_after_eating",
    ]}
    for bad in (True, "1"):
        payload = {"instrument": "radi", "answers": dict(answers, effort_to_swallow=bad)}
        response = client.post("/api/v1/triage/score", json=payload, headers=CAREGIVER)
        assert response.status_code == 422


def test_session_answer_rejects_boolean_and_string_values(client, patient):
    client.post("/api/v1/triage/session", json={"patient_id": patient["id"]}, headers=CAREGIVER)
    for bad in (True, "1"):
        response = client.post("/api/v1/triage/session/answer", json={"index": 0, "value": bad}, headers=CAREGIVER)
        assert response.status_code == 422

    response = client.get("/api/v1/triage/session", headers=CAREGIVER)
    assert response.json()["current_index"] == 0
    assert response.json()["answers"] == {}
