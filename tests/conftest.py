"""
Shared fixtures - temporary storage directory and API test client
"""
import pytest
from fastapi.testclient import TestClient

from disfagia_monitor.core import config
from disfagia_monitor.database.cache import get_patients_cache, get_triage_session_cache
from disfagia_monitor.main import app

CAREGIVER = {"X-Caregiver-ID": "caregiver-1"}
OTHER_CAREGIVER = {"X-Caregiver-ID": "caregiver-2"}


@pytest.fixture
def temp_data_dir(tmp_path, monkeypatch):
    """Point storage at a temporary directory and start with empty caches"""
    monkeypatch.setattr(config, "DATA_DIR", str(tmp_path))
    get_patients_cache().clear()
    get_triage_session_cache().clear()
    yield tmp_path
    get_patients_cache().clear()
    get_triage_session_cache().clear()


@pytest.fixture
def client(temp_data_dir):
    """Test client"""
    return TestClient(app)


@pytest.fixture
def patient(client):
    """A patient registered by CAREGIVER"""
    response = client.post("/api/v1/patients", json={"nome": "Maria Silva", "data_nascimento": "1947-03-02"}, headers=CAREGIVER)
    assert response.status_code == 201
    return response.json()
