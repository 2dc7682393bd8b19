"""
Simple JSON file storage with in-memory caching

- JSON files under DATA_DIR avoid a database server for small deployments
- Patients are stored per caregiver (the caregiver that registered them)
- Assessments and daily records are stored per patient, append-only
- Easy to migrate to SQL/NoSQL later by replacing these functions
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from disfagia_monitor.core import config
from disfagia_monitor.database.cache import get_patients_cache

logger = logging.getLogger(__name__)


def _data_path(*parts: str) -> Path:
    return Path(config.DATA_DIR).joinpath(*parts)


def read_json(filepath: Path) -> List[Dict[str, Any]]:
    """
    Read JSON file, return empty list if not found
    """
    path = Path(filepath)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        return []
    except json.JSONDecodeError as e:
        logger.warning(f"Corrupt JSON file {path}: {e}. Treating as empty.")
        return []


def write_json(filepath: Path, data: List[Dict[str, Any]]):
    """
    Write data to JSON file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


# Patients
def get_patients(caregiver_id: str) -> List[Dict[str, Any]]:
    """
    Get all patients registered by a caregiver, newest first
    Uses in-memory cache to avoid repeated file reads
    """
    cache = get_patients_cache()
    cache_key = f"patients:{caregiver_id}"

    cached = cache.get(cache_key)
    if cached is not None:
        return list(cached)

    patients = read_json(_data_path("patients", f"{caregiver_id}.json"))
    patients.sort(key=lambda p: p.get('created_at') or '', reverse=True)
    cache.set(cache_key, patients)
    return list(patients)


def get_patient(patient_id: str, caregiver_id: str) -> Optional[Dict[str, Any]]:
    """
    Get one patient, only if it belongs to the caregiver
    """
    for patient in get_patients(caregiver_id):
        if patient.get('id') == patient_id:
            return patient
    return None


def save_patient(patient: Dict[str, Any], caregiver_id: str):
    """
    Insert or replace a patient in the caregiver's list
    Updates cache immediately
    """
    filepath = _data_path("patients", f"{caregiver_id}.json")
    patients = [p for p in read_json(filepath) if p.get('id') != patient.get('id')]
    patients.append(patient)
    write_json(filepath, patients)
    get_patients_cache().invalidate(f"patients:{caregiver_id}")


def delete_patient(patient_id: str, caregiver_id: str) -> bool:
    """
    Delete a patient and all of its assessments and daily records

    Returns False when the caregiver has no such patient.
    """
    filepath = _data_path("patients", f"{caregiver_id}.json")
    patients = read_json(filepath)
    remaining = [p for p in patients if p.get('id') != patient_id]
    if len(remaining) == len(patients):
        return False

    write_json(filepath, remaining)
    get_patients_cache().invalidate(f"patients:{caregiver_id}")

    for folder in ("triage_assessments", "daily_records"):
        path = _data_path(folder, f"{patient_id}.json")
        if path.exists():
            path.unlink()

    logger.info(f"Deleted patient {patient_id} for caregiver {caregiver_id}")
    return True


# Triage assessments
def save_triage_assessment(assessment: Dict[str, Any]):
    """
    Append a completed assessment to the patient's history
    """
    filepath = _data_path("triage_assessments", f"{assessment['patient_id']}.json")
    data = read_json(filepath)
    data.append(assessment)
    write_json(filepath, data)


def get_triage_assessments(patient_id: str) -> List[Dict[str, Any]]:
    """
    Get all assessments for a patient (in submission order)
    """
    return read_json(_data_path("triage_assessments", f"{patient_id}.json"))


# Daily records
def save_daily_record(record: Dict[str, Any]):
    """
    Append a daily record to the patient's history
    """
    filepath = _data_path("daily_records", f"{record['patient_id']}.json")
    data = read_json(filepath)
    data.append(record)
    write_json(filepath, data)


def get_daily_records(patient_id: str) -> List[Dict[str, Any]]:
    """
    Get all daily records for a patient (in submission order)
    """
    return read_json(_data_path("daily_records", f"{patient_id}.json"))


def get_daily_record(patient_id: str, record_id: str) -> Optional[Dict[str, Any]]:
    for record in get_daily_records(patient_id):
        if record.get('id') == record_id:
            return record
    return None


def update_daily_record(record: Dict[str, Any]) -> bool:
    """
    Replace a stored daily record by id

    Returns False when the record does not exist.
    """
    filepath = _data_path("daily_records", f"{record['patient_id']}.json")
    data = read_json(filepath)
    for position, existing in enumerate(data):
        if existing.get('id') == record.get('id'):
            data[position] = record
            write_json(filepath, data)
            return True
    return False
