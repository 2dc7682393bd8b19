"""
Database module

Contains both data models (schemas) and storage operations.
"""

# Export schemas
from disfagia_monitor.database.schemas import (
    Patient,
    PatientInput,
    PatientUpdate,
    TriageAnswer,
    TriageAssessment,
    DailyRecord,
    DailyRecordInput,
)

# Export storage functions for convenience
from disfagia_monitor.database.storage import (
    read_json,
    write_json,
    get_patients,
    get_patient,
    save_patient,
    delete_patient,
    save_triage_assessment,
    get_triage_assessments,
    save_daily_record,
    get_daily_records,
    get_daily_record,
    update_daily_record,
)

from disfagia_monitor.database import storage

__all__ = [
    # Schemas
    "Patient",
    "PatientInput",
    "PatientUpdate",
    "TriageAnswer",
    "TriageAssessment",
    "DailyRecord",
    "DailyRecordInput",
    # Storage functions
    "read_json",
    "write_json",
    "get_patients",
    "get_patient",
    "save_patient",
    "delete_patient",
    "save_triage_assessment",
    "get_triage_assessments",
    "save_daily_record",
    "get_daily_records",
    "get_daily_record",
    "update_daily_record",
    # Storage module
    "storage",
]
