"""
Data models

- Pydantic provides request validation and response shaping
- Storage keeps the model_dump() of these, with dates as ISO strings
- Field names follow the caregiver app (Portuguese for patient details)
"""
import re
from typing import Optional, Dict, Any, List, Literal
from datetime import datetime, date
from pydantic import BaseModel, Field, StrictInt, field_validator, ConfigDict

from disfagia_monitor.services.risk.catalog import SYMPTOMS, FOOD_CONSISTENCIES

NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s]+$")

PatientStatusValue = Literal["ativo", "inativo", "em_tratamento"]
InstrumentName = Literal["radi", "screener"]
FoodConsistency = Literal["normal", "facil_mastigar", "umidificados", "pastosa", "liquida_modificada", "liquida_fina"]


def _validate_name(value: str) -> str:
    value = value.strip()
    if not (2 <= len(value) <= 100):
        raise ValueError("nome must have between 2 and 100 characters")
    if not NAME_PATTERN.match(value):
        raise ValueError("nome must contain only letters and spaces")
    return value


def _validate_birth_date(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError("data_nascimento must be in YYYY-MM-DD format")
    if parsed > date.today():
        raise ValueError("data_nascimento cannot be in the future")
    return value


class PatientInput(BaseModel):
    """
    Patient registration payload
    """
    model_config = ConfigDict(extra="ignore")
    nome: str                          = Field(...,  description="Patient name")
    data_nascimento: Optional[str]     = Field(None, description="Date of birth (format: YYYY-MM-DD)")
    diagnostico: Optional[str]         = Field(None, max_length=500, description="Clinical diagnosis")
    observacoes: Optional[str]         = Field(None, max_length=500, description="Free-text notes")
    responsavel_nome: Optional[str]    = Field(None, description="Name of the responsible family member")
    status: PatientStatusValue         = Field(default="ativo", description="Care status")

    @field_validator("nome")
    @classmethod
    def validate_nome(cls, value: str) -> str:
        return _validate_name(value)

    @field_validator("responsavel_nome")
    @classmethod
    def validate_responsavel_nome(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else _validate_name(value)

    @field_validator("data_nascimento")
    @classmethod
    def validate_data_nascimento(cls, value: Optional[str]) -> Optional[str]:
        return _validate_birth_date(value)


class PatientUpdate(PatientInput):
    """
    Partial patient update; only provided fields are applied
    """
    nome: Optional[str]                = Field(None, description="Patient name")
    status: Optional[PatientStatusValue] = Field(None, description="Care status")

    @field_validator("nome")
    @classmethod
    def validate_nome(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else _validate_name(value)


class Patient(BaseModel):
    """
    Stored patient, owned by the caregiver who registered it
    """
    id: str                            = Field(...,  description="Patient unique identifier")
    nome: str                          = Field(...,  description="Patient name")
    data_nascimento: Optional[str]     = Field(None, description="Date of birth (format: YYYY-MM-DD)")
    diagnostico: Optional[str]         = Field(None, description="Clinical diagnosis")
    observacoes: Optional[str]         = Field(None, description="Free-text notes")
    responsavel_nome: Optional[str]    = Field(None, description="Name of the responsible family member")
    status: PatientStatusValue         = Field(default="ativo", description="Care status")
    usuario_cadastro_id: str           = Field(...,  description="Caregiver that registered the patient")
    created_at: Optional[datetime]     = Field(default_factory=datetime.now, description="Timestamp when patient was registered")
    updated_at: Optional[datetime]     = Field(default_factory=datetime.now, description="Timestamp when patient was last updated")


class TriageAnswer(BaseModel):
    """
    One persisted answer of a completed assessment
    """
    question_id: str                   = Field(..., description="Question key")
    answer_value: int                  = Field(..., description="Answer value recorded for the question")


class TriageAssessment(BaseModel):
    """
    Completed triage assessment

    Immutable once stored; one per finished session.
    """
    id: Optional[str]                  = Field(None, description="Unique assessment ID (auto-generated)")
    patient_id: str                    = Field(..., description="Patient this assessment is about")
    caregiver_id: str                  = Field(..., description="Caregiver that completed the assessment")
    instrument: InstrumentName         = Field(default="radi", description="Questionnaire used")
    total_score: int                   = Field(..., description="Total score")
    risk_level: str                    = Field(..., description="Risk classification for the total score")
    risk_label: str                    = Field(..., description="Display label for the risk level")
    answers: List[TriageAnswer]        = Field(default_factory=list, description="Answers in question order")
    additional_observations: Optional[str] = Field(None, description="Caregiver notes")
    completed_at: Optional[datetime]   = Field(default_factory=datetime.now, description="Timestamp when the last question was answered")


class TriageSessionStart(BaseModel):
    patient_id: str                    = Field(..., description="Patient to assess")
    instrument: InstrumentName         = Field(default="radi", description="Questionnaire to run")


class TriageSessionAnswer(BaseModel):
    index: int                         = Field(..., ge=0, description="Index of the question being answered")
    value: StrictInt                   = Field(..., description="Answer value")
    additional_observations: Optional[str] = Field(None, max_length=1000, description="Caregiver notes, kept when the session completes")


class TriageSessionState(BaseModel):
    """
    Progress of the caregiver's in-progress triage
    """
    caregiver_id: str
    patient_id: str
    instrument: InstrumentName
    state: Literal["awaiting_question", "complete"]
    current_index: Optional[int]       = Field(None, description="Question awaiting an answer; null once complete")
    total_questions: int
    current_question: Optional[Dict[str, Any]] = None
    answers: Dict[str, int]            = Field(default_factory=dict)
    outcome: Optional[Dict[str, Any]]  = None
    assessment: Optional[TriageAssessment] = Field(None, description="Stored assessment, present once complete")


class ScoreRequest(BaseModel):
    instrument: InstrumentName         = Field(..., description="Questionnaire the answers belong to")
    answers: Dict[str, StrictInt]      = Field(..., description="Full answer map (question key -> value)")


class ScoreResponse(BaseModel):
    instrument: InstrumentName
    total_score: int
    risk_level: str
    risk_label: str


class DailyRecordInput(BaseModel):
    """
    Daily observation payload from the caregiver form
    """
    record_date: date                  = Field(default_factory=date.today, description="Day the observation refers to")
    food_consistency: FoodConsistency  = Field(default="normal", description="Food/liquid consistency offered")
    observations: Optional[str]        = Field(None, max_length=1000, description="Free-text notes")
    symptoms: List[str]                = Field(default_factory=list, description="Symptom ids from the catalog")

    @field_validator("symptoms")
    @classmethod
    def validate_symptoms(cls, value: List[str]) -> List[str]:
        return _validate_symptoms(value)


class SymptomsUpdate(BaseModel):
    symptoms: List[str]                = Field(..., description="Replacement symptom list")

    @field_validator("symptoms")
    @classmethod
    def validate_symptoms(cls, value: List[str]) -> List[str]:
        return _validate_symptoms(value)


def _validate_symptoms(value: List[str]) -> List[str]:
    unknown = [s for s in value if s not in SYMPTOMS]
    if unknown:
        raise ValueError(f"Unknown symptoms: {', '.join(unknown)}")
    # de-duplicate, keep first occurrence order
    return list(dict.fromkeys(value))


class DailyRecord(BaseModel):
    """
    Stored daily record with its computed risk
    """
    id: Optional[str]                  = Field(None, description="Unique record ID (auto-generated)")
    patient_id: str                    = Field(..., description="Patient the record belongs to")
    caregiver_id: str                  = Field(..., description="Caregiver that recorded it")
    record_date: date                  = Field(..., description="Day the observation refers to")
    food_consistency: FoodConsistency  = Field(..., description="Food/liquid consistency offered")
    observations: Optional[str]        = Field(None, description="Free-text notes")
    symptoms: List[str]                = Field(default_factory=list, description="Symptom ids")
    symptom_labels: List[str]          = Field(default_factory=list, description="Display labels of the symptoms")
    risk_score: int                    = Field(..., description="Computed daily risk score")
    risk_level: str                    = Field(..., description="Form classification ('normal' or 'alerta')")
    risk_label: str                    = Field(..., description="Display label for risk_level")
    history_risk_level: str            = Field(..., description="History classification ('baixo', 'medio' or 'alto')")
    created_at: Optional[datetime]     = Field(default_factory=datetime.now, description="Timestamp when record was created")
    updated_at: Optional[datetime]     = Field(default_factory=datetime.now, description="Timestamp when record was last updated")


class CatalogResponse(BaseModel):
    instruments: List[Dict[str, Any]]
    symptoms: Dict[str, str]           = Field(default_factory=lambda: dict(SYMPTOMS))
    food_consistencies: Dict[str, str] = Field(default_factory=lambda: dict(FOOD_CONSISTENCIES))


class SummaryChartPoint(BaseModel):
    date: str                          = Field(..., description="Completion day as dd/mm/yyyy")
    completed_at: str
    instrument: InstrumentName
    total_score: int
    risk_level: str
    risk_rank: int                     = Field(..., description="1 no/low risk, 2 medium, 3 symptoms or high risk")


class PatientSummary(BaseModel):
    """
    Dashboard summary of a patient's assessment history
    """
    patient_id: str
    nome: str
    current_risk_level: Optional[str]  = Field(None, description="Risk level of the latest assessment")
    current_status: str                = Field(..., description="Label of the latest risk level, or 'Não avaliado'")
    last_evaluation: Optional[str]     = Field(None, description="completed_at of the latest assessment")
    total_assessments: int
    trend: Literal["up", "down", "stable"]
    chart: List[SummaryChartPoint]     = Field(default_factory=list, description="Latest assessments, oldest first")
