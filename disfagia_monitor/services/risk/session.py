"""
Triage session state machine

Walks a caregiver through an instrument one question at a time.

States:
- awaiting question i, for i in [0, N)
- complete (terminal), with the scored outcome

Answers stay cached when stepping back. Switching the target patient
resets the session and drops every cached answer.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from disfagia_monitor.services.risk.catalog import Instrument, Question, RADI
from disfagia_monitor.services.risk.errors import InvalidAnswerValue, InvalidTransition
from disfagia_monitor.services.risk.scoring import assess, risk_label, summarize_answers

AWAITING_QUESTION = "awaiting_question"
COMPLETE = "complete"


class TriageOutcome(BaseModel):
    """Result emitted when the last question is answered"""
    total_score: int               = Field(..., description="Total score for the instrument")
    risk_level: str                = Field(..., description="Risk classification for the total score")
    risk_label: str                = Field(..., description="Display label for the risk level")
    answers: Dict[str, int]        = Field(..., description="Answers in question order")
    completed_at: datetime         = Field(default_factory=datetime.now, description="When the last answer was recorded")


class TriageSession:
    """
    One in-progress triage for a caregiver-patient pair

    Not shared between sessions; callers keep one instance per caregiver.
    """

    def __init__(self, caregiver_id: str, patient_id: str, instrument: Instrument = RADI):
        self.caregiver_id = caregiver_id
        self.patient_id = patient_id
        self.instrument = instrument
        self.current_index = 0
        self.answers: Dict[str, int] = {}
        self.outcome: Optional[TriageOutcome] = None

    @property
    def total_questions(self) -> int:
        return len(self.instrument.questions)

    @property
    def state(self) -> str:
        return COMPLETE if self.outcome is not None else AWAITING_QUESTION

    @property
    def is_complete(self) -> bool:
        return self.outcome is not None

    @property
    def current_question(self) -> Optional[Question]:
        if self.is_complete:
            return None
        return self.instrument.questions[self.current_index]

    def answer(self, index: int, value: int) -> Optional[TriageOutcome]:
        """
        Record the answer for question `index`

        Returns the outcome when this was the last question, otherwise None.
        """
        if self.is_complete:
            raise InvalidTransition("Triage is already complete")
        if index != self.current_index:
            raise InvalidTransition(
                f"Expected an answer for question {self.current_index}, got {index}"
            )

        question = self.instrument.questions[index]
        if isinstance(value, bool) or value not in question.legal_values:
            raise InvalidAnswerValue(question.key, value, question.legal_values)

        self.answers[question.key] = value

        if index < self.total_questions - 1:
            self.current_index = index + 1
            return None

        total_score, risk_level = assess(self.instrument.name, self.answers)
        self.outcome = TriageOutcome(
            total_score=total_score,
            risk_level=risk_level,
            risk_label=risk_label(risk_level),
            answers=summarize_answers(self.instrument, self.answers),
        )
        return self.outcome

    def previous(self) -> None:
        """Step back one question, keeping cached answers"""
        if self.is_complete:
            raise InvalidTransition("Triage is already complete")
        if self.current_index == 0:
            raise InvalidTransition("Already at the first question")
        self.current_index -= 1

    def select_patient(self, patient_id: str) -> None:
        """Switch the target patient; any change discards progress"""
        if patient_id != self.patient_id:
            self.patient_id = patient_id
            self.reset()

    def reset(self) -> None:
        self.current_index = 0
        self.answers = {}
        self.outcome = None

    def snapshot(self) -> Dict[str, Any]:
        """Plain dict view of the session for API responses"""
        question = self.current_question
        return {
            "caregiver_id": self.caregiver_id,
            "patient_id": self.patient_id,
            "instrument": self.instrument.name,
            "state": self.state,
            "current_index": None if self.is_complete else self.current_index,
            "total_questions": self.total_questions,
            "current_question": question.model_dump() if question else None,
            "answers": summarize_answers(self.instrument, self.answers),
            "outcome": self.outcome.model_dump() if self.outcome else None,
        }
