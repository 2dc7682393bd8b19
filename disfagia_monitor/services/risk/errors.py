"""
Risk engine errors

All errors are ValueError subclasses so callers that already guard
against bad input with `except ValueError` keep working.
"""
from typing import Any, Iterable


class RiskEngineError(ValueError):
    """Base class for scoring and triage flow errors"""


class IncompleteAnswers(RiskEngineError):
    """
    Raised when scoring is requested before every required question is answered
    """
    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(f"Missing answers for questions: {', '.join(self.missing)}")


class InvalidAnswerValue(RiskEngineError):
    """
    Raised when an answer lies outside the legal domain of its question
    """
    def __init__(self, question_id: str, value: Any, legal_values: Iterable[Any] = ()):
        self.question_id = question_id
        self.value = value
        self.legal_values = tuple(legal_values)
        message = f"Invalid value {value!r} for '{question_id}'"
        if self.legal_values:
            message += f" (allowed: {', '.join(str(v) for v in self.legal_values)})"
        super().__init__(message)


class InvalidTransition(RiskEngineError):
    """Raised on an illegal move of the triage state machine"""
