"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class PlannerError(Exception):
    """Base exception for dayplanner."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(PlannerError):
    """Resource not found."""

    pass


class DuplicateError(PlannerError):
    """Unique field (username, email) already taken."""

    pass


class ValidationError(PlannerError):
    """Validation error."""

    pass


class FormatError(ValidationError):
    """Time text does not match the canonical "H:MM AM|PM" form."""

    def __init__(self, text: str):
        super().__init__(f"Invalid time format: {text!r}", details={"text": text})
        self.text = text


class LLMError(PlannerError):
    """LLM-related error."""

    pass


class LLMValidationError(LLMError):
    """LLM output validation failed."""

    def __init__(self, message: str, raw_output: str, attempts: int = 1):
        super().__init__(message, details={"raw_output": raw_output, "attempts": attempts})
        self.raw_output = raw_output
        self.attempts = attempts


class AuthenticationError(PlannerError):
    """Authentication failed."""

    pass


class BusinessLogicError(PlannerError):
    """Business logic constraint violation."""

    pass


class InvariantViolation(BusinessLogicError):
    """Operation would break a schedule invariant (e.g. deleting the last row)."""

    pass
