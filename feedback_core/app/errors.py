"""
Domain errors raised by the form, response and notification code paths.

Every error carries a machine-readable ``error_code`` and the HTTP status the
API layer answers with, so the exception handler in ``main`` can render them
uniformly and the UI can tell an expired form from a full or private one.
"""
from enum import Enum


class ErrorCode(str, Enum):
    validation_error = "validation_error"
    unknown_question = "unknown_question"
    missing_required_answer = "missing_required_answer"
    invalid_answer = "invalid_answer"
    not_found = "not_found"
    forbidden = "forbidden"
    not_accessible = "not_accessible"
    expired = "expired"
    response_limit_reached = "response_limit_reached"
    conflict = "conflict"


class FeedbackError(Exception):
    """Base class for feedback-related exceptions."""

    error_code: ErrorCode = ErrorCode.validation_error
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FeedbackError):
    """Malformed or missing input."""


class UnknownQuestion(ValidationError):
    error_code = ErrorCode.unknown_question

    def __init__(self, question_id: str) -> None:
        super().__init__(f"Invalid question ID: {question_id}")
        self.question_id = question_id


class MissingRequiredAnswer(ValidationError):
    error_code = ErrorCode.missing_required_answer

    def __init__(self, question_text: str) -> None:
        super().__init__(f'Question "{question_text}" is required')
        self.question_text = question_text


class InvalidAnswer(ValidationError):
    error_code = ErrorCode.invalid_answer


class NotFound(FeedbackError):
    error_code = ErrorCode.not_found
    status_code = 404


class Forbidden(FeedbackError):
    error_code = ErrorCode.forbidden
    status_code = 403

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class NotAccessible(FeedbackError):
    error_code = ErrorCode.not_accessible
    status_code = 404

    def __init__(self, message: str = "Form not found or not accessible") -> None:
        super().__init__(message)


class Expired(FeedbackError):
    error_code = ErrorCode.expired
    status_code = 410

    def __init__(self, message: str = "This form has expired") -> None:
        super().__init__(message)


class ResponseLimitReached(FeedbackError):
    error_code = ErrorCode.response_limit_reached
    status_code = 410

    def __init__(
        self, message: str = "This form has reached maximum responses"
    ) -> None:
        super().__init__(message)


class Conflict(FeedbackError):
    error_code = ErrorCode.conflict
    status_code = 400
