"""
Custom exceptions for the Submission service.

Validation failures are not exceptions: they travel as ``Rejected`` outcomes
(see ``field_rules``). The classes here cover the failures that abort a
request before or during persistence.
"""

from enum import Enum
from typing import Optional


class ReasonCode(str, Enum):
    """Machine-readable cause attached to every non-success response."""

    MISSING_FIELD = "MISSING_FIELD"
    INVALID_TYPE = "INVALID_TYPE"
    TOO_SHORT = "TOO_SHORT"
    TOO_LONG = "TOO_LONG"
    EMPTY_VALUE = "EMPTY_VALUE"
    INVALID_FORMAT = "INVALID_FORMAT"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SubmissionServiceError(Exception):
    """Base exception for all Submission service errors."""

    reason_code: ReasonCode = ReasonCode.INTERNAL_ERROR

    def __init__(self, message: str, original: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original = original

    def __str__(self):
        if self.original:
            return f"{self.message} (caused by: {self.original})"
        return self.message


class StorageError(SubmissionServiceError):
    """Raised by a submission store when a database operation fails."""

    reason_code = ReasonCode.STORAGE_ERROR


class MalformedInputError(SubmissionServiceError):
    """Raised when the request body is not a JSON object."""

    reason_code = ReasonCode.MALFORMED_INPUT
