"""
Builders for the JSON envelopes returned by the submissions API.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from submission_service.core.exceptions import MalformedInputError, ReasonCode
from submission_service.core.field_rules import Rejected
from submission_service.models.dtos import ErrorEnvelope, StoredSubmission, SuccessEnvelope

INTERNAL_ERROR_MESSAGE = "Internal server error"
MALFORMED_INPUT_MESSAGE = "Invalid JSON payload"


@dataclass(frozen=True)
class SubmissionResponse:
    """An envelope together with the HTTP status it should be sent with."""

    status_code: int
    body: Dict[str, Any]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def success(data: Dict[str, Any], message: str = "Success") -> SubmissionResponse:
    envelope = SuccessEnvelope(message=message, data=data, timestamp=_now())
    return SubmissionResponse(status_code=200, body=envelope.model_dump(mode="json"))


def error(
    message: str,
    status_code: int = 500,
    details: Optional[Dict[str, Any]] = None,
    status: str = "error",
) -> SubmissionResponse:
    envelope = ErrorEnvelope(status=status, message=message, details=details or {}, timestamp=_now())
    return SubmissionResponse(status_code=status_code, body=envelope.model_dump(mode="json"))


def submission_saved(stored: StoredSubmission) -> SubmissionResponse:
    return success(stored.model_dump(mode="json"), "Data validated and saved successfully")


def validation_error(outcome: Rejected) -> SubmissionResponse:
    return error(outcome.message, status_code=400, details=outcome.details(), status="validation_error")


def malformed_input(exc: MalformedInputError) -> SubmissionResponse:
    return error(
        MALFORMED_INPUT_MESSAGE,
        status_code=400,
        details={"reason_code": exc.reason_code.value, "reason": exc.message},
    )


def server_error(reason_code: ReasonCode = ReasonCode.INTERNAL_ERROR) -> SubmissionResponse:
    return error(INTERNAL_ERROR_MESSAGE, status_code=500, details={"reason_code": reason_code.value})
