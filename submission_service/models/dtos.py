"""
Pydantic Data Transfer Objects (DTOs) for the Submission service.

These models carry validated submissions to the store and shape the JSON
envelopes returned by the API.
"""

from datetime import datetime
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict


class SubmissionRecord(BaseModel):
    """
    A submission that passed every validation rule, with trimmed values.

    Built only by ``from_validated_payload`` after the validation pipeline
    accepted the payload; never stored or reused across requests.
    """
    title: str
    description: str
    author: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_validated_payload(cls, payload: Mapping[str, Any]) -> "SubmissionRecord":
        return cls(
            title=payload["title"].strip(),
            description=payload["description"].strip(),
            author=payload["author"].strip(),
        )


class StoredSubmission(BaseModel):
    """
    DTO for a persisted submission row.

    Mirrors the submissions table; ``id`` and ``created_at`` are assigned by the store.
    """
    id: int
    title: str
    description: str
    author: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class SuccessEnvelope(BaseModel):
    """Response body for a request that succeeded."""
    status: Literal["success"] = "success"
    message: str
    data: Dict[str, Any]
    timestamp: datetime


class ErrorEnvelope(BaseModel):
    """Response body for validation, input and server failures."""
    status: Literal["error", "validation_error"] = "error"
    message: str
    details: Dict[str, Any] = {}
    timestamp: datetime


class EndpointInfo(BaseModel):
    """Usage hint returned by ``GET /api/submissions``."""
    endpoint: str
    method: str
    fields: list[str]
    example: Optional[Dict[str, str]] = None
