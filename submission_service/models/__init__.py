"""
Models package for the Submission service.

This package contains the SQLAlchemy table definition and Pydantic DTOs.
"""

from .dtos import (
    EndpointInfo,
    ErrorEnvelope,
    StoredSubmission,
    SubmissionRecord,
    SuccessEnvelope,
)
from .submission_table import build_submissions_table

__all__ = [
    # Tables
    "build_submissions_table",
    # DTOs
    "EndpointInfo",
    "ErrorEnvelope",
    "StoredSubmission",
    "SubmissionRecord",
    "SuccessEnvelope",
]
