"""
Core components for the Submission service.
"""

from .exceptions import MalformedInputError, ReasonCode, StorageError, SubmissionServiceError
from .field_rules import (
    ACCEPTED,
    Accepted,
    FieldRule,
    LengthRangeRule,
    PatternRule,
    PresenceRule,
    Rejected,
    TypeRule,
    ValidationOutcome,
)
from .validation_pipeline import ValidationPipeline, build_submission_pipeline
from .submission_store import SQLAlchemySubmissionStore, StoreConfig, SubmissionStore
from .request_handler import SubmissionRequestHandler

__all__ = [
    "ACCEPTED",
    "Accepted",
    "FieldRule",
    "LengthRangeRule",
    "MalformedInputError",
    "PatternRule",
    "PresenceRule",
    "ReasonCode",
    "Rejected",
    "SQLAlchemySubmissionStore",
    "StorageError",
    "StoreConfig",
    "SubmissionRequestHandler",
    "SubmissionServiceError",
    "SubmissionStore",
    "TypeRule",
    "ValidationOutcome",
    "ValidationPipeline",
    "build_submission_pipeline",
]
