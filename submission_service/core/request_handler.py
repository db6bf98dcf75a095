"""
Request handler for the Submission service.

Orchestrates a single submission: parse the body, validate it, persist the
trimmed record and map the result to a response envelope. Every failure
ends as an envelope; nothing raised below this boundary reaches the
HTTP layer.
"""
import json
import logging
from typing import Any, Mapping, Optional

from submission_service.core import responses
from submission_service.core.exceptions import MalformedInputError, StorageError
from submission_service.core.field_rules import Rejected
from submission_service.core.submission_store import SubmissionStore
from submission_service.core.validation_pipeline import ValidationPipeline, build_submission_pipeline
from submission_service.models.dtos import SubmissionRecord

logger = logging.getLogger(__name__)


def parse_body(body: bytes) -> Mapping[str, Any]:
    """
    Decode a raw request body into a JSON object.

    Raises:
        MalformedInputError: If the body is empty, not valid UTF-8 JSON, or
                             not a JSON object.
    """
    if not body or not body.strip():
        raise MalformedInputError("Request body is empty")
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError, UnicodeDecodeError and oversized integer literals
        raise MalformedInputError("Request body is not valid JSON", original=e) from e
    if not isinstance(payload, dict):
        raise MalformedInputError("Request body must be a JSON object")
    return payload


class SubmissionRequestHandler:
    """
    Validates submissions and hands accepted ones to a submission store.
    """

    def __init__(
        self,
        store: SubmissionStore,
        pipeline: Optional[ValidationPipeline] = None,
        ensure_schema_per_request: bool = True,
    ):
        """
        Args:
            store: Persistence collaborator for accepted submissions.
            pipeline: Validation rules to apply. Defaults to the standard
                      title/description/author pipeline.
            ensure_schema_per_request: Call ``store.ensure_schema()`` before
                                       every insert.
        """
        self._store = store
        self._pipeline = pipeline if pipeline is not None else build_submission_pipeline()
        self._ensure_schema_per_request = ensure_schema_per_request

    async def handle_raw(self, body: bytes) -> responses.SubmissionResponse:
        """Handle an undecoded request body."""
        try:
            payload = parse_body(body)
        except MalformedInputError as e:
            logger.info(f"Rejected malformed submission body: {e}")
            return responses.malformed_input(e)
        except Exception as e:
            logger.error(f"Unexpected error while parsing submission body: {e}", exc_info=True)
            return responses.server_error()
        return await self.handle(payload)

    async def handle(self, payload: Any) -> responses.SubmissionResponse:
        """Handle an already-decoded payload."""
        try:
            if not isinstance(payload, Mapping):
                raise MalformedInputError("Request body must be a JSON object")

            outcome = self._pipeline.validate(payload)
            if isinstance(outcome, Rejected):
                logger.info(f"Submission rejected: {outcome.reason_code.value} on field '{outcome.field}'")
                return responses.validation_error(outcome)

            record = SubmissionRecord.from_validated_payload(payload)

            if self._ensure_schema_per_request:
                await self._store.ensure_schema()
            stored = await self._store.insert(record)

        except MalformedInputError as e:
            logger.info(f"Rejected malformed submission: {e}")
            return responses.malformed_input(e)
        except StorageError as e:
            logger.error(f"Storage failure while saving submission: {e}", exc_info=True)
            return responses.server_error(e.reason_code)
        except Exception as e:
            logger.error(f"Unexpected error while handling submission: {e}", exc_info=True)
            return responses.server_error()

        logger.info(f"Submission saved: id={stored.id}, title='{stored.title}', author='{stored.author}'")
        return responses.submission_saved(stored)
