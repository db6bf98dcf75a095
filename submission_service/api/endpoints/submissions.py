"""
Submission API endpoints.

This module exposes the "submit a record" operation and a usage hint for it.
Validation and persistence live in the request handler; the endpoints only
move bytes in and envelopes out.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from submission_service.core import responses
from submission_service.core.request_handler import SubmissionRequestHandler
from submission_service.core.validation_pipeline import SUBMISSION_FIELDS
from submission_service.models.dtos import EndpointInfo, ErrorEnvelope, SuccessEnvelope

router = APIRouter()
logger = logging.getLogger(__name__)


# Dependency to get the request handler built at startup
def get_request_handler(request: Request) -> SubmissionRequestHandler:
    """Get the application's submission request handler."""
    return request.app.state.request_handler


@router.post(
    "",
    response_model=SuccessEnvelope,
    responses={
        400: {"model": ErrorEnvelope, "description": "Validation failure or malformed body"},
        500: {"model": ErrorEnvelope, "description": "Storage or unexpected failure"},
    },
)
async def create_submission(
    request: Request,
    handler: SubmissionRequestHandler = Depends(get_request_handler),
) -> JSONResponse:
    """
    Validate a submission and save it.

    The body must be a JSON object with string fields ``title`` (5-100
    characters), ``description`` (5-1000 characters) and ``author`` (a
    capitalised name). Values are trimmed before they are checked and stored.

    Returns:
        JSONResponse: Success envelope with the generated id (200), a
        validation/input error envelope (400) or a server error envelope (500).
    """
    body = await request.body()
    result = await handler.handle_raw(body)
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get("", response_model=SuccessEnvelope)
async def describe_submissions_endpoint(request: Request) -> JSONResponse:
    """Describe how to use the submissions endpoint."""
    info = EndpointInfo(
        endpoint=request.url.path,
        method="POST",
        fields=list(SUBMISSION_FIELDS),
        example={
            "title": "Buenas prácticas",
            "description": "Una descripción válida",
            "author": "Juan Pérez",
        },
    )
    result = responses.success(
        info.model_dump(),
        "Submit data using POST method with title, description, and author fields",
    )
    return JSONResponse(status_code=result.status_code, content=result.body)
