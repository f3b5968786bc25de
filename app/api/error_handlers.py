"""Error handlers - global exception handlers for the Forums API.

Every failure is a single JSON envelope {"error": ...}:
    - RequestValidationError -> 400, one message describing the undecodable input
    - DomainValidationError  -> 400, field -> message map
    - EntityNotFoundError    -> 404
    - EditConflictError      -> 409
    - StoreError / Exception -> 500, detail logged but never returned
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.exceptions import (
    DomainValidationError,
    EditConflictError,
    EntityNotFoundError,
    StoreError,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "the requested resource could not be found"
EDIT_CONFLICT_MESSAGE = "unable to update the record due to an edit conflict, please try again"
SERVER_ERROR_MESSAGE = "the server encountered a problem and could not process your request"


def error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handlers(app)
    _register_request_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(DomainValidationError)
    async def failed_validation_handler(request: Request, exc: DomainValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, exc.errors)

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)

    @app.exception_handler(EditConflictError)
    async def edit_conflict_handler(request: Request, exc: EditConflictError):
        logger.info(f"Edit conflict on {request.method} {request.url.path}: {exc}")
        return error_response(status.HTTP_409_CONFLICT, EDIT_CONFLICT_MESSAGE)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


def _register_request_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def bad_request_handler(request: Request, exc: RequestValidationError):
        """Undecodable request input: malformed JSON, wrong types, unknown keys."""
        message = describe_request_error(exc)
        logger.warning(f"Bad request on {request.method} {request.url.path}: {message}")
        return error_response(status.HTTP_400_BAD_REQUEST, message)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


def describe_request_error(exc: RequestValidationError) -> str:
    """Single client-facing message for the first decoding problem."""
    errors = exc.errors()
    if not errors:
        return "the request could not be decoded"

    error = errors[0]
    kind = error.get("type", "")
    loc = [str(part) for part in error.get("loc", ())]
    source, fields = (loc[0], loc[1:]) if loc else ("body", [])

    if source != "body":
        name = fields[0] if fields else source
        return f"invalid {source} parameter {name}"

    if kind == "json_invalid":
        position = fields[0] if fields else None
        if position is not None:
            return f"body contains badly-formed JSON (at character {position})"
        return "body contains badly-formed JSON"

    if kind == "missing" and not fields:
        return "body must not be empty"

    if kind == "extra_forbidden" and fields:
        return f'body contains unknown key "{fields[-1]}"'

    if fields:
        return f'body contains incorrect JSON type for field "{fields[0]}"'
    return "body contains incorrect JSON type"
