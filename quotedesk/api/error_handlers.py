"""Error Handlers — every failure leaves the API in the QuoteDesk error envelope.

Invariants:
    - One renderer (render_error) builds every error body: QuoteDeskError,
      request-body validation and unexpected exceptions alike
    - Record validation failures list every violation under "violations"
    - Not-found responses name the resource type and id; database failures say
      whether a retry may help
    - Unexpected exceptions are logged with traceback and rendered as
      INTERNAL_ERROR without leaking their message

Design Decisions:
    - Pydantic request errors are converted to RecordValidationError so clients
      parse one shape for "the record you sent is wrong", whichever layer caught it
    - Log level follows the status class: 4xx at INFO, 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quotedesk.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, PersistenceError,
    QuoteDeskError, RecordValidationError, ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


def render_error(exc: QuoteDeskError) -> dict:
    """Base envelope plus the fields specific to each error type."""
    body = exc.to_response()
    error = body["error"]
    if isinstance(exc, RecordValidationError):
        error["violations"] = exc.violations
    elif isinstance(exc, ResourceNotFoundError):
        error["resource"] = {"type": exc.resource_type, "id": exc.resource_id}
    elif isinstance(exc, PersistenceError):
        error["retryable"] = exc.retryable
    return body


def _respond(request: Request, exc: QuoteDeskError) -> JSONResponse:
    level = logging.INFO if exc.http_status < 500 else logging.ERROR
    logger.log(
        level, "%s %s -> %s: %s",
        request.method, request.url.path, exc.code, exc.message,
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "status_code": exc.http_status,
            "entity_kind": exc.context.entity_kind,
            "record_id": exc.context.record_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=render_error(exc))


async def handle_quotedesk_error(request: Request, exc: QuoteDeskError):
    return _respond(request, exc)


async def handle_request_validation(request: Request, exc: RequestValidationError):
    violations = [
        f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    ]
    return _respond(request, RecordValidationError(violations))


async def handle_unexpected(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s", request.url.path, exc_info=exc,
        extra={"path": request.url.path},
    )
    internal = QuoteDeskError(
        "An unexpected error occurred", "INTERNAL_ERROR",
        ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, ErrorContext(), 500,
    )
    return _respond(request, internal)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuoteDeskError, handle_quotedesk_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
