"""
Error Mapper: Exceptions to Structured HTTP Error Bodies
=============================================================================
CONCEPT: One Boundary for Error Translation

The service layer raises domain exceptions that know nothing about HTTP.
This module is the only place where a failure becomes a status code. Every
error body has the same shape (employee_service.schemas.errors):

    {
      "timestamp": "2025-01-15 10:30:45",
      "status": 400,
      "message": "Validation failed",
      "details": "One or more fields have validation errors",
      "path": "/employees",
      "fieldErrors": [{"field": "name", "message": "...", "rejectedValue": "A"}]
    }

`fieldErrors` only appears for per-field body validation failures.

DISPATCH TABLE:
  NotFoundError                      -> 404 Resource not found
  InvalidInputError                  -> 400 Invalid input
  RequestValidationError
    body JSON unparseable / missing  -> 400 Invalid JSON format
    query/path parameter missing     -> 400 Missing required parameter
    query/path parameter wrong type  -> 400 Type conversion error
    body fields invalid              -> 400 Validation failed (+ fieldErrors)
  ConstraintViolationError,
  sqlalchemy IntegrityError          -> 409 Data integrity violation
  Starlette HTTPException            -> its own status (unknown route, 405, ...)
  anything else                      -> 500 Internal server error

LOG LEVELS:
  404 -> info, other 4xx -> warning, 409 -> error, 500 -> exception
  (full traceback server-side; the caller only gets the generic message)
=============================================================================
"""

from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_service.exceptions import EmployeeServiceError, ErrorKind
from employee_service.observability.logging import get_logger
from employee_service.observability.metrics import record_error
from employee_service.schemas.errors import ErrorResponse, FieldErrorDetail

logger = get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONSTRAINT_VIOLATION: status.HTTP_409_CONFLICT,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

MESSAGE_BY_KIND: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.INVALID_INPUT: "Invalid input",
    ErrorKind.CONSTRAINT_VIOLATION: "Data integrity violation",
    ErrorKind.UNEXPECTED: "Internal server error",
}

CONSTRAINT_DETAILS = "The operation violates database constraints"
UNEXPECTED_DETAILS = "An unexpected error occurred"

# pydantic error type prefix -> type name shown in "Type conversion error"
_TYPE_NAMES: dict[str, str] = {
    "int": "int",
    "float": "float",
    "bool": "bool",
    "date": "date",
    "datetime": "datetime",
    "string": "str",
}


def _error_response(
    request: Request,
    kind: ErrorKind,
    status_code: int,
    message: str,
    details: str,
    field_errors: list[FieldErrorDetail] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        message=message,
        details=details,
        path=request.url.path,
        field_errors=field_errors,
    )
    record_error(kind.value, status_code)
    return JSONResponse(status_code=status_code, content=body.to_content())


def _log(status_code: int, event: str, **kwargs: Any) -> None:
    if status_code == status.HTTP_404_NOT_FOUND:
        logger.info(event, status_code=status_code, **kwargs)
    elif status_code == status.HTTP_409_CONFLICT:
        logger.error(event, status_code=status_code, **kwargs)
    else:
        logger.warning(event, status_code=status_code, **kwargs)


# =============================================================================
# Handlers
# =============================================================================
async def handle_service_error(request: Request, exc: EmployeeServiceError) -> JSONResponse:
    status_code = STATUS_BY_KIND[exc.kind]
    _log(status_code, "service_error", kind=exc.kind.value, detail=exc.message, path=request.url.path)
    details = exc.message
    if exc.kind is ErrorKind.CONSTRAINT_VIOLATION:
        details = CONSTRAINT_DETAILS
    return _error_response(request, exc.kind, status_code, MESSAGE_BY_KIND[exc.kind], details)


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    kind = ErrorKind.CONSTRAINT_VIOLATION
    _log(status.HTTP_409_CONFLICT, "integrity_error", detail=str(exc.orig), path=request.url.path)
    return _error_response(
        request, kind, STATUS_BY_KIND[kind], MESSAGE_BY_KIND[kind], CONSTRAINT_DETAILS
    )


def _type_name(error_type: str) -> str:
    prefix = error_type.split("_", 1)[0]
    return _TYPE_NAMES.get(prefix, prefix)


def _field_name(loc: tuple) -> str:
    # Drop the "body" / "query" / "path" prefix: ("body", "name") -> "name"
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


def _field_message(error: dict) -> str:
    # For our own ValueError validators, report the raw message
    # ("Name must be between ...") rather than "Value error, Name must ...".
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error.get("msg", "Invalid value")


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    kind = ErrorKind.INVALID_INPUT
    status_code = status.HTTP_400_BAD_REQUEST

    for error in errors:
        loc = tuple(error.get("loc", ()))
        error_type = error.get("type", "")
        source = loc[0] if loc else None

        if error_type == "json_invalid" or (loc == ("body",) and error_type == "missing"):
            _log(status_code, "invalid_json", path=request.url.path)
            return _error_response(
                request, kind, status_code,
                "Invalid JSON format",
                "The request body contains invalid JSON",
            )

        if source in ("query", "path"):
            name = _field_name(loc)
            if error_type == "missing":
                _log(status_code, "missing_parameter", parameter=name, path=request.url.path)
                return _error_response(
                    request, kind, status_code,
                    "Missing required parameter",
                    f"Required parameter '{name}' is missing",
                )
            _log(status_code, "type_mismatch", parameter=name, path=request.url.path)
            return _error_response(
                request, kind, status_code,
                "Type conversion error",
                f"Parameter '{name}' should be of type {_type_name(error_type)}",
            )

    field_errors = [
        FieldErrorDetail(
            field=_field_name(tuple(error.get("loc", ("body",)))),
            message=_field_message(error),
            # "missing" errors echo the whole body as input; there is no rejected value
            rejected_value=None if error.get("type") == "missing" else error.get("input"),
        )
        for error in errors
    ]
    _log(
        status_code,
        "validation_failed",
        fields=[fe.field for fe in field_errors],
        path=request.url.path,
    )
    return _error_response(
        request, kind, status_code,
        "Validation failed",
        "One or more fields have validation errors",
        field_errors,
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    status_code = exc.status_code
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        phrase = "HTTP error"
    kind = ErrorKind.NOT_FOUND if status_code == status.HTTP_404_NOT_FOUND else ErrorKind.INVALID_INPUT
    if status_code >= 500:
        kind = ErrorKind.UNEXPECTED
    _log(status_code, "http_error", detail=exc.detail, path=request.url.path)
    response = _error_response(request, kind, status_code, phrase, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    kind = ErrorKind.UNEXPECTED
    logger.exception(
        "unhandled_error",
        error_type=type(exc).__name__,
        method=request.method,
        path=request.url.path,
    )
    return _error_response(
        request, kind, STATUS_BY_KIND[kind], MESSAGE_BY_KIND[kind], UNEXPECTED_DETAILS
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler above on the application."""
    app.add_exception_handler(EmployeeServiceError, handle_service_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
