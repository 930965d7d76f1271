"""Exception handlers translating failures into JSON error bodies."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from casework_tasks.api.schemas import REQUIRED_FIELD_MESSAGES, ErrorResponse
from casework_tasks.domain.entities.result_types import DomainErrorType, TaskServiceError
from casework_tasks.domain.entities.task import utc_now

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

# (HTTP status, error category) per domain error type
DOMAIN_ERROR_RESPONSES: Dict[DomainErrorType, Tuple[int, str]] = {
    DomainErrorType.NOT_FOUND: (404, "Task Not Found"),
    DomainErrorType.VALIDATION_ERROR: (400, "Invalid Request"),
    DomainErrorType.ALREADY_EXISTS: (409, "Duplicate Case Number"),
    DomainErrorType.OPERATION_FAILED: (500, "Internal Server Error"),
}

_VALUE_ERROR_PREFIX = "Value error, "


def _error_response(
    status_code: int,
    error: str,
    message: str,
    validation_errors: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        error=error,
        message=message,
        timestamp=utc_now().isoformat(),
        validation_errors=validation_errors,
    )
    return JSONResponse(status_code=status_code, content=body.to_content())


def _field_name(loc: Sequence[Any]) -> str:
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


def _is_unparseable(error_type: str) -> bool:
    return error_type.endswith("_parsing") or error_type.endswith("_type")


def _request_validation_response(errors: List[Dict[str, Any]]) -> JSONResponse:
    """Pick the error body for a failed request validation."""
    for error in errors:
        if error.get("type") == "json_invalid":
            return _error_response(400, "Bad Request", "Malformed JSON request")

    for error in errors:
        loc = tuple(error.get("loc", ()))
        if loc == ("body",):
            if error.get("type") == "missing":
                return _error_response(400, "Bad Request", "Request body is missing")
            return _error_response(400, "Bad Request", "Malformed JSON request")

    for error in errors:
        loc = tuple(error.get("loc", ()))
        if loc and loc[0] in ("path", "query"):
            name = _field_name(loc)
            content = {
                "status": 400,
                "error": f"Invalid {loc[0]} parameter: {name}",
                "message": "Expected type: int",
                "timestamp": utc_now().isoformat(),
            }
            return JSONResponse(status_code=400, content=content)

    for error in errors:
        if _is_unparseable(str(error.get("type", ""))):
            name = _field_name(tuple(error.get("loc", ())))
            return _error_response(400, "Bad Request", f"Invalid value for field: {name}")

    field_errors: Dict[str, str] = {}
    for error in errors:
        name = _field_name(tuple(error.get("loc", ())))
        if error.get("type") == "missing":
            message = REQUIRED_FIELD_MESSAGES.get(name, f"{name} is required")
        else:
            message = str(error.get("msg", "Invalid value"))
            if message.startswith(_VALUE_ERROR_PREFIX):
                message = message[len(_VALUE_ERROR_PREFIX):]
        field_errors.setdefault(name, message)

    return _error_response(
        400, "Validation Failed", "Request validation failed", validation_errors=field_errors
    )


async def _request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("Request validation failed for %s %s: %s", request.method, request.url.path, exc.errors())
    return _request_validation_response(list(exc.errors()))


async def _task_service_exception_handler(request: Request, exc: TaskServiceError) -> JSONResponse:
    status_code, category = DOMAIN_ERROR_RESPONSES.get(
        exc.error_type, DOMAIN_ERROR_RESPONSES[DomainErrorType.OPERATION_FAILED]
    )
    if status_code >= 500:
        logger.error("Task operation failed on %s %s: %s", request.method, request.url.path, exc.message)
        return _error_response(status_code, category, GENERIC_ERROR_MESSAGE)
    return _error_response(status_code, category, exc.message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        response = _error_response(
            405,
            "Method Not Allowed",
            f"HTTP method '{request.method}' is not supported for this endpoint",
        )
    elif exc.status_code == 404:
        response = _error_response(404, "Not Found", f"No endpoint {request.method} {request.url.path}")
    else:
        response = _error_response(exc.status_code, "Error", str(exc.detail))

    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _error_response(500, "Internal Server Error", GENERIC_ERROR_MESSAGE)


def install_error_handling(app: FastAPI) -> None:
    """Register every exception handler on ``app``."""
    app.add_exception_handler(RequestValidationError, _request_validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(TaskServiceError, _task_service_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)
