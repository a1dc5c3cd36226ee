# backend/app/api/error_handling.py
"""
Exception handlers that turn every failure into the error envelope:

    {"success": false, "error": {"message": ..., "code": ..., "details": ...}}

Internal causes are logged here and never copied into the response.
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.core.errors import AppError, ErrorCode
from backend.app.schemas.common import ErrorBody, ErrorResponse

logger = logging.getLogger(__name__)

_STATUS_TO_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    409: ErrorCode.DUPLICATE_ENTRY,
}


def error_code_for_status(status_code: int) -> str:
    return _STATUS_TO_CODE.get(status_code, ErrorCode.INTERNAL_ERROR).value


def error_response(
    status_code: int,
    message: str,
    code: Optional[str] = None,
    details: Any = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorBody(
            message=message,
            code=code or error_code_for_status(status_code),
            details=details,
        )
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


def _validation_details(exc: RequestValidationError) -> list:
    details = []
    for err in exc.errors():
        # drop the "body"/"query" prefix FastAPI puts first
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        message = str(err.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append({"path": ".".join(loc), "message": message})
    return details


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        log_fn = logger.error if exc.status_code >= 500 else logger.info
        log_fn(
            "%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.code.value
        )
        return error_response(exc.status_code, exc.message, exc.code.value, exc.details)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        details = _validation_details(exc)
        logger.info("%s %s -> validation failed: %s", request.method, request.url.path, details)
        return error_response(400, "Validation failed", ErrorCode.VALIDATION_ERROR.value, details)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = "Route not found"
        elif isinstance(exc.detail, str):
            message = exc.detail
        else:
            message = "Request failed"
        return error_response(exc.status_code, message)

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(request: Request, exc: IntegrityError):
        logger.warning("%s %s -> integrity error: %s", request.method, request.url.path, exc.orig)
        return error_response(
            409, "A record with this data already exists", ErrorCode.DUPLICATE_ENTRY.value
        )

    @app.exception_handler(Exception)
    async def handle_uncaught(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error", ErrorCode.INTERNAL_ERROR.value)
