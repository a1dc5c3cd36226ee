# backend/app/core/errors.py
"""
Application error hierarchy.

Every error carries an HTTP status and a stable machine-readable code.
Security-sensitive errors use fixed, non-distinguishing messages: the
internal cause is logged by the raiser, never put into the exception.
"""
from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    USER_EXISTS = "USER_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    MISSING_REFRESH_TOKEN = "MISSING_REFRESH_TOKEN"
    INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    PREMIUM_REQUIRED = "PREMIUM_REQUIRED"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    status_code: int = 500
    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Any = None,
        status_code: Optional[int] = None,
        code: Optional[ErrorCode] = None,
    ) -> None:
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(self.message)


class ValidationFailed(AppError):
    status_code = 400
    code = ErrorCode.VALIDATION_ERROR
    message = "Validation failed"


class UserExistsError(AppError):
    status_code = 409
    code = ErrorCode.USER_EXISTS
    message = "User with this email already exists"


class InvalidCredentialsError(AppError):
    status_code = 401
    code = ErrorCode.INVALID_CREDENTIALS
    message = "Invalid email or password"


class MissingRefreshTokenError(AppError):
    status_code = 400
    code = ErrorCode.MISSING_REFRESH_TOKEN
    message = "Refresh token required"


class InvalidRefreshTokenError(AppError):
    status_code = 401
    code = ErrorCode.INVALID_REFRESH_TOKEN
    message = "Invalid or expired refresh token"


class UnauthorizedError(AppError):
    status_code = 401
    code = ErrorCode.UNAUTHORIZED
    message = "Invalid or expired token"


class ForbiddenError(AppError):
    status_code = 403
    code = ErrorCode.FORBIDDEN
    message = "You do not have permission to access this resource"


class PremiumRequiredError(AppError):
    status_code = 403
    code = ErrorCode.PREMIUM_REQUIRED
    message = "This feature requires a Premium subscription"


class UserNotFoundError(AppError):
    status_code = 404
    code = ErrorCode.USER_NOT_FOUND
    message = "User not found"


class NotFoundError(AppError):
    status_code = 404
    code = ErrorCode.NOT_FOUND
    message = "Record not found"
