"""Application exception types and the single error-to-response mapping."""

from __future__ import annotations

from enum import Enum

from ballers_api.schemas.error import ErrorResponse

GENERIC_ERROR_MESSAGE = "Internal Server Error"


class ErrorKind(str, Enum):
    MISSING_TOKEN = "MISSING_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    MALFORMED_IDENTIFIER = "MALFORMED_IDENTIFIER"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    WRITE_FAILURE = "WRITE_FAILURE"
    UNEXPECTED = "UNEXPECTED"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES.get(self, GENERIC_ERROR_MESSAGE)


_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.MISSING_TOKEN: 403,
    ErrorKind.INVALID_TOKEN: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.MALFORMED_IDENTIFIER: 412,
    ErrorKind.VALIDATION_ERROR: 412,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 412,
    ErrorKind.WRITE_FAILURE: 400,
    ErrorKind.UNEXPECTED: 500,
}

_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.MISSING_TOKEN: "Token needed to access resources",
    ErrorKind.INVALID_TOKEN: "Invalid token",
    ErrorKind.UNAUTHORIZED: "Invalid email or password",
    ErrorKind.FORBIDDEN: "You are not permitted to perform this action",
    ErrorKind.MALFORMED_IDENTIFIER: "Invalid Id supplied",
    ErrorKind.VALIDATION_ERROR: "Invalid request payload",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.CONFLICT: "Resource already exists",
    ErrorKind.WRITE_FAILURE: "Error saving resource",
}


class ApiError(Exception):
    """Expected failure raised by pipeline steps and services.

    ``error`` is the client-facing detail; it defaults to ``message``. The
    underlying exception, when there is one, travels as ``__cause__`` and never
    reaches the response body.
    """

    def __init__(self, kind: ErrorKind, message: str | None = None, error: str | None = None) -> None:
        self.kind = kind
        self.message = message or kind.default_message
        self.payload = ErrorResponse(message=self.message, error=error or self.message)
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


def normalize(exc: BaseException) -> tuple[int, ErrorResponse]:
    """Map any failure to its status code and ``{success, message, error}`` body."""
    if isinstance(exc, ApiError):
        return exc.status_code, exc.payload
    return (
        ErrorKind.UNEXPECTED.status_code,
        ErrorResponse(message=GENERIC_ERROR_MESSAGE, error=GENERIC_ERROR_MESSAGE),
    )


__all__ = ["ApiError", "ErrorKind", "GENERIC_ERROR_MESSAGE", "normalize"]
