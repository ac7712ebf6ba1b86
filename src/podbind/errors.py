"""Error handling module for podbind.

This module defines error codes, exception classes and the engine error payload model.

Engine Error Payload Format:
{
    "cause": "no such secret",
    "message": "db-pass: no such secret",
    "response": 404
}

Usage:
    from podbind.errors import NotFoundError

    try:
        await secrets.inspect("db-pass")
    except NotFoundError as exc:
        print(exc.status_code, exc.message)

Transport failures (httpx.TransportError and subclasses) and task
cancellation are not wrapped; they reach the caller unchanged.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(str, Enum):
    """Error codes."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CONNECTION_FAILED = "CONNECTION_FAILED"
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    SERVER_ERROR = "SERVER_ERROR"
    API_ERROR = "API_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    DECODE_FAILED = "DECODE_FAILED"


class ErrorModel(BaseModel):
    """Error payload returned by the engine for non-2xx responses."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    cause: str = ""
    message: str
    response: int = Field(default=0, description="HTTP status echoed by the engine")


class PodbindError(Exception):
    """Base exception for podbind.

    Attributes:
        code: The error code from ErrorCode enum
        message: Human-readable error message
        status_code: HTTP status code, or None when no response was received
    """

    def __init__(
        self, code: ErrorCode, message: str, status_code: int | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidArgumentError(PodbindError):
    """Local precondition failed; no request was issued."""

    def __init__(self, message: str = "Invalid argument") -> None:
        super().__init__(ErrorCode.INVALID_ARGUMENT, message)


class EngineConnectionError(PodbindError):
    """Connection provider could not produce a usable connection."""

    def __init__(self, message: str = "Unable to connect to engine") -> None:
        super().__init__(ErrorCode.CONNECTION_FAILED, message)


class APIError(PodbindError):
    """Engine answered with a non-success status and a structured payload."""

    default_code = ErrorCode.API_ERROR

    def __init__(self, status_code: int, message: str, cause: str = "") -> None:
        self.cause = cause
        super().__init__(self.default_code, message, status_code)


class BadRequestError(APIError):
    """400 Bad Request - Engine rejected the parameters."""

    default_code = ErrorCode.BAD_REQUEST


class NotFoundError(APIError):
    """404 Not Found - No such secret."""

    default_code = ErrorCode.NOT_FOUND


class ConflictError(APIError):
    """409 Conflict - Secret name already in use."""

    default_code = ErrorCode.CONFLICT


class ServerError(APIError):
    """5xx - Engine internal failure."""

    default_code = ErrorCode.SERVER_ERROR


class StatusError(PodbindError):
    """Non-success status whose body is not a structured error payload."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.body = body
        message = f"Unexpected HTTP status {status_code}"
        if body:
            message = f"{message}: {body}"
        super().__init__(ErrorCode.HTTP_ERROR, message, status_code)


class DecodeError(PodbindError):
    """Success status paired with a body that does not match the expected type.

    Indicates a client/engine API version mismatch rather than a
    resource-level failure.
    """

    def __init__(self, status_code: int, message: str = "Unable to decode response") -> None:
        super().__init__(ErrorCode.DECODE_FAILED, message, status_code)


_STATUS_ERRORS: dict[int, type[APIError]] = {
    400: BadRequestError,
    404: NotFoundError,
    409: ConflictError,
}


def api_error_for(status_code: int, payload: ErrorModel) -> APIError:
    """Build the APIError subclass matching an HTTP status."""
    error_cls = _STATUS_ERRORS.get(status_code)
    if error_cls is None:
        error_cls = ServerError if status_code >= 500 else APIError
    return error_cls(status_code, payload.message, payload.cause)
