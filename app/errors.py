"""Structured error helpers for API responses.

Every business failure raised by a service is an ``AppError`` subclass, one per
error kind, rendered by ``app_error_handler`` as
``{"error": {"code": ..., "message": ..., "details": ...}}``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


def build_error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        self.payload = build_error_payload(code, message, details)


class _KindError(AppError):
    status_code_default: int = status.HTTP_400_BAD_REQUEST
    code_default: str = "BAD_REQUEST"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(self.status_code_default, self.code_default, message, details)


class NotFoundError(_KindError):
    """Referenced candidate/schedule/outcome/onboard request/stage does not exist."""

    status_code_default = status.HTTP_404_NOT_FOUND
    code_default = "NOT_FOUND"


class InvalidStateTransitionError(_KindError):
    """The entity's current state disallows the operation."""

    status_code_default = status.HTTP_409_CONFLICT
    code_default = "INVALID_STATE_TRANSITION"


class ConflictError(_KindError):
    """Interviewer double-booking or a duplicate live round."""

    status_code_default = status.HTTP_409_CONFLICT
    code_default = "CONFLICT"


class AlreadyExistsError(_KindError):
    status_code_default = status.HTTP_409_CONFLICT
    code_default = "ALREADY_EXISTS"


class PreconditionFailedError(_KindError):
    """A business-rule gate is not met."""

    status_code_default = status.HTTP_412_PRECONDITION_FAILED
    code_default = "PRECONDITION_FAILED"


class InputValidationError(_KindError):
    """Malformed input (end <= start, empty interviewer set, negative salary)."""

    status_code_default = 422
    code_default = "VALIDATION_ERROR"


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)
