"""
Application error types and their FastAPI handlers.

Every error body carries a machine-readable `code` so clients can branch
on it without parsing English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger("abjadmatch.errors")


class AbjadMatchError(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class StorageError(AbjadMatchError):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "STORAGE_ERROR"

    def __init__(self, operation: str):
        super().__init__(
            message=f"Failed to {operation} compatibility results",
            details={"operation": operation},
        )


class RecordNotFoundError(AbjadMatchError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, record_id: int):
        super().__init__(
            message=f"Compatibility result {record_id} not found",
            details={"id": record_id},
        )


async def app_exception_handler(request: Request, exc: AbjadMatchError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error(
            "%s on %s %s | %s",
            exc.code,
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__,
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return a 400 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Invalid compatibility result data",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
