"""
Error types raised by the donor store and the JSON handlers that render
every error response as ``{"message": ..., "errors": [...]}``.
"""
import logging
from typing import Any, List, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class DonorStoreError(Exception):
    """Base class for donor persistence failures."""


class DonorNotFoundError(DonorStoreError):
    def __init__(self, donor_id: int):
        self.donor_id = donor_id
        super().__init__(f"Donor with ID {donor_id} not found")


class DonorConflictError(DonorStoreError):
    """A uniqueness constraint rejected the write."""


class StorageError(DonorStoreError):
    """Any other persistence failure (connectivity, constraint, timeout)."""


def error_body(message: str, errors: Optional[List[str]] = None) -> dict:
    body: dict = {"message": message}
    if errors:
        body["errors"] = errors
    return body


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException details; dict details are passed through as the body."""
    detail: Any = exc.detail
    if isinstance(detail, dict):
        content = detail
    else:
        content = error_body(str(detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(content),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request payloads as 400 with itemized messages."""
    errors = [_format_validation_error(error) for error in exc.errors()]
    logger.warning(
        f"Request validation failed for {request.method} {request.url.path}: {', '.join(errors)}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", errors),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler so unexpected faults still answer with JSON."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("An unexpected error occurred", [str(exc)]),
    )
