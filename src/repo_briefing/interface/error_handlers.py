"""Global exception handlers — translate domain errors to HTTP responses.

Every error leaves the API in the ``{"status": "error", "message": "..."}``
envelope.  Domain errors keep their message; anything unexpected is logged
with its traceback and reported generically.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_briefing.domain.exceptions import (
    InvalidRepositoryUrlError,
    LlmError,
    MissingFieldError,
    RepoBriefingError,
    RepositoryNotFoundError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[RepoBriefingError], int] = {
    MissingFieldError: 422,
    InvalidRepositoryUrlError: 422,
    RepositoryNotFoundError: 404,
    UpstreamError: 502,
    LlmError: 502,
}


def status_for(exc: RepoBriefingError) -> int:
    """Most specific status registered for *exc*'s class hierarchy, else 500."""
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    @app.exception_handler(RepoBriefingError)
    async def domain_handler(request: Request, exc: RepoBriefingError) -> JSONResponse:
        status_code = status_for(exc)
        logger.warning("%s (%d): %s", type(exc).__name__, status_code, exc)
        return _error_json(status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        ]
        return _error_json(422, "; ".join(messages))

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
