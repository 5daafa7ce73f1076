"""Error Handlers — global exception handlers for the AMP checker API.

Invariants:
    - AmpCheckError → structured JSON with error code, message, severity
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Two-layer handler: domain (AmpCheckError), catch-all (Exception). The only
      input is an optional string query parameter, so request validation cannot
      fail and FastAPI's default RequestValidationError handler stays in place
    - Extracted from main.py to keep the app factory small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ampcheck.core.errors import AmpCheckError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_ampcheck_error_handler(app)
    _register_generic_error_handler(app)


def _register_ampcheck_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(AmpCheckError)
    async def ampcheck_error_handler(request: Request, exc: AmpCheckError):
        """Handle all AMP checker domain/infrastructure errors."""
        logger.error(
            f"AmpCheckError: {exc.message}",
            extra={"error_code": exc.code, "status_code": exc.http_status},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
