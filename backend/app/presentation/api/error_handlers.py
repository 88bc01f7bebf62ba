"""Error Handlers — global exception handlers for the client registry API.

Invariants:
    - ValidationError → 400 with one detail entry per offending field
    - RequestValidationError → 400 with the same envelope
    - StoreError → 503, never retried here
    - Exception (catch-all) → 500, never leaks internal details

EntityNotFoundError is translated by the endpoints themselves.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_validation_handler(app)
    _register_request_validation_handler(app)
    _register_store_error_handler(app)
    _register_generic_error_handler(app)


def _error_envelope(code: str, message: str, details: list[dict] | None = None) -> dict:
    error: dict = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error}


def _register_domain_validation_handler(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def domain_validation_handler(request: Request, exc: ValidationError):
        logger.info("Rejected input on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_envelope(
                "VALIDATION_ERROR",
                str(exc),
                [{"field": e.field, "message": e.message} for e in exc.errors],
            ),
        )


def _register_request_validation_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (bad types, bad query params)."""
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        details = [
            {
                # drop the "body"/"query" prefix so the field name matches domain errors
                "field": ".".join(str(loc) for loc in e["loc"][1:]) or str(e["loc"][0]),
                "message": e["msg"],
            }
            for e in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_envelope("VALIDATION_ERROR", "Invalid request data", details),
        )


def _register_store_error_handler(app: FastAPI) -> None:
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store error on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_error_envelope("STORE_ERROR", "The record store is unavailable"),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_envelope("INTERNAL_ERROR", "An unexpected error occurred"),
        )
