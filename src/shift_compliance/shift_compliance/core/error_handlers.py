"""JSON error responses for domain exceptions (no stack traces leak to clients)."""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .exceptions import (
    AlreadyCheckedIn,
    DomainError,
    InvalidShiftConfig,
    MissingEmployee,
    NoOpenSession,
    UpstreamUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: InvalidShiftConfig is also a ValidationError.
_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (AlreadyCheckedIn, 409),
    (NoOpenSession, 409),
    (InvalidShiftConfig, 422),
    (ValidationError, 400),
    (MissingEmployee, 404),
    (UpstreamUnavailable, 503),
)


def status_for(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def _error_body(message: str, *, error: str):
    return jsonify({"success": False, "error": error, "message": message})


def register_error_handlers(app: Flask) -> None:
    """Attach the domain/HTTP/generic handlers to the Flask app."""

    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        status = status_for(exc)
        if status >= 500:
            logger.warning("Upstream failure: %s", exc)
        return _error_body(str(exc), error=type(exc).__name__), status

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return _error_body(exc.description or exc.name, error=exc.name), exc.code

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return _error_body("Internal server error", error="InternalServerError"), 500
