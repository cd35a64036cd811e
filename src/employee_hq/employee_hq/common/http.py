from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..core.exceptions import (
    AlreadyCheckedIn,
    AuthenticationError,
    AuthorizationError,
    ConstraintViolation,
    DomainError,
    NoActiveCheckIn,
    NotFound,
    StoreError,
    StoreUnavailable,
    UniqueConstraintViolation,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (AlreadyCheckedIn, 409),
    (NoActiveCheckIn, 400),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFound, 404),
    (UniqueConstraintViolation, 409),
    (ConstraintViolation, 409),
    (StoreUnavailable, 503),
)


def status_code_for(exc: Exception) -> int:
    for exc_type, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    if isinstance(exc, StoreError):
        return 503
    return 400


def error_response(exc: Exception):
    code = status_code_for(exc)
    message = str(exc) if code != 503 else "The attendance service is temporarily unavailable"
    return jsonify({"success": False, "error": type(exc).__name__, "message": message}), code


def register_error_handlers(app: Flask) -> None:
    def handle_domain_error(exc: DomainError):
        return error_response(exc)

    def handle_store_error(exc: StoreError):
        logger.warning("Store error surfaced to client: %s", exc)
        return error_response(exc)

    app.register_error_handler(DomainError, handle_domain_error)
    app.register_error_handler(StoreError, handle_store_error)
