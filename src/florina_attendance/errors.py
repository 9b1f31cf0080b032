from __future__ import annotations

import logging

from flask import Flask, jsonify

from .core.exceptions import (
    AttendanceAlreadyRecorded,
    AuthenticationError,
    Conflict,
    DomainError,
    DuplicateEmployeeNumber,
    StoreUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, **extra):
    body = {"error": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(exc: ValidationError):
        return error_response(str(exc), 400, field=exc.field)

    @app.errorhandler(AuthenticationError)
    def _authentication(exc: AuthenticationError):
        return error_response(str(exc), 401)

    @app.errorhandler(DuplicateEmployeeNumber)
    @app.errorhandler(Conflict)
    @app.errorhandler(AttendanceAlreadyRecorded)
    def _conflict(exc: DomainError):
        return error_response(str(exc), 409)

    @app.errorhandler(StoreUnavailable)
    def _unavailable(exc: StoreUnavailable):
        logger.error("Store unavailable: %s", exc.__cause__ or exc)
        return error_response(str(exc), 503)

    @app.errorhandler(DomainError)
    def _domain(exc: DomainError):
        return error_response(str(exc), 400)
