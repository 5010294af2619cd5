"""JSON error responses for the HTTP layer.

Services raise typed DomainError subclasses; this is the one place they are
turned into status codes.
"""
from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    EncodingError,
    InvalidStateError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: AuthenticationError is a NotFoundError.
STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (AuthenticationError, 401),
    (ValidationError, 400),
    (InvalidStateError, 400),
    (NotFoundError, 404),
    (EncodingError, 500),
    (StorageError, 500),
)


def status_for(exc: DomainError) -> int:
    for err_type, code in STATUS_BY_ERROR:
        if isinstance(exc, err_type):
            return code
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        code = status_for(exc)
        if code >= 500:
            logger.error("%s: %s", exc.__class__.__name__, exc)
        else:
            logger.warning("%s: %s", exc.__class__.__name__, exc)
        return jsonify({"error": str(exc)}), code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.error("Unexpected error: %s", exc, exc_info=True)
        return jsonify({"error": "An unexpected error occurred"}), 500
