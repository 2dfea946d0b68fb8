from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    DomainError,
    ExportTimeoutError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _json_error(status_code: int, message: str, exc: Exception):
    """Unified JSON error payload for the API."""
    if status_code >= 500:
        message = "Internal Server Error. Please try again later."
    payload = {
        "message": message,
        "error_type": exc.__class__.__name__,
        "status_code": status_code,
    }
    return jsonify(payload), status_code


def _status_for(exc: DomainError) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, (StorageError, ExportTimeoutError)):
        return 500
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = _status_for(exc)
        if status >= 500:
            logger.exception("%s: %s %s | %s", status, request.method, request.path, exc)
        elif status == 404:
            logger.info("404 Not Found: %s %s | %s", request.method, request.path, exc)
        else:
            logger.warning("%s: %s %s | %s", status, request.method, request.path, exc)
        return _json_error(status, str(exc), exc)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        status = int(exc.code or 500)
        return _json_error(status, exc.description or exc.name, exc)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("500 Unhandled exception: %s %s", request.method, request.path)
        return _json_error(500, str(exc), exc)
