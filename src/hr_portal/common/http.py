from __future__ import annotations

import logging
import secrets
from functools import wraps
from typing import Any, Callable

from flask import current_app, jsonify, request

from ..core.exceptions import (
    ConfigurationError,
    EmailDeliveryError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = "X-Admin-Key"


def ok(payload: dict | None = None, status: int = 200, **fields: Any):
    body = {"success": True}
    body.update(payload or {})
    body.update(fields)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def error_response(exc: Exception):
    """Translate a service exception into a JSON error response."""
    if isinstance(exc, ValidationError):
        return fail(str(exc), 400)
    if isinstance(exc, NotFoundError):
        return fail(str(exc), 404)
    if isinstance(exc, (EmailDeliveryError, StorageError)):
        return fail(str(exc), 502)
    if isinstance(exc, ConfigurationError):
        logger.error("Configuration error: %s", exc)
        return fail(str(exc), 500)

    logger.exception("Unhandled error on %s %s", request.method, request.path)
    if current_app.config.get("DEBUG"):
        return fail(str(exc), 500)
    return fail("Internal server error", 500)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def make_admin_required(get_key: Callable[[], str]):
    """Build a view decorator that checks the X-Admin-Key header."""

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            expected = get_key() or ""
            if not expected:
                logger.error("ADMIN_API_KEY is not configured")
                return fail("Server configuration error", 500)
            provided = request.headers.get(ADMIN_KEY_HEADER, "")
            if not secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
                return fail("Unauthorized", 401)
            return view(*args, **kwargs)

        return wrapper

    return admin_required
