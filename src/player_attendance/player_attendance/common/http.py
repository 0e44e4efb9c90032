from __future__ import annotations

import hmac
import logging
from functools import wraps
from typing import Any

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.constants import ADMIN_PIN_HEADER
from ..core.exceptions import AdminRequiredError, DomainError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def check_admin_pin() -> None:
    """Shared-secret check against the x-admin-pin header.

    With no ADMIN_PIN configured every admin route is open.
    """
    expected = str(current_app.config.get("ADMIN_PIN") or "")
    if not expected:
        return
    supplied = request.headers.get(ADMIN_PIN_HEADER, "")
    if not supplied or not hmac.compare_digest(supplied.encode(), expected.encode()):
        raise AdminRequiredError("Admin PIN required")


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        check_admin_pin()
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(StorageError)
    def handle_storage_error(e: StorageError):
        logger.error("storage failure on %s %s: %s", request.method, request.path, e, exc_info=e)
        return jsonify({"error": "Internal server error"}), 500

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("unexpected domain failure on %s %s", request.method, request.path, exc_info=e)
            return jsonify({"error": "Internal server error"}), e.status_code
        logger.info("%s on %s %s: %s", type(e).__name__, request.method, request.path, e)
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500


def register_cors(app: Flask) -> None:
    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = str(app.config.get("CORS_ORIGIN") or "*")
        response.headers["Access-Control-Allow-Headers"] = f"Content-Type, {ADMIN_PIN_HEADER}"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
        return response
