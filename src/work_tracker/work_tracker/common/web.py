from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(session_service):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session_service.is_authenticated():
                return error_response("Please log in to continue", 401)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def admin_required(session_service):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session_service.is_authenticated():
                return error_response("Please log in to continue", 401)

            user = session_service.get_current_user()
            if not user or not user.is_admin:
                return error_response("Admin access required", 403)

            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return error_response(str(e), status)
        return error_response(str(e), 400)

    @app.errorhandler(500)
    def handle_internal_error(e):
        original = getattr(e, "original_exception", None) or e
        logger.exception("Unhandled error", exc_info=original)
        if app.config.get("DEBUG", False):
            return error_response(f"Internal error: {original}", 500)
        return error_response("Internal error", 500)
