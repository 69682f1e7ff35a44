"""Shared pieces of the JSON API: response envelope, auth decorator, error handlers."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.authorization import authorize
from ..core.enums import Permission
from ..core.exceptions import AuthenticationError, DomainError, ValidationError

logger = logging.getLogger(__name__)


def ok(payload: Optional[dict] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_user_id() -> int:
    if "user_id" not in session:
        raise AuthenticationError("Not authorized")
    return int(session["user_id"])


def current_emp_id() -> int:
    emp_id = session.get("emp_id")
    if not emp_id:
        raise ValidationError("No employee record is linked to this account")
    return int(emp_id)


def requires(permission: Permission):
    """Route decorator: login required, then a single permission check."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise AuthenticationError("Not authorized")
            authorize(session.get("role"), permission)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Not authorized")
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        logger.info("%s %s -> %s: %s", request.method, request.path, type(err).__name__, err)
        return fail(str(err), err.status_code)

    @app.errorhandler(404)
    def handle_not_found(_err):
        return fail("Resource not found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(_err):
        return fail("Method not allowed", 405)

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        if isinstance(err, HTTPException):
            return fail(err.description or err.name, err.code or 500)
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return fail(f"Server error: {err}", 500)
        return fail("Server error", 500)
