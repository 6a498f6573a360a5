from __future__ import annotations

from functools import wraps

from flask import Flask, current_app, g, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError
from ..users.model import SessionUser

CONTAINER_KEY = "timesheet_tracker"


def store_session_user(user: SessionUser) -> None:
    # Only the id is kept; role and rate are re-read on every request.
    session["user_id"] = user.user_id


def current_user() -> SessionUser:
    """The logged-in account as stored now, so role or rate changes apply at once."""
    if "current_user" in g:
        return g.current_user

    user_id = session.get("user_id")
    if user_id is None:
        raise AuthenticationError("Not authenticated")

    users_repo = current_app.extensions[CONTAINER_KEY].users_repo
    user = users_repo.get_by_id(int(user_id))
    if user is None:
        session.clear()
        raise AuthenticationError("Not authenticated")

    g.current_user = SessionUser(
        user_id=user.user_id,
        username=user.username,
        role=user.role,
        hourly_rate=user.hourly_rate,
    )
    return g.current_user


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_user()
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_user().is_admin:
            raise AuthorizationError("Not authorized to access this resource")
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"message": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        current_app.logger.exception("Unhandled error: %s", e)
        return jsonify({"message": "Server error"}), 500
