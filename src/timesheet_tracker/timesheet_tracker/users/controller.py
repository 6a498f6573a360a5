from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, current_user, login_required, store_session_user
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = request.get_json(silent=True) or {}
        s_user = container.auth_service.authenticate(body.get("username", ""), body.get("password", ""))

        session.clear()
        session.permanent = True
        app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", 1)))
        store_session_user(s_user)

        app.logger.info("User %r logged in", s_user.username)
        return jsonify({"user": s_user.to_public()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", endpoint="me")
    @login_required
    def me():
        return jsonify({"user": current_user().to_public()})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        users = container.user_service.list_users(current_role=current_user().role)
        return jsonify([u.to_public() for u in users])

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="get_user")
    @login_required
    def get_user(user_id: int):
        user = container.user_service.get_user(current_user=current_user(), user_id=user_id)
        return jsonify(user.to_public())

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_required
    def create_user():
        body = request.get_json(silent=True) or {}
        user = container.user_service.create_user(
            current_role=current_user().role,
            username=body.get("username"),
            password=body.get("password"),
            role=body.get("role"),
            hourly_rate=body.get("hourly_rate", body.get("hourlyRate")),
        )
        return jsonify(user.to_public()), 201

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @admin_required
    def update_user(user_id: int):
        body = request.get_json(silent=True) or {}
        user = container.user_service.update_user(
            current_role=current_user().role,
            user_id=user_id,
            username=body.get("username"),
            role=body.get("role"),
            hourly_rate=body.get("hourly_rate", body.get("hourlyRate")),
            password=body.get("password") or None,
        )
        return jsonify(user.to_public())

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        container.user_service.delete_user(current_role=current_user().role, user_id=user_id)
        return jsonify({"message": "User deleted successfully"})
