from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_role, json_body, login_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(str(data.get("username", "")), str(data.get("password", "")))

        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        logger.info("user %s logged in", s_user.user_id)
        return jsonify({"success": True, "user_id": s_user.user_id, "full_name": s_user.full_name, "role": s_user.role.value})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Đã đăng xuất hệ thống."})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"user_id": session["user_id"], "full_name": session.get("name"), "role": session.get("role")})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users():
        return jsonify(container.user_service.list_users())

    @app.route("/api/users", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        data = json_body()
        try:
            role = Role(str(data.get("role", Role.STAFF.value)))
        except ValueError:
            raise ValidationError("Loại tài khoản không hợp lệ")

        user_id = container.user_service.create_account(
            current_role=current_role(),
            full_name=str(data.get("full_name", "")),
            username=str(data.get("username", "")),
            password=str(data.get("password", "")),
            role=role,
            phone_number=data.get("phone_number"),
        )
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        container.user_service.delete_user(current_role=current_role(), user_id=user_id)
        return jsonify({"success": True, "message": "Đã xóa nhân viên."})
