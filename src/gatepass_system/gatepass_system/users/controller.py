from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        return jsonify({"success": True, "user": user.public_view()})

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    def admin_users():
        return jsonify({"users": container.user_service.list_users()})
