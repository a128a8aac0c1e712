from __future__ import annotations

from flask import Flask

from ..common.http import parse_json_body, success
from ..container import Container
from .schemas import LoginRequest


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        body = parse_json_body(LoginRequest)
        profile = container.auth_service.login(body.employee_id, body.pin_code)
        return success(
            {
                "employee_id": profile.employee_id,
                "name": profile.name,
                "email": profile.email,
            },
            message="Login successful",
        )
