from __future__ import annotations

from flask import Flask, g

from ..common.responses import created, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.auth_service

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        result = service.login(data.get("username"), data.get("password"))
        return ok(result, "Login berhasil")

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        return created(service.register(json_body()), "User berhasil didaftarkan")

    @app.route("/api/auth/profile", methods=["GET"], endpoint="auth_profile")
    def auth_profile():
        return ok(service.profile(g.current_user))

    @app.route("/api/auth/profile", methods=["PUT"], endpoint="auth_profile_update")
    def auth_profile_update():
        return ok(service.update_profile(g.current_user, json_body()), "Profil berhasil diupdate")
