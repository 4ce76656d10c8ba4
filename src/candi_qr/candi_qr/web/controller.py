from __future__ import annotations

from datetime import timedelta

from flask import Flask, current_app, redirect, render_template, request

from ..container import Container
from ..core.constants import DEFAULT_COOKIE_DAYS, TOKEN_COOKIE_NAME
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DomainError

# Post-login landing page per role.
ROLE_HOME = {
    Role.ADMIN: "/admin/dashboard",
    Role.TEACHER: "/guru/dashboard",
    Role.STUDENT: "/siswa/dashboard",
    Role.OPERATOR: "/operator/dashboard",
    Role.PARENT: "/parent/dashboard",
}

SECTION_ROLE = {path.split("/")[1]: role for role, path in ROLE_HOME.items()}


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    def _logged_out():
        resp = redirect("/login")
        resp.delete_cookie(TOKEN_COOKIE_NAME)
        return resp

    @app.route("/", methods=["GET"], endpoint="web_index")
    def web_index():
        return redirect("/login")

    @app.route("/login", methods=["GET", "POST"], endpoint="web_login")
    def web_login():
        if request.method == "GET":
            return render_template("login.html")

        username = request.form.get("username", "")
        password = request.form.get("password", "")
        try:
            result = auth.login(username, password)
        except DomainError as e:
            return render_template("login.html", error=str(e), username=username), e.http_status

        role = Role(result["user"]["role"])
        days = int(current_app.config.get("TOKEN_COOKIE_DAYS", DEFAULT_COOKIE_DAYS))
        resp = redirect(ROLE_HOME[role])
        resp.set_cookie(
            TOKEN_COOKIE_NAME,
            result["token"],
            max_age=int(timedelta(days=days).total_seconds()),
            httponly=True,
            samesite="Lax",
            secure=not current_app.config.get("DEBUG", False) and not current_app.testing,
        )
        return resp

    @app.route("/logout", methods=["GET"], endpoint="web_logout")
    def web_logout():
        return _logged_out()

    @app.route("/<section>/dashboard", methods=["GET"], endpoint="web_dashboard")
    def web_dashboard(section: str):
        expected = SECTION_ROLE.get(section)
        if expected is None:
            return render_template("unauthorized.html"), 404

        token = request.cookies.get(TOKEN_COOKIE_NAME)
        if not token:
            return redirect("/login")
        try:
            user = auth.authenticate_token(token)
        except AuthenticationError:
            return _logged_out()

        if user.role != expected:
            return redirect("/unauthorized")
        return render_template("dashboard.html", user=user, section=section)

    @app.route("/unauthorized", methods=["GET"], endpoint="web_unauthorized")
    def web_unauthorized():
        return render_template("unauthorized.html"), 403
