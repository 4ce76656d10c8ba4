from __future__ import annotations

from flask import Flask

from ..common.responses import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.settings_service

    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    def settings_get():
        return ok(service.current())

    @app.route("/api/settings", methods=["PUT"], endpoint="settings_update")
    def settings_update():
        return ok(service.update(json_body()), "Pengaturan berhasil disimpan")

    @app.route("/api/settings/reset", methods=["POST"], endpoint="settings_reset")
    def settings_reset():
        return ok(service.reset(), "Pengaturan dikembalikan ke default")
