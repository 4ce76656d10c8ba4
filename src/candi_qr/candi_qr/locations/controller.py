from __future__ import annotations

from flask import Flask

from ..common.responses import created, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.location_service

    @app.route("/api/locations", methods=["GET"], endpoint="locations_list")
    def locations_list():
        return ok(service.list_all())

    @app.route("/api/locations", methods=["POST"], endpoint="locations_create")
    def locations_create():
        return created(service.create(json_body()), "Lokasi berhasil ditambahkan")

    @app.route("/api/locations/<int:location_id>", methods=["PUT"], endpoint="locations_update")
    def locations_update(location_id: int):
        return ok(service.update(location_id, json_body()), "Lokasi berhasil diupdate")

    @app.route("/api/locations/<int:location_id>", methods=["DELETE"], endpoint="locations_delete")
    def locations_delete(location_id: int):
        service.delete(location_id)
        return ok(message="Lokasi berhasil dihapus")
