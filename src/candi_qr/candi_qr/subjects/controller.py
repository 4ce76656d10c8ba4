from __future__ import annotations

from flask import Flask, request

from ..common.responses import created, json_body, ok
from ..common.validators import optional_str
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.subject_service

    @app.route("/api/subjects", methods=["GET"], endpoint="subjects_list")
    def subjects_list():
        return ok(service.list_all(search=optional_str(request.args.get("search"))))

    @app.route("/api/subjects", methods=["POST"], endpoint="subjects_create")
    def subjects_create():
        return created(service.create(json_body()), "Mata pelajaran berhasil dibuat")

    @app.route("/api/subjects/<int:subject_id>", methods=["GET"], endpoint="subjects_get")
    def subjects_get(subject_id: int):
        return ok(service.get(subject_id))

    @app.route("/api/subjects/<int:subject_id>", methods=["PUT"], endpoint="subjects_update")
    def subjects_update(subject_id: int):
        return ok(service.update(subject_id, json_body()), "Mata pelajaran berhasil diperbarui")

    @app.route("/api/subjects/<int:subject_id>", methods=["DELETE"], endpoint="subjects_delete")
    def subjects_delete(subject_id: int):
        service.delete(subject_id)
        return ok(message="Mata pelajaran berhasil dihapus")
