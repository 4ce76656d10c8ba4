from __future__ import annotations

from flask import Flask, request

from ..common.responses import created, json_body, ok
from ..common.validators import optional_str
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.class_service

    @app.route("/api/classes", methods=["GET"], endpoint="classes_list")
    def classes_list():
        rows = service.list_all(
            tingkat=optional_str(request.args.get("tingkat")),
            search=optional_str(request.args.get("search")),
        )
        return ok(rows)

    @app.route("/api/classes", methods=["POST"], endpoint="classes_create")
    def classes_create():
        return created(service.create(json_body()), "Kelas berhasil dibuat")

    @app.route("/api/classes/<int:class_id>", methods=["GET"], endpoint="classes_get")
    def classes_get(class_id: int):
        return ok(service.get(class_id))

    @app.route("/api/classes/<int:class_id>", methods=["PUT"], endpoint="classes_update")
    def classes_update(class_id: int):
        return ok(service.update(class_id, json_body()), "Kelas berhasil diperbarui")

    @app.route("/api/classes/<int:class_id>", methods=["DELETE"], endpoint="classes_delete")
    def classes_delete(class_id: int):
        service.delete(class_id)
        return ok(message="Kelas berhasil dihapus")

    @app.route("/api/classes/<int:class_id>/students", methods=["GET"], endpoint="classes_students")
    def classes_students(class_id: int):
        return ok(service.students_of(class_id))
