from __future__ import annotations

from flask import Flask, request

from ..common.responses import created, json_body, ok
from ..common.validators import optional_str
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.teacher_service

    @app.route("/api/teachers", methods=["GET"], endpoint="teachers_list")
    def teachers_list():
        return ok(service.list_all(search=optional_str(request.args.get("search"))))

    @app.route("/api/teachers", methods=["POST"], endpoint="teachers_create")
    def teachers_create():
        return created(service.create(json_body()), "Guru berhasil ditambahkan")

    @app.route("/api/teachers/<int:teacher_id>", methods=["GET"], endpoint="teachers_get")
    def teachers_get(teacher_id: int):
        return ok(service.get(teacher_id))

    @app.route("/api/teachers/<int:teacher_id>", methods=["PUT"], endpoint="teachers_update")
    def teachers_update(teacher_id: int):
        return ok(service.update(teacher_id, json_body()), "Guru berhasil diupdate")

    @app.route("/api/teachers/<int:teacher_id>", methods=["DELETE"], endpoint="teachers_delete")
    def teachers_delete(teacher_id: int):
        service.delete(teacher_id)
        return ok(message="Guru berhasil dihapus")
