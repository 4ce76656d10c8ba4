from __future__ import annotations

from flask import Flask, request, send_file

from ..common.responses import created, json_body, ok
from ..common.validators import optional_int, optional_str
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    def students_list():
        rows = service.list_all(
            kelas_id=optional_int(request.args.get("kelas_id"), "Kelas"),
            search=optional_str(request.args.get("search")),
        )
        return ok(rows)

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    def students_create():
        student = service.create(json_body())
        return created(student, "Siswa berhasil ditambahkan")

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="students_get")
    def students_get(student_id: int):
        return ok(service.get(student_id))

    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="students_update")
    def students_update(student_id: int):
        student = service.update(student_id, json_body())
        return ok(student, "Siswa berhasil diupdate")

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="students_delete")
    def students_delete(student_id: int):
        service.delete(student_id)
        return ok(message="Siswa berhasil dihapus")

    @app.route("/api/students/<int:student_id>/qrcode", methods=["GET"], endpoint="students_qrcode")
    def students_qrcode(student_id: int):
        png, filename = service.qrcode_png(student_id)
        return send_file(png, mimetype="image/png", download_name=filename)
