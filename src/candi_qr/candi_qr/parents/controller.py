from __future__ import annotations

from flask import Flask, g, request

from ..common.responses import created, json_body, ok
from ..common.validators import optional_date, optional_str, require_choice
from ..container import Container
from ..core.enums import AttendanceType


def register(app: Flask, container: Container) -> None:
    service = container.parent_service

    @app.route("/api/parents", methods=["GET"], endpoint="parents_list")
    def parents_list():
        return ok(service.list_all(search=optional_str(request.args.get("search"))))

    @app.route("/api/parents", methods=["POST"], endpoint="parents_create")
    def parents_create():
        return created(service.create(json_body()), "Orang tua berhasil ditambahkan")

    @app.route("/api/parents/<int:parent_id>", methods=["GET"], endpoint="parents_get")
    def parents_get(parent_id: int):
        return ok(service.get(parent_id))

    @app.route("/api/parents/<int:parent_id>", methods=["PUT"], endpoint="parents_update")
    def parents_update(parent_id: int):
        return ok(service.update(parent_id, json_body()), "Orang tua berhasil diupdate")

    @app.route("/api/parents/<int:parent_id>", methods=["DELETE"], endpoint="parents_delete")
    def parents_delete(parent_id: int):
        service.delete(parent_id)
        return ok(message="Orang tua berhasil dihapus")

    @app.route("/api/parents/children", methods=["GET"], endpoint="parents_children")
    def parents_children():
        return ok(service.children(g.current_user))

    @app.route("/api/parents/children/<int:siswa_id>/attendance", methods=["GET"], endpoint="parents_child_attendance")
    def parents_child_attendance(siswa_id: int):
        rows = service.child_attendance(
            g.current_user,
            siswa_id,
            start_date=optional_date(request.args.get("start_date"), "Tanggal mulai"),
            end_date=optional_date(request.args.get("end_date"), "Tanggal akhir"),
            attendance_type=require_choice(request.args.get("type") or "sekolah", "Tipe", AttendanceType),
        )
        return ok(rows)

    @app.route("/api/parents/children/<int:siswa_id>/stats", methods=["GET"], endpoint="parents_child_stats")
    def parents_child_stats(siswa_id: int):
        stats = service.child_stats(
            g.current_user,
            siswa_id,
            start_date=optional_date(request.args.get("start_date"), "Tanggal mulai"),
            end_date=optional_date(request.args.get("end_date"), "Tanggal akhir"),
        )
        return ok(stats)
