from __future__ import annotations

from flask import Flask, g, request

from ..common.responses import created, json_body, ok
from ..common.validators import optional_int, optional_str
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    @app.route("/api/schedules", methods=["GET"], endpoint="schedules_list")
    def schedules_list():
        rows = service.list_for(
            g.current_user,
            kelas_id=optional_int(request.args.get("kelas_id"), "Kelas"),
            guru_id=optional_int(request.args.get("guru_id"), "Guru"),
            mata_pelajaran_id=optional_int(request.args.get("mata_pelajaran_id"), "Mata pelajaran"),
            hari=optional_str(request.args.get("hari")),
            search=optional_str(request.args.get("search")),
        )
        return ok(rows)

    @app.route("/api/schedules", methods=["POST"], endpoint="schedules_create")
    def schedules_create():
        return created(service.create(json_body()), "Jadwal berhasil dibuat")

    @app.route("/api/schedules/<int:schedule_id>", methods=["GET"], endpoint="schedules_get")
    def schedules_get(schedule_id: int):
        return ok(service.get(schedule_id))

    @app.route("/api/schedules/<int:schedule_id>", methods=["PUT"], endpoint="schedules_update")
    def schedules_update(schedule_id: int):
        return ok(service.update(schedule_id, json_body()), "Jadwal berhasil diperbarui")

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="schedules_delete")
    def schedules_delete(schedule_id: int):
        service.delete(schedule_id)
        return ok(message="Jadwal berhasil dihapus")
