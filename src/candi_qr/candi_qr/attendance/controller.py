from __future__ import annotations

from datetime import timedelta

from flask import Flask, g, request

from ..common.datetime_utils import now_local
from ..common.responses import json_body, ok
from ..common.validators import optional_date, optional_int, optional_str, require_choice
from ..container import Container
from ..core.enums import AttendanceStatus, AttendanceType
from .service import ScanRequest


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _type_arg():
        raw = optional_str(request.args.get("type"))
        return require_choice(raw, "Tipe absensi", AttendanceType) if raw else None

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="attendance_scan")
    def attendance_scan():
        result = service.scan(ScanRequest.from_payload(json_body()))
        return ok(result.as_dict(), result.message)

    @app.route("/api/yolo/attendance", methods=["POST"], endpoint="yolo_attendance")
    def yolo_attendance():
        result = service.scan(ScanRequest.from_payload(json_body(), geolocated=True))
        return ok(result.as_dict(), result.message)

    @app.route("/api/yolo/locations", methods=["GET"], endpoint="yolo_locations")
    def yolo_locations():
        return ok(service.active_locations())

    @app.route("/api/yolo/statuses", methods=["GET"], endpoint="yolo_statuses")
    def yolo_statuses():
        return ok(service.statuses())

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        rows = service.history(
            g.current_user,
            siswa_id=optional_int(request.args.get("siswa_id"), "Siswa"),
            start_date=optional_date(request.args.get("start_date"), "Tanggal mulai"),
            end_date=optional_date(request.args.get("end_date"), "Tanggal akhir"),
            attendance_type=_type_arg(),
        )
        return ok(rows)

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        raw_status = optional_str(request.args.get("status"))
        rows = service.list_for(
            g.current_user,
            tanggal=optional_date(request.args.get("tanggal"), "Tanggal"),
            kelas_id=optional_int(request.args.get("kelas_id"), "Kelas"),
            status=require_choice(raw_status, "Status", AttendanceStatus) if raw_status else None,
            attendance_type=_type_arg(),
        )
        return ok(rows)

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        today = now_local().date()
        rows = service.report(
            start_date=optional_date(request.args.get("start_date"), "Tanggal mulai") or today - timedelta(days=30),
            end_date=optional_date(request.args.get("end_date"), "Tanggal akhir") or today,
            kelas_id=optional_int(request.args.get("kelas_id"), "Kelas"),
            attendance_type=_type_arg(),
        )
        return ok(rows)

    @app.route("/api/attendance/<int:record_id>", methods=["PUT"], endpoint="attendance_correct")
    def attendance_correct(record_id: int):
        record = service.correct(record_id, json_body())
        return ok(record, "Status absensi berhasil diperbarui")
