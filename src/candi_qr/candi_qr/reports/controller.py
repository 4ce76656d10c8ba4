from __future__ import annotations

import csv
import io
from datetime import timedelta

from flask import Flask, g, request

from ..common.datetime_utils import month_start, now_local
from ..common.responses import ok
from ..common.validators import optional_date, optional_int, optional_str, require_choice
from ..container import Container
from ..core.enums import AttendanceType
from .service import EXPORT_FIELDS, ExportData


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _range_args(default_days: int = 30):
        today = now_local().date()
        start = optional_date(request.args.get("start_date"), "Tanggal mulai") or today - timedelta(days=default_days)
        end = optional_date(request.args.get("end_date"), "Tanggal akhir") or today
        raw_type = optional_str(request.args.get("type"))
        return {
            "start_date": start,
            "end_date": end,
            "kelas_id": optional_int(request.args.get("kelas_id"), "Kelas"),
            "attendance_type": require_choice(raw_type, "Tipe absensi", AttendanceType) if raw_type else None,
        }

    def _write_report_csv(*, data: ExportData, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="reports_dashboard")
    def reports_dashboard():
        return ok(service.dashboard(g.current_user, today=now_local().date()))

    @app.route("/api/reports/stats", methods=["GET"], endpoint="reports_stats")
    def reports_stats():
        return ok(service.stats(**_range_args()))

    @app.route("/api/reports/export", methods=["GET"], endpoint="reports_export")
    def reports_export():
        args = _range_args()
        if not request.args.get("start_date"):
            args["start_date"] = month_start(args["end_date"])
        data = service.export_rows(**args)
        filename = f"laporan_absensi_{data.start.strftime('%Y%m%d')}_{data.end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(data=data, filename=filename)
