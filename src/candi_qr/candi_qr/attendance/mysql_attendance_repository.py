from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..common.datetime_utils import month_start
from ..core.enums import AttendanceStatus, AttendanceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, normalize_mysql_time
from .model import AttendanceFilter, AttendanceRecord, NewCheckIn
from .repository import AttendanceRepository

_SELECT = """
    SELECT
        a.id, a.siswa_id, a.tanggal, a.attendance_type, a.jadwal_id, a.jam_masuk, a.jam_pulang,
        a.status, a.latitude, a.longitude, a.latitude_pulang, a.longitude_pulang, a.keterangan,
        u.full_name AS nama_siswa, s.nis, k.nama_kelas, mp.nama_pelajaran
    FROM attendance_records a
    JOIN siswa s ON s.id = a.siswa_id
    JOIN users u ON u.id = s.user_id
    LEFT JOIN kelas k ON k.id = s.kelas_id
    LEFT JOIN jadwal j ON j.id = a.jadwal_id
    LEFT JOIN mata_pelajaran mp ON mp.id = j.mata_pelajaran_id
"""


def _float(value) -> Optional[float]:
    return float(value) if value is not None else None


def row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        siswa_id=int(r["siswa_id"]),
        tanggal=r["tanggal"],
        attendance_type=AttendanceType(r["attendance_type"]),
        jadwal_id=int(r.get("jadwal_id") or 0),
        status=AttendanceStatus(r["status"]),
        jam_masuk=normalize_mysql_time(r.get("jam_masuk")),
        jam_pulang=normalize_mysql_time(r.get("jam_pulang")),
        latitude=_float(r.get("latitude")),
        longitude=_float(r.get("longitude")),
        latitude_pulang=_float(r.get("latitude_pulang")),
        longitude_pulang=_float(r.get("longitude_pulang")),
        keterangan=r.get("keterangan"),
        nama_siswa=r.get("nama_siswa"),
        nis=r.get("nis"),
        nama_kelas=r.get("nama_kelas"),
        nama_pelajaran=r.get("nama_pelajaran"),
    )


def _where(flt: AttendanceFilter) -> tuple[str, list[object]]:
    clauses: list[str] = []
    params: list[object] = []
    if flt.siswa_id is not None:
        clauses.append("a.siswa_id=%s")
        params.append(int(flt.siswa_id))
    if flt.kelas_id is not None:
        clauses.append("s.kelas_id=%s")
        params.append(int(flt.kelas_id))
    if flt.kelas_ids is not None:
        if not flt.kelas_ids:
            clauses.append("1=0")
        else:
            clauses.append(f"s.kelas_id IN ({', '.join(['%s'] * len(flt.kelas_ids))})")
            params.extend(int(k) for k in flt.kelas_ids)
    if flt.tanggal is not None:
        clauses.append("a.tanggal=%s")
        params.append(flt.tanggal)
    if flt.start_date is not None:
        clauses.append("a.tanggal>=%s")
        params.append(flt.start_date)
    if flt.end_date is not None:
        clauses.append("a.tanggal<=%s")
        params.append(flt.end_date)
    if flt.status is not None:
        clauses.append("a.status=%s")
        params.append(flt.status.value)
    if flt.attendance_type is not None:
        clauses.append("a.attendance_type=%s")
        params.append(flt.attendance_type.value)

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_student(
        self, *, siswa_id: int, tanggal: date, attendance_type: AttendanceType, jadwal_id: int
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE a.siswa_id=%s AND a.tanggal=%s AND a.attendance_type=%s AND a.jadwal_id=%s
                """,
                (int(siswa_id), tanggal, attendance_type.value, int(jadwal_id)),
            )
            r = fetchone(cur)
            return row_to_record(r) if r else None

    def try_create_checkin(self, checkin: NewCheckIn) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(siswa_id, tanggal, attendance_type, jadwal_id, jam_masuk,
                                                   status, latitude, longitude, keterangan)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(checkin.siswa_id),
                        checkin.tanggal,
                        checkin.attendance_type.value,
                        int(checkin.jadwal_id),
                        checkin.jam_masuk,
                        checkin.status.value,
                        checkin.latitude,
                        checkin.longitude,
                        checkin.keterangan,
                    ),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                return None
            raise

    def try_record_checkout(
        self,
        record_id: int,
        *,
        jam_pulang: time,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET jam_pulang=%s, latitude_pulang=%s, longitude_pulang=%s
                WHERE id=%s AND jam_pulang IS NULL
                """,
                (jam_pulang, latitude, longitude, int(record_id)),
            )
            return cur.rowcount == 1

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.id=%s", (int(record_id),))
            r = fetchone(cur)
            return row_to_record(r) if r else None

    def correct_status(self, record_id: int, *, status: AttendanceStatus, keterangan: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET status=%s, keterangan=%s WHERE id=%s",
                (status.value, keterangan, int(record_id)),
            )
            return cur.rowcount > 0

    def list_records(self, flt: AttendanceFilter) -> Sequence[AttendanceRecord]:
        where, params = _where(flt)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} {where} ORDER BY a.tanggal DESC, a.jam_masuk DESC LIMIT %s",
                tuple(params) + (int(flt.limit),),
            )
            return [row_to_record(r) for r in fetchall(cur)]

    def count_by_status(self, flt: AttendanceFilter) -> dict:
        where, params = _where(flt)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.status, COUNT(*) AS total
                FROM attendance_records a
                JOIN siswa s ON s.id = a.siswa_id
                {where}
                GROUP BY a.status
                """,
                tuple(params),
            )
            return {r["status"]: int(r["total"]) for r in fetchall(cur)}

    def count_on(self, day: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM attendance_records WHERE tanggal=%s", (day,))
            return int((fetchone(cur) or {}).get("total") or 0)

    def count_in_month(self, day: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM attendance_records WHERE tanggal BETWEEN %s AND %s",
                (month_start(day), day),
            )
            return int((fetchone(cur) or {}).get("total") or 0)
