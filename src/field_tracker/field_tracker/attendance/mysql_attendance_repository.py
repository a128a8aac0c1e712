from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import AttendanceSession
from .repository import AttendanceRepository

_COLUMNS = """
    id, employee_id, attendance_date,
    check_in_time, check_in_latitude, check_in_longitude, check_in_location_code,
    check_out_time, check_out_latitude, check_out_longitude, check_out_location_code,
    location_verified, total_hours
"""


def _to_session(r: Dict[str, Any]) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        attendance_date=r["attendance_date"],
        check_in_time=r["check_in_time"],
        check_in_latitude=as_float(r["check_in_latitude"]),
        check_in_longitude=as_float(r["check_in_longitude"]),
        location_verified=bool(r.get("location_verified")),
        check_in_location_code=r.get("check_in_location_code"),
        check_out_time=r.get("check_out_time"),
        check_out_latitude=as_float(r.get("check_out_latitude")),
        check_out_longitude=as_float(r.get("check_out_longitude")),
        check_out_location_code=r.get("check_out_location_code"),
        total_hours=as_float(r.get("total_hours")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest_open_for_employee(self, employee_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s AND check_out_time IS NULL
                ORDER BY check_in_time DESC, id DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s AND attendance_date=%s
                ORDER BY check_in_time DESC, id DESC
                """,
                (int(employee_id), attendance_date),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_for_employee_between(
        self,
        employee_id: int,
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s AND attendance_date BETWEEN %s AND %s
                ORDER BY attendance_date DESC, check_in_time DESC, id DESC
                """,
                (int(employee_id), start_date, end_date),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s
                ORDER BY attendance_date DESC, check_in_time DESC, id DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def create_session(
        self,
        *,
        employee_id: int,
        attendance_date: date,
        check_in_time: datetime,
        latitude: float,
        longitude: float,
        location_verified: bool,
        location_code: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(
                        employee_id, attendance_date, check_in_time,
                        check_in_latitude, check_in_longitude,
                        location_verified, check_in_location_code
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        attendance_date,
                        check_in_time,
                        latitude,
                        longitude,
                        1 if location_verified else 0,
                        location_code,
                    ),
                )
                return int(cur.lastrowid)
        except ConflictError as e:
            # uq_attendance_one_open_session: a concurrent check-in won the race.
            raise ConflictError("Employee already has an open session") from e

    def close_session(
        self,
        *,
        session_id: int,
        check_out_time: datetime,
        latitude: float,
        longitude: float,
        total_hours: float,
        location_code: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s,
                    check_out_latitude=%s,
                    check_out_longitude=%s,
                    check_out_location_code=%s,
                    total_hours=%s
                WHERE id=%s AND check_out_time IS NULL
                """,
                (check_out_time, latitude, longitude, location_code, total_hours, int(session_id)),
            )
            return cur.rowcount > 0
