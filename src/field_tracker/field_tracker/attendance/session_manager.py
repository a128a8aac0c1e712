"""Attendance session state machine.

Per employee: no session -> open -> closed. Closing is terminal for a
session; the next check-in always creates a new one. At most one session per
employee may be open at a time. The check here is check-then-act; the
record store backs it with a uniqueness constraint, so a lost race still ends
in ``ConflictError`` instead of a second open row.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import Clock, SystemClock, elapsed_hours
from ..core.exceptions import ConflictError
from ..geo.verifier import GeoPoint
from .model import AttendanceSession
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceSessionManager:
    def __init__(self, attendance: AttendanceRepository, *, clock: Clock | None = None):
        self._attendance = attendance
        self._clock = clock or SystemClock()

    def find_open_session(self, employee_id: int) -> Optional[AttendanceSession]:
        """Latest open session for the employee, whatever its date.

        Sessions are not closed automatically at midnight.
        """
        return self._attendance.get_latest_open_for_employee(employee_id)

    def open_session(
        self,
        employee_id: int,
        point: GeoPoint,
        *,
        location_verified: bool,
        location_code: Optional[str] = None,
    ) -> AttendanceSession:
        existing = self.find_open_session(employee_id)
        if existing is not None:
            raise ConflictError("Employee is already checked in. Please check out first.")

        now = self._clock.now()
        session_id = self._attendance.create_session(
            employee_id=employee_id,
            attendance_date=now.date(),
            check_in_time=now,
            latitude=point.latitude,
            longitude=point.longitude,
            location_verified=location_verified,
            location_code=location_code,
        )
        logger.info("Opened session %s for employee %s", session_id, employee_id)

        return AttendanceSession(
            session_id=session_id,
            employee_id=employee_id,
            attendance_date=now.date(),
            check_in_time=now,
            check_in_latitude=point.latitude,
            check_in_longitude=point.longitude,
            location_verified=location_verified,
            check_in_location_code=location_code,
        )

    def close_session(
        self,
        employee_id: int,
        point: GeoPoint,
        *,
        location_code: Optional[str] = None,
    ) -> AttendanceSession:
        current = self.find_open_session(employee_id)
        if current is None:
            raise ConflictError("Employee is not checked in. Please check in first.")

        now = self._clock.now()
        total_hours = elapsed_hours(current.check_in_time, now)

        closed = self._attendance.close_session(
            session_id=current.session_id,
            check_out_time=now,
            latitude=point.latitude,
            longitude=point.longitude,
            total_hours=total_hours,
            location_code=location_code,
        )
        if not closed:
            # Another request closed it between our read and the update.
            raise ConflictError("Employee is not checked in. Please check in first.")

        logger.info(
            "Closed session %s for employee %s (%.2f h)", current.session_id, employee_id, total_hours
        )
        return replace(
            current,
            check_out_time=now,
            check_out_latitude=point.latitude,
            check_out_longitude=point.longitude,
            check_out_location_code=location_code,
            total_hours=total_hours,
        )
