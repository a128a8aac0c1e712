from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceSession


class AttendanceRepository(Protocol):
    """Record store for attendance sessions.

    Implementations must refuse a second open session for the same employee
    by raising ``ConflictError`` from ``create_session``.
    """

    def get_latest_open_for_employee(self, employee_id: int) -> Optional[AttendanceSession]:
        """Open session with the latest check-in time, across all dates."""

        raise NotImplementedError

    def list_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Sequence[AttendanceSession]:
        """Sessions of one business day, most recent check-in first."""

        raise NotImplementedError

    def list_for_employee_between(
        self,
        employee_id: int,
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceSession]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        """Close the session if it is still open; False when it was not."""

        raise NotImplementedError
