from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import Clock, SystemClock
from ..common.validators import require_coordinates, require_int_in_range
from ..core.constants import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_SUMMARY_DAYS,
    MAX_HISTORY_LIMIT,
    MAX_SUMMARY_DAYS,
    MIN_SUMMARY_DAYS,
    OTHERS_LOCATION_TYPE,
)
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeDirectory
from ..geo.verifier import GeoPoint, GeoVerifier
from ..locations.repository import LocationDirectory
from .model import AttendanceResult, AttendanceSession, AttendanceStatusView, DailySummary
from .repository import AttendanceRepository
from .session_manager import AttendanceSessionManager
from .summary import DailySummaryAggregator, build_daily_summary

logger = logging.getLogger(__name__)


def is_others_location(location_type: Optional[str]) -> bool:
    return bool(location_type) and location_type.strip().lower() == OTHERS_LOCATION_TYPE


def stored_location_code(location_code: Optional[str], location_type: Optional[str]) -> Optional[str]:
    """Free-text "others" codes are kept as typed; blank known-site codes become NULL."""
    if is_others_location(location_type) or location_code is None:
        return location_code
    return location_code if location_code.strip() else None


class AttendanceService:
    """Use cases: check-in, check-out, status, summary and history.

    Input is validated before any repository call, so a rejected request
    never leaves a partial write behind.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        locations: LocationDirectory,
        *,
        clock: Clock | None = None,
        geo: GeoVerifier | None = None,
    ):
        self._employees = employees
        self._locations = locations
        self._clock = clock or SystemClock()
        self._geo = geo or GeoVerifier()
        self._attendance = attendance
        self._sessions = AttendanceSessionManager(attendance, clock=self._clock)
        self._summaries = DailySummaryAggregator(attendance, clock=self._clock)

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise NotFoundError("Employee not found")
        return employee

    def _verify_location(
        self, employee: Employee, point: GeoPoint, location_id: Optional[int]
    ) -> tuple[bool, Optional[float]]:
        """Geofence check against the explicit or assigned location.

        Never raises for a bad location: the check-in goes through unverified.
        """

        location_ref = location_id if location_id is not None else employee.assigned_location_id
        if location_ref is None:
            return False, None

        location = self._locations.get_by_id(location_ref)
        if location is None or not location.is_active:
            logger.warning(
                "Employee %s checked in against unknown or inactive location %s",
                employee.employee_id,
                location_ref,
            )
            return False, None

        distance = self._geo.distance_meters(point, location.center)
        verified = self._geo.is_within_radius(point, location.center, location.radius_meters)
        logger.debug(
            "Geofence for employee %s at location %s: %.1f m (radius %.0f m) verified=%s",
            employee.employee_id,
            location.location_id,
            distance,
            location.radius_meters,
            verified,
        )
        return verified, distance

    def check_in(
        self,
        employee_id: int,
        point: GeoPoint,
        *,
        location_id: Optional[int] = None,
        location_code: Optional[str] = None,
        location_type: Optional[str] = None,
    ) -> AttendanceResult:
        point = require_coordinates(point.latitude, point.longitude)
        employee = self._require_employee(employee_id)

        if is_others_location(location_type):
            verified, distance = False, None
        else:
            verified, distance = self._verify_location(employee, point, location_id)

        session = self._sessions.open_session(
            employee.employee_id,
            point,
            location_verified=verified,
            location_code=stored_location_code(location_code, location_type),
        )
        logger.info(
            "Employee %s checked in (session %s, verified=%s)",
            employee.employee_id,
            session.session_id,
            verified,
        )
        return AttendanceResult(
            session=session,
            daily_summary=self._summaries.summarize(employee.employee_id, session.attendance_date),
            distance_meters=distance,
        )

    def check_out(
        self,
        employee_id: int,
        point: GeoPoint,
        *,
        location_code: Optional[str] = None,
        location_type: Optional[str] = None,
    ) -> AttendanceResult:
        # Geofence is only checked at check-in; location_type is bookkeeping here.
        point = require_coordinates(point.latitude, point.longitude)
        employee = self._require_employee(employee_id)

        session = self._sessions.close_session(
            employee.employee_id,
            point,
            location_code=stored_location_code(location_code, location_type),
        )
        logger.info(
            "Employee %s checked out (session %s, type=%s)",
            employee.employee_id,
            session.session_id,
            location_type or "-",
        )
        return AttendanceResult(
            session=session,
            daily_summary=self._summaries.summarize(employee.employee_id, session.attendance_date),
        )

    def status(self, employee_id: int) -> AttendanceStatusView:
        employee = self._require_employee(employee_id)
        today = self._clock.now().date()

        current = self._sessions.find_open_session(employee.employee_id)
        today_sessions = list(self._attendance.list_for_employee_and_date(employee.employee_id, today))
        return AttendanceStatusView(
            is_checked_in=current is not None,
            current_session=current,
            today_sessions=today_sessions,
            daily_summary=build_daily_summary(today, today_sessions),
        )

    def summary(self, employee_id: int, num_days: object = DEFAULT_SUMMARY_DAYS) -> list[DailySummary]:
        num_days = require_int_in_range(num_days, "days", minimum=MIN_SUMMARY_DAYS, maximum=MAX_SUMMARY_DAYS)
        employee = self._require_employee(employee_id)
        return self._summaries.summarize_range(employee.employee_id, num_days)

    def history(self, employee_id: int, limit: object = DEFAULT_HISTORY_LIMIT) -> list[AttendanceSession]:
        limit = require_int_in_range(limit, "limit", minimum=1, maximum=MAX_HISTORY_LIMIT)
        employee = self._require_employee(employee_id)
        return list(self._attendance.get_recent_for_employee(employee.employee_id, limit))
