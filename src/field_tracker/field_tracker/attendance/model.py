from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import SessionStatus


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one check-in/check-out pair.

    Open while ``check_out_time`` is None. ``attendance_date`` is the business
    day fixed at check-in; a session left open overnight keeps its date.
    """

    session_id: int
    employee_id: int
    attendance_date: date
    check_in_time: datetime
    check_in_latitude: float
    check_in_longitude: float
    location_verified: bool = False
    check_in_location_code: Optional[str] = None
    check_out_time: Optional[datetime] = None
    check_out_latitude: Optional[float] = None
    check_out_longitude: Optional[float] = None
    check_out_location_code: Optional[str] = None
    total_hours: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None

    @property
    def status(self) -> SessionStatus:
        return SessionStatus.ONGOING if self.is_open else SessionStatus.COMPLETED


@dataclass(frozen=True)
class DailySummary:
    """Read-model: per-day rollup, always derived from session rows."""

    attendance_date: date
    total_sessions: int = 0
    completed_sessions: int = 0
    ongoing_sessions: int = 0
    total_hours_worked: float = 0.0
    first_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceResult:
    """Outcome of a check-in or check-out."""

    session: AttendanceSession
    daily_summary: DailySummary
    distance_meters: Optional[float] = None


@dataclass(frozen=True)
class AttendanceStatusView:
    is_checked_in: bool
    current_session: Optional[AttendanceSession]
    daily_summary: DailySummary
    today_sessions: list[AttendanceSession] = field(default_factory=list)
