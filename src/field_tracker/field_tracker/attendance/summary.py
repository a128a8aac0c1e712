from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable

from ..common.datetime_utils import Clock, SystemClock
from ..common.validators import require_int_in_range
from ..core.constants import MAX_SUMMARY_DAYS, MIN_SUMMARY_DAYS
from .model import AttendanceSession, DailySummary
from .repository import AttendanceRepository


def build_daily_summary(attendance_date: date, sessions: Iterable[AttendanceSession]) -> DailySummary:
    """Fold the sessions of one day into a DailySummary.

    Sessions dated differently are ignored; an empty day yields zero counts.
    """

    total = completed = 0
    hours = 0.0
    first_in = None
    last_out = None

    for s in sessions:
        if s.attendance_date != attendance_date:
            continue
        total += 1
        if first_in is None or s.check_in_time < first_in:
            first_in = s.check_in_time
        if s.is_open:
            continue
        completed += 1
        hours += s.total_hours or 0.0
        if last_out is None or s.check_out_time > last_out:
            last_out = s.check_out_time

    return DailySummary(
        attendance_date=attendance_date,
        total_sessions=total,
        completed_sessions=completed,
        ongoing_sessions=total - completed,
        total_hours_worked=round(hours, 2),
        first_check_in=first_in,
        last_check_out=last_out,
    )


class DailySummaryAggregator:
    def __init__(self, attendance: AttendanceRepository, *, clock: Clock | None = None):
        self._attendance = attendance
        self._clock = clock or SystemClock()

    def summarize(self, employee_id: int, attendance_date: date) -> DailySummary:
        sessions = self._attendance.list_for_employee_and_date(employee_id, attendance_date)
        return build_daily_summary(attendance_date, sessions)

    def summarize_range(self, employee_id: int, num_days: int) -> list[DailySummary]:
        """Per-day summaries for the last ``num_days`` days including today.

        Most recent first; days without sessions are left out.
        """

        num_days = require_int_in_range(num_days, "days", minimum=MIN_SUMMARY_DAYS, maximum=MAX_SUMMARY_DAYS)
        today = self._clock.now().date()
        start = today - timedelta(days=num_days - 1)

        by_date: dict[date, list[AttendanceSession]] = defaultdict(list)
        for s in self._attendance.list_for_employee_between(employee_id, start_date=start, end_date=today):
            if start <= s.attendance_date <= today:
                by_date[s.attendance_date].append(s)

        return [build_daily_summary(d, by_date[d]) for d in sorted(by_date, reverse=True)]
