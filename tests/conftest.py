from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from field_tracker.attendance.model import AttendanceSession
from field_tracker.container import build_services
from field_tracker.core.exceptions import ConflictError
from field_tracker.employees.model import Employee
from field_tracker.locations.model import Location
from field_tracker.main import create_app


class FrozenClock:
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@dataclass
class InMemoryEmployees:
    employees: dict[int, Employee] = field(default_factory=dict)
    lookups: int = 0

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        self.lookups += 1
        return self.employees.get(employee_id)


@dataclass
class InMemoryLocations:
    locations: dict[int, Location] = field(default_factory=dict)
    lookups: list[int] = field(default_factory=list)

    def get_by_id(self, location_id: int) -> Optional[Location]:
        self.lookups.append(location_id)
        return self.locations.get(location_id)

    def search(self, *, location_code: str, location_type=None, exact: bool = False):
        needle = location_code.upper()
        out = []
        for loc in sorted(self.locations.values(), key=lambda l: (l.location_code or "", l.location_id)):
            if not loc.is_active or not loc.location_code:
                continue
            code = loc.location_code.upper()
            if (code != needle) if exact else (needle not in code):
                continue
            if location_type and (loc.location_type or "").upper() != location_type.upper():
                continue
            out.append(loc)
        return out


class InMemoryAttendance:
    """Mimics the MySQL table, including the one-open-session unique key."""

    def __init__(self):
        self.rows: dict[int, AttendanceSession] = {}
        self._id = 0
        self.writes = 0

    def add(self, session: AttendanceSession) -> AttendanceSession:
        self._id = max(self._id, session.session_id)
        self.rows[session.session_id] = session
        return session

    def _for_employee(self, employee_id: int):
        items = [r for r in self.rows.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: (r.attendance_date, r.check_in_time, r.session_id), reverse=True)
        return items

    def get_latest_open_for_employee(self, employee_id: int):
        open_rows = [r for r in self.rows.values() if r.employee_id == employee_id and r.is_open]
        if not open_rows:
            return None
        return max(open_rows, key=lambda r: (r.check_in_time, r.session_id))

    def list_for_employee_and_date(self, employee_id: int, attendance_date: date):
        items = [r for r in self.rows.values() if r.employee_id == employee_id and r.attendance_date == attendance_date]
        items.sort(key=lambda r: (r.check_in_time, r.session_id), reverse=True)
        return items

    def list_for_employee_between(self, employee_id: int, *, start_date: date, end_date: date):
        return [r for r in self._for_employee(employee_id) if start_date <= r.attendance_date <= end_date]

    def get_recent_for_employee(self, employee_id: int, limit: int):
        return self._for_employee(employee_id)[:limit]

    def create_session(
        self,
        *,
        employee_id,
        attendance_date,
        check_in_time,
        latitude,
        longitude,
        location_verified,
        location_code=None,
    ) -> int:
        if any(r.employee_id == employee_id and r.is_open for r in self.rows.values()):
            raise ConflictError("Employee already has an open session")
        self._id += 1
        self.writes += 1
        self.rows[self._id] = AttendanceSession(
            session_id=self._id,
            employee_id=employee_id,
            attendance_date=attendance_date,
            check_in_time=check_in_time,
            check_in_latitude=latitude,
            check_in_longitude=longitude,
            location_verified=location_verified,
            check_in_location_code=location_code,
        )
        return self._id

    def close_session(
        self,
        *,
        session_id,
        check_out_time,
        latitude,
        longitude,
        total_hours,
        location_code=None,
    ) -> bool:
        row = self.rows.get(session_id)
        if row is None or not row.is_open:
            return False
        self.writes += 1
        self.rows[session_id] = replace(
            row,
            check_out_time=check_out_time,
            check_out_latitude=latitude,
            check_out_longitude=longitude,
            check_out_location_code=location_code,
            total_hours=total_hours,
        )
        return True


OFFICE = Location(
    location_id=1,
    name="Test Office",
    latitude=28.7041,
    longitude=77.1025,
    radius_meters=100,
    location_code="HQ-DEL-01",
    location_type="office",
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, 0)


@pytest.fixture
def clock(fixed_now) -> FrozenClock:
    return FrozenClock(fixed_now)


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        {
            1: Employee(
                employee_id=1,
                name="Test Employee",
                email="test@example.com",
                phone="1234567890",
                assigned_location_id=1,
                pin_code="1234",
            ),
            2: Employee(
                employee_id=2,
                name="No Location",
                email="nolocation@example.com",
                phone=None,
                assigned_location_id=None,
                pin_code="0000",
            ),
            3: Employee(
                employee_id=3,
                name="Former Employee",
                email="former@example.com",
                phone=None,
                assigned_location_id=1,
                is_active=False,
                pin_code="1111",
            ),
            4: Employee(
                employee_id=4,
                name="No Pin",
                email="nopin@example.com",
                phone=None,
                assigned_location_id=1,
                pin_code=None,
            ),
        }
    )


@pytest.fixture
def locations() -> InMemoryLocations:
    return InMemoryLocations(
        {
            1: OFFICE,
            2: Location(
                location_id=2,
                name="Warehouse",
                latitude=28.6139,
                longitude=77.2090,
                radius_meters=250,
                location_code="WH-DEL-02",
                location_type="warehouse",
            ),
            3: Location(
                location_id=3,
                name="Closed Branch",
                latitude=28.7041,
                longitude=77.1025,
                radius_meters=100,
                is_active=False,
                location_code="HQ-OLD-03",
                location_type="office",
            ),
        }
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def container(employees, locations, attendance_repo, clock):
    return build_services(
        employees_repo=employees,
        locations_repo=locations,
        attendance_repo=attendance_repo,
        clock=clock,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
