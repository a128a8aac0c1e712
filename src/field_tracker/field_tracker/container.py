from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock
from .core.constants import DEFAULT_DB_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeDirectory
from .employees.service import AuthService
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationDirectory
from .locations.service import LocationService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeDirectory
    locations_repo: LocationDirectory
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    attendance_service: AttendanceService
    location_service: LocationService


def build_services(
    *,
    employees_repo: EmployeeDirectory,
    locations_repo: LocationDirectory,
    attendance_repo: AttendanceRepository,
    clock: Clock | None = None,
) -> Container:
    clock = clock or SystemClock()
    return Container(
        employees_repo=employees_repo,
        locations_repo=locations_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo, locations_repo, clock=clock),
        location_service=LocationService(locations_repo),
    )


def build_container(*, db_config: dict, timeout_seconds: int = DEFAULT_DB_TIMEOUT_SECONDS) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 5)),
        timeout_seconds=int(timeout_seconds),
    )
    conn = DatabaseConnection(config)

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
