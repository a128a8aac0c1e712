from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeDirectory


class MySQLEmployeeRepository(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, email, phone, pin_code, assigned_location_id, is_active
                FROM employees
                WHERE id=%s
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Employee(
                employee_id=int(row["id"]),
                name=row["name"],
                email=row.get("email"),
                phone=row.get("phone"),
                assigned_location_id=row.get("assigned_location_id"),
                is_active=bool(row.get("is_active", True)),
                pin_code=row.get("pin_code"),
            )
