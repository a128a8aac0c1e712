from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import Location
from .repository import LocationDirectory

_COLUMNS = "id, name, location_code, location_type, latitude, longitude, radius_meters, is_active"


def _to_location(row: Dict[str, Any]) -> Location:
    return Location(
        location_id=int(row["id"]),
        name=row["name"],
        latitude=as_float(row["latitude"]),
        longitude=as_float(row["longitude"]),
        radius_meters=as_float(row["radius_meters"]),
        is_active=bool(row.get("is_active", True)),
        location_code=row.get("location_code"),
        location_type=row.get("location_type"),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MySQLLocationRepository(LocationDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, location_id: int) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE id=%s", (int(location_id),))
            row = fetchone(cur)
            return _to_location(row) if row else None

    def search(
        self,
        *,
        location_code: str,
        location_type: Optional[str] = None,
        exact: bool = False,
    ) -> Sequence[Location]:
        clauses = ["is_active=1"]
        params: list[object] = []

        if exact:
            clauses.append("UPPER(location_code)=UPPER(%s)")
            params.append(location_code)
        else:
            clauses.append("UPPER(location_code) LIKE UPPER(%s)")
            params.append(f"%{_escape_like(location_code)}%")

        if location_type:
            clauses.append("UPPER(location_type)=UPPER(%s)")
            params.append(location_type)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM locations
                WHERE {where}
                ORDER BY location_code ASC, id ASC
                """,
                tuple(params),
            )
            return [_to_location(r) for r in fetchall(cur)]
