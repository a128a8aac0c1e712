from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..geo.verifier import GeoPoint


@dataclass(frozen=True)
class Location:
    """Domain entity: a registered site with a circular geofence."""

    location_id: int
    name: str
    latitude: float
    longitude: float
    radius_meters: float
    is_active: bool = True
    location_code: Optional[str] = None
    location_type: Optional[str] = None

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)
