"""Geofence math.

Pure functions: no I/O, no shared state. Coordinates are assumed to be in
range; callers validate them first (see ``common.validators.require_coordinates``).
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import EARTH_RADIUS_METERS


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points (haversine formula)."""

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(h))


def is_within_radius(point: GeoPoint, center: GeoPoint, radius_meters: float) -> bool:
    """Inclusive containment: a point exactly on the boundary is inside."""

    return distance_meters(point, center) <= radius_meters


class GeoVerifier:
    """Thin object wrapper so services can take the verifier as a dependency."""

    def distance_meters(self, a: GeoPoint, b: GeoPoint) -> float:
        return distance_meters(a, b)

    def is_within_radius(self, point: GeoPoint, center: GeoPoint, radius_meters: float) -> bool:
        return is_within_radius(point, center, radius_meters)
