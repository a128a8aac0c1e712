from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError
from ..geo.verifier import GeoPoint


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_int_in_range(value: object, field_name: str, *, minimum: int, maximum: int) -> int:
    # bool is an int subclass; True must not pass as 1.
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(f"{field_name} must be an integer") from None
    if not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if value < minimum or value > maximum:
        raise ValidationError(f"{field_name} must be between {minimum} and {maximum}")
    return value


def require_coordinates(latitude: float, longitude: float) -> GeoPoint:
    """Range-check a latitude/longitude pair before it reaches the geo math."""

    if latitude is None or longitude is None:
        raise ValidationError("Location is required")
    if not -90.0 <= float(latitude) <= 90.0:
        raise ValidationError("Latitude must be between -90 and 90")
    if not -180.0 <= float(longitude) <= 180.0:
        raise ValidationError("Longitude must be between -180 and 180")
    return GeoPoint(latitude=float(latitude), longitude=float(longitude))
