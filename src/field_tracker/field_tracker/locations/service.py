from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_non_empty
from .model import Location
from .repository import LocationDirectory


class LocationService:
    """Use case: look up registered sites by their code."""

    def __init__(self, locations: LocationDirectory):
        self._locations = locations

    def search(self, location_code: Optional[str], location_type: Optional[str] = None) -> Sequence[Location]:
        code = require_non_empty(location_code, "location_code")
        return self._locations.search(location_code=code, location_type=_clean(location_type), exact=False)

    def search_exact(self, location_code: Optional[str], location_type: Optional[str] = None) -> Sequence[Location]:
        code = require_non_empty(location_code, "location_code")
        return self._locations.search(location_code=code, location_type=_clean(location_type), exact=True)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
