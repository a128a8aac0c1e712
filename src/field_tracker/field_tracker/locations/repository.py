from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Location


class LocationDirectory(Protocol):
    def get_by_id(self, location_id: int) -> Optional[Location]:
        raise NotImplementedError

    def search(
        self,
        *,
        location_code: str,
        location_type: Optional[str] = None,
        exact: bool = False,
    ) -> Sequence[Location]:
        """Active locations matching the code (substring, or exact when ``exact``)."""

        raise NotImplementedError
