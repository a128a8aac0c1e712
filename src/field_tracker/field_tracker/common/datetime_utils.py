from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol


class Clock(Protocol):
    """Source of "current server time" for the services."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Current local time.

    Note: Injected into services so tests can freeze time.
    """

    def now(self) -> datetime:
        return datetime.now()


def isoformat_or_none(value: Optional[datetime | date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def elapsed_hours(start: datetime, end: datetime) -> float:
    """Elapsed wall-clock time in hours, rounded to 2 decimals, never negative."""
    seconds = (end - start).total_seconds()
    return round(max(seconds, 0.0) / 3600.0, 2)
