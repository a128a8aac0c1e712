from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """State of an attendance session as exposed by the API."""

    ONGOING = "ongoing"
    COMPLETED = "completed"
