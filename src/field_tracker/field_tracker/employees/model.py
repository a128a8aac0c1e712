from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by the attendance service.

    Note: Read-only here; employees are managed outside this service.
    """

    employee_id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    assigned_location_id: Optional[int]
    is_active: bool = True
    pin_code: Optional[str] = None


@dataclass(frozen=True)
class EmployeeProfile:
    """What a successful login returns to the client."""

    employee_id: int
    name: str
    email: Optional[str]
