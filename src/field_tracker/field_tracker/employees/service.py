from __future__ import annotations

import logging

from ..core.exceptions import AuthenticationError
from .model import EmployeeProfile
from .repository import EmployeeDirectory

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Use case: authenticate an employee with ID + PIN (login)."""

    def __init__(self, employees: EmployeeDirectory):
        self._employees = employees

    def login(self, employee_id: int, pin_code: str) -> EmployeeProfile:
        employee = self._employees.get_by_id(employee_id)

        # Every failure reason yields the same message so callers cannot tell
        # which part of the credentials was wrong.
        if not employee or not employee.is_active:
            logger.info("Login rejected for employee_id=%s: unknown or inactive", employee_id)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not employee.pin_code:
            logger.info("Login rejected for employee_id=%s: no PIN configured", employee_id)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if str(pin_code) != str(employee.pin_code):
            logger.info("Login rejected for employee_id=%s: PIN mismatch", employee_id)
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("Employee %s logged in", employee.employee_id)
        return EmployeeProfile(
            employee_id=employee.employee_id,
            name=employee.name,
            email=employee.email,
        )
