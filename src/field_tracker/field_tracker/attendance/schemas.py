from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..core.constants import LOCATION_CODE_MAX_LENGTH


class _PunchRequest(BaseModel):
    # Range checks live in the service (common.validators.require_coordinates).
    # Strict numbers: JSON true/false must not pass as 1/0.
    employee_id: int = Field(strict=True)
    latitude: float = Field(strict=True)
    longitude: float = Field(strict=True)
    location_code: Optional[str] = Field(default=None, max_length=LOCATION_CODE_MAX_LENGTH)
    location_type: Optional[str] = Field(default=None, max_length=50)

    @field_validator("location_type")
    @classmethod
    def _blank_as_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class CheckinRequest(_PunchRequest):
    location_id: Optional[int] = Field(default=None, gt=0, strict=True)


class CheckoutRequest(_PunchRequest):
    pass
