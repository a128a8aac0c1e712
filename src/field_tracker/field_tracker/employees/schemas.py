from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    employee_id: int = Field(strict=True)
    pin_code: str = Field(..., min_length=1)

    @field_validator("pin_code", mode="before")
    @classmethod
    def _pin_as_text(cls, value):
        # Mobile clients send numeric PINs as JSON numbers.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
