# -*- coding: utf-8 -*-
"""Brew-start request model (pydantic) and its conversion to field errors."""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from first_crack.exceptions import FieldError
from first_crack.models import DEFAULT_EXTRACTION_SECONDS, DEFAULT_PREINFUSION_SECONDS, BrewType

# FCM registration tokens and test ids: no whitespace, URL-safe token characters.
DEVICE_ADDRESS_PATTERN = re.compile(r"^[A-Za-z0-9_:.\-]+$")


class BrewRequest(BaseModel):
    """Parameters accepted by start_brew. Ranges follow the machine's safe envelope."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    brew_type: BrewType
    dose_grams: float = Field(ge=10, le=30, allow_inf_nan=False)
    target_temp_c: float = Field(ge=85, le=100, allow_inf_nan=False)
    target_pressure_bar: float = Field(ge=5, le=15, allow_inf_nan=False)
    device_address: str
    preinfusion_seconds: float = Field(default=DEFAULT_PREINFUSION_SECONDS, ge=0, le=30)
    extraction_seconds: float = Field(default=DEFAULT_EXTRACTION_SECONDS, ge=15, le=60)

    @field_validator("device_address")
    @classmethod
    def _check_device_address(cls, value: str, info: ValidationInfo) -> str:
        min_length = (info.context or {}).get("device_address_min_length", 1)
        if not value or not value.strip():
            raise ValueError("device address is empty")
        if any(ch.isspace() for ch in value):
            raise ValueError("device address contains whitespace")
        if not DEVICE_ADDRESS_PATTERN.fullmatch(value):
            raise ValueError("device address contains disallowed characters")
        if len(value) < min_length:
            raise ValueError(f"device address shorter than {min_length} characters")
        return value


def field_errors(exc: PydanticValidationError) -> list[FieldError]:
    """Flatten pydantic errors into one FieldError per failing field."""
    errors: list[FieldError] = []
    for item in exc.errors():
        loc = item.get("loc") or ()
        field = ".".join(str(part) for part in loc) or "request"
        reason = str(item.get("msg", "invalid value"))
        if reason.startswith("Value error, "):
            reason = reason[len("Value error, ") :]
        errors.append(FieldError(field=field, reason=reason))
    return errors


def optional_overrides(
    preinfusion_seconds: Optional[float],
    extraction_seconds: Optional[float],
) -> dict[str, float]:
    """Only pass timing overrides the caller actually set, so model defaults apply."""
    overrides: dict[str, float] = {}
    if preinfusion_seconds is not None:
        overrides["preinfusion_seconds"] = preinfusion_seconds
    if extraction_seconds is not None:
        overrides["extraction_seconds"] = extraction_seconds
    return overrides
