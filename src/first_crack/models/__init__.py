# -*- coding: utf-8 -*-
"""Domain models."""

from first_crack.models.brew import (
    DEFAULT_EXTRACTION_SECONDS,
    DEFAULT_PREINFUSION_SECONDS,
    BrewContext,
    BrewStartResult,
    BrewType,
    generate_brew_id,
)

__all__ = [
    "DEFAULT_EXTRACTION_SECONDS",
    "DEFAULT_PREINFUSION_SECONDS",
    "BrewContext",
    "BrewStartResult",
    "BrewType",
    "generate_brew_id",
]
