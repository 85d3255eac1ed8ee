# -*- coding: utf-8 -*-
"""Brew context: the per-brew correlation and parameter record.

Created when a brew is requested, read by the scheduler and payload builder
for the length of the timeline, discarded after the last stage fires.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BrewType(str, Enum):
    """Supported brew methods."""

    ESPRESSO = "espresso"
    LUNGO = "lungo"
    RISTRETTO = "ristretto"
    AMERICANO = "americano"


DEFAULT_PREINFUSION_SECONDS = 8
DEFAULT_EXTRACTION_SECONDS = 28


@dataclass(frozen=True, slots=True)
class BrewContext:
    """Immutable brew parameters plus correlation id and start instant.

    brew_id doubles as the notification tag: re-sending with the same id
    updates the notification instead of stacking a new one.
    """

    brew_id: str
    device_address: str
    brew_type: BrewType
    dose_grams: float
    target_temp_c: float
    target_pressure_bar: float
    start_time: datetime
    """Wall-clock (UTC) instant every stage offset is relative to."""

    preinfusion_seconds: float = DEFAULT_PREINFUSION_SECONDS
    extraction_seconds: float = DEFAULT_EXTRACTION_SECONDS


@dataclass(frozen=True, slots=True)
class BrewStartResult:
    """Returned to the caller of start_brew."""

    brew_id: str
    stage_count: int
    estimated_duration_seconds: int


def generate_brew_id(now_ms: int | None = None) -> str:
    """Return brew_<epoch_ms>_<0..9999>."""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"brew_{timestamp}_{random.randint(0, 9999)}"
