# -*- coding: utf-8 -*-
"""Brew lifecycle stages and the per-stage notification entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from first_crack.actions import ActionId


class StageId(str, Enum):
    """Brew lifecycle stage, ordered by position in the lifecycle."""

    HEATING = "heating"
    GRINDING = "grinding"
    PRE_INFUSION = "pre_infusion"
    BREWING = "brewing"
    COMPLETE = "complete"

    @property
    def ordinal(self) -> int:
        return _STAGE_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, StageId):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __le__(self, other: object) -> bool:
        if not isinstance(other, StageId):
            return NotImplemented
        return self.ordinal <= other.ordinal

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, StageId):
            return NotImplemented
        return self.ordinal > other.ordinal

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, StageId):
            return NotImplemented
        return self.ordinal >= other.ordinal

    @classmethod
    def parse(cls, value: str | None) -> Optional[StageId]:
        """Parse a wire stage name, tolerating case and the camelCase variant (preInfusion)."""
        if not value:
            return None
        normalized = value.strip().replace("-", "_").lower()
        for stage in cls:
            if normalized in (stage.value, stage.value.replace("_", "")):
                return stage
        return None


_STAGE_ORDER: tuple[StageId, ...] = tuple(StageId)


@dataclass(frozen=True, slots=True)
class MediaRef:
    """Image and/or video locator relative to the media base URL."""

    image_path: Optional[str] = None
    video_path: Optional[str] = None


@dataclass(frozen=True, slots=True)
class StageEntry:
    """One point in the brew lifecycle: when it fires and what the notification shows.

    actions is in display order; empty for informational stages.
    """

    stage_id: StageId
    offset_seconds: int
    title: str
    body: str
    media: MediaRef = field(default_factory=MediaRef)
    actions: tuple[ActionId, ...] = ()
    require_interaction: bool = False
    progress: Optional[int] = None
    """Percentage 0..100 shown as a progress indicator."""

    high_priority: bool = False
