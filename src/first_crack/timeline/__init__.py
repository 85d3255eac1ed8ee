"""Brew stage timeline."""

from first_crack.timeline.stage import MediaRef, StageEntry, StageId
from first_crack.timeline.timeline import (
    DEFAULT_TIMELINE,
    NATIVE_MAX_ACTIONS,
    StageTimeline,
)

__all__ = [
    "DEFAULT_TIMELINE",
    "NATIVE_MAX_ACTIONS",
    "MediaRef",
    "StageEntry",
    "StageId",
    "StageTimeline",
]
