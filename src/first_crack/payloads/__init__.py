"""Per-surface notification payloads."""

from first_crack.payloads.builder import (
    CATEGORY_BY_STAGE,
    NO_ACTION_CATEGORY,
    PayloadBuilder,
    category_for,
    number_to_str,
)
from first_crack.payloads.types import PlatformPayload, PushSurface, StagePayloadSet

__all__ = [
    "CATEGORY_BY_STAGE",
    "NO_ACTION_CATEGORY",
    "PayloadBuilder",
    "PlatformPayload",
    "PushSurface",
    "StagePayloadSet",
    "category_for",
    "number_to_str",
]
