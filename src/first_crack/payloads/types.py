"""Payload types produced for the push transport."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class PushSurface(str, Enum):
    """Platform surface a payload variant is rendered on."""

    ANDROID = "android"
    APNS = "apns"
    """iOS and macOS."""

    WEB = "web"


@dataclass(frozen=True, slots=True)
class PlatformPayload:
    """Notification payload for one surface. body already embeds the core record."""

    surface: PushSurface
    body: dict[str, Any]


@dataclass(frozen=True, slots=True)
class StagePayloadSet:
    """All surface payloads for one (brew, stage) pair, derived from one core record."""

    stage: str
    brew_id: str
    category: str
    core: dict[str, str]
    payloads: tuple[PlatformPayload, ...]

    def for_surface(self, surface: PushSurface) -> PlatformPayload:
        for payload in self.payloads:
            if payload.surface is surface:
                return payload
        raise KeyError(surface)

    def to_message(self, device_address: str) -> dict[str, Any]:
        """Merge surface payloads into one FCM HTTP v1 message body."""
        message: dict[str, Any] = {"token": device_address, "data": dict(self.core)}
        for payload in self.payloads:
            key = "webpush" if payload.surface is PushSurface.WEB else payload.surface.value
            message[key] = payload.body
        return {"message": message}
