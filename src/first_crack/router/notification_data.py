# -*- coding: utf-8 -*-
"""Typed view of the string-only notification data payload."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from first_crack.timeline import StageId


def _parse_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _parse_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True, slots=True)
class NotificationButton:
    """One action button as encoded in the data payload's `actions` JSON."""

    id: str
    title: str
    icon: Optional[str] = None
    requires_foreground: bool = True
    deep_link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Optional[NotificationButton]:
        """Build from one decoded entry; entries without an id or title are dropped."""
        button_id = _opt_str(data.get("id"))
        title = _opt_str(data.get("title"))
        if button_id is None or title is None:
            return None
        return cls(
            id=button_id,
            title=title,
            icon=_opt_str(data.get("icon")),
            requires_foreground=bool(data.get("requiresForeground", True)),
            deep_link=_opt_str(data.get("deepLink")),
        )


def parse_buttons(raw: Any) -> tuple[NotificationButton, ...]:
    """Decode the compact JSON `actions` field. Malformed input yields no buttons."""
    if not isinstance(raw, str) or not raw:
        return ()
    try:
        decoded = json.loads(raw)
    except ValueError:
        return ()
    if not isinstance(decoded, list):
        return ()
    buttons = (NotificationButton.from_dict(item) for item in decoded if isinstance(item, Mapping))
    return tuple(button for button in buttons if button is not None)


@dataclass(frozen=True, slots=True)
class NotificationData:
    """Notification data payload decoded in one step, with explicit defaults per field.

    Transport data maps carry strings only; numbers are parsed here so the rest
    of the client never re-parses them ad hoc.
    """

    type: str = "brew_stage"
    stage: StageId = StageId.HEATING
    """Unknown or missing stage names fall back to heating."""

    brew_id: str = ""
    title: str = ""
    body: str = ""
    category: Optional[str] = None
    brew_type: str = "espresso"
    dose: float = 18.0
    temperature: float = 93.0
    pressure: float = 9.0
    preinfusion_time: Optional[int] = None
    extraction_time: Optional[int] = None
    elapsed_time: int = 0
    remaining_time: Optional[int] = None
    progress: Optional[int] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    deep_link: Optional[str] = None
    actions: tuple[NotificationButton, ...] = ()

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> NotificationData:
        """Build from the raw data map (camelCase keys, string values)."""
        dose = _parse_float(data.get("dose"))
        temperature = _parse_float(data.get("temperature"))
        pressure = _parse_float(data.get("pressure"))
        elapsed = _parse_int(data.get("elapsedTime"))
        stage = data.get("stage")
        return cls(
            type=_str(data.get("type"), "brew_stage") or "brew_stage",
            stage=(StageId.parse(stage) if isinstance(stage, str) else None) or StageId.HEATING,
            brew_id=_str(data.get("brewId")),
            title=_str(data.get("title")),
            body=_str(data.get("body")),
            category=_opt_str(data.get("category")),
            brew_type=_str(data.get("brewType"), "espresso") or "espresso",
            dose=dose if dose is not None else 18.0,
            temperature=temperature if temperature is not None else 93.0,
            pressure=pressure if pressure is not None else 9.0,
            preinfusion_time=_parse_int(data.get("preinfusionTime")),
            extraction_time=_parse_int(data.get("extractionTime")),
            elapsed_time=elapsed if elapsed is not None else 0,
            remaining_time=_parse_int(data.get("remainingTime")),
            progress=_parse_int(data.get("progress")),
            image_url=_opt_str(data.get("imageUrl")),
            video_url=_opt_str(data.get("videoUrl")),
            deep_link=_opt_str(data.get("deepLink")),
            actions=parse_buttons(data.get("actions")),
        )
