# -*- coding: utf-8 -*-
"""Raw interaction events, decoded from whichever surface delivered the tap.

Each surface hands over a different shape (APNs response + userInfo, Android
intent extras, web notificationclick action + data). The decoders below flatten
them into one InteractionEvent; validation happens later in the router.

The data map's top-level deepLink is the body-tap link. A button tap takes the
link of the matching entry in the `actions` JSON instead, or none at all so the
router computes it from the action id.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from first_crack.actions import DEFAULT_TAP_SENTINELS
from first_crack.router.notification_data import parse_buttons


def _opt_str(value: Any) -> Optional[str]:
    """Non-empty string or None. Non-string values are treated as absent."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def supplied_link(wire_action_id: str, data: Mapping[str, Any]) -> Optional[str]:
    """Deep link the surface delivered for this tap, if any."""
    if wire_action_id in DEFAULT_TAP_SENTINELS:
        return _opt_str(data.get("deepLink"))
    for button in parse_buttons(data.get("actions")):
        if button.id == wire_action_id:
            return button.deep_link
    return None


@dataclass(frozen=True, slots=True)
class InteractionEvent:
    """Interaction captured by a surface: raw action id and context, unvalidated."""

    wire_action_id: str
    brew_id: Optional[str] = None
    deep_link: Optional[str] = None
    """Link the surface may have pre-computed (possibly a server override)."""

    stage: Optional[str] = None
    surface: Optional[str] = None

    @classmethod
    def from_wire(cls, raw: Mapping[str, Any]) -> InteractionEvent:
        """Build from the generic {wireActionId, brewId?, deepLink?, stage?} shape.

        deepLink here is already specific to the tapped action.
        """
        action = raw.get("wireActionId")
        return cls(
            wire_action_id=action if isinstance(action, str) else "",
            brew_id=_opt_str(raw.get("brewId")),
            deep_link=_opt_str(raw.get("deepLink")),
            stage=_opt_str(raw.get("stage")),
            surface=_opt_str(raw.get("surface")),
        )

    @classmethod
    def from_apns(cls, action_identifier: str, user_info: Mapping[str, Any]) -> InteractionEvent:
        """Build from a UNNotificationResponse action identifier and its userInfo."""
        action = action_identifier or ""
        return cls(
            wire_action_id=action,
            brew_id=_opt_str(user_info.get("brewId")),
            deep_link=supplied_link(action, user_info),
            stage=_opt_str(user_info.get("stage")),
            surface="apns",
        )

    @classmethod
    def from_android(cls, extras: Mapping[str, Any]) -> InteractionEvent:
        """Build from intent extras. Button taps carry actionId, body taps carry action."""
        action = _opt_str(extras.get("actionId")) or _opt_str(extras.get("action")) or "default"
        return cls(
            wire_action_id=action,
            brew_id=_opt_str(extras.get("brewId")),
            deep_link=supplied_link(action, extras),
            stage=_opt_str(extras.get("stage")),
            surface="android",
        )

    @classmethod
    def from_web(cls, action: Optional[str], data: Mapping[str, Any]) -> InteractionEvent:
        """Build from a notificationclick event. An empty action is a body tap."""
        wire_action_id = action or ""
        return cls(
            wire_action_id=wire_action_id,
            brew_id=_opt_str(data.get("brewId")),
            deep_link=supplied_link(wire_action_id, data),
            stage=_opt_str(data.get("stage")),
            surface="web",
        )
