# -*- coding: utf-8 -*-
"""Closed action set: wire ids <-> ActionId, ActionId -> deep-link path segment.

Deep link format: <scheme>://brew/<brew_id>/<segment>. The brew id is checked
against an allow-list before it is interpolated into any link.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from first_crack.exceptions import InvalidBrewId, UnknownAction

BREW_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

# Identifiers the platform surfaces use for a tap on the notification body.
DEFAULT_TAP_SENTINELS: frozenset[str] = frozenset(
    {
        "default",
        "com.apple.UNNotificationDefaultActionIdentifier",
        "",
    }
)


class ActionId(str, Enum):
    """Every action a notification can carry. Value is the wire identifier."""

    DEFAULT = "default"
    PAUSE_GRINDING = "pause_grinding"
    ADJUST_GRIND = "adjust_grind"
    SKIP_PREINFUSION = "skip_preinfusion"
    EXTEND_PREINFUSION = "extend_preinfusion"
    STOP_SHOT = "stop_shot"
    VIEW_LIVE = "view_live"
    BREW_AGAIN = "brew_again"
    ADJUST_PROFILE = "adjust_profile"
    SHARE = "share"


@dataclass(frozen=True, slots=True)
class ActionSpec:
    """Wire id, deep-link segment and button metadata for one action."""

    action_id: ActionId
    path_segment: str
    title: str
    icon: Optional[str] = None
    requires_foreground: bool = True
    destructive: bool = False

    @property
    def wire_id(self) -> str:
        return self.action_id.value


_ACTION_SPECS: tuple[ActionSpec, ...] = (
    ActionSpec(ActionId.DEFAULT, "details", "View Details", icon="info"),
    ActionSpec(ActionId.PAUSE_GRINDING, "pause", "Pause Grinding", icon="pause"),
    ActionSpec(ActionId.ADJUST_GRIND, "settings", "Adjust Settings", icon="tune"),
    ActionSpec(ActionId.SKIP_PREINFUSION, "skip-preinfusion", "Skip to Extraction", icon="skip_next"),
    ActionSpec(ActionId.EXTEND_PREINFUSION, "extend-preinfusion", "Extend Pre-Infusion", icon="more_time"),
    ActionSpec(ActionId.STOP_SHOT, "stop", "Stop Shot Now", icon="stop", destructive=True),
    ActionSpec(ActionId.VIEW_LIVE, "live", "View Live", icon="videocam"),
    ActionSpec(ActionId.BREW_AGAIN, "repeat", "Brew Again", icon="refresh", requires_foreground=False),
    ActionSpec(ActionId.ADJUST_PROFILE, "profile", "Adjust Profile", icon="tune"),
    ActionSpec(ActionId.SHARE, "share", "Share", icon="share"),
)


def is_valid_brew_id(brew_id: object) -> bool:
    """Return True if brew_id is a non-empty string of [A-Za-z0-9_-]."""
    return isinstance(brew_id, str) and BREW_ID_PATTERN.fullmatch(brew_id) is not None


class ActionRegistry:
    """Bidirectional, read-only mapping between wire ids, ActionIds and deep links."""

    def __init__(self, scheme: str = "firstcrack") -> None:
        """Initialize the registry.

        Args:
            scheme: URI scheme for generated deep links (e.g. "firstcrack").
        """
        self._scheme = scheme
        self._specs: Mapping[ActionId, ActionSpec] = MappingProxyType(
            {spec.action_id: spec for spec in _ACTION_SPECS}
        )
        self._by_wire_id: Mapping[str, ActionId] = MappingProxyType(
            {spec.wire_id: spec.action_id for spec in _ACTION_SPECS}
        )
        missing = set(ActionId) - set(self._specs)
        if missing:
            raise RuntimeError(f"Actions without button metadata: {sorted(a.value for a in missing)}")

    @property
    def scheme(self) -> str:
        return self._scheme

    def __iter__(self) -> Iterator[ActionSpec]:
        return iter(self._specs.values())

    def spec(self, action_id: ActionId) -> ActionSpec:
        return self._specs[action_id]

    def resolve(self, wire_id: str) -> ActionId:
        """Map a wire identifier to its ActionId.

        Default-tap sentinels from any surface resolve to ActionId.DEFAULT.

        Raises:
            UnknownAction: If wire_id is not in the closed set.
        """
        if wire_id in DEFAULT_TAP_SENTINELS:
            return ActionId.DEFAULT
        action = self._by_wire_id.get(wire_id)
        if action is None:
            raise UnknownAction(wire_id)
        return action

    def wire_id_of(self, action_id: ActionId) -> str:
        return self._specs[action_id].wire_id

    def deep_link_for(self, action_id: ActionId, brew_id: str) -> str:
        """Build <scheme>://brew/<brew_id>/<segment> for the action.

        Raises:
            InvalidBrewId: If brew_id fails the allow-list; callers fall back to
                generic_details_link().
        """
        if not is_valid_brew_id(brew_id):
            raise InvalidBrewId(str(brew_id))
        segment = self._specs[action_id].path_segment
        return f"{self._scheme}://brew/{brew_id}/{segment}"

    def generic_details_link(self) -> str:
        """Details link scoped to no brew."""
        return f"{self._scheme}://brew/details"
