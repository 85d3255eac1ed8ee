# -*- coding: utf-8 -*-
"""Navigation events (bubus BaseEvent) emitted once an interaction has been routed."""

from __future__ import annotations

from bubus import BaseEvent  # type: ignore[import-untyped]

from first_crack.actions import ActionId


class NavigationEvent(BaseEvent[None]):
    """Emitted by the action router toward the app's UI layer.

    Handled by the app shell (navigate to deep_link) and by StopActionHandler
    (cancel the remaining timeline when action is stop_shot).
    """

    action: ActionId
    brew_id: str
    """Validated brew id, or "" for the generic fallback route."""

    deep_link: str
    """firstcrack://brew/{brewId}/{segment} or the generic details link."""
