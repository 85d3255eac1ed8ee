"""Client-side interaction routing."""

from first_crack.router.action_router import (
    ActionRouter,
    RejectReason,
    RouteResult,
    RouteState,
)
from first_crack.router.channel import (
    NavigationChannel,
    get_navigation_channel,
    set_navigation_channel,
)
from first_crack.router.interaction import InteractionEvent
from first_crack.router.notification_data import (
    NotificationButton,
    NotificationData,
    parse_buttons,
)

__all__ = [
    "ActionRouter",
    "InteractionEvent",
    "NavigationChannel",
    "NotificationButton",
    "NotificationData",
    "RejectReason",
    "RouteResult",
    "RouteState",
    "get_navigation_channel",
    "parse_buttons",
    "set_navigation_channel",
]
