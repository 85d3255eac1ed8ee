# -*- coding: utf-8 -*-
"""Event bus and event types."""

from first_crack.events.bus import close_event_bus, get_event_bus, set_event_bus
from first_crack.events.navigation import NavigationEvent

__all__ = ["close_event_bus", "get_event_bus", "set_event_bus", "NavigationEvent"]
