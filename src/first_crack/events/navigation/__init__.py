# -*- coding: utf-8 -*-
"""Navigation events."""

from first_crack.events.navigation.navigation_events import NavigationEvent

__all__ = ["NavigationEvent"]
