# -*- coding: utf-8 -*-
"""NavigationChannel: the single outbound path from the router to the UI layer.

The channel is process-wide and may outlive any one UI owner: a surface can
deliver an interaction before the app shell has attached, or after it has
gone away. Dispatch on a detached channel is reported, never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from first_crack.exceptions import ChannelNotAttached

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from first_crack.events import NavigationEvent


class NavigationChannel:
    """Single-owner handle around the event bus that receives NavigationEvents."""

    def __init__(
        self,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._bus: Optional[EventBus] = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def is_attached(self) -> bool:
        return self._bus is not None

    @property
    def bus(self) -> EventBus:
        """The attached bus.

        Raises:
            ChannelNotAttached: If no owner is attached.
        """
        if self._bus is None:
            raise ChannelNotAttached("Navigation channel has no attached event bus")
        return self._bus

    def attach(self, bus: Any) -> None:
        """Attach the owner's bus, replacing any previous owner."""
        if self._bus is not None and self._bus is not bus:
            self._logger.warning("navigation_channel_owner_replaced")
        self._bus = bus
        self._logger.debug("navigation_channel_attached")

    def detach(self) -> None:
        self._bus = None
        self._logger.debug("navigation_channel_detached")

    def dispatch(self, event: NavigationEvent) -> bool:
        """Emit the event to the attached bus. Returns False if detached."""
        if self._bus is None:
            self._logger.warning(
                "navigation_dispatch_without_owner",
                navigation_action=event.action.value,
                brew_id=event.brew_id,
            )
            return False
        self._bus.dispatch(event)
        return True


_navigation_channel: NavigationChannel | None = None


def get_navigation_channel() -> NavigationChannel:
    """Return the process-wide navigation channel. Created on first call."""
    global _navigation_channel
    if _navigation_channel is None:
        _navigation_channel = NavigationChannel()
    return _navigation_channel


def set_navigation_channel(channel: NavigationChannel | None) -> None:
    """Set the channel instance (e.g. for testing or DI). None resets to lazy default."""
    global _navigation_channel
    _navigation_channel = channel
