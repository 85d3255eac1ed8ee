# -*- coding: utf-8 -*-
"""Stops a brew's remaining timeline when the user taps "Stop Shot Now"."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from first_crack.actions import ActionId
from first_crack.events import NavigationEvent

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from first_crack.services.brew import BrewOrchestrator


class StopActionHandler:
    """Subscribes to NavigationEvent and calls stop_brew for stop_shot."""

    def __init__(
        self,
        orchestrator: "BrewOrchestrator",
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def start(self) -> None:
        """Subscribe to NavigationEvent."""
        self._event_bus.on(NavigationEvent, self._on_navigation)
        self._logger.debug("stop_action_handler_started")

    def stop(self) -> None:
        """Unsubscribe from NavigationEvent."""
        key = NavigationEvent.__name__
        handlers = getattr(self._event_bus, "handlers", {})
        if key in handlers:
            handlers[key] = [h for h in handlers[key] if h != self._on_navigation]
        self._logger.debug("stop_action_handler_stopped")

    def _on_navigation(self, event: NavigationEvent) -> None:
        if event.action is not ActionId.STOP_SHOT or not event.brew_id:
            return
        self._orchestrator.stop_brew(event.brew_id)
