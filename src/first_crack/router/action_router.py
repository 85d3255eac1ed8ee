# -*- coding: utf-8 -*-
"""ActionRouter: turns a raw interaction into at most one NavigationEvent.

idle -> received -> resolved -> dispatched, or -> rejected from received /
resolved. Each call is independent; the only shared state is the read-only
action registry and the navigation channel.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from first_crack.actions import ActionId, is_valid_brew_id
from first_crack.events import NavigationEvent
from first_crack.exceptions import UnknownAction

if TYPE_CHECKING:
    from first_crack.actions import ActionRegistry
    from first_crack.router.channel import NavigationChannel
    from first_crack.router.interaction import InteractionEvent


class RouteState(str, Enum):
    IDLE = "idle"
    RECEIVED = "received"
    RESOLVED = "resolved"
    DISPATCHED = "dispatched"
    REJECTED = "rejected"


class RejectReason(str, Enum):
    """Why an interaction did not produce a navigation."""

    MISSING_BREW_ID = "missing_brew_id"
    UNKNOWN_ACTION = "unknown_action"
    CHANNEL_DETACHED = "channel_detached"


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Terminal state of one routing attempt."""

    state: RouteState
    navigation: Optional[NavigationEvent] = None
    reason: Optional[RejectReason] = None

    @property
    def dispatched(self) -> bool:
        return self.state is RouteState.DISPATCHED


class ActionRouter:
    """Validate, resolve and dispatch interaction events from any surface."""

    def __init__(
        self,
        registry: ActionRegistry,
        channel: NavigationChannel,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the router.

        Args:
            registry: Closed action registry (wire ids and deep links).
            channel: Navigation channel that receives the resulting event.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._registry = registry
        self._channel = channel
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def route(self, event: InteractionEvent) -> RouteResult:
        """Route one interaction. Never raises; rejections are logged only."""
        # received
        if not event.brew_id or not event.brew_id.strip():
            return self._reject(event, RejectReason.MISSING_BREW_ID)

        try:
            action = self._registry.resolve(event.wire_action_id)
        except UnknownAction:
            return self._reject(event, RejectReason.UNKNOWN_ACTION)

        # resolved
        navigation = self._navigation_for(action, event)
        if not self._channel.dispatch(navigation):
            return self._reject(event, RejectReason.CHANNEL_DETACHED, navigation=navigation)

        self._logger.info(
            "interaction_dispatched",
            navigation_action=navigation.action.value,
            brew_id=navigation.brew_id,
            navigation_deep_link=navigation.deep_link,
            interaction_surface=event.surface,
        )
        return RouteResult(state=RouteState.DISPATCHED, navigation=navigation)

    def _navigation_for(self, action: ActionId, event: InteractionEvent) -> NavigationEvent:
        brew_id = event.brew_id or ""
        if not is_valid_brew_id(brew_id):
            # Never interpolate a bad id, and never trust a link that came with one.
            self._logger.warning(
                "interaction_brew_id_invalid",
                interaction_action_id=event.wire_action_id,
                interaction_surface=event.surface,
            )
            return NavigationEvent(
                action=ActionId.DEFAULT,
                brew_id="",
                deep_link=self._registry.generic_details_link(),
            )

        # A link supplied by the delivering surface wins; it may carry a server override.
        deep_link = event.deep_link or self._registry.deep_link_for(action, brew_id)
        return NavigationEvent(action=action, brew_id=brew_id, deep_link=deep_link)

    def _reject(
        self,
        event: InteractionEvent,
        reason: RejectReason,
        *,
        navigation: Optional[NavigationEvent] = None,
    ) -> RouteResult:
        self._logger.warning(
            "interaction_rejected",
            reject_reason=reason.value,
            interaction_action_id=event.wire_action_id,
            brew_id=event.brew_id,
            interaction_surface=event.surface,
        )
        return RouteResult(state=RouteState.REJECTED, navigation=navigation, reason=reason)
