# -*- coding: utf-8 -*-
"""Unit tests for ActionRouter and NavigationChannel."""

from __future__ import annotations

from typing import Any

import pytest

from first_crack.actions import ActionId, ActionRegistry
from first_crack.exceptions import ChannelNotAttached
from first_crack.router import (
    ActionRouter,
    InteractionEvent,
    NavigationChannel,
    RejectReason,
    RouteState,
    get_navigation_channel,
    set_navigation_channel,
)


class _FakeEventBus:
    """Minimal event bus fake for unit tests."""

    def __init__(self) -> None:
        self.handlers: dict[str, list[Any]] = {}
        self.dispatched: list[Any] = []

    def on(self, event_type: type[Any], handler: Any) -> None:
        key = event_type.__name__
        self.handlers.setdefault(key, []).append(handler)

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)


@pytest.fixture
def bus() -> _FakeEventBus:
    return _FakeEventBus()


@pytest.fixture
def router(registry: ActionRegistry, bus: _FakeEventBus) -> ActionRouter:
    channel = NavigationChannel()
    channel.attach(bus)
    return ActionRouter(registry, channel)


def test_stop_shot_routes_to_stop_deep_link(router: ActionRouter, bus: _FakeEventBus) -> None:
    result = router.route(InteractionEvent.from_wire({"wireActionId": "stop_shot", "brewId": "brew_1_2"}))

    assert result.state is RouteState.DISPATCHED
    assert result.dispatched
    assert len(bus.dispatched) == 1
    event = bus.dispatched[0]
    assert event.action is ActionId.STOP_SHOT
    assert event.brew_id == "brew_1_2"
    assert event.deep_link == "firstcrack://brew/brew_1_2/stop"
    assert result.navigation is event


@pytest.mark.parametrize("raw", [{"wireActionId": "stop_shot"}, {"wireActionId": "stop_shot", "brewId": ""}])
def test_missing_brew_id_is_rejected(
    router: ActionRouter,
    bus: _FakeEventBus,
    raw: dict[str, Any],
) -> None:
    result = router.route(InteractionEvent.from_wire(raw))

    assert result.state is RouteState.REJECTED
    assert result.reason is RejectReason.MISSING_BREW_ID
    assert result.navigation is None
    assert bus.dispatched == []


@pytest.mark.parametrize("brew_id", ["", "  "])
def test_blank_brew_id_on_constructed_event_is_rejected(
    router: ActionRouter,
    bus: _FakeEventBus,
    brew_id: str,
) -> None:
    result = router.route(InteractionEvent(wire_action_id="stop_shot", brew_id=brew_id))

    assert result.state is RouteState.REJECTED
    assert result.reason is RejectReason.MISSING_BREW_ID
    assert result.navigation is None
    assert bus.dispatched == []


def test_unknown_action_is_rejected(router: ActionRouter, bus: _FakeEventBus) -> None:
    result = router.route(InteractionEvent(wire_action_id="explode", brew_id="brew_1_2"))

    assert result.state is RouteState.REJECTED
    assert result.reason is RejectReason.UNKNOWN_ACTION
    assert bus.dispatched == []


def test_body_tap_routes_to_details(router: ActionRouter) -> None:
    result = router.route(
        InteractionEvent.from_apns(
            "com.apple.UNNotificationDefaultActionIdentifier",
            {"brewId": "brew_9_9", "aps": {}},
        )
    )

    assert result.navigation is not None
    assert result.navigation.action is ActionId.DEFAULT
    assert result.navigation.deep_link == "firstcrack://brew/brew_9_9/details"


def test_surface_supplied_deep_link_wins(router: ActionRouter) -> None:
    result = router.route(
        InteractionEvent(
            wire_action_id="view_live",
            brew_id="brew_1_2",
            deep_link="firstcrack://brew/brew_1_2/live?camera=2",
        )
    )

    assert result.navigation is not None
    assert result.navigation.deep_link == "firstcrack://brew/brew_1_2/live?camera=2"


def test_invalid_brew_id_falls_back_to_generic_details(router: ActionRouter, bus: _FakeEventBus) -> None:
    result = router.route(
        InteractionEvent(
            wire_action_id="stop_shot",
            brew_id="abc;rm -rf",
            deep_link="firstcrack://brew/abc;rm -rf/stop",
        )
    )

    assert result.state is RouteState.DISPATCHED
    event = bus.dispatched[0]
    assert event.action is ActionId.DEFAULT
    assert event.brew_id == ""
    assert event.deep_link == "firstcrack://brew/details"


def test_detached_channel_is_rejected(registry: ActionRegistry) -> None:
    router = ActionRouter(registry, NavigationChannel())

    result = router.route(InteractionEvent(wire_action_id="share", brew_id="brew_1_2"))

    assert result.state is RouteState.REJECTED
    assert result.reason is RejectReason.CHANNEL_DETACHED
    assert result.navigation is not None


def test_each_interaction_routes_independently(router: ActionRouter, bus: _FakeEventBus) -> None:
    router.route(InteractionEvent(wire_action_id="explode", brew_id="brew_1_2"))
    router.route(InteractionEvent(wire_action_id="share", brew_id="brew_1_2"))
    router.route(InteractionEvent(wire_action_id="share", brew_id="brew_1_2"))

    assert [e.action for e in bus.dispatched] == [ActionId.SHARE, ActionId.SHARE]


def test_channel_attach_detach(bus: _FakeEventBus) -> None:
    channel = NavigationChannel()
    assert not channel.is_attached
    with pytest.raises(ChannelNotAttached):
        _ = channel.bus

    channel.attach(bus)
    assert channel.is_attached
    assert channel.bus is bus

    channel.detach()
    assert not channel.is_attached


def test_navigation_channel_is_process_wide() -> None:
    set_navigation_channel(None)
    try:
        first = get_navigation_channel()
        assert get_navigation_channel() is first
    finally:
        set_navigation_channel(None)
