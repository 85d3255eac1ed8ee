# -*- coding: utf-8 -*-
"""Built stage payloads, decoded per surface, routed to the right screen."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import pytest

from first_crack.actions import ActionId, ActionRegistry
from first_crack.models import BrewContext
from first_crack.payloads import PayloadBuilder, PushSurface, StagePayloadSet
from first_crack.router import ActionRouter, InteractionEvent, NavigationChannel, RouteState
from first_crack.timeline import DEFAULT_TIMELINE, StageId


class _FakeEventBus:
    def __init__(self) -> None:
        self.dispatched: list[Any] = []

    def on(self, event_type: type[Any], handler: Any) -> None:
        pass

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)


def _web_data(payloads: StagePayloadSet) -> Mapping[str, Any]:
    return payloads.for_surface(PushSurface.WEB).body["data"]


def _apns_user_info(payloads: StagePayloadSet) -> Mapping[str, Any]:
    return payloads.for_surface(PushSurface.APNS).body["payload"]


def _android_data(payloads: StagePayloadSet) -> Mapping[str, Any]:
    return payloads.for_surface(PushSurface.ANDROID).body["data"]


_BUTTON_TAPS: dict[str, Callable[[StagePayloadSet, str], InteractionEvent]] = {
    "web": lambda p, action: InteractionEvent.from_web(action, _web_data(p)),
    "apns": lambda p, action: InteractionEvent.from_apns(action, _apns_user_info(p)),
    "android": lambda p, action: InteractionEvent.from_android({**_android_data(p), "actionId": action}),
}

_BODY_TAPS: dict[str, Callable[[StagePayloadSet], InteractionEvent]] = {
    "web": lambda p: InteractionEvent.from_web("", _web_data(p)),
    "apns": lambda p: InteractionEvent.from_apns(
        "com.apple.UNNotificationDefaultActionIdentifier", _apns_user_info(p)
    ),
    "android": lambda p: InteractionEvent.from_android(_android_data(p)),
}


@pytest.fixture
def bus() -> _FakeEventBus:
    return _FakeEventBus()


@pytest.fixture
def router(registry: ActionRegistry, bus: _FakeEventBus) -> ActionRouter:
    channel = NavigationChannel()
    channel.attach(bus)
    return ActionRouter(registry, channel)


@pytest.fixture
def brewing_payloads(builder: PayloadBuilder, brew_context: BrewContext) -> StagePayloadSet:
    stage = DEFAULT_TIMELINE.get(StageId.BREWING)
    assert stage is not None
    return builder.build(brew_context, stage)


@pytest.mark.parametrize("surface", sorted(_BUTTON_TAPS))
@pytest.mark.parametrize(
    ("action", "expected_id", "segment"),
    [("stop_shot", ActionId.STOP_SHOT, "stop"), ("view_live", ActionId.VIEW_LIVE, "live")],
)
def test_button_tap_opens_button_screen(
    router: ActionRouter,
    bus: _FakeEventBus,
    brewing_payloads: StagePayloadSet,
    brew_context: BrewContext,
    surface: str,
    action: str,
    expected_id: ActionId,
    segment: str,
) -> None:
    result = router.route(_BUTTON_TAPS[surface](brewing_payloads, action))

    assert result.state is RouteState.DISPATCHED
    assert result.navigation is not None
    assert result.navigation.action is expected_id
    assert result.navigation.deep_link == f"firstcrack://brew/{brew_context.brew_id}/{segment}"
    assert bus.dispatched == [result.navigation]


@pytest.mark.parametrize("surface", sorted(_BODY_TAPS))
def test_body_tap_opens_details(
    router: ActionRouter,
    brewing_payloads: StagePayloadSet,
    brew_context: BrewContext,
    surface: str,
) -> None:
    result = router.route(_BODY_TAPS[surface](brewing_payloads))

    assert result.navigation is not None
    assert result.navigation.action is ActionId.DEFAULT
    assert result.navigation.deep_link == f"firstcrack://brew/{brew_context.brew_id}/details"


def test_button_absent_from_payload_uses_computed_link(
    router: ActionRouter,
    brewing_payloads: StagePayloadSet,
    brew_context: BrewContext,
) -> None:
    event = InteractionEvent.from_web("share", _web_data(brewing_payloads))

    assert event.deep_link is None
    result = router.route(event)
    assert result.navigation is not None
    assert result.navigation.action is ActionId.SHARE
    assert result.navigation.deep_link == f"firstcrack://brew/{brew_context.brew_id}/share"
