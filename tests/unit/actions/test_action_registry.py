# -*- coding: utf-8 -*-
"""Unit tests for ActionRegistry."""

from __future__ import annotations

import pytest

from first_crack.actions import ActionId, ActionRegistry, is_valid_brew_id
from first_crack.exceptions import InvalidBrewId, UnknownAction


def test_every_action_round_trips_through_its_wire_id(registry: ActionRegistry) -> None:
    for action in ActionId:
        assert registry.resolve(registry.wire_id_of(action)) is action


@pytest.mark.parametrize(
    "sentinel",
    ["default", "com.apple.UNNotificationDefaultActionIdentifier", ""],
)
def test_body_tap_sentinels_resolve_to_default(registry: ActionRegistry, sentinel: str) -> None:
    assert registry.resolve(sentinel) is ActionId.DEFAULT


@pytest.mark.parametrize("wire_id", ["stopShot", "STOP_SHOT", "open_app", "stop_shot "])
def test_unknown_wire_ids_raise(registry: ActionRegistry, wire_id: str) -> None:
    with pytest.raises(UnknownAction) as exc_info:
        registry.resolve(wire_id)

    assert exc_info.value.wire_id == wire_id


@pytest.mark.parametrize(
    ("action", "segment"),
    [
        (ActionId.DEFAULT, "details"),
        (ActionId.PAUSE_GRINDING, "pause"),
        (ActionId.ADJUST_GRIND, "settings"),
        (ActionId.SKIP_PREINFUSION, "skip-preinfusion"),
        (ActionId.EXTEND_PREINFUSION, "extend-preinfusion"),
        (ActionId.STOP_SHOT, "stop"),
        (ActionId.VIEW_LIVE, "live"),
        (ActionId.BREW_AGAIN, "repeat"),
        (ActionId.ADJUST_PROFILE, "profile"),
        (ActionId.SHARE, "share"),
    ],
)
def test_deep_link_segments(registry: ActionRegistry, action: ActionId, segment: str) -> None:
    assert registry.deep_link_for(action, "brew_1_2") == f"firstcrack://brew/brew_1_2/{segment}"


def test_deep_link_rejects_unsafe_brew_id(registry: ActionRegistry) -> None:
    with pytest.raises(InvalidBrewId):
        registry.deep_link_for(ActionId.DEFAULT, "abc;rm -rf")


def test_generic_details_link_carries_no_brew_id() -> None:
    registry = ActionRegistry(scheme="espresso")

    assert registry.generic_details_link() == "espresso://brew/details"
    assert registry.deep_link_for(ActionId.SHARE, "b-1") == "espresso://brew/b-1/share"


@pytest.mark.parametrize(
    ("brew_id", "valid"),
    [
        ("brew_1700000000000_42", True),
        ("A-b_9", True),
        ("", False),
        ("brew/../x", False),
        ("brew 1", False),
        ("brew_1\n", False),
        (None, False),
    ],
)
def test_is_valid_brew_id(brew_id: object, valid: bool) -> None:
    assert is_valid_brew_id(brew_id) is valid


def test_stop_shot_is_the_only_destructive_action(registry: ActionRegistry) -> None:
    destructive = [spec.action_id for spec in registry if spec.destructive]

    assert destructive == [ActionId.STOP_SHOT]
