# -*- coding: utf-8 -*-
"""Unit tests for surface decoders and NotificationData."""

from __future__ import annotations

import json

from first_crack.router import InteractionEvent, NotificationData, parse_buttons
from first_crack.timeline import StageId


def test_android_button_extras_prefer_action_id() -> None:
    event = InteractionEvent.from_android(
        {"actionId": "pause_grinding", "action": "default", "brewId": "brew_1_2", "stage": "grinding"}
    )

    assert event.wire_action_id == "pause_grinding"
    assert event.brew_id == "brew_1_2"
    assert event.stage == "grinding"
    assert event.surface == "android"


def test_android_body_tap_without_action_defaults() -> None:
    assert InteractionEvent.from_android({"brewId": "brew_1_2"}).wire_action_id == "default"
    assert InteractionEvent.from_android({"action": "default"}).wire_action_id == "default"


def test_web_empty_action_is_body_tap() -> None:
    event = InteractionEvent.from_web("", {"brewId": "brew_1_2", "deepLink": "firstcrack://brew/brew_1_2/details"})

    assert event.wire_action_id == ""
    assert event.deep_link == "firstcrack://brew/brew_1_2/details"
    assert InteractionEvent.from_web(None, {}).brew_id is None


def test_button_tap_takes_link_from_matching_button() -> None:
    data = {
        "brewId": "brew_1_2",
        "deepLink": "firstcrack://brew/brew_1_2/details",
        "actions": json.dumps(
            [
                {"id": "stop_shot", "title": "Stop Shot Now", "deepLink": "firstcrack://brew/brew_1_2/stop"},
                {"id": "view_live", "title": "View Live", "deepLink": "firstcrack://brew/brew_1_2/live?camera=2"},
            ]
        ),
    }

    assert InteractionEvent.from_web("view_live", data).deep_link == "firstcrack://brew/brew_1_2/live?camera=2"
    assert InteractionEvent.from_apns("stop_shot", data).deep_link == "firstcrack://brew/brew_1_2/stop"
    assert InteractionEvent.from_android({**data, "actionId": "share"}).deep_link is None
    assert InteractionEvent.from_android(data).deep_link == "firstcrack://brew/brew_1_2/details"


def test_wire_decoder_ignores_non_string_values() -> None:
    event = InteractionEvent.from_wire({"wireActionId": 7, "brewId": 12, "deepLink": ""})

    assert event.wire_action_id == ""
    assert event.brew_id is None
    assert event.deep_link is None


def test_notification_data_decodes_string_payload() -> None:
    buttons = [
        {"id": "stop_shot", "title": "Stop Shot Now", "icon": "stop", "requiresForeground": True},
        {"id": "view_live", "title": "View Live", "deepLink": "firstcrack://brew/b_1/live"},
    ]
    data = NotificationData.from_wire(
        {
            "type": "brew_stage",
            "stage": "brewing",
            "brewId": "b_1",
            "title": "Brewing",
            "body": "Extracting",
            "category": "BREW_EXTRACTION",
            "dose": "18.5",
            "temperature": "93",
            "pressure": "9",
            "elapsedTime": "45",
            "remainingTime": "30",
            "progress": "60",
            "videoUrl": "https://cdn.example/v.mp4",
            "actions": json.dumps(buttons),
        }
    )

    assert data.stage is StageId.BREWING
    assert data.dose == 18.5
    assert data.temperature == 93.0
    assert data.elapsed_time == 45
    assert data.remaining_time == 30
    assert data.progress == 60
    assert data.image_url is None
    assert [b.id for b in data.actions] == ["stop_shot", "view_live"]
    assert data.actions[1].deep_link == "firstcrack://brew/b_1/live"


def test_notification_data_defaults_for_missing_or_bad_fields() -> None:
    data = NotificationData.from_wire({"stage": "pouring", "dose": "lots", "progress": ""})

    assert data.type == "brew_stage"
    assert data.stage is StageId.HEATING
    assert data.brew_id == ""
    assert data.brew_type == "espresso"
    assert data.dose == 18.0
    assert data.pressure == 9.0
    assert data.elapsed_time == 0
    assert data.progress is None
    assert data.actions == ()


def test_parse_buttons_tolerates_malformed_json() -> None:
    assert parse_buttons("{not json") == ()
    assert parse_buttons('{"id": "share"}') == ()
    assert parse_buttons('[{"id": "share"}, {"id": "share", "title": "Share"}]')[0].title == "Share"
    assert parse_buttons(None) == ()
