# -*- coding: utf-8 -*-
"""Unit tests for Settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from first_crack.config import Settings


def test_defaults() -> None:
    settings = Settings.from_env()

    assert settings.brew.deep_link_scheme == "firstcrack"
    assert settings.brew.native_max_actions == 3
    assert settings.brew.web_max_actions == 2
    assert settings.transport.fcm_enabled is False
    assert settings.console.enabled is True


def test_nested_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BREW__WEB_MAX_ACTIONS", "4")
    monkeypatch.setenv("TRANSPORT__FCM_PROJECT_ID", "demo-project")

    settings = Settings()

    assert settings.brew.web_max_actions == 4
    assert settings.transport.fcm_project_id == "demo-project"


def test_action_caps_are_bounded() -> None:
    with pytest.raises(PydanticValidationError):
        Settings.from_env(brew={"native_max_actions": 4})
    with pytest.raises(PydanticValidationError):
        Settings.from_env(brew={"web_max_actions": 1})
