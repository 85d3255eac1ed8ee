# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest
from bubus import EventBus  # type: ignore[import-untyped]

from first_crack.actions import ActionRegistry
from first_crack.config import Settings
from first_crack.exceptions import TransportSendFailure
from first_crack.models import BrewContext, BrewType
from first_crack.payloads import PayloadBuilder
from first_crack.timeline import DEFAULT_TIMELINE


class FakeClock:
    """Monotonic clock whose sleep advances time instantly.

    on_sleep (if set) runs before each advance, e.g. to cancel mid-timeline.
    """

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []
        self.on_sleep: Callable[[FakeClock], None] | None = None

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(self)
        self.now += seconds
        await asyncio.sleep(0)


class FakeTransport:
    """Records sent messages; fails for stages listed in fail_stages."""

    def __init__(self, fail_stages: tuple[str, ...] = ()) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail_stages = set(fail_stages)

    @property
    def sent_stages(self) -> list[str]:
        return [m["message"]["data"]["stage"] for m in self.sent]

    async def send(self, message: dict[str, Any]) -> str:
        stage = message["message"]["data"]["stage"]
        if stage in self.fail_stages:
            raise TransportSendFailure(f"rejected {stage}", status_code=500)
        self.sent.append(message)
        return f"projects/demo/messages/{len(self.sent)}"


@pytest.fixture
def settings() -> Settings:
    """Default settings (no FCM, console enabled)."""
    return Settings.from_env()


@pytest.fixture
def registry() -> ActionRegistry:
    return ActionRegistry(scheme="firstcrack")


@pytest.fixture
def builder(registry: ActionRegistry, settings: Settings) -> PayloadBuilder:
    """Payload builder sized for the default timeline."""
    return PayloadBuilder(
        registry,
        settings.brew,
        total_duration_seconds=DEFAULT_TIMELINE.total_duration_seconds,
    )


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def brew_context_factory(now_utc: datetime) -> Callable[..., BrewContext]:
    """Build BrewContext with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> BrewContext:
        return BrewContext(
            brew_id=overrides.pop("brew_id", "brew_1739448000000_42"),
            device_address=overrides.pop("device_address", "dev-123"),
            brew_type=overrides.pop("brew_type", BrewType.ESPRESSO),
            dose_grams=overrides.pop("dose_grams", 18.0),
            target_temp_c=overrides.pop("target_temp_c", 93.0),
            target_pressure_bar=overrides.pop("target_pressure_bar", 9.0),
            start_time=overrides.pop("start_time", now_utc),
            **overrides,
        )

    return _build


@pytest.fixture
def brew_context(brew_context_factory: Callable[..., BrewContext]) -> BrewContext:
    return brew_context_factory()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def event_bus() -> EventBus:
    """Isolated event bus instance for tests."""
    return EventBus(
        name="FirstCrackTests",
        max_history_size=200,
        wal_path=None,
    )


@pytest.fixture
def fake_transport_factory() -> Callable[..., FakeTransport]:
    """FakeTransport constructor, e.g. fake_transport_factory(fail_stages=("grinding",))."""
    return FakeTransport
