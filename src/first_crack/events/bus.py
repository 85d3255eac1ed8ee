"""Process event bus (bubus). Carries NavigationEvents to the UI shell and StopActionHandler."""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]

_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Return the process event bus. Created on first call."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus(name="FirstCrack", max_history_size=50, wal_path=None)
    return _event_bus


def set_event_bus(bus: EventBus | None) -> None:
    """Replace the bus (tests, DI). None resets to the lazy default."""
    global _event_bus
    _event_bus = bus


async def close_event_bus() -> None:
    """Drain and stop the bus if one was created, then reset to the lazy default."""
    global _event_bus
    bus, _event_bus = _event_bus, None
    if bus is not None:
        await bus.stop()
