"""Configuration subpackage."""

from first_crack.config.config import (
    AppSettings,
    BrewSettings,
    ConsoleTransportSettings,
    DemoSettings,
    LoggingSettings,
    Settings,
    TransportSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "BrewSettings",
    "ConsoleTransportSettings",
    "DemoSettings",
    "LoggingSettings",
    "Settings",
    "TransportSettings",
    "get_settings",
]
