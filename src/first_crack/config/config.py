# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, TRANSPORT__FCM_PROJECT_ID.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "first-crack"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/first_crack.log"
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Level for chatty dependencies (aiohttp, bubus, asyncio)
    library_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class BrewSettings(BaseSettings):
    """Notification content and deep-link settings (from env BREW__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    media_base_url: str = Field(
        default="https://storage.googleapis.com/first-crack-demo",
        description="Base URL prepended to stage image/video paths.",
    )
    deep_link_scheme: str = Field(
        default="firstcrack",
        pattern=r"^[a-z][a-z0-9+.-]*$",
        description="URI scheme used for every deep link.",
    )
    native_max_actions: int = Field(
        default=3,
        ge=1,
        le=3,
        description="Action buttons rendered on Android/APNs notifications.",
    )
    web_max_actions: int = Field(
        default=2,
        ge=2,
        le=4,
        description=(
            "Action buttons rendered on web push notifications. Later actions are left off "
            "web only (e.g. share on the complete stage); the data actions field keeps all."
        ),
    )
    android_channel_id: str = "brew_notifications"
    web_icon: str = "/icons/icon-192.png"
    web_badge: str = "/icons/badge-72.png"
    device_address_min_length: int = Field(
        default=1,
        ge=1,
        le=4096,
        description="Minimum length for a device address (FCM tokens are 100+ chars).",
    )


class TransportSettings(BaseSettings):
    """Push transport configuration (from env TRANSPORT__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    fcm_enabled: bool = False
    fcm_endpoint: str = Field(
        default="https://fcm.googleapis.com/v1/projects/{project_id}/messages:send",
        description="FCM HTTP v1 send URL; {project_id} is substituted.",
    )
    fcm_project_id: Optional[str] = Field(default=None, description="Firebase project id.")
    fcm_access_token: Optional[str] = Field(
        default=None,
        description="OAuth2 bearer token for the FCM HTTP v1 API.",
    )
    timeout_seconds: float = Field(
        default=10.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )


class ConsoleTransportSettings(BaseSettings):
    """Console transport settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True


class DemoSettings(BaseSettings):
    """Brew parameters used by the demo entry point (from env DEMO__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    brew_type: str = "espresso"
    dose_grams: float = 18
    target_temp_c: float = 93
    target_pressure_bar: float = 9
    device_address: str = "demo-device-001"
    simulated_action: Optional[str] = Field(
        default="view_live",
        description="Wire action id routed once the brew starts; empty to skip.",
    )


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, BREW__DEEP_LINK_SCHEME.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    brew: BrewSettings = Field(default_factory=BrewSettings)
    transport: TransportSettings = Field(default_factory=TransportSettings)
    console: ConsoleTransportSettings = Field(default_factory=ConsoleTransportSettings)
    demo: DemoSettings = Field(default_factory=DemoSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(brew={"web_max_actions": 3})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from first_crack.config import get_settings

        settings = get_settings()
        scheme = settings.brew.deep_link_scheme
    """
    return Settings()
