# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire.

Every event carries the service identity and, inside a stage send or a routed
interaction, the brew_id/stage bound through structlog contextvars.
"""

from __future__ import annotations

import logging
import logfire
import structlog
from typing import Any, Optional
from structlog.types import EventDict, Processor
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from first_crack.config import AppSettings, LoggingSettings, Settings, get_settings

LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

# Dependencies whose INFO/DEBUG chatter would drown the brew timeline.
LIBRARY_LOGGERS: tuple[str, ...] = ("aiohttp", "bubus", "asyncio")


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


class ServiceContext:
    """structlog processor stamping logger name and service identity on each event."""

    def __init__(self, app_settings: AppSettings) -> None:
        self._static: dict[str, str] = {"app_name": app_settings.app_name}
        if app_settings.service_name:
            self._static["service_name"] = app_settings.service_name
        if app_settings.service_version:
            self._static["service_version"] = app_settings.service_version
        self._static["environment"] = app_settings.environment

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = (
            getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        )
        for key, value in self._static.items():
            event_dict.setdefault(key, value)
        return event_dict


def quiet_library_loggers(level: str) -> None:
    """Raise third-party loggers to at least `level`."""
    threshold = _level(level)
    for name in LIBRARY_LOGGERS:
        library_logger = logging.getLogger(name)
        if library_logger.level < threshold:
            library_logger.setLevel(threshold)


def _build_handlers(logging_settings: LoggingSettings) -> list[logging.Handler]:
    """Return the stdlib handlers enabled in settings (console and/or rotating file)."""
    handlers: list[logging.Handler] = []

    if logging_settings.log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(logging_settings.console_level))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if logging_settings.log_to_file:
        log_file_path = Path(logging_settings.log_file_path)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_file_path,
            when=logging_settings.log_file_when,
            interval=logging_settings.log_file_interval,
            backupCount=logging_settings.log_file_backup_count,
            encoding="utf-8",
            utc=logging_settings.log_file_utc,
        )
        file_handler.setLevel(_level(logging_settings.file_level))
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    return handlers


def build_processors(settings: Settings, *, render: bool) -> list[Processor]:
    """structlog processor chain; a renderer is appended only when render is True."""
    logging_settings = settings.logging
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        ServiceContext(settings.app),
    ]

    if logging_settings.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]

    if render:
        # File output is always JSON; console follows json_format.
        use_json = logging_settings.log_to_file or logging_settings.json_format
        renderer: Any = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer()
        )
        processors.append(renderer)
    return processors


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog (and Logfire when enabled). Defaults to get_settings()."""
    settings = settings or get_settings()
    app_settings = settings.app
    logging_settings = settings.logging

    handlers = _build_handlers(logging_settings)
    if handlers:
        logging.basicConfig(
            level=min(handler.level for handler in handlers),
            handlers=handlers,
        )
    quiet_library_loggers(logging_settings.library_level)

    if logging_settings.logfire_enabled:
        logfire.configure(
            token=logging_settings.logfire_token,
            service_name=app_settings.service_name or app_settings.app_name,
            service_version=app_settings.service_version,
            min_level=LOG_LEVEL_TO_LOGFIRE.get(logging_settings.logfire_level, "info"),  # type: ignore[arg-type]
            environment=app_settings.environment,
        )

    structlog.configure(
        processors=build_processors(settings, render=bool(handlers)),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
