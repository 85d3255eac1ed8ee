# -*- coding: utf-8 -*-
"""
Entry point for the First Crack demo.

Orchestrates: logging, settings, container, one demo brew, one simulated
interaction, shutdown (timeline complete, SIGINT or CancelledError).
Notifications flow: orchestrator -> scheduler -> payload builder -> transport.
Interactions flow: surface -> action router -> navigation channel -> event bus.

Run with: python -m first_crack.main
"""
from __future__ import annotations

import asyncio
import signal
from typing import Any

import structlog

from first_crack.DI import Container
from first_crack.config import get_settings
from first_crack.events import close_event_bus
from first_crack.exceptions import ValidationError
from first_crack.logging.config import configure_logging
from first_crack.router import InteractionEvent


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(
            signal.SIGINT,
            lambda: shutdown_event.set(),
        )
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


async def _wait_for_first(*awaitables: Any) -> None:
    tasks = [asyncio.ensure_future(a) for a in awaitables]
    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            task.cancel()


async def run() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger = structlog.get_logger("main")
    demo = settings.demo

    container = Container()
    transport = container.transport()
    scheduler = container.stage_scheduler()
    orchestrator = container.brew_orchestrator()
    router = container.action_router()
    channel = container.navigation_channel()
    stop_handler = container.stop_action_handler()

    await transport.initialize()
    channel.attach(container.event_bus())
    stop_handler.start()
    shutdown_event = asyncio.Event()
    _setup_sigint(shutdown_event)

    try:
        try:
            result = await orchestrator.start_brew(
                demo.brew_type,
                demo.dose_grams,
                demo.target_temp_c,
                demo.target_pressure_bar,
                demo.device_address,
            )
        except ValidationError as exc:
            logger.error("main_demo_brew_invalid", validation_fields=exc.fields)
            raise

        logger.info(
            "main_demo_brew_started",
            brew_id=result.brew_id,
            brew_stage_count=result.stage_count,
            brew_duration_seconds=result.estimated_duration_seconds,
        )

        if demo.simulated_action:
            route = router.route(
                InteractionEvent(
                    wire_action_id=demo.simulated_action,
                    brew_id=result.brew_id,
                    surface="demo",
                )
            )
            logger.info(
                "main_simulated_interaction_routed",
                route_state=route.state.value,
                navigation_deep_link=route.navigation.deep_link if route.navigation else None,
            )

        handle = orchestrator.last_handle
        if handle is not None:
            await _wait_for_first(handle.wait(), shutdown_event.wait())
    finally:
        stop_handler.stop()
        channel.detach()
        await scheduler.shutdown()
        await transport.shutdown()
        await close_event_bus()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
