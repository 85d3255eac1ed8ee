# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from first_crack.actions import ActionRegistry
from first_crack.clients.http import AsyncHttpClient
from first_crack.config import Settings, get_settings
from first_crack.events.bus import get_event_bus
from first_crack.payloads import PayloadBuilder
from first_crack.router import ActionRouter, get_navigation_channel
from first_crack.scheduler import StageScheduler
from first_crack.services.brew import BrewOrchestrator
from first_crack.services.stop_action_handler import StopActionHandler
from first_crack.timeline import DEFAULT_TIMELINE, StageTimeline
from first_crack.transport import BasePushTransport, ConsoleTransport, FcmTransport


def _build_registry(settings: Settings) -> ActionRegistry:
    return ActionRegistry(scheme=settings.brew.deep_link_scheme)


def _build_payload_builder(
    settings: Settings,
    registry: ActionRegistry,
    timeline: StageTimeline,
) -> PayloadBuilder:
    """Build the payload builder; remainingTime is measured against the timeline length."""
    return PayloadBuilder(
        registry,
        settings.brew,
        total_duration_seconds=timeline.total_duration_seconds,
    )


def _build_transport(settings: Settings, http_client: AsyncHttpClient) -> BasePushTransport:
    """FCM when enabled, otherwise print to the console."""
    if settings.transport.fcm_enabled:
        return FcmTransport(settings=settings, http_client=http_client)
    return ConsoleTransport(settings=settings)


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, transport, scheduler, orchestrator, router."""

    config = providers.Callable(get_settings)

    event_bus = providers.Callable(get_event_bus)

    timeline = providers.Object(DEFAULT_TIMELINE)

    action_registry = providers.Singleton(_build_registry, config)

    payload_builder = providers.Singleton(
        _build_payload_builder,
        config,
        action_registry,
        timeline,
    )

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    transport = providers.Singleton(_build_transport, config, http_client)

    stage_scheduler = providers.Singleton(
        StageScheduler,
        timeline=timeline,
        payload_builder=payload_builder,
        transport=transport,
    )

    brew_orchestrator = providers.Singleton(
        BrewOrchestrator,
        settings=config,
        timeline=timeline,
        scheduler=stage_scheduler,
    )

    navigation_channel = providers.Callable(get_navigation_channel)

    action_router = providers.Singleton(
        ActionRouter,
        registry=action_registry,
        channel=navigation_channel,
    )

    stop_action_handler = providers.Singleton(
        StopActionHandler,
        orchestrator=brew_orchestrator,
        event_bus=event_bus,
    )
