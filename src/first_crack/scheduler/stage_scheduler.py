# -*- coding: utf-8 -*-
"""StageScheduler: fires one notification per timeline stage at start_time + offset.

One long-lived task per brew walks the timeline. Fire times are anchored to the
brew's start instant, never to the previous send's completion, so a slow send
cannot push later stages back. Each send runs as its own task; failures are
logged and the timeline carries on (no retries: a stale stage update is worse
than a missing one).
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from first_crack.exceptions import InvalidStageData, TransportSendFailure
from first_crack.timeline import StageEntry, StageId

if TYPE_CHECKING:
    from first_crack.models import BrewContext
    from first_crack.payloads import PayloadBuilder
    from first_crack.timeline import StageTimeline
    from first_crack.transport import BasePushTransport


class SendOutcome(str, Enum):
    """Result of one stage send."""

    SENT = "sent"
    FAILED = "failed"
    INVALID = "invalid"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class SendAttempt:
    """A stage that reached its fire time and was handed to the transport."""

    stage_id: StageId
    planned_at: datetime
    """start_time + offset (wall clock)."""

    fired_at: float
    """Scheduler clock reading when the send started."""


class BrewTimelineHandle:
    """Cancellation handle and progress record for one scheduled timeline."""

    def __init__(self, context: BrewContext, anchor: float) -> None:
        self.context = context
        self.anchor = anchor
        """Scheduler clock reading that corresponds to context.start_time."""

        self.attempts: list[SendAttempt] = []
        self.outcomes: dict[StageId, SendOutcome] = {}
        self._task: Optional[asyncio.Task[None]] = None
        self._in_flight: set[asyncio.Task[None]] = set()
        self._cancelled = False

    @property
    def brew_id(self) -> str:
        return self.context.brew_id

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def _track(self, send_task: asyncio.Task[None]) -> None:
        self._in_flight.add(send_task)
        send_task.add_done_callback(self._in_flight.discard)

    def cancel(self) -> bool:
        """Stop future sends and best-effort cancel in-flight ones. Returns False if already done."""
        if self._cancelled or self.done:
            return False
        self._cancelled = True
        if self._task is not None:
            self._task.cancel()
        for send_task in list(self._in_flight):
            send_task.cancel()
        return True

    async def wait(self) -> None:
        """Wait until every stage has fired or failed, or the timeline was cancelled."""
        if self._task is None:
            return
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise


def _utcnow() -> datetime:
    return datetime.now(UTC)


class StageScheduler:
    """Schedules timed stage sends for brews. Handles are keyed by brew id."""

    def __init__(
        self,
        timeline: StageTimeline,
        payload_builder: PayloadBuilder,
        transport: BasePushTransport,
        *,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = _utcnow,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            timeline: Static stage timeline.
            payload_builder: Builds per-surface payloads for each stage.
            transport: Push transport used for every send.
            clock: Monotonic clock used for fire times (injected for tests).
            wall_clock: UTC wall clock, used to map start_time onto clock.
            sleep: Async sleep (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._timeline = timeline
        self._builder = payload_builder
        self._transport = transport
        self._clock = clock
        self._wall_clock = wall_clock
        self._sleep = sleep
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._handles: dict[str, list[BrewTimelineHandle]] = {}

    def schedule(self, context: BrewContext) -> BrewTimelineHandle:
        """Start the timeline for a brew. Must be called from a running event loop.

        Scheduling the same brew id twice creates two independent timelines.
        """
        elapsed = (self._wall_clock() - context.start_time).total_seconds()
        handle = BrewTimelineHandle(context, anchor=self._clock() - elapsed)
        task = asyncio.create_task(
            self._run_timeline(handle),
            name=f"brew-timeline-{context.brew_id}",
        )
        handle._task = task
        self._handles.setdefault(context.brew_id, []).append(handle)
        task.add_done_callback(lambda _: self._forget(handle))
        self._logger.info(
            "stage_timeline_scheduled",
            brew_id=context.brew_id,
            timeline_stage_count=len(self._timeline),
            timeline_duration_seconds=self._timeline.total_duration_seconds,
        )
        return handle

    def cancel(self, brew_id: str) -> int:
        """Cancel every live timeline for brew_id. Returns how many were cancelled."""
        cancelled = sum(1 for handle in list(self._handles.get(brew_id, [])) if handle.cancel())
        self._logger.info(
            "stage_timeline_cancel_requested",
            brew_id=brew_id,
            timelines_cancelled=cancelled,
        )
        return cancelled

    def active(self, brew_id: str) -> list[BrewTimelineHandle]:
        return list(self._handles.get(brew_id, []))

    async def shutdown(self) -> None:
        """Cancel all live timelines and wait for them to unwind."""
        handles = [h for group in self._handles.values() for h in group]
        for handle in handles:
            handle.cancel()
        for handle in handles:
            await handle.wait()

    def _forget(self, handle: BrewTimelineHandle) -> None:
        group = self._handles.get(handle.brew_id)
        if group is None:
            return
        if handle in group:
            group.remove(handle)
        if not group:
            del self._handles[handle.brew_id]

    async def _run_timeline(self, handle: BrewTimelineHandle) -> None:
        context = handle.context
        try:
            for stage in self._timeline:
                delay = handle.anchor + stage.offset_seconds - self._clock()
                if delay > 0:
                    await self._sleep(delay)
                if handle.cancelled:
                    return
                handle.attempts.append(
                    SendAttempt(
                        stage_id=stage.stage_id,
                        planned_at=context.start_time + timedelta(seconds=stage.offset_seconds),
                        fired_at=self._clock(),
                    )
                )
                handle._track(asyncio.create_task(self._send_stage(handle, stage)))

            # Stages have all fired; let slow sends finish before the timeline is done.
            pending = list(handle._in_flight)
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
            self._logger.info(
                "stage_timeline_complete",
                brew_id=context.brew_id,
                timeline_sent=sum(1 for o in handle.outcomes.values() if o is SendOutcome.SENT),
                timeline_failed=sum(1 for o in handle.outcomes.values() if o is not SendOutcome.SENT),
            )
        except asyncio.CancelledError:
            self._logger.info(
                "stage_timeline_cancelled",
                brew_id=context.brew_id,
                timeline_fired=len(handle.attempts),
            )
            raise

    async def _send_stage(self, handle: BrewTimelineHandle, stage: StageEntry) -> None:
        context = handle.context
        with bound_contextvars(brew_id=context.brew_id, stage=stage.stage_id.value):
            try:
                payloads = self._builder.build(context, stage)
            except InvalidStageData as exc:
                handle.outcomes[stage.stage_id] = SendOutcome.INVALID
                self._logger.error("stage_payload_invalid", error_message=str(exc))
                return

            try:
                message_id = await self._transport.send(payloads.to_message(context.device_address))
            except TransportSendFailure as exc:
                handle.outcomes[stage.stage_id] = SendOutcome.FAILED
                self._logger.error(
                    "stage_send_failed",
                    error_message=str(exc),
                    http_status_code=exc.status_code,
                )
                return
            except asyncio.CancelledError:
                handle.outcomes[stage.stage_id] = SendOutcome.CANCELLED
                raise
            except Exception as exc:
                handle.outcomes[stage.stage_id] = SendOutcome.FAILED
                self._logger.exception(
                    "stage_send_unexpected_error",
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                return

            handle.outcomes[stage.stage_id] = SendOutcome.SENT
            self._logger.info(
                "stage_sent",
                stage_category=payloads.category,
                transport_message_id=message_id,
            )
