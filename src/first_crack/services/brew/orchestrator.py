# -*- coding: utf-8 -*-
"""BrewOrchestrator: validate a brew request, create its context, schedule its timeline."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from first_crack.exceptions import ValidationError
from first_crack.models import BrewContext, BrewStartResult, generate_brew_id
from first_crack.services.brew.request import BrewRequest, field_errors, optional_overrides

if TYPE_CHECKING:
    from first_crack.config import Settings
    from first_crack.scheduler import BrewTimelineHandle, StageScheduler
    from first_crack.timeline import StageTimeline


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BrewOrchestrator:
    """Entry point for starting and stopping brews."""

    def __init__(
        self,
        settings: Settings,
        timeline: StageTimeline,
        scheduler: StageScheduler,
        *,
        now: Callable[[], datetime] = _utcnow,
        brew_id_factory: Callable[[], str] = generate_brew_id,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Application settings (device address rules).
            timeline: Stage timeline (stage count and duration reported to callers).
            scheduler: Stage scheduler that runs the timeline.
            now: UTC wall clock for the brew start instant.
            brew_id_factory: Produces brew_<epoch_ms>_<rand> ids.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._timeline = timeline
        self._scheduler = scheduler
        self._now = now
        self._brew_id_factory = brew_id_factory
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._last_handle: Optional[BrewTimelineHandle] = None

    @property
    def last_handle(self) -> Optional[BrewTimelineHandle]:
        """Handle of the most recently started brew (demo and tests)."""
        return self._last_handle

    async def start_brew(
        self,
        brew_type: str,
        dose_grams: float,
        target_temp_c: float,
        target_pressure_bar: float,
        device_address: str,
        *,
        preinfusion_seconds: Optional[float] = None,
        extraction_seconds: Optional[float] = None,
    ) -> BrewStartResult:
        """Validate parameters and schedule the stage timeline.

        Returns:
            BrewStartResult with the brew id, stage count and total duration.

        Raises:
            ValidationError: If any parameter is out of range; nothing is scheduled.
        """
        try:
            request = BrewRequest.model_validate(
                {
                    "brew_type": brew_type,
                    "dose_grams": dose_grams,
                    "target_temp_c": target_temp_c,
                    "target_pressure_bar": target_pressure_bar,
                    "device_address": device_address,
                    **optional_overrides(preinfusion_seconds, extraction_seconds),
                },
                context={"device_address_min_length": self._settings.brew.device_address_min_length},
            )
        except PydanticValidationError as exc:
            errors = field_errors(exc)
            self._logger.warning(
                "brew_request_invalid",
                validation_fields=[e.field for e in errors],
            )
            raise ValidationError(errors) from exc

        context = BrewContext(
            brew_id=self._brew_id_factory(),
            device_address=request.device_address,
            brew_type=request.brew_type,
            dose_grams=request.dose_grams,
            target_temp_c=request.target_temp_c,
            target_pressure_bar=request.target_pressure_bar,
            start_time=self._now(),
            preinfusion_seconds=request.preinfusion_seconds,
            extraction_seconds=request.extraction_seconds,
        )
        self._last_handle = self._scheduler.schedule(context)
        self._logger.info(
            "brew_started",
            brew_id=context.brew_id,
            brew_type=context.brew_type.value,
            brew_dose_grams=context.dose_grams,
        )
        return BrewStartResult(
            brew_id=context.brew_id,
            stage_count=len(self._timeline),
            estimated_duration_seconds=self._timeline.total_duration_seconds,
        )

    def stop_brew(self, brew_id: str) -> bool:
        """Cancel the remaining stages of a brew. Returns False if nothing was running."""
        stopped = self._scheduler.cancel(brew_id) > 0
        self._logger.info("brew_stop_requested", brew_id=brew_id, brew_stopped=stopped)
        return stopped
