"""Stage scheduling."""

from first_crack.scheduler.stage_scheduler import (
    BrewTimelineHandle,
    SendAttempt,
    SendOutcome,
    StageScheduler,
)

__all__ = [
    "BrewTimelineHandle",
    "SendAttempt",
    "SendOutcome",
    "StageScheduler",
]
