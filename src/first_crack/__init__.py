"""First Crack: stage-driven brew notifications and notification action routing."""

from first_crack.actions import ActionId, ActionRegistry
from first_crack.config import get_settings
from first_crack.DI import Container
from first_crack.router import ActionRouter, InteractionEvent
from first_crack.scheduler import StageScheduler
from first_crack.services import BrewOrchestrator

__version__ = "0.1.0"
__all__ = [
    "ActionId",
    "ActionRegistry",
    "ActionRouter",
    "BrewOrchestrator",
    "Container",
    "InteractionEvent",
    "StageScheduler",
    "get_settings",
]
