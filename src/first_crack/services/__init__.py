# -*- coding: utf-8 -*-
"""Application services."""

from first_crack.services.brew import BrewOrchestrator
from first_crack.services.stop_action_handler import StopActionHandler

__all__ = ["BrewOrchestrator", "StopActionHandler"]
