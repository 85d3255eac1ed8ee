# -*- coding: utf-8 -*-
"""Brew orchestration."""

from first_crack.services.brew.orchestrator import BrewOrchestrator
from first_crack.services.brew.request import BrewRequest, field_errors

__all__ = ["BrewOrchestrator", "BrewRequest", "field_errors"]
