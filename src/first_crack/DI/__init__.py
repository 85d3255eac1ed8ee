# -*- coding: utf-8 -*-
"""Dependency injection."""

from first_crack.DI.container import Container

__all__ = ["Container"]
