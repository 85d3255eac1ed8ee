"""Logging setup."""

from first_crack.logging.config import configure_logging

__all__ = ["configure_logging"]
