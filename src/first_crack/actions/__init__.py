"""Action registry."""

from first_crack.actions.registry import (
    BREW_ID_PATTERN,
    DEFAULT_TAP_SENTINELS,
    ActionId,
    ActionRegistry,
    ActionSpec,
    is_valid_brew_id,
)

__all__ = [
    "BREW_ID_PATTERN",
    "DEFAULT_TAP_SENTINELS",
    "ActionId",
    "ActionRegistry",
    "ActionSpec",
    "is_valid_brew_id",
]
