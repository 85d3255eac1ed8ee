"""Exceptions subpackage."""

from first_crack.exceptions.exceptions import (
    ChannelNotAttached,
    FieldError,
    FirstCrackError,
    InvalidBrewId,
    InvalidStageData,
    MissingRequiredConfigError,
    TransportSendFailure,
    UnknownAction,
    ValidationError,
)

__all__ = [
    "ChannelNotAttached",
    "FieldError",
    "FirstCrackError",
    "InvalidBrewId",
    "InvalidStageData",
    "MissingRequiredConfigError",
    "TransportSendFailure",
    "UnknownAction",
    "ValidationError",
]
