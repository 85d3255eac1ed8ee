"""Custom exceptions for brew orchestration and interaction routing."""

from __future__ import annotations

from dataclasses import dataclass


class FirstCrackError(Exception):
    """Base exception for First Crack errors."""

    pass


class MissingRequiredConfigError(FirstCrackError):
    """Raised when a required configuration value is missing."""

    pass


@dataclass(frozen=True)
class FieldError:
    """One field-level validation failure."""

    field: str
    reason: str


class ValidationError(FirstCrackError):
    """Raised when brew-start parameters are malformed. The brew is never created."""

    def __init__(self, errors: list[FieldError]) -> None:
        details = "; ".join(f"{e.field}: {e.reason}" for e in errors)
        super().__init__(f"Invalid brew request ({details})")
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]


class InvalidStageData(FirstCrackError):
    """Raised when a stage entry / brew context pair cannot produce a payload."""

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage


class TransportSendFailure(FirstCrackError):
    """Raised when the push transport rejects or cannot deliver a payload."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class UnknownAction(FirstCrackError):
    """Raised when a wire action id is outside the closed action set."""

    def __init__(self, wire_id: str) -> None:
        super().__init__(f"Unknown action identifier: {wire_id!r}")
        self.wire_id = wire_id


class InvalidBrewId(FirstCrackError):
    """Raised when a brew id contains characters outside [A-Za-z0-9_-]."""

    def __init__(self, brew_id: str) -> None:
        super().__init__(f"Invalid brew id format: {brew_id!r}")
        self.brew_id = brew_id


class ChannelNotAttached(FirstCrackError):
    """Raised when dispatching on a navigation channel with no attached bus."""

    pass
