# -*- coding: utf-8 -*-
"""Base push transport."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from first_crack.config.config import Settings


class BasePushTransport(ABC):
    """Abstract base class for push notification transports."""

    def __init__(self, settings: "Settings"):
        """
        Initialize the transport.

        Args:
            settings: Global configuration (Settings).
        """
        self.settings = settings

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether the transport is initialized and accepting sends."""
        pass

    @abstractmethod
    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        pass

    @abstractmethod
    async def send(self, message: dict[str, Any]) -> str:
        """
        Deliver one FCM-style message ({"message": {"token": ..., ...}}).

        Returns:
            Transport message id.

        Raises:
            TransportSendFailure: If the transport rejects or cannot deliver it.
        """
        pass
