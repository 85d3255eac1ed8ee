# -*- coding: utf-8 -*-
"""Firebase Cloud Messaging transport (HTTP v1 API)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from first_crack.exceptions import MissingRequiredConfigError, TransportSendFailure
from first_crack.transport.base import BasePushTransport

if TYPE_CHECKING:
    from first_crack.clients.http import AsyncHttpClient
    from first_crack.config.config import Settings


class FcmTransport(BasePushTransport):
    """Send messages through the FCM HTTP v1 `messages:send` endpoint."""

    def __init__(
        self,
        settings: "Settings",
        http_client: "AsyncHttpClient",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._http = http_client

        cfg = self.settings.transport
        if not cfg.fcm_project_id:
            raise MissingRequiredConfigError("TRANSPORT__FCM_PROJECT_ID")
        if not cfg.fcm_access_token:
            raise MissingRequiredConfigError("TRANSPORT__FCM_ACCESS_TOKEN")

        self.url = cfg.fcm_endpoint.format(project_id=cfg.fcm_project_id)
        self._access_token = cfg.fcm_access_token
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            self._logger.warning("fcm_already_running")
            return
        self._running = True

    async def shutdown(self) -> None:
        if not self._running:
            return
        await self._http.aclose()
        self._running = False

    async def send(self, message: dict[str, Any]) -> str:
        """POST the message once and return the FCM message name.

        Raises:
            TransportSendFailure: If not running, rejected, or the response has no name.
        """
        if not self._running:
            raise TransportSendFailure("FCM transport is not running", url=self.url)

        response = await self._http.post(
            self.url,
            json=message,
            headers={"Authorization": f"Bearer {self._access_token}"},
        )
        name = response.get("name") if isinstance(response, dict) else None
        if not name:
            raise TransportSendFailure(
                "FCM response did not include a message name",
                url=self.url,
            )
        return str(name)
