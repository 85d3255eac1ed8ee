# -*- coding: utf-8 -*-
"""Async HTTP client for the push transport (single attempt, no retry)."""

from __future__ import annotations

import asyncio
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from first_crack.config import Settings
from first_crack.exceptions import TransportSendFailure


class AsyncHttpClient:
    """Async JSON-over-HTTP client.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager. Requests are attempted once: stage
    notifications are time-sensitive, so a failed send is reported rather
    than repeated.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (transport timeout).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.transport.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def post(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """POST a JSON body and return the parsed JSON response.

        Args:
            url: Full URL to request.
            json: Optional JSON-serializable body.
            headers: Optional extra request headers (e.g. Authorization).

        Returns:
            Parsed JSON response (dict or list).

        Raises:
            TransportSendFailure: On a non-2xx status, connection error or timeout.
        """
        request_id = uuid.uuid4().hex[:12]
        with bound_contextvars(http_url=url, http_request_id=request_id):
            try:
                session = await self._get_session()
                async with session.post(url, json=json or {}, headers=headers) as response:
                    response.raise_for_status()
                    return await response.json()
            except aiohttp.ClientResponseError as e:
                self._logger.warning(
                    "http_post_rejected",
                    http_status_code=e.status,
                    error_message=e.message,
                )
                raise TransportSendFailure(
                    f"POST rejected with HTTP {e.status}: {url}",
                    url=url,
                    status_code=e.status,
                    cause=e,
                ) from e
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                self._logger.warning(
                    "http_post_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise TransportSendFailure(
                    f"POST failed: {url}",
                    url=url,
                    cause=e,
                ) from e
