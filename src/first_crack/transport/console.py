# -*- coding: utf-8 -*-
"""Console transport (print-based), used when no real push backend is configured."""

from __future__ import annotations

import itertools
from typing import Any

from first_crack.config import Settings
from first_crack.exceptions import TransportSendFailure
from first_crack.transport.base import BasePushTransport


def render_message(message: dict[str, Any]) -> str:
    """Render the notification as a short plain-text block."""
    body = message.get("message", {})
    data = body.get("data", {})
    lines = [
        f"[{data.get('stage', '?')}] {data.get('title', '')}",
        f"  {data.get('body', '')}",
        f"  brew={data.get('brewId', '')} category={data.get('category', '')}",
    ]
    if data.get("progress") is not None:
        lines.append(f"  progress={data['progress']}%")
    if data.get("actions"):
        lines.append(f"  actions={data['actions']}")
    return "\n".join(lines)


class ConsoleTransport(BasePushTransport):
    """Print notifications to stdout."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self._running = False
        self._counter = itertools.count(1)

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send(self, message: dict[str, Any]) -> str:
        """Print the message."""
        if not self.is_running:
            raise TransportSendFailure("Console transport is not running")
        print(render_message(message))
        return f"console/{next(self._counter)}"
