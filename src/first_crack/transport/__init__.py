"""Push transports."""

from first_crack.transport.base import BasePushTransport
from first_crack.transport.console import ConsoleTransport, render_message
from first_crack.transport.fcm import FcmTransport

__all__ = [
    "BasePushTransport",
    "ConsoleTransport",
    "FcmTransport",
    "render_message",
]
