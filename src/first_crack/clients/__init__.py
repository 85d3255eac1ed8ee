"""HTTP clients."""

from first_crack.clients.http import AsyncHttpClient

__all__ = ["AsyncHttpClient"]
