"""HTTP clients for remote reference tables."""

from phagelink.api_clients.base import CachedAPIClient

__all__ = ["CachedAPIClient"]
