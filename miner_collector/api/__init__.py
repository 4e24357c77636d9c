"""API клиенты устройств."""

from .base import ApiClient
from .web import WebAPIClient

__all__ = ["ApiClient", "WebAPIClient"]
