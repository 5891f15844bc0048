"""Publishing platform clients (dev.to and Medium)."""

from .base import PlatformClient
from .devto import DevToClient
from .factory import create_client
from .medium import MediumClient

__all__ = ["PlatformClient", "DevToClient", "MediumClient", "create_client"]
