"""Core app configuration and shared finder state."""

from subordinates.core.config import get_settings, settings
from subordinates.core.state import get_finder

__all__ = ["get_settings", "settings", "get_finder"]
