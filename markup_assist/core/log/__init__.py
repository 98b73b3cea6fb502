"""Logging micro API for markup-assist."""

from .lib import get_logger, resolve_level, setup_logging

__all__ = ["get_logger", "resolve_level", "setup_logging"]
