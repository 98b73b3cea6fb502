"""Core utilities shared by all markup-assist modules."""

from .log import get_logger, resolve_level, setup_logging

__all__ = ["get_logger", "resolve_level", "setup_logging"]
