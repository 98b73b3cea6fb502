"""Collector module - gather the types a grammar must declare."""

from .lib import collect_types, type_depth

__all__ = ["collect_types", "type_depth"]
