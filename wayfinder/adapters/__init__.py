"""Adapters layer - Concrete sources of map snapshots."""

from .snapshot import JsonMapSnapshot, StaticMapSnapshot

__all__ = ["JsonMapSnapshot", "StaticMapSnapshot"]
