"""Viewport mapping between screen pixels and timeline seconds."""

from .coordinates import (
    CoordinateEngine,
    RulerTick,
    clamp_time,
    snap_unit,
    tick_interval,
)
from .drag import EventDrag

__all__ = [
    "CoordinateEngine",
    "RulerTick",
    "clamp_time",
    "snap_unit",
    "tick_interval",
    "EventDrag",
]
