"""Time <-> pixel mapping, zoom about the cursor, panning, and grid snapping."""

import math
from dataclasses import dataclass

from ..constants import (
    DEFAULT_PIXELS_PER_SECOND,
    LONG_TICK_INTERVAL,
    MAJOR_TICK_EVERY,
    MAX_PIXELS_PER_SECOND,
    MIN_PIXELS_PER_SECOND,
    TICK_INTERVALS,
    ZOOM_FACTOR,
)


@dataclass(frozen=True)
class RulerTick:
    """A ruler marker at ``time`` seconds, drawn at content pixel ``x``."""
    time: float
    x: float
    major: bool


def tick_interval(duration: float) -> int:
    """Ruler tick spacing in seconds for a timeline of ``duration`` seconds."""
    for max_duration, interval in TICK_INTERVALS:
        if duration <= max_duration:
            return interval
    return LONG_TICK_INTERVAL


def snap_unit(duration: float) -> float:
    """Snap granularity: half a tick when ticks are 2s or wider, else 1 second."""
    interval = tick_interval(duration)
    return interval / 2 if interval >= 2 else 1


def clamp_time(time: float, duration: float) -> float:
    """Clamp to ``[0, duration]``; NaN maps to 0."""
    if math.isnan(time):
        return 0.0
    return max(0.0, min(duration, time))


class CoordinateEngine:
    """
    Viewport state for a horizontally scrolling timeline.

    ``scroll_x``/``scroll_y`` mirror the hosting viewport's scroll offsets;
    viewport coordinates are relative to its visible top-left corner.
    """

    def __init__(
        self,
        pixels_per_second: float = DEFAULT_PIXELS_PER_SECOND,
        snap_to_grid: bool = True,
        min_zoom: float = MIN_PIXELS_PER_SECOND,
        max_zoom: float = MAX_PIXELS_PER_SECOND,
    ):
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.pixels_per_second = self._clamp_zoom(pixels_per_second)
        self.snap_to_grid = snap_to_grid
        self.scroll_x = 0.0
        self.scroll_y = 0.0
        self.is_panning = False
        self._pan_start = (0.0, 0.0)
        self._scroll_start = (0.0, 0.0)

    def _clamp_zoom(self, pixels_per_second: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, pixels_per_second))

    def time_to_pixel(self, time: float) -> float:
        """Content x position (before scrolling) of ``time``."""
        return time * self.pixels_per_second

    def pixel_to_time(self, viewport_x: float) -> float:
        """Time under viewport position ``viewport_x`` at the current scroll."""
        return (viewport_x + self.scroll_x) / self.pixels_per_second

    def content_width(self, duration: float) -> float:
        return duration * self.pixels_per_second

    @property
    def zoom_percent(self) -> int:
        """Zoom relative to the default scale, as a whole percentage."""
        return round(self.pixels_per_second / DEFAULT_PIXELS_PER_SECOND * 100)

    def zoom_at(self, direction: int, viewport_x: float) -> float:
        """
        Zoom one step keeping the time under ``viewport_x`` fixed on screen.

        Args:
            direction: Positive zooms in; zero or negative zooms out
            viewport_x: Cursor position in viewport pixels

        Returns:
            The new pixels-per-second scale
        """
        time_at_cursor = self.pixel_to_time(viewport_x)
        factor = ZOOM_FACTOR if direction > 0 else 1 / ZOOM_FACTOR
        self.pixels_per_second = self._clamp_zoom(self.pixels_per_second * factor)
        # Scroll so the same time lands back under the cursor; the viewport clamps its own range.
        self.scroll_x = time_at_cursor * self.pixels_per_second - viewport_x
        return self.pixels_per_second

    def zoom_from_wheel(self, delta_y: float, viewport_x: float) -> float:
        """Wheel up (negative delta) zooms in."""
        return self.zoom_at(-_sign(delta_y), viewport_x)

    def begin_pan(self, pointer_x: float, pointer_y: float) -> None:
        self.is_panning = True
        self._pan_start = (pointer_x, pointer_y)
        self._scroll_start = (self.scroll_x, self.scroll_y)

    def pan_to(self, pointer_x: float, pointer_y: float) -> None:
        """Drag the content with the pointer: scroll moves opposite to the pointer."""
        if not self.is_panning:
            return
        self.scroll_x = self._scroll_start[0] - (pointer_x - self._pan_start[0])
        self.scroll_y = self._scroll_start[1] - (pointer_y - self._pan_start[1])

    def end_pan(self) -> None:
        self.is_panning = False

    def snap_time(self, time: float, duration: float) -> float:
        """
        Round ``time`` to the nearest snap unit (halves round up) when snapping is on.

        Non-finite times are returned unchanged and left to :func:`clamp_time`.
        """
        if not self.snap_to_grid or not math.isfinite(time):
            return time
        unit = snap_unit(duration)
        return math.floor(time / unit + 0.5) * unit

    def viewport_to_time(self, viewport_x: float, duration: float) -> float:
        """Model time for a click at ``viewport_x``: mapped, snapped, then clamped."""
        return clamp_time(self.snap_time(self.pixel_to_time(viewport_x), duration), duration)

    def ruler_ticks(self, duration: float) -> list[RulerTick]:
        """Ruler markers from 0 through ``duration``; every fifth tick is major."""
        interval = tick_interval(duration)
        count = int(duration // interval)
        return [
            RulerTick(
                time=index * interval,
                x=self.time_to_pixel(index * interval),
                major=index % MAJOR_TICK_EVERY == 0,
            )
            for index in range(count + 1)
        ]


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)
