"""Two-phase event dragging.

While a drag is in progress the candidate time lives on the drag object;
the event and its track are only touched when the drag is committed, so the
track stays sorted throughout the gesture.
"""

from typing import TYPE_CHECKING

from ..constants import SNAP_INDICATOR_THRESHOLD
from ..errors import DragFinished
from .coordinates import clamp_time

if TYPE_CHECKING:
    from ..model import TimelineEvent, Track
    from .coordinates import CoordinateEngine


class EventDrag:
    """Moves one event along its track by pointer delta."""

    def __init__(
        self,
        engine: "CoordinateEngine",
        track: "Track",
        event: "TimelineEvent",
        pointer_x: float,
        duration: float,
    ):
        """
        Start dragging ``event``.

        Args:
            engine: Viewport mapping used for scale and snapping
            track: Track that owns the event (re-sorted on commit)
            event: Event being moved
            pointer_x: Pointer x position when the drag started
            duration: Timeline duration bounding the new time
        """
        self.engine = engine
        self.track = track
        self.event = event
        self.duration = duration
        self.start_pointer_x = pointer_x
        self.start_time = event.time
        self.provisional_time = event.time
        self.finished = False

    @property
    def display_time(self) -> float:
        """Where the event should be drawn: the provisional time, snapped."""
        return self.engine.snap_time(self.provisional_time, self.duration)

    @property
    def snap_indicator(self) -> bool:
        """True when the pointer is close enough to a grid line to show the snap guide."""
        return (
            self.engine.snap_to_grid
            and abs(self.display_time - self.provisional_time) < SNAP_INDICATOR_THRESHOLD
        )

    def move(self, pointer_x: float) -> float:
        """Update the provisional time from the pointer; returns the display time."""
        self._ensure_active()
        delta_time = (pointer_x - self.start_pointer_x) / self.engine.pixels_per_second
        self.provisional_time = clamp_time(self.start_time + delta_time, self.duration)
        return self.display_time

    def commit(self) -> "TimelineEvent":
        """Write the final (snapped, clamped) time to the event and re-sort its track."""
        self._ensure_active()
        self.finished = True
        final_time = clamp_time(self.display_time, self.duration)
        self.event.update(time=float(final_time))
        self.track.sort_events()
        return self.event

    def cancel(self) -> None:
        """Abandon the drag, leaving the event where it was."""
        self._ensure_active()
        self.finished = True
        self.provisional_time = self.start_time

    def _ensure_active(self) -> None:
        if self.finished:
            raise DragFinished("Drag already committed or cancelled")
