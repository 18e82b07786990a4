"""Tracks: ordered lanes of timeline events."""

import random
from typing import Any

from ..constants import DEFAULT_TRACK_NAME, TRACK_COLORS
from .event import TimelineEvent
from .identity import generate_id


class Track:
    """An ordered collection of events sharing a visual lane."""

    def __init__(self, name: str = DEFAULT_TRACK_NAME, rng: random.Random | None = None):
        """
        Initialize an empty track.

        Args:
            name: Display name
            rng: Random source for the display color (injectable for tests)
        """
        self.id = generate_id("track")
        self.name = name
        self.events: list[TimelineEvent] = []
        self.color = (rng or random).choice(TRACK_COLORS)
        # Placeholders for future UI gating; nothing in the core reads them.
        self.visible = True
        self.locked = False

    def add_event(self, event: TimelineEvent) -> TimelineEvent:
        """Append an event and restore time order."""
        self.events.append(event)
        self.sort_events()
        return event

    def remove_event(self, event_id: str) -> bool:
        """Remove an event by id, reporting whether it was present."""
        for index, event in enumerate(self.events):
            if event.id == event_id:
                del self.events[index]
                return True
        return False

    def get_event(self, event_id: str) -> TimelineEvent | None:
        return next((event for event in self.events if event.id == event_id), None)

    def sort_events(self) -> None:
        """
        Re-establish ascending time order.

        The sort is stable: events with equal times keep their relative order.
        """
        self.events.sort(key=lambda event: event.time)

    def get_events_in_range(self, start: float, end: float) -> list[TimelineEvent]:
        """Events with ``start <= time <= end``."""
        return [event for event in self.events if start <= event.time <= end]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "visible": self.visible,
            "locked": self.locked,
            "events": [event.to_dict() for event in self.events],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Track":
        events = data["events"]
        if not isinstance(events, list):
            raise TypeError("Track events must be a list")
        track = cls(str(data["name"]))
        track.id = str(data["id"])
        track.color = str(data.get("color", track.color))
        track.visible = bool(data.get("visible", True))
        track.locked = bool(data.get("locked", False))
        track.events = [TimelineEvent.from_dict(event) for event in events]
        track.sort_events()
        return track

    def __repr__(self) -> str:
        return f"Track(id={self.id!r}, name={self.name!r}, events={len(self.events)})"
