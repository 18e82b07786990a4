"""Timeline aggregate: duration, tracks, and the authoring file format."""

import json
from typing import Any, NamedTuple

from ..constants import (
    DEFAULT_DURATION,
    DEFAULT_EVENT_TOLERANCE,
    DEFAULT_TIMELINE_NAME,
    DEFAULT_TIMELINE_ZOOM,
    MIN_DURATION,
)
from ..log import get_logger
from .event import TimelineEvent
from .identity import format_timestamp, generate_id, parse_timestamp, utc_now
from .track import Track

log = get_logger(__name__)


class TrackEvent(NamedTuple):
    """An event paired with the track that owns it."""
    track: Track
    event: TimelineEvent


class Timeline:
    """Root of ownership for tracks and events."""

    def __init__(self, duration: float = DEFAULT_DURATION, name: str = DEFAULT_TIMELINE_NAME):
        self.id = generate_id("timeline")
        self.name = name
        self.duration = MIN_DURATION
        self.set_duration(duration)
        self.tracks: list[Track] = []
        self.current_time = 0.0
        self.zoom = DEFAULT_TIMELINE_ZOOM
        self.created_at = utc_now()

    def add_track(self, track: Track) -> Track:
        self.tracks.append(track)
        return track

    def create_track(self, name: str | None = None) -> Track:
        """Add a new track named after its position (``Track N``) unless named."""
        return self.add_track(Track(name or f"Track {len(self.tracks) + 1}"))

    def remove_track(self, track_id: str) -> bool:
        """Remove a track and every event on it, reporting whether it existed."""
        for index, track in enumerate(self.tracks):
            if track.id == track_id:
                del self.tracks[index]
                return True
        return False

    def get_track(self, track_id: str) -> Track | None:
        return next((track for track in self.tracks if track.id == track_id), None)

    def set_duration(self, duration: float) -> None:
        """Set the duration, silently raising it to the minimum if needed."""
        self.duration = max(MIN_DURATION, float(duration))

    def get_all_events(self) -> list[TrackEvent]:
        """All events, in track order then time order."""
        return [TrackEvent(track, event) for track in self.tracks for event in track.events]

    def get_events_at_time(
        self, time: float, tolerance: float = DEFAULT_EVENT_TOLERANCE
    ) -> list[TrackEvent]:
        return [pair for pair in self.get_all_events() if abs(pair.event.time - time) <= tolerance]

    def find_event(self, event_id: str) -> TrackEvent | None:
        for track in self.tracks:
            event = track.get_event(event_id)
            if event is not None:
                return TrackEvent(track, event)
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "currentTime": self.current_time,
            "zoom": self.zoom,
            "createdAt": format_timestamp(self.created_at),
            "tracks": [track.to_dict() for track in self.tracks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Timeline":
        """
        Restore a timeline from its wire form.

        Raises:
            KeyError, TypeError, ValueError, AttributeError: If the payload is structurally invalid
        """
        if not isinstance(data, dict):
            raise TypeError("Timeline payload must be an object")
        tracks = data["tracks"]
        if not isinstance(tracks, list):
            raise TypeError("Timeline tracks must be a list")
        timeline = cls(float(data["duration"]), str(data["name"]))
        timeline.id = str(data["id"])
        timeline.current_time = float(data.get("currentTime", 0.0))
        timeline.zoom = data.get("zoom", DEFAULT_TIMELINE_ZOOM)
        timeline.created_at = parse_timestamp(data["createdAt"])
        timeline.tracks = [Track.from_dict(track) for track in tracks]
        return timeline

    def export(self) -> str:
        """Serialize the whole aggregate as indented JSON."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def import_json(cls, text: str) -> "Timeline | None":
        """
        Parse an exported timeline.

        Returns:
            The restored timeline, or None if the text is not valid JSON or
            does not have the timeline shape (the cause is logged)
        """
        try:
            return cls.from_dict(json.loads(text))
        except (json.JSONDecodeError, RecursionError) as e:
            log.error("Timeline import failed: invalid JSON: %s", e)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            log.error("Timeline import failed: incompatible payload: %s: %s", type(e).__name__, e)
        return None

    def __repr__(self) -> str:
        return f"Timeline(id={self.id!r}, name={self.name!r}, duration={self.duration}, tracks={len(self.tracks)})"
