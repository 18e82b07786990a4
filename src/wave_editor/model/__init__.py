"""Timeline data model: events, tracks, and the timeline aggregate."""

from .event import TimelineEvent
from .timeline import Timeline, TrackEvent
from .track import Track

__all__ = [
    "TimelineEvent",
    "Timeline",
    "Track",
    "TrackEvent",
]
