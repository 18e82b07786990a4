"""Timeline editor core for authoring enemy wave configurations."""

from .model import Timeline, TimelineEvent, Track, TrackEvent
from .output import WaveData, WaveExporter, generate_wave_data
from .registry import EnemyType, EnemyTypeRegistry, EventType, EventTypeRegistry
from .session import EditorSession
from .viewport import CoordinateEngine, EventDrag

__version__ = "0.1.0"

__all__ = [
    "Timeline",
    "TimelineEvent",
    "Track",
    "TrackEvent",
    "WaveData",
    "WaveExporter",
    "generate_wave_data",
    "EnemyType",
    "EnemyTypeRegistry",
    "EventType",
    "EventTypeRegistry",
    "EditorSession",
    "CoordinateEngine",
    "EventDrag",
]
