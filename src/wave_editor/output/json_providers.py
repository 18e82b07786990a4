"""JSON output providers for the authoring timeline and the wave configuration."""

from typing import Any

from ..model import Timeline
from .base import JsonOutputProvider
from .wave import WaveData


class TimelineOutputProvider(JsonOutputProvider[Timeline]):
    """Full-fidelity authoring format; can be imported back."""

    def to_payload(self, document: Timeline) -> dict[str, Any]:
        return document.to_dict()


class WaveOutputProvider(JsonOutputProvider[WaveData]):
    """Engine consumption format; spawn events sorted by time."""

    def to_payload(self, document: WaveData) -> dict[str, Any]:
        return document.to_dict()
