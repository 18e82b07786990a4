"""Timeline events: typed, timed points placed on a track."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..constants import DEFAULT_EVENT_TYPE
from .identity import format_timestamp, generate_id, parse_timestamp, utc_now

if TYPE_CHECKING:
    from ..registry.event_types import EventType, EventTypeRegistry


class TimelineEvent:
    """A single point-in-time occurrence with a type tag and a free-form payload."""

    _PATCHABLE = frozenset({"time", "type", "custom_data"})

    def __init__(
        self,
        time: float,
        type: str = DEFAULT_EVENT_TYPE,
        custom_data: dict[str, Any] | None = None,
    ):
        """
        Initialize an event with a fresh id and timestamps.

        Args:
            time: Trigger time in seconds
            type: Key into the event type registry
            custom_data: Field values; shape follows the event type's schema
        """
        self.id = generate_id("event")
        self.time = float(time)
        self.type = type
        self.custom_data: dict[str, Any] = dict(custom_data) if custom_data else {}
        self.created_at: datetime = utc_now()
        self.updated_at: datetime = self.created_at

    @classmethod
    def create(cls, time: float, type: str, registry: "EventTypeRegistry") -> "TimelineEvent":
        """Create an event whose payload holds the type's default field values."""
        type_config = registry.get(type)
        return cls(time, type, type_config.default_values())

    def update(self, **patch: Any) -> None:
        """
        Shallow-merge ``patch`` into the event and refresh ``updated_at``.

        Only ``time``, ``type`` and ``custom_data`` may be patched. The patch
        is not checked against the type schema; callers keep ``custom_data``
        consistent with ``type``.

        Raises:
            AttributeError: If ``patch`` names any other attribute (nothing is applied)
        """
        unknown = set(patch) - self._PATCHABLE
        if unknown:
            raise AttributeError(f"Cannot update event attributes: {', '.join(sorted(unknown))}")
        for key, value in patch.items():
            setattr(self, key, value)
        self.updated_at = utc_now()

    def change_type(self, type: str, registry: "EventTypeRegistry") -> None:
        """Switch to another event type, resetting the payload to its defaults."""
        type_config = registry.get(type)
        self.update(type=type, custom_data=type_config.default_values())

    def get_type_config(self, registry: "EventTypeRegistry") -> "EventType":
        """Resolve the current type through the registry (falls back to the default type)."""
        return registry.get(self.type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "time": self.time,
            "type": self.type,
            "customData": dict(self.custom_data),
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimelineEvent":
        """
        Restore an event from its wire form.

        Raises:
            KeyError, TypeError, ValueError: If the payload is structurally invalid
        """
        custom_data = data.get("customData") or {}
        if not isinstance(custom_data, dict):
            raise TypeError("Event customData must be an object")
        event = cls(_as_time(data["time"]), str(data["type"]), custom_data)
        event.id = str(data["id"])
        event.created_at = parse_timestamp(data["createdAt"])
        event.updated_at = parse_timestamp(data["updatedAt"])
        return event

    def __repr__(self) -> str:
        return f"TimelineEvent(id={self.id!r}, time={self.time}, type={self.type!r})"


def _as_time(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Event time must be a number, got {type(value).__name__}")
    return float(value)
