"""Editor session: the application context tying model, registries and viewport together."""

from typing import Any, Mapping

from .constants import DEFAULT_EVENT_TYPE
from .errors import UnknownEventError, UnknownTrackError
from .log import get_logger
from .model import Timeline, TimelineEvent, Track, TrackEvent
from .output import WaveData, WaveExporter
from .output.wave import ConfirmCallback
from .registry import EnemyTypeRegistry, EventTypeRegistry
from .viewport import CoordinateEngine, EventDrag, clamp_time

log = get_logger(__name__)


class EditorSession:
    """
    Owns one timeline plus the registries and viewport used to edit it.

    Every time entering the model through a session operation is clamped to
    ``[0, timeline.duration]``.
    """

    def __init__(
        self,
        timeline: Timeline | None = None,
        event_types: EventTypeRegistry | None = None,
        enemy_types: EnemyTypeRegistry | None = None,
        engine: CoordinateEngine | None = None,
    ):
        self.timeline = timeline if timeline is not None else self._new_timeline()
        self.event_types = event_types if event_types is not None else EventTypeRegistry()
        self.enemy_types = enemy_types if enemy_types is not None else EnemyTypeRegistry()
        self.engine = engine if engine is not None else CoordinateEngine()

    @staticmethod
    def _new_timeline() -> Timeline:
        timeline = Timeline()
        timeline.create_track()
        return timeline

    def require_track(self, track_id: str) -> Track:
        track = self.timeline.get_track(track_id)
        if track is None:
            raise UnknownTrackError(track_id)
        return track

    def require_event(self, event_id: str) -> TrackEvent:
        pair = self.timeline.find_event(event_id)
        if pair is None:
            raise UnknownEventError(event_id)
        return pair

    def add_track(self, name: str | None = None) -> Track:
        return self.timeline.create_track(name)

    def remove_track(self, track_id: str) -> bool:
        return self.timeline.remove_track(track_id)

    def set_duration(self, duration: float) -> float:
        """Set the duration (minimum enforced); existing events are left where they are."""
        self.timeline.set_duration(duration)
        return self.timeline.duration

    def place_event(
        self,
        track_id: str,
        time: float,
        type: str = DEFAULT_EVENT_TYPE,
        snap: bool = True,
    ) -> TimelineEvent:
        """
        Create an event of ``type`` with default field values at ``time``.

        The time is snapped (when ``snap`` and grid snapping are on) and clamped.
        """
        track = self.require_track(track_id)
        duration = self.timeline.duration
        if snap:
            time = self.engine.snap_time(time, duration)
        event = TimelineEvent.create(clamp_time(time, duration), type, self.event_types)
        track.add_event(event)
        log.debug("Placed %s event %s at %.2fs on %s", event.type, event.id, event.time, track.name)
        return event

    def place_event_at_pixel(
        self, track_id: str, viewport_x: float, type: str = DEFAULT_EVENT_TYPE
    ) -> TimelineEvent:
        """Create an event where the user clicked in the viewport."""
        time = self.engine.viewport_to_time(viewport_x, self.timeline.duration)
        return self.place_event(track_id, time, type, snap=False)

    def edit_event(
        self,
        event_id: str,
        time: float | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> TimelineEvent:
        """
        Apply an editor form submission: new time and/or field values.

        Field values are coerced to each field's declared kind; fields the
        event's type does not declare are ignored.

        Raises:
            UnknownEventError: If no track holds ``event_id``
            ValueError: If a field value cannot be read as its kind
        """
        track, event = self.require_event(event_id)
        patch: dict[str, Any] = {}
        if time is not None:
            patch["time"] = clamp_time(float(time), self.timeline.duration)
        if fields:
            type_config = event.get_type_config(self.event_types)
            custom_data = dict(event.custom_data)
            for name, raw in fields.items():
                spec = type_config.get_field(name)
                if spec is None:
                    log.warning("Ignoring field '%s' not declared by event type '%s'", name, event.type)
                    continue
                custom_data[name] = spec.coerce(raw)
            patch["custom_data"] = custom_data
        event.update(**patch)
        track.sort_events()
        return event

    def change_event_type(self, event_id: str, type: str) -> TimelineEvent:
        """Retype an event, resetting its payload to the new type's defaults."""
        _, event = self.require_event(event_id)
        event.change_type(type, self.event_types)
        return event

    def remove_event(self, event_id: str) -> bool:
        pair = self.timeline.find_event(event_id)
        if pair is None:
            return False
        return pair.track.remove_event(event_id)

    def begin_drag(self, event_id: str, pointer_x: float) -> EventDrag:
        track, event = self.require_event(event_id)
        return EventDrag(self.engine, track, event, pointer_x, self.timeline.duration)

    def load_timeline(self, text: str) -> bool:
        """Replace the timeline with an imported one; the current one is kept on failure."""
        timeline = Timeline.import_json(text)
        if timeline is None:
            return False
        self.timeline = timeline
        return True

    def export_wave(self, confirm: ConfirmCallback | None = None) -> WaveData | None:
        return WaveExporter(self.enemy_types).export(self.timeline, confirm)
