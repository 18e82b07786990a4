"""Tests for timeline events, tracks, and the timeline aggregate."""

import json
import logging
from datetime import timezone

import pytest

from wave_editor.model import Timeline, TimelineEvent, Track
from wave_editor.model.identity import format_timestamp, parse_timestamp
from wave_editor.registry import EventTypeRegistry


@pytest.fixture
def event_types() -> EventTypeRegistry:
    return EventTypeRegistry()


class TestTimelineEvent:
    """Tests for event creation, updates, and serialization."""

    def test_new_event_has_prefixed_id_and_equal_timestamps(self) -> None:
        event = TimelineEvent(3.5, "marker", {"label": "boss"})

        assert event.id.startswith("event_")
        assert event.time == 3.5
        assert event.created_at == event.updated_at
        assert event.created_at.tzinfo is not None

    def test_ids_are_unique(self) -> None:
        ids = {TimelineEvent(0).id for _ in range(200)}
        assert len(ids) == 200

    def test_create_uses_type_defaults(self, event_types: EventTypeRegistry) -> None:
        event = TimelineEvent.create(1.0, "audio", event_types)

        assert event.custom_data == {"soundFile": "", "volume": 1.0, "loop": False}

    def test_update_merges_and_refreshes_timestamp(self) -> None:
        event = TimelineEvent(1.0, "marker", {"label": "a", "note": ""})
        created = event.created_at

        event.update(time=4.0)

        assert event.time == 4.0
        assert event.custom_data == {"label": "a", "note": ""}
        assert event.updated_at >= created

    def test_update_does_not_validate_against_schema(self) -> None:
        event = TimelineEvent(1.0, "marker", {"label": "a"})
        event.update(custom_data={"anything": 42})
        assert event.custom_data == {"anything": 42}

    def test_update_rejects_unknown_attributes(self) -> None:
        event = TimelineEvent(1.0)
        with pytest.raises(AttributeError, match="colour"):
            event.update(colour="red")

    def test_change_type_resets_custom_data(self, event_types: EventTypeRegistry) -> None:
        event = TimelineEvent.create(2.0, "marker", event_types)
        event.custom_data["label"] = "keep me?"

        event.change_type("spawn_enemy", event_types)

        assert event.type == "spawn_enemy"
        assert event.custom_data == {
            "enemyId": "",
            "count": 1,
            "spawnPosition": "random",
            "formationType": "single",
        }

    def test_get_type_config_falls_back_to_default(self, event_types: EventTypeRegistry) -> None:
        event = TimelineEvent(0.0, "no_such_type")
        assert event.get_type_config(event_types).id == "default"

    def test_dict_round_trip_keeps_everything(self) -> None:
        event = TimelineEvent(7.25, "marker", {"label": "x", "note": "y"})

        restored = TimelineEvent.from_dict(event.to_dict())

        assert restored.id == event.id
        assert restored.time == event.time
        assert restored.type == event.type
        assert restored.custom_data == event.custom_data
        assert restored.created_at == event.created_at
        assert restored.updated_at == event.updated_at

    def test_from_dict_accepts_browser_timestamps(self) -> None:
        restored = TimelineEvent.from_dict(
            {
                "id": "event_1",
                "time": 2,
                "type": "default",
                "customData": {"description": ""},
                "createdAt": "2024-01-02T03:04:05.678Z",
                "updatedAt": "2024-01-02T03:04:06.000Z",
            }
        )

        assert restored.created_at.year == 2024
        assert restored.created_at.microsecond == 678000
        assert format_timestamp(restored.created_at) == "2024-01-02T03:04:05.678Z"

    def test_from_dict_rejects_non_numeric_time(self) -> None:
        with pytest.raises(TypeError):
            TimelineEvent.from_dict(
                {
                    "id": "e",
                    "time": "soon",
                    "type": "default",
                    "customData": {},
                    "createdAt": "2024-01-01T00:00:00.000Z",
                    "updatedAt": "2024-01-01T00:00:00.000Z",
                }
            )


def test_timestamp_round_trip() -> None:
    text = "2023-11-14T22:13:20.123Z"
    parsed = parse_timestamp(text)
    assert parsed.tzinfo == timezone.utc
    assert format_timestamp(parsed) == text


class TestTrack:
    """Tests for event ordering and lookup on a track."""

    def test_events_stay_sorted_after_every_add(self) -> None:
        track = Track("Lane")
        for time in [5.0, 1.0, 9.5, 0.0, 3.3, 3.3, 7.0, 2.2]:
            track.add_event(TimelineEvent(time))
            times = [event.time for event in track.events]
            assert times == sorted(times)

    def test_equal_times_keep_insertion_order(self) -> None:
        track = Track()
        first = track.add_event(TimelineEvent(2.0))
        track.add_event(TimelineEvent(1.0))
        second = track.add_event(TimelineEvent(2.0))

        tied = [event for event in track.events if event.time == 2.0]
        assert tied == [first, second]

    def test_remove_event_reports_success(self) -> None:
        track = Track()
        event = track.add_event(TimelineEvent(1.0))

        assert track.remove_event(event.id) is True
        assert track.remove_event(event.id) is False
        assert track.events == []

    def test_get_event(self) -> None:
        track = Track()
        event = track.add_event(TimelineEvent(1.0))

        assert track.get_event(event.id) is event
        assert track.get_event("missing") is None

    def test_sort_events_after_direct_time_edit(self) -> None:
        track = Track()
        early = track.add_event(TimelineEvent(1.0))
        late = track.add_event(TimelineEvent(2.0))

        early.time = 3.0
        track.sort_events()

        assert track.events == [late, early]

    def test_events_in_range_is_inclusive(self) -> None:
        track = Track()
        for time in [0.0, 1.0, 2.0, 3.0, 4.0]:
            track.add_event(TimelineEvent(time))

        assert [event.time for event in track.get_events_in_range(1.0, 3.0)] == [1.0, 2.0, 3.0]

    def test_color_comes_from_palette(self) -> None:
        import random

        from wave_editor.constants import TRACK_COLORS

        assert Track(rng=random.Random(4)).color in TRACK_COLORS

    def test_flags_default(self) -> None:
        track = Track()
        assert track.visible is True
        assert track.locked is False


class TestTimeline:
    """Tests for the timeline aggregate and its file format."""

    def test_set_duration_clamps_to_minimum(self) -> None:
        timeline = Timeline()
        timeline.set_duration(5)
        assert timeline.duration == 10

        timeline.set_duration(42)
        assert timeline.duration == 42

    def test_constructor_clamps_duration(self) -> None:
        assert Timeline(duration=1).duration == 10

    def test_create_track_names_by_position(self) -> None:
        timeline = Timeline()
        assert timeline.create_track().name == "Track 1"
        assert timeline.create_track().name == "Track 2"
        assert timeline.create_track("Bosses").name == "Bosses"

    def test_track_management(self) -> None:
        timeline = Timeline()
        track = timeline.add_track(Track("A"))
        track.add_event(TimelineEvent(1.0))

        assert timeline.get_track(track.id) is track
        assert timeline.remove_track(track.id) is True
        assert timeline.remove_track(track.id) is False
        assert timeline.get_track(track.id) is None
        assert timeline.get_all_events() == []

    def test_get_all_events_pairs_track_and_event(self) -> None:
        timeline = Timeline()
        a = timeline.add_track(Track("A"))
        b = timeline.add_track(Track("B"))
        ea = a.add_event(TimelineEvent(4.0))
        eb = b.add_event(TimelineEvent(1.0))

        pairs = timeline.get_all_events()

        assert [(pair.track, pair.event) for pair in pairs] == [(a, ea), (b, eb)]

    def test_events_at_time_uses_tolerance(self) -> None:
        timeline = Timeline()
        track = timeline.add_track(Track())
        near = track.add_event(TimelineEvent(5.05))
        track.add_event(TimelineEvent(5.3))

        found = timeline.get_events_at_time(5.0)
        assert [pair.event for pair in found] == [near]
        assert len(timeline.get_events_at_time(5.0, tolerance=0.5)) == 2

    def test_find_event(self) -> None:
        timeline = Timeline()
        track = timeline.add_track(Track())
        event = track.add_event(TimelineEvent(1.0))

        pair = timeline.find_event(event.id)
        assert pair is not None
        assert pair.track is track
        assert timeline.find_event("nope") is None

    def test_export_import_round_trip(self) -> None:
        timeline = Timeline(duration=90, name="Wave 3")
        first = timeline.create_track()
        second = timeline.create_track("Flankers")
        first.add_event(TimelineEvent(12.5, "spawn_enemy", {"enemyId": "grunt", "count": 4}))
        first.add_event(TimelineEvent(3.0, "marker", {"label": "start", "note": ""}))
        second.add_event(TimelineEvent(45.0, "audio", {"soundFile": "horn.ogg", "volume": 0.5, "loop": False}))
        second.locked = True

        restored = Timeline.import_json(timeline.export())

        assert restored is not None
        assert restored.to_dict() == timeline.to_dict()
        assert [track.id for track in restored.tracks] == [first.id, second.id]
        assert restored.tracks[1].locked is True

    def test_export_is_indented_json(self) -> None:
        payload = json.loads(Timeline().export())
        assert set(payload) == {"id", "name", "duration", "currentTime", "zoom", "createdAt", "tracks"}
        assert payload["zoom"] == 10

    @pytest.mark.parametrize(
        "text",
        [
            "not json at all",
            "[]",
            '{"id": "t"}',
            '{"id": "t", "name": "x", "duration": 60, "createdAt": "2024-01-01T00:00:00Z", "tracks": "nope"}',
            '{"id": "t", "name": "x", "duration": 60, "createdAt": "2024-01-01T00:00:00Z",'
            ' "tracks": [{"id": "tr", "name": "a", "events": [{"time": 1}]}]}',
            '{"id": "t", "name": "x", "duration": 60, "createdAt": "yesterday", "tracks": []}',
            "[" * 200_000 + "]" * 200_000,
        ],
    )
    def test_import_rejects_bad_payloads(self, text: str, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            assert Timeline.import_json(text) is None
        assert "Timeline import failed" in caplog.text
