"""Tests for the viewport coordinate engine."""

import math

import pytest

from wave_editor.viewport import CoordinateEngine, clamp_time, snap_unit, tick_interval


@pytest.fixture
def engine() -> CoordinateEngine:
    return CoordinateEngine()


@pytest.mark.parametrize(
    ("duration", "interval"),
    [(10, 1), (30, 1), (30.5, 2), (60, 2), (61, 5), (120, 5), (121, 10), (300, 10), (301, 30), (3600, 30)],
)
def test_tick_interval(duration: float, interval: int) -> None:
    assert tick_interval(duration) == interval


@pytest.mark.parametrize(("duration", "unit"), [(30, 1), (60, 1), (120, 2.5), (300, 5), (600, 15)])
def test_snap_unit(duration: float, unit: float) -> None:
    assert snap_unit(duration) == unit


@pytest.mark.parametrize(
    ("time", "expected"),
    [(-3.0, 0.0), (0.0, 0.0), (12.5, 12.5), (60.0, 60.0), (75.0, 60.0), (math.inf, 60.0), (-math.inf, 0.0), (math.nan, 0.0)],
)
def test_clamp_time(time: float, expected: float) -> None:
    assert clamp_time(time, 60.0) == expected


class TestMapping:
    """Tests for time/pixel conversion."""

    def test_time_and_pixel_are_inverse_without_scroll(self, engine: CoordinateEngine) -> None:
        for time in [0.0, 0.25, 3.0, 59.9]:
            assert engine.pixel_to_time(engine.time_to_pixel(time)) == pytest.approx(time)

    def test_pixel_to_time_accounts_for_scroll(self, engine: CoordinateEngine) -> None:
        engine.scroll_x = 500
        assert engine.pixel_to_time(0) == 10.0
        assert engine.pixel_to_time(100) == 12.0

    def test_content_width(self, engine: CoordinateEngine) -> None:
        assert engine.content_width(60) == 3000

    def test_initial_zoom_is_clamped(self) -> None:
        assert CoordinateEngine(pixels_per_second=500).pixels_per_second == 200
        assert CoordinateEngine(pixels_per_second=1).pixels_per_second == 10


class TestZoom:
    """Tests for zooming about the cursor."""

    def test_zoom_in_keeps_time_under_cursor(self, engine: CoordinateEngine) -> None:
        new_scale = engine.zoom_at(1, 100)

        assert new_scale == pytest.approx(55.0)
        assert engine.scroll_x == pytest.approx(10.0)
        assert engine.pixel_to_time(100) == pytest.approx(2.0)

    @pytest.mark.parametrize("direction", [1, -1])
    @pytest.mark.parametrize("viewport_x", [0, 37.5, 400, 1280])
    @pytest.mark.parametrize("scroll_x", [0, 120, 2500])
    def test_time_under_cursor_is_invariant(self, direction: int, viewport_x: float, scroll_x: float) -> None:
        engine = CoordinateEngine()
        engine.scroll_x = scroll_x
        before = engine.pixel_to_time(viewport_x)

        engine.zoom_at(direction, viewport_x)

        assert abs(engine.pixel_to_time(viewport_x) - before) < 1e-9

    def test_zoom_stays_within_bounds(self, engine: CoordinateEngine) -> None:
        for _ in range(100):
            engine.zoom_at(1, 0)
        assert engine.pixels_per_second == 200

        for _ in range(100):
            engine.zoom_at(-1, 0)
        assert engine.pixels_per_second == 10

    def test_wheel_up_zooms_in(self, engine: CoordinateEngine) -> None:
        assert engine.zoom_from_wheel(-120, 0) > 50
        engine = CoordinateEngine()
        assert engine.zoom_from_wheel(120, 0) < 50

    def test_zoom_percent(self, engine: CoordinateEngine) -> None:
        assert engine.zoom_percent == 100
        engine.zoom_at(1, 0)
        assert engine.zoom_percent == 110


class TestPan:
    """Tests for drag-to-pan."""

    def test_pan_subtracts_pointer_delta(self, engine: CoordinateEngine) -> None:
        engine.scroll_x = 200
        engine.scroll_y = 40

        engine.begin_pan(300, 100)
        engine.pan_to(250, 90)

        assert engine.is_panning is True
        assert engine.scroll_x == 250
        assert engine.scroll_y == 50

    def test_pan_is_relative_to_start(self, engine: CoordinateEngine) -> None:
        engine.begin_pan(0, 0)
        engine.pan_to(-10, 0)
        engine.pan_to(-30, 0)
        assert engine.scroll_x == 30

    def test_moves_after_end_are_ignored(self, engine: CoordinateEngine) -> None:
        engine.begin_pan(0, 0)
        engine.end_pan()
        engine.pan_to(100, 100)

        assert engine.is_panning is False
        assert engine.scroll_x == 0


class TestSnap:
    """Tests for grid snapping."""

    @pytest.mark.parametrize(
        ("time", "expected"),
        [(5.03, 5.0), (2.01, 2.0), (4.5, 5.0), (4.49, 4.0), (0.2, 0.0)],
    )
    def test_snaps_to_whole_seconds_on_short_timeline(self, engine: CoordinateEngine, time: float, expected: float) -> None:
        assert engine.snap_time(time, 60) == expected

    def test_snaps_to_half_tick_on_long_timeline(self, engine: CoordinateEngine) -> None:
        assert engine.snap_time(13.0, 300) == 15.0
        assert engine.snap_time(11.0, 300) == 10.0

    @pytest.mark.parametrize("time", [0.0, 0.7, 3.14, 17.5, 42.26, 59.99])
    @pytest.mark.parametrize("duration", [10, 60, 120, 300, 900])
    def test_snap_is_idempotent(self, engine: CoordinateEngine, time: float, duration: float) -> None:
        once = engine.snap_time(time, duration)
        assert engine.snap_time(once, duration) == once

    @pytest.mark.parametrize("time", [math.inf, -math.inf])
    def test_infinite_times_pass_through_snap(self, engine: CoordinateEngine, time: float) -> None:
        assert engine.snap_time(time, 60) == time

    def test_nan_passes_through_snap(self, engine: CoordinateEngine) -> None:
        assert math.isnan(engine.snap_time(math.nan, 60))

    def test_snap_can_be_disabled(self) -> None:
        engine = CoordinateEngine(snap_to_grid=False)
        assert engine.snap_time(5.03, 60) == 5.03

    def test_viewport_to_time_maps_snaps_and_clamps(self, engine: CoordinateEngine) -> None:
        assert engine.viewport_to_time(251.5, 60) == 5.0
        assert engine.viewport_to_time(100.5, 60) == 2.0
        assert engine.viewport_to_time(-80, 60) == 0.0
        assert engine.viewport_to_time(10_000, 60) == 60.0


class TestRuler:
    """Tests for ruler tick generation."""

    def test_ticks_cover_duration(self, engine: CoordinateEngine) -> None:
        ticks = engine.ruler_ticks(60)

        assert len(ticks) == 31
        assert ticks[0].time == 0
        assert ticks[-1].time == 60
        assert ticks[3].x == 300

    def test_every_fifth_tick_is_major(self, engine: CoordinateEngine) -> None:
        ticks = engine.ruler_ticks(60)
        assert [tick.time for tick in ticks if tick.major] == [0, 10, 20, 30, 40, 50, 60]

    def test_ticks_follow_zoom(self, engine: CoordinateEngine) -> None:
        engine.pixels_per_second = 100
        assert engine.ruler_ticks(20)[1].x == 100
