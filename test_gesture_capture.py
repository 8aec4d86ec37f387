"""
Test Gesture Capture (Pointer Drag -> Geographic Ring)
======================================================

Drives GestureCapturer against a real MercatorViewport; rendering is a
recorded callback.

Usage:
    pytest test_gesture_capture.py
"""

import json
import logging

import pytest

from scribble_data.schemas import Restaurant
from scribble_zone.capture import DrawPhase, DrawState, GestureCapturer
from scribble_zone.config import CameraFitConfig, CaptureConfig, ScribbleConfig
from scribble_zone.geometry import GeoPoint, PixelPoint, filter_restaurants
from scribble_zone.logging import create_logger
from scribble_zone.maps import MapHandle, MercatorViewport

WIDTH, HEIGHT = 400, 300


def make_capturer(config=None, mounted=True):
    viewport = MercatorViewport(WIDTH, HEIGHT, GeoPoint(lng=-73.975, lat=40.752), zoom=13)
    handle = MapHandle()
    if mounted:
        handle.mount(viewport)
    rendered = []
    capturer = GestureCapturer(
        handle,
        DrawState(),
        config=config,
        render=lambda points: rendered.append(tuple(points)),
    )
    return capturer, viewport, rendered


def draw(capturer, samples):
    first, *rest = samples
    capturer.begin(PixelPoint(*first))
    for x, y in rest:
        capturer.extend(PixelPoint(x, y))
    return capturer.end()


TRIANGLE = [(100, 100), (300, 110), (200, 250)]


def test_samples_under_threshold_are_dropped():
    """Repeated samples at one pixel leave a single captured point."""
    capturer, _, _ = make_capturer()
    capturer.set_drawing_mode(True)

    assert capturer.begin(PixelPoint(50, 50))
    assert not capturer.extend(PixelPoint(50, 50))
    assert not capturer.extend(PixelPoint(50, 50))
    assert not capturer.extend(PixelPoint(51, 51))  # ~1.41 px

    assert len(capturer.state.geo_path) == 1
    assert len(capturer.state.pixel_path) == 1


def test_threshold_compares_against_last_accepted_sample():
    capturer, _, _ = make_capturer()
    capturer.set_drawing_mode(True)
    capturer.begin(PixelPoint(0, 0))

    assert capturer.extend(PixelPoint(2, 0))      # exactly at threshold
    assert not capturer.extend(PixelPoint(3, 0))  # 1 px from (2, 0)
    assert capturer.extend(PixelPoint(4, 0))      # 2 px from (2, 0)
    assert [p.x for p in capturer.state.pixel_path] == [0, 2, 4]


def test_threshold_is_configurable():
    config = ScribbleConfig(capture=CaptureConfig(min_sample_distance_px=10))
    capturer, _, _ = make_capturer(config)
    capturer.set_drawing_mode(True)
    capturer.begin(PixelPoint(0, 0))

    assert not capturer.extend(PixelPoint(5, 5))
    assert capturer.extend(PixelPoint(10, 0))


def test_two_point_gesture_is_discarded():
    restaurants = [
        Restaurant(id="a", longitude=-73.975, latitude=40.752),
        Restaurant(id="b", longitude=-80.0, latitude=35.0),
    ]
    capturer, viewport, rendered = make_capturer()
    capturer.set_drawing_mode(True)

    assert draw(capturer, [(100, 100), (200, 200)]) is None
    assert capturer.state.phase is DrawPhase.IDLE
    assert len(capturer.state.committed_ring) == 0
    assert filter_restaurants(restaurants, capturer.state.committed_ring) == restaurants
    assert rendered[-1] == ()
    assert viewport.camera_history == []


def test_discard_also_drops_previous_ring():
    capturer, _, _ = make_capturer()
    capturer.set_drawing_mode(True)
    assert draw(capturer, TRIANGLE) is not None

    capturer.set_drawing_mode(True)
    assert draw(capturer, [(10, 10), (40, 40)]) is None
    assert len(capturer.state.committed_ring) == 0


def test_commit_stores_geo_ring_and_fits_camera():
    capturer, viewport, rendered = make_capturer()
    capturer.set_drawing_mode(True)

    expected = [viewport.screen_to_geo(PixelPoint(x, y)) for x, y in TRIANGLE]
    ring = draw(capturer, TRIANGLE)

    assert ring is not None
    assert list(ring.points) == expected
    assert capturer.state.phase is DrawPhase.COMMITTED
    assert capturer.state.committed_ring is ring

    move = viewport.camera_history[-1]
    assert move.kind == "fit"
    assert move.duration_ms == 700
    assert move.zoom <= 15

    # Ring's bounding box lies inside the padded viewport after the fit
    for corner in ring.bounding_box().corners():
        pixel = viewport.geo_to_screen(corner)
        assert 60 - 1e-6 <= pixel.x <= WIDTH - 60 + 1e-6
        assert 60 - 1e-6 <= pixel.y <= HEIGHT - 60 + 1e-6

    # Live preview rendered once per accepted sample
    assert [len(points) for points in rendered] == [1, 2, 3]


def test_fit_respects_zoom_cap():
    config = ScribbleConfig(camera_fit=CameraFitConfig(padding_px=10, max_zoom=12, duration_ms=0))
    capturer, viewport, _ = make_capturer(config)
    capturer.set_drawing_mode(True)

    # Tiny ring would zoom far past 12 uncapped
    draw(capturer, [(200, 150), (204, 150), (202, 154)])
    assert viewport.zoom == 12
    assert viewport.camera_history[-1].duration_ms == 0


def test_end_turns_drawing_mode_off():
    capturer, _, _ = make_capturer()
    capturer.set_drawing_mode(True)
    draw(capturer, TRIANGLE)

    assert not capturer.drawing_mode
    assert not capturer.begin(PixelPoint(10, 10))


def test_begin_is_noop_without_drawing_mode():
    capturer, _, rendered = make_capturer()
    assert not capturer.begin(PixelPoint(10, 10))
    assert not capturer.extend(PixelPoint(50, 50))
    assert capturer.end() is None
    assert capturer.state.phase is DrawPhase.IDLE
    assert rendered == []


def test_begin_is_noop_without_mounted_map():
    capturer, _, rendered = make_capturer(mounted=False)
    capturer.set_drawing_mode(True)
    assert not capturer.begin(PixelPoint(10, 10))
    assert capturer.state.phase is DrawPhase.IDLE
    assert rendered == []


def test_disabling_drawing_mode_mid_gesture_ends_it():
    capturer, _, _ = make_capturer()
    capturer.set_drawing_mode(True)
    capturer.begin(PixelPoint(*TRIANGLE[0]))
    for point in TRIANGLE[1:]:
        capturer.extend(PixelPoint(*point))

    ring = capturer.set_drawing_mode(False)
    assert ring is not None
    assert len(ring) == 3
    assert capturer.state.phase is DrawPhase.COMMITTED


def test_new_gesture_keeps_committed_ring_until_it_ends():
    capturer, _, _ = make_capturer()
    capturer.set_drawing_mode(True)
    ring = draw(capturer, TRIANGLE)

    capturer.set_drawing_mode(True)
    capturer.begin(PixelPoint(10, 10))
    assert capturer.state.phase is DrawPhase.DRAWING
    assert capturer.state.committed_ring is ring
    assert len(capturer.state.active_ring_points()) == 1


def test_clear_resets_ring_and_camera():
    capturer, viewport, rendered = make_capturer()
    capturer.set_drawing_mode(True)
    draw(capturer, TRIANGLE)

    capturer.clear()

    assert capturer.state.phase is DrawPhase.IDLE
    assert len(capturer.state.committed_ring) == 0
    assert rendered[-1] == ()

    move = viewport.camera_history[-1]
    assert move.kind == "fly"
    assert move.center == GeoPoint(lng=-73.975, lat=40.752)
    assert move.zoom == 13


def test_commit_is_logged(caplog):
    viewport = MercatorViewport(WIDTH, HEIGHT, GeoPoint(lng=-73.975, lat=40.752), zoom=13)
    handle = MapHandle()
    handle.mount(viewport)
    capturer = GestureCapturer(handle, DrawState(), logger=create_logger("capture-test"))
    capturer.set_drawing_mode(True)

    with caplog.at_level(logging.INFO, logger="scribble.capture-test"):
        draw(capturer, TRIANGLE)

    events = [json.loads(record.getMessage())["event"] for record in caplog.records]
    assert "ring.committed" in events
    assert "camera.fit" in events


@pytest.mark.parametrize("samples", [[(5, 5)], [(5, 5), (5, 6)]])
def test_gestures_below_three_points_never_commit(samples):
    capturer, _, _ = make_capturer()
    capturer.set_drawing_mode(True)
    assert draw(capturer, samples) is None
    assert capturer.state.phase is DrawPhase.IDLE


def test_every_log_event_has_one_category():
    from scribble_zone.logging.events import (
        CLI_EVENTS,
        COLLABORATOR_EVENTS,
        FILTER_EVENTS,
        GESTURE_EVENTS,
        MAP_EVENTS,
        RING_EVENTS,
        LogEvent,
    )

    categories = [
        GESTURE_EVENTS, RING_EVENTS, FILTER_EVENTS, MAP_EVENTS, COLLABORATOR_EVENTS, CLI_EVENTS,
    ]
    for event in LogEvent:
        assert sum(event in category for category in categories) == 1, event


def test_snapshot_is_detached_from_state():
    capturer, _, _ = make_capturer()
    capturer.set_drawing_mode(True)
    capturer.begin(PixelPoint(*TRIANGLE[0]))
    capturer.extend(PixelPoint(*TRIANGLE[1]))

    snapshot = capturer.state.snapshot()
    capturer.extend(PixelPoint(*TRIANGLE[2]))

    assert snapshot.phase is DrawPhase.DRAWING
    assert len(snapshot.pixel_path) == 2
    assert len(snapshot.geo_path) == 2
    assert len(capturer.state.geo_path) == 3
    assert len(snapshot.committed_ring) == 0


def test_gesture_back_at_start_counts_closing_point_once():
    """Three samples where the last repeats the first enclose nothing."""
    capturer, viewport, rendered = make_capturer()
    capturer.set_drawing_mode(True)

    assert draw(capturer, [(100, 100), (200, 100), (100, 100)]) is None
    assert capturer.state.phase is DrawPhase.IDLE
    assert len(capturer.state.committed_ring) == 0
    assert viewport.camera_history == []
    assert rendered[-1] == ()


def test_closed_gesture_keeps_distinct_vertices():
    capturer, _, _ = make_capturer()
    capturer.set_drawing_mode(True)

    ring = draw(capturer, TRIANGLE + [TRIANGLE[0]])
    assert ring is not None
    assert len(ring) == 3
    assert capturer.state.committed_ring is ring
