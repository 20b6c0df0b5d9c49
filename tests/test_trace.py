"""
Trace Analysis Tests
====================

Tests for screenshot extraction, decoding and visual progress.
"""

import base64

import pytest

from screenshot_thumbnails.errors import ImageDecodeError, InputUnavailableError
from screenshot_thumbnails.trace import (
    TraceFrame,
    compute_speedline,
    decode_snapshot,
    extract_screenshot_frames,
    find_beginning,
    trace_events,
)

from conftest import BEGINNING_US, jpeg_snapshot, screenshot_event


class TestDecodeSnapshot:
    """Tests for decode_snapshot."""

    def test_decodes_to_rgba(self):
        raster = decode_snapshot(jpeg_snapshot(32, 16, bgr=(0, 0, 255)))

        assert (raster.width, raster.height) == (32, 16)
        assert raster.data.shape == (16, 32, 4)
        red, green, blue, alpha = raster.data[8, 16]
        assert red > 200 and blue < 50
        assert alpha == 255

    def test_invalid_base64(self):
        with pytest.raises(ImageDecodeError):
            decode_snapshot("not base64!!")

    def test_not_an_image(self):
        garbage = base64.b64encode(b"definitely not a jpeg").decode()
        with pytest.raises(ImageDecodeError):
            decode_snapshot(garbage)

    def test_empty_snapshot(self):
        with pytest.raises(ImageDecodeError):
            decode_snapshot("")


class TestTraceFrame:
    """Tests for TraceFrame."""

    def test_raster_is_decoded_once(self):
        frame = TraceFrame(timestamp=10.0, snapshot=jpeg_snapshot(8, 8))
        assert frame.raster() is frame.raster()

    def test_corrupt_snapshot(self):
        frame = TraceFrame(timestamp=10.0, snapshot="AAAA")
        with pytest.raises(ImageDecodeError):
            frame.raster()


class TestTraceParsing:
    """Tests for event extraction."""

    def test_trace_events_accepts_list_and_dict(self):
        events = [{"name": "x", "ts": 1}]
        assert trace_events(events) is events
        assert trace_events({"traceEvents": events}) is events

    def test_trace_events_rejects_other(self):
        with pytest.raises(InputUnavailableError):
            trace_events({"events": []})

    def test_find_beginning_prefers_markers(self):
        events = [
            {"name": "Other", "ph": "X", "ts": 500_000},
            {"name": "navigationStart", "ph": "R", "ts": 2_000_000},
        ]
        assert find_beginning(events) == 2000.0

    def test_find_beginning_ignores_metadata(self):
        events = [
            {"name": "thread_name", "ph": "M", "ts": 0},
            {"name": "Other", "ph": "X", "ts": 750_000},
        ]
        assert find_beginning(events) == 750.0

    def test_extracts_sorted_screenshots(self):
        snapshot = jpeg_snapshot(8, 8)
        events = [
            screenshot_event(300, snapshot),
            screenshot_event(100, snapshot),
            {"name": "Screenshot", "cat": "other", "ts": 5, "args": {"snapshot": snapshot}},
        ]
        frames = extract_screenshot_frames(events)

        assert [f.timestamp for f in frames] == [
            (BEGINNING_US + 100_000) / 1000,
            (BEGINNING_US + 300_000) / 1000,
        ]

    def test_no_screenshots(self):
        with pytest.raises(InputUnavailableError):
            extract_screenshot_frames([{"name": "Layout", "ts": 1}])


class TestComputeSpeedline:
    """Tests for compute_speedline."""

    def test_timeline_bounds(self, page_load_trace):
        speedline = compute_speedline(page_load_trace)

        assert speedline.beginning == BEGINNING_US / 1000
        assert speedline.complete == pytest.approx(400.0)
        assert speedline.first == pytest.approx(400.0)
        assert speedline.duration == pytest.approx(900.0)
        assert len(speedline.frames) == 6

    def test_progress(self, page_load_trace):
        frames = compute_speedline(page_load_trace, fast_mode=False).frames

        assert [f.progress for f in frames] == [0.0, 0.0, 0.0, 100.0, 100.0, 100.0]
        assert not any(f.is_interpolated for f in frames)

    def test_fast_mode_interpolates_plateaus(self, page_load_trace):
        frames = compute_speedline(page_load_trace, fast_mode=True).frames

        assert [f.progress for f in frames] == [0.0, 0.0, 0.0, 100.0, 100.0, 100.0]
        assert [f.is_interpolated for f in frames] == [False, True, False, False, True, False]

    def test_single_screenshot_is_complete(self):
        trace = [screenshot_event(50, jpeg_snapshot(8, 8))]
        speedline = compute_speedline(trace)

        assert speedline.frames[0].progress == 100.0
        assert speedline.complete == 0.0
