"""
Test Configuration
==================

Pytest fixtures and test configuration for screenshot thumbnails.
"""

import base64
import threading
from dataclasses import dataclass, field
from typing import List, Optional

import cv2
import numpy as np
import pytest

from screenshot_thumbnails.models.frame import Raster


class FakeFrame:
    """In-memory RenderFrame counting its decodes."""

    def __init__(
        self,
        timestamp: float,
        raster: Optional[Raster] = None,
        is_interpolated: bool = False,
        error: Optional[Exception] = None,
    ) -> None:
        self.timestamp = timestamp
        self.is_interpolated = is_interpolated
        self._raster = raster
        self._error = error
        self.decode_count = 0

    def raster(self) -> Raster:
        self.decode_count += 1
        if self._error is not None:
            raise self._error
        return self._raster

    def __repr__(self) -> str:
        return f"FakeFrame(timestamp={self.timestamp}, interpolated={self.is_interpolated})"


@dataclass
class FakeTimeline:
    """In-memory VisualTimeline."""

    beginning: float
    complete: float
    frames: List[FakeFrame] = field(default_factory=list)


class CountingEncoder:
    """Deterministic encoder stub recording every call."""

    def __init__(self) -> None:
        self.calls: List[Raster] = []
        self._lock = threading.Lock()

    def encode(self, raster: Raster, quality: int) -> bytes:
        with self._lock:
            self.calls.append(raster)
        header = f"{raster.width}x{raster.height}q{quality}:".encode()
        return header + raster.tobytes()[:32]

    @property
    def call_count(self) -> int:
        return len(self.calls)


def solid_raster(width: int, height: int, rgba=(255, 255, 255, 255)) -> Raster:
    """Raster filled with one colour."""
    data = np.empty((height, width, 4), dtype=np.uint8)
    data[:, :] = rgba
    return Raster(width=width, height=height, data=data)


def pattern_raster(width: int, height: int) -> Raster:
    """Raster where pixel(x, y) = (x % 256, y % 256, 0, 255)."""
    xs, ys = np.meshgrid(np.arange(width), np.arange(height))
    data = np.stack(
        [xs % 256, ys % 256, np.zeros_like(xs), np.full_like(xs, 255)],
        axis=-1,
    ).astype(np.uint8)
    return Raster(width=width, height=height, data=data)


def jpeg_snapshot(width: int, height: int, bgr=(255, 255, 255)) -> str:
    """Base64 JPEG of a solid BGR colour, as found in trace screenshots."""
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:, :] = bgr
    ok, buffer = cv2.imencode(".jpg", image, [int(cv2.IMWRITE_JPEG_QUALITY), 95])
    assert ok
    return base64.b64encode(buffer.tobytes()).decode("ascii")


BEGINNING_US = 1_000_000_000


def screenshot_event(offset_ms: float, snapshot: str) -> dict:
    return {
        "name": "Screenshot",
        "cat": "disabled-by-default-devtools.screenshot",
        "ph": "O",
        "pid": 1,
        "tid": 1,
        "ts": BEGINNING_US + int(offset_ms * 1000),
        "args": {"snapshot": snapshot},
    }


@pytest.fixture
def counting_encoder():
    """Provide a fresh CountingEncoder."""
    return CountingEncoder()


@pytest.fixture
def page_load_trace():
    """
    Provide a synthetic Chrome trace of a 320x200 page load.

    The page is white until 400ms after navigation, then blue.
    """
    white = jpeg_snapshot(320, 200, bgr=(255, 255, 255))
    blue = jpeg_snapshot(320, 200, bgr=(255, 0, 0))

    events = [
        {"name": "process_name", "ph": "M", "pid": 1, "ts": 0, "args": {"name": "Renderer"}},
        {
            "name": "TracingStartedInPage",
            "cat": "disabled-by-default-devtools.timeline",
            "ph": "I",
            "pid": 1,
            "ts": BEGINNING_US,
            "args": {},
        },
        screenshot_event(10, white),
        screenshot_event(100, white),
        screenshot_event(200, white),
        screenshot_event(400, blue),
        screenshot_event(600, blue),
        screenshot_event(800, blue),
        {"name": "Layout", "cat": "devtools.timeline", "ph": "X", "pid": 1, "ts": BEGINNING_US + 900_000, "dur": 10},
    ]
    return {"traceEvents": events}
