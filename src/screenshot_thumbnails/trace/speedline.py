"""
Speedline Analysis
==================

Visual progress analysis of a Chrome trace.

This module turns the raw trace (``{"traceEvents": [...]}`` or a bare
event list) into the timeline consumed by the thumbnail audit:
    - beginning: absolute start of the page load (ms)
    - complete: time from beginning to the first visually complete frame
    - frames: time-ordered TraceFrames with visual progress

Visual Progress:
    Each frame is summarized by per-channel 256-bin colour histograms.
    Progress is the fraction of the histogram distance between the first
    and the last frame that has been covered:

        progress = 100 * (1 - dist(frame, last) / dist(first, last))

Fast Mode:
    Progress is only computed at the ends of recursively bisected frame
    ranges. When both ends of a range have the same progress, the frames
    in between inherit it without being decoded and are flagged as
    interpolated.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import numpy as np

from screenshot_thumbnails.errors import InputUnavailableError
from screenshot_thumbnails.trace.frame import TraceFrame


logger = logging.getLogger(__name__)


SCREENSHOT_CATEGORY = "disabled-by-default-devtools.screenshot"
BEGINNING_EVENTS = ("TracingStartedInPage", "navigationStart")

Trace = Union[Dict[str, Any], List[Dict[str, Any]]]


@dataclass
class SpeedlineResult:
    """
    Visual progress timeline of a trace.

    Attributes:
        beginning: Absolute start of the page load (ms)
        end: Absolute time of the last trace event (ms)
        first: Time from beginning to the first frame with progress > 0
        complete: Time from beginning to the first frame at 100% progress
        frames: Time-ordered frames
    """

    beginning: float
    end: float
    first: float
    complete: float
    frames: List[TraceFrame]

    @property
    def duration(self) -> float:
        """Total trace duration (ms)."""
        return self.end - self.beginning


def trace_events(trace: Trace) -> List[Dict[str, Any]]:
    """
    Get the event list of a trace.

    Raises:
        InputUnavailableError: If the trace has no event list
    """
    if isinstance(trace, list):
        return trace
    if isinstance(trace, dict) and isinstance(trace.get("traceEvents"), list):
        return trace["traceEvents"]
    raise InputUnavailableError("Trace has no traceEvents list")


def find_beginning(events: List[Dict[str, Any]]) -> float:
    """
    Absolute start of the page load (ms).

    Uses the earliest TracingStartedInPage/navigationStart event, falling
    back to the earliest timed event.
    """
    markers = [
        e["ts"] for e in events
        if e.get("name") in BEGINNING_EVENTS and "ts" in e
    ]
    if not markers:
        # Metadata events carry ts=0
        markers = [e["ts"] for e in events if "ts" in e and e.get("ph") != "M"]
    if not markers:
        raise InputUnavailableError("Trace has no timed events")
    return min(markers) / 1000


def find_end(events: List[Dict[str, Any]]) -> float:
    """Absolute time of the last timed event (ms)."""
    timestamps = [e["ts"] for e in events if "ts" in e and e.get("ph") != "M"]
    if not timestamps:
        raise InputUnavailableError("Trace has no timed events")
    return max(timestamps) / 1000


def extract_screenshot_frames(
    events: List[Dict[str, Any]],
    category: str = SCREENSHOT_CATEGORY,
) -> List[TraceFrame]:
    """
    Build time-ordered frames from the trace's screenshot events.

    Raises:
        InputUnavailableError: If the trace holds no screenshots
    """
    frames = [
        TraceFrame(timestamp=e["ts"] / 1000, snapshot=e["args"]["snapshot"])
        for e in events
        if e.get("name") == "Screenshot"
        and e.get("cat") == category
        and "snapshot" in e.get("args", {})
    ]
    if not frames:
        raise InputUnavailableError("Trace contains no screenshots")

    frames.sort(key=lambda frame: frame.timestamp)
    return frames


def color_histogram(frame: TraceFrame) -> np.ndarray:
    """Per-channel (R, G, B) 256-bin histograms, shape (3, 256)."""
    pixels = frame.raster().data
    return np.stack([
        np.bincount(pixels[:, :, channel].ravel(), minlength=256)
        for channel in range(3)
    ]).astype(np.int64)


def _histogram_distance(a: np.ndarray, b: np.ndarray) -> int:
    return int(np.abs(a - b).sum())


class _ProgressCalculator:
    """Histogram-based visual progress relative to the first and last frames."""

    def __init__(self, frames: List[TraceFrame]) -> None:
        self._final = color_histogram(frames[-1])
        self._total = _histogram_distance(color_histogram(frames[0]), self._final)

    def __call__(self, frame: TraceFrame) -> float:
        if self._total == 0:
            return 100.0
        distance = _histogram_distance(color_histogram(frame), self._final)
        progress = 100.0 * (1 - distance / self._total)
        return float(min(100.0, max(0.0, progress)))


def compute_visual_progress(frames: List[TraceFrame], fast_mode: bool = True) -> None:
    """
    Set ``progress`` (and ``is_interpolated`` in fast mode) on every frame.

    Args:
        frames: Time-ordered, non-empty frame list
        fast_mode: Skip decoding frames whose progress can be inherited
    """
    calculate = _ProgressCalculator(frames)

    if not fast_mode:
        for frame in frames:
            frame.progress = calculate(frame)
            frame.is_interpolated = False
        return

    def analyze(index: int) -> None:
        if frames[index].progress is None:
            frames[index].progress = calculate(frames[index])
            frames[index].is_interpolated = False

    def bisect(lo: int, hi: int) -> None:
        if hi - lo < 2:
            return
        if frames[lo].progress == frames[hi].progress:
            for frame in frames[lo + 1:hi]:
                frame.progress = frames[lo].progress
                frame.is_interpolated = True
            return
        mid = (lo + hi) // 2
        analyze(mid)
        bisect(lo, mid)
        bisect(mid, hi)

    analyze(0)
    analyze(len(frames) - 1)
    bisect(0, len(frames) - 1)


def compute_speedline(
    trace: Trace,
    fast_mode: bool = True,
    screenshot_category: str = SCREENSHOT_CATEGORY,
) -> SpeedlineResult:
    """
    Analyze a trace's screenshots.

    Args:
        trace: Chrome trace (dict with traceEvents, or event list)
        fast_mode: Interpolate progress where possible
        screenshot_category: Trace category of screenshot events

    Returns:
        SpeedlineResult with the visual progress timeline

    Raises:
        InputUnavailableError: If the trace has no screenshots
        ImageDecodeError: If an analyzed screenshot is corrupt
    """
    events = trace_events(trace)
    frames = extract_screenshot_frames(events, screenshot_category)
    beginning = find_beginning(events)
    end = find_end(events)

    compute_visual_progress(frames, fast_mode=fast_mode)

    first_ts = next((f.timestamp for f in frames if f.progress > 0), frames[-1].timestamp)
    complete_ts = next((f.timestamp for f in frames if f.progress >= 100), frames[-1].timestamp)

    interpolated = sum(1 for f in frames if f.is_interpolated)
    logger.info(
        f"Speedline: {len(frames)} frames ({interpolated} interpolated), "
        f"first={first_ts - beginning:.1f}ms, complete={complete_ts - beginning:.1f}ms"
    )

    return SpeedlineResult(
        beginning=beginning,
        end=end,
        first=first_ts - beginning,
        complete=complete_ts - beginning,
        frames=frames,
    )


async def request_speedline(
    trace: Trace,
    fast_mode: bool = True,
    screenshot_category: Optional[str] = None,
) -> SpeedlineResult:
    """Async wrapper running compute_speedline off the event loop."""
    return await asyncio.to_thread(
        compute_speedline,
        trace,
        fast_mode,
        screenshot_category or SCREENSHOT_CATEGORY,
    )
