"""
Trace Module
============

Trace analysis producing the visual progress timeline.

Components:
    - TraceFrame: RenderFrame backed by a screenshot event
    - decode_snapshot: Base64 JPEG -> RGBA Raster
    - compute_speedline / request_speedline: Visual progress analysis
    - SpeedlineResult: beginning, complete and frames of a trace
"""

from screenshot_thumbnails.trace.frame import TraceFrame
from screenshot_thumbnails.trace.image_decoder import decode_snapshot
from screenshot_thumbnails.trace.speedline import (
    SCREENSHOT_CATEGORY,
    SpeedlineResult,
    compute_speedline,
    compute_visual_progress,
    extract_screenshot_frames,
    find_beginning,
    request_speedline,
    trace_events,
)

__all__ = [
    "TraceFrame",
    "decode_snapshot",
    "SCREENSHOT_CATEGORY",
    "SpeedlineResult",
    "compute_speedline",
    "compute_visual_progress",
    "extract_screenshot_frames",
    "find_beginning",
    "request_speedline",
    "trace_events",
]
