"""
Trace Frame
===========

RenderFrame implementation backed by a screenshot event of a trace.

The screenshot stays base64-encoded until its pixels are needed; the
decoded raster is then kept for the lifetime of the frame.
"""

import threading
from typing import Optional

from screenshot_thumbnails.models.frame import Raster
from screenshot_thumbnails.trace.image_decoder import decode_snapshot


class TraceFrame:
    """
    One screenshot from a trace.

    Attributes:
        timestamp: Screenshot time in milliseconds
        snapshot: Base64-encoded JPEG (NOT decoded until raster() is called)
        progress: Visual progress in [0, 100], set by trace analysis
        is_interpolated: True if progress was inherited from neighbours
            rather than computed from this frame's pixels
    """

    def __init__(
        self,
        timestamp: float,
        snapshot: str,
        is_interpolated: bool = False,
        progress: Optional[float] = None,
    ) -> None:
        self.timestamp = timestamp
        self.snapshot = snapshot
        self.is_interpolated = is_interpolated
        self.progress = progress
        self._raster: Optional[Raster] = None
        self._lock = threading.Lock()

    def raster(self) -> Raster:
        """
        Decoded RGBA screenshot, decoded once.

        Raises:
            ImageDecodeError: If the screenshot is corrupt
        """
        with self._lock:
            if self._raster is None:
                self._raster = decode_snapshot(
                    self.snapshot, label=f"screenshot at {self.timestamp:.3f}ms"
                )
            return self._raster

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the image."""
        return (
            f"TraceFrame(timestamp={self.timestamp:.3f}, "
            f"progress={self.progress}, "
            f"interpolated={self.is_interpolated})"
        )
