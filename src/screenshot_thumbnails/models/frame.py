"""
Frame Data Model
=================

Typed frame and raster representations shared by the selector,
the renderer and the trace analyzer.

Design Rules:
    - Raster pixels are always RGBA, 4 bytes per pixel, row-major
    - Frames are owned by the trace analyzer; the core only reads them
    - Timestamps are milliseconds
"""

from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np


CHANNELS = 4


@dataclass(frozen=True, eq=False)
class Raster:
    """
    Decoded RGBA image.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        data: uint8 array of shape (height, width, 4), channels R,G,B,A

    Note:
        The flat buffer (``tobytes()``) is always exactly
        width * height * 4 bytes long.
    """

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.width < 0 or self.height < 0:
            raise ValueError("width and height must be non-negative")
        if self.data.dtype != np.uint8:
            raise ValueError(f"Raster data must be uint8, got {self.data.dtype}")
        expected = (self.height, self.width, CHANNELS)
        if self.data.shape != expected:
            raise ValueError(
                f"Raster data shape {self.data.shape} does not match {expected}"
            )

    @classmethod
    def from_bytes(cls, width: int, height: int, buffer: bytes) -> "Raster":
        """
        Build a raster from a flat row-major RGBA buffer.

        Raises:
            ValueError: If the buffer length is not width * height * 4
        """
        if len(buffer) != width * height * CHANNELS:
            raise ValueError(
                f"Buffer of {len(buffer)} bytes does not match "
                f"{width}x{height} RGBA ({width * height * CHANNELS} bytes)"
            )
        data = np.frombuffer(buffer, dtype=np.uint8).reshape(height, width, CHANNELS)
        return cls(width=width, height=height, data=data)

    def tobytes(self) -> bytes:
        """Flat row-major RGBA buffer."""
        return self.data.tobytes()

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the pixels."""
        return f"Raster(width={self.width}, height={self.height})"


class RenderFrame(Protocol):
    """
    One rendered state of the page during load.

    Implemented by the trace analyzer (see ``trace.TraceFrame``).
    Decoding may be lazy and cached by the implementation.
    """

    @property
    def timestamp(self) -> float:
        """Frame time in milliseconds."""
        ...

    @property
    def is_interpolated(self) -> bool:
        """True if the frame's progress was not directly analyzed."""
        ...

    def raster(self) -> Raster:
        """Decoded RGBA image of the frame."""
        ...


class VisualTimeline(Protocol):
    """
    Visual progress window produced by trace analysis.

    Attributes:
        beginning: Absolute start of the page load (ms)
        complete: Time from beginning to visual completeness (ms)
        frames: Time-ordered render frames
    """

    beginning: float
    complete: float
    frames: Sequence[RenderFrame]
