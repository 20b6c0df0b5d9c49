"""
Thumbnail Encoder
=================

Lossy encoding of scaled rasters.

The renderer only depends on the ``Encoder`` protocol; ``JpegEncoder``
is the OpenCV-backed default.
"""

import logging
from typing import Protocol

import cv2

from screenshot_thumbnails.errors import ImageEncodeError
from screenshot_thumbnails.models.frame import Raster


logger = logging.getLogger(__name__)


JPEG_QUALITY = 90


class Encoder(Protocol):
    """Protocol for thumbnail encoders."""

    def encode(self, raster: Raster, quality: int) -> bytes:
        """
        Encode a raster.

        Args:
            raster: RGBA raster to encode
            quality: Encoder quality in [0, 100]

        Returns:
            Encoded image bytes
        """
        ...


class JpegEncoder:
    """
    JPEG encoder using OpenCV.

    The alpha channel is dropped; JPEG has no transparency.
    """

    def encode(self, raster: Raster, quality: int = JPEG_QUALITY) -> bytes:
        """
        Encode an RGBA raster as JPEG.

        Raises:
            ImageEncodeError: If OpenCV rejects the image
        """
        if not 0 <= quality <= 100:
            raise ImageEncodeError(f"JPEG quality must be in [0, 100], got {quality}")

        try:
            bgr = cv2.cvtColor(raster.data, cv2.COLOR_RGBA2BGR)
            ok, buffer = cv2.imencode(
                ".jpg", bgr, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)]
            )
        except cv2.error as e:
            raise ImageEncodeError(f"JPEG encode failed for {raster!r}: {e}")

        if not ok:
            raise ImageEncodeError(
                f"JPEG encode failed for {raster!r}: cv2.imencode returned False"
            )

        return buffer.tobytes()
