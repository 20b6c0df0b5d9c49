"""
Image Decoder
=============

Dedicated module for decoding base64 JPEG screenshots into RGBA rasters.

Design Rules:
    - This is the ONLY place in the codebase that decodes images
    - Validates shape and dtype
    - Fails fast on corrupt screenshots
"""

import base64
import binascii
import logging

import cv2
import numpy as np

from screenshot_thumbnails.errors import ImageDecodeError
from screenshot_thumbnails.models.frame import Raster


logger = logging.getLogger(__name__)


def decode_snapshot(snapshot_b64: str, label: str = "snapshot") -> Raster:
    """
    Decode a base64 JPEG screenshot to an RGBA raster.

    Args:
        snapshot_b64: Base64-encoded JPEG data from the trace
        label: Name used in error messages

    Returns:
        Raster with RGBA pixels, fully opaque

    Raises:
        ImageDecodeError: If decoding fails or the image is invalid
    """
    try:
        image_bytes = base64.b64decode(snapshot_b64, validate=True)
        nparr = np.frombuffer(image_bytes, np.uint8)

        bgr = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

        if bgr is None:
            raise ImageDecodeError(
                f"Failed to decode {label}: cv2.imdecode returned None"
            )

        if len(bgr.shape) != 3 or bgr.shape[2] != 3:
            raise ImageDecodeError(
                f"Invalid image shape for {label}: {bgr.shape}"
            )

        if bgr.dtype != np.uint8:
            raise ImageDecodeError(
                f"Invalid dtype for {label}: {bgr.dtype}"
            )

        rgba = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGBA)
        height, width = rgba.shape[:2]
        return Raster(width=width, height=height, data=rgba)

    except binascii.Error as e:
        raise ImageDecodeError(
            f"Base64 decode failed for {label}: {e}"
        )
    except Exception as e:
        if isinstance(e, ImageDecodeError):
            raise
        raise ImageDecodeError(
            f"Unexpected error decoding {label}: {e}"
        )
