"""
Thumbnail Scaling
=================

Nearest-neighbor scaling to a fixed thumbnail height.

Nearest neighbor is used for speed: every output pixel is a verbatim
copy of one source pixel, with no blending. The aspect ratio of the
source is kept, so only the height is fixed. Sources shorter than the
thumbnail are upsampled the same way.
"""

import math

import numpy as np

from screenshot_thumbnails.errors import ImageDecodeError
from screenshot_thumbnails.models.frame import Raster


THUMBNAIL_HEIGHT = 100


def scale_image_to_thumbnail(raster: Raster, height: int = THUMBNAIL_HEIGHT) -> Raster:
    """
    Scale a raster to ``height`` pixels, preserving aspect ratio.

    Output pixel (i, j) is source pixel (floor(i * s), floor(j * s)) with
    s = raster.height / height, all four channels copied unmodified.

    Args:
        raster: Source RGBA raster
        height: Output height in pixels

    Returns:
        Raster of floor(raster.width / s) x height pixels

    Raises:
        ImageDecodeError: If the source has no rows
    """
    if height < 1:
        raise ValueError("height must be >= 1")
    if raster.height < 1:
        raise ImageDecodeError(f"Cannot scale empty {raster!r}")

    scale_factor = raster.height / height
    scaled_width = math.floor(raster.width / scale_factor)

    orig_x = np.floor(np.arange(scaled_width) * scale_factor).astype(np.intp)
    orig_y = np.floor(np.arange(height) * scale_factor).astype(np.intp)

    out_pixels = raster.data[orig_y[:, np.newaxis], orig_x[np.newaxis, :]]

    return Raster(width=scaled_width, height=height, data=out_pixels)
