"""
Thumbnail Renderer
==================

Turns selected frames into encoded thumbnails.

For each selection the renderer:
    1. Looks up the frame index in the per-call FrameCache
    2. On a miss, decodes the frame, scales it to the thumbnail height
       and encodes it (JPEG, quality 90 by default)
    3. Emits a Thumbnail with timing relative to the beginning of the load

Failure Policy:
    Any decode or encode failure aborts the whole render. No blank
    or partial thumbnail set is ever returned.
"""

import base64
import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from screenshot_thumbnails.errors import ImageDecodeError, ImageEncodeError, ThumbnailError
from screenshot_thumbnails.models.frame import Raster
from screenshot_thumbnails.models.output import Thumbnail
from screenshot_thumbnails.rendering.cache import FrameCache
from screenshot_thumbnails.rendering.encoder import JPEG_QUALITY, Encoder, JpegEncoder
from screenshot_thumbnails.rendering.scaling import THUMBNAIL_HEIGHT, scale_image_to_thumbnail
from screenshot_thumbnails.selection.selector import SelectedFrame


logger = logging.getLogger(__name__)


def _decode(selection: SelectedFrame) -> Raster:
    """Decode the selected frame, normalizing failures to ImageDecodeError."""
    try:
        return selection.frame.raster()
    except ImageDecodeError:
        raise
    except Exception as e:
        raise ImageDecodeError(
            f"Failed to decode frame {selection.frame_index}: {e}"
        )


def _encode(raster: Raster, encoder: Encoder, quality: int, frame_index: int) -> bytes:
    """Encode a scaled raster, normalizing failures to ImageEncodeError."""
    try:
        return encoder.encode(raster, quality)
    except ThumbnailError:
        raise
    except Exception as e:
        raise ImageEncodeError(
            f"Failed to encode thumbnail for frame {frame_index}: {e}"
        )


def render_thumbnail(
    selection: SelectedFrame,
    beginning: float,
    cache: FrameCache,
    encoder: Encoder,
    quality: int = JPEG_QUALITY,
    height: int = THUMBNAIL_HEIGHT,
) -> Thumbnail:
    """
    Render one thumbnail, reusing a cached encoding of the same frame.

    Args:
        selection: Frame chosen for this slot
        beginning: Absolute start of the load (ms)
        cache: Cache scoped to the current call
        encoder: Lossy image encoder
        quality: Encoder quality
        height: Thumbnail height in pixels

    Returns:
        Thumbnail for the slot

    Raises:
        ImageDecodeError: If the frame cannot be decoded
        ImageEncodeError: If the encoder fails
    """
    def compute() -> str:
        raster = _decode(selection)
        scaled = scale_image_to_thumbnail(raster, height)
        encoded = _encode(scaled, encoder, quality, selection.frame_index)
        return base64.b64encode(encoded).decode("ascii")

    data = cache.get_or_compute(selection.frame_index, compute)

    # Half-up rounding; round() would send .5 ms targets to the even neighbour
    return Thumbnail(
        timing=math.floor(selection.target_timestamp - beginning + 0.5),
        timestamp=selection.target_timestamp * 1000,
        data=data,
    )


class ThumbnailRenderer:
    """
    Renders a full storyboard from a sequence of selections.

    Attributes:
        encoder: Lossy image encoder
        quality: Encoder quality in [0, 100]
        height: Thumbnail height in pixels
        max_workers: Threads used for rendering (1 = sequential)

    Example:
        renderer = ThumbnailRenderer(quality=90, height=100)
        thumbnails = renderer.render(selections, beginning=timeline.beginning)
    """

    def __init__(
        self,
        encoder: Optional[Encoder] = None,
        quality: int = JPEG_QUALITY,
        height: int = THUMBNAIL_HEIGHT,
        max_workers: int = 1,
        slow_render_ms: float = 500.0,
    ) -> None:
        """
        Initialize renderer.

        Args:
            encoder: Encoder to use. Defaults to JpegEncoder.
            quality: Encoder quality in [0, 100]
            height: Thumbnail height in pixels. Must be >= 1.
            max_workers: Rendering threads. Must be >= 1.
            slow_render_ms: Log a warning when a render takes longer
        """
        if not 0 <= quality <= 100:
            raise ValueError("quality must be in [0, 100]")
        if height < 1:
            raise ValueError("height must be >= 1")
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        self.encoder = encoder if encoder is not None else JpegEncoder()
        self.quality = quality
        self.height = height
        self.max_workers = max_workers
        self.slow_render_ms = slow_render_ms

        logger.info(
            f"ThumbnailRenderer initialized: height={height}px, "
            f"quality={quality}, workers={max_workers}"
        )

    def render(
        self,
        selections: Sequence[SelectedFrame],
        beginning: float,
        cache: Optional[FrameCache] = None,
    ) -> List[Thumbnail]:
        """
        Render every selection, in order.

        Args:
            selections: Output of select_frames
            beginning: Absolute start of the load (ms)
            cache: Optional cache; a fresh one is used when omitted

        Returns:
            One thumbnail per selection, in selection order
        """
        if cache is None:
            cache = FrameCache()

        start_time = time.time()

        if self.max_workers == 1 or len(selections) <= 1:
            thumbnails = [
                render_thumbnail(
                    selection, beginning, cache, self.encoder, self.quality, self.height
                )
                for selection in selections
            ]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                futures = [
                    pool.submit(
                        render_thumbnail,
                        selection, beginning, cache, self.encoder, self.quality, self.height,
                    )
                    for selection in selections
                ]
                thumbnails = [future.result() for future in futures]

        elapsed_ms = (time.time() - start_time) * 1000
        metrics = cache.metrics()
        logger.info(
            f"Rendered {len(thumbnails)} thumbnails from {metrics['misses']} "
            f"distinct frames in {elapsed_ms:.1f}ms"
        )
        if elapsed_ms > self.slow_render_ms:
            logger.warning(
                f"Thumbnail rendering took {elapsed_ms:.1f}ms "
                f"(>{self.slow_render_ms:.0f}ms threshold)"
            )

        return thumbnails
