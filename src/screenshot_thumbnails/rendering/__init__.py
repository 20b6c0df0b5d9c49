"""
Rendering Module
================

Scaling, encoding and caching of storyboard thumbnails.

Components:
    - scale_image_to_thumbnail: Nearest-neighbor downscale to a fixed height
    - Encoder / JpegEncoder: Lossy encoder protocol and OpenCV default
    - FrameCache: Per-call, thread-safe encode cache keyed by frame index
    - ThumbnailRenderer: Renders a whole storyboard from selections
"""

from screenshot_thumbnails.rendering.cache import FrameCache
from screenshot_thumbnails.rendering.encoder import JPEG_QUALITY, Encoder, JpegEncoder
from screenshot_thumbnails.rendering.renderer import ThumbnailRenderer, render_thumbnail
from screenshot_thumbnails.rendering.scaling import THUMBNAIL_HEIGHT, scale_image_to_thumbnail

__all__ = [
    "THUMBNAIL_HEIGHT",
    "JPEG_QUALITY",
    "scale_image_to_thumbnail",
    "Encoder",
    "JpegEncoder",
    "FrameCache",
    "ThumbnailRenderer",
    "render_thumbnail",
]
