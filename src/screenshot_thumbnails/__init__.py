"""
Screenshot Thumbnails
=====================

Storyboard of how a page's rendering evolved during a page-load trace.

Given the screenshots of a trace and its visual progress timeline, this
package picks a fixed number of frames at even intervals of the
visually-complete window, scales each to a small fixed-height thumbnail
and encodes it as JPEG.

Components:
    - selection: Evenly spaced frame selection
    - rendering: Nearest-neighbor scaling, encoding and per-call caching
    - trace: Screenshot extraction and visual progress analysis
    - audit: Host-facing entry point

Example:
    import asyncio
    from screenshot_thumbnails.audit import Artifacts, ScreenshotThumbnailsAudit

    artifacts = Artifacts.with_default_analyzer({"defaultPass": trace})
    result = asyncio.run(ScreenshotThumbnailsAudit().audit(artifacts))
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
