"""
Data Models
===========

Frame, raster and output models for screenshot thumbnails.

Models:
    Input:
        - Raster: Decoded RGBA image
        - RenderFrame: Protocol for one rendered page state
        - VisualTimeline: Protocol for the visual progress window

    Output:
        - Thumbnail: One storyboard entry
        - AuditResult: Complete output contract
        - AuditMeta: Static audit description
"""

from screenshot_thumbnails.models.frame import Raster, RenderFrame, VisualTimeline
from screenshot_thumbnails.models.output import AuditMeta, AuditResult, Thumbnail

__all__ = [
    # Input
    "Raster",
    "RenderFrame",
    "VisualTimeline",
    # Output
    "Thumbnail",
    "AuditResult",
    "AuditMeta",
]
