"""
Selection Module
================

Frame selection for the thumbnail storyboard.

Components:
    - select_frames: One frame per evenly spaced target timestamp
    - SelectedFrame: (target, analyzed-frame index, frame) triple
"""

from screenshot_thumbnails.selection.selector import (
    NUMBER_OF_THUMBNAILS,
    SelectedFrame,
    analyzed_frames,
    select_frames,
)

__all__ = [
    "NUMBER_OF_THUMBNAILS",
    "SelectedFrame",
    "analyzed_frames",
    "select_frames",
]
