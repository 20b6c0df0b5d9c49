"""
Frame Selector
==============

Maps evenly spaced target timestamps onto the analyzed frames of a trace.

Targets are spread over the visual-completeness window, not over the
whole trace, so each thumbnail marks a step of perceived progress:

    target_i = beginning + complete * i / count,   i = 1..count

Selection Policy:
    - Interpolated frames are never candidates
    - Slot i < count gets the latest frame at or before target_i
    - The final slot always gets the last analyzed frame, whatever its
      timestamp, so the storyboard ends on the final observed state
"""

import logging
from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Sequence

from screenshot_thumbnails.errors import InputUnavailableError
from screenshot_thumbnails.models.frame import RenderFrame


logger = logging.getLogger(__name__)


NUMBER_OF_THUMBNAILS = 10


@dataclass(frozen=True, slots=True)
class SelectedFrame:
    """
    A frame chosen for one thumbnail slot.

    Attributes:
        target_timestamp: Target time of the slot (ms)
        frame_index: Position of the frame in the analyzed sequence,
            a stable handle for caching within one call
        frame: The chosen frame
    """

    target_timestamp: float
    frame_index: int
    frame: RenderFrame


def analyzed_frames(frames: Sequence[RenderFrame]) -> List[RenderFrame]:
    """Drop interpolated frames, keeping order."""
    return [frame for frame in frames if not frame.is_interpolated]


def select_frames(
    frames: Sequence[RenderFrame],
    beginning: float,
    complete: float,
    count: int = NUMBER_OF_THUMBNAILS,
) -> List[SelectedFrame]:
    """
    Pick one frame per thumbnail slot.

    Args:
        frames: Time-ordered frames from trace analysis
        beginning: Absolute start of the load (ms)
        complete: Time from beginning to visual completeness (ms)
        count: Number of slots

    Returns:
        Exactly ``count`` selections with non-decreasing targets

    Raises:
        InputUnavailableError: If no frame is analyzed, or a non-final
            target predates every analyzed frame
    """
    if count < 1:
        raise ValueError("count must be >= 1")

    candidates = analyzed_frames(frames)
    if not candidates:
        raise InputUnavailableError(
            f"No analyzed frames among {len(frames)} frames"
        )

    timestamps = [frame.timestamp for frame in candidates]
    last_index = len(candidates) - 1

    selections: List[SelectedFrame] = []
    for i in range(1, count + 1):
        target_timestamp = beginning + complete * i / count

        if i == count:
            index = last_index
        else:
            # Right-most frame with timestamp <= target
            index = bisect_right(timestamps, target_timestamp) - 1
            if index < 0:
                raise InputUnavailableError(
                    f"No analyzed frame at or before target "
                    f"{target_timestamp:.3f}ms (slot {i}/{count}, "
                    f"first frame at {timestamps[0]:.3f}ms)"
                )

        logger.debug(
            f"Slot {i}/{count}: target={target_timestamp:.3f}ms -> "
            f"frame {index} at {timestamps[index]:.3f}ms"
        )
        selections.append(
            SelectedFrame(
                target_timestamp=target_timestamp,
                frame_index=index,
                frame=candidates[index],
            )
        )

    return selections
