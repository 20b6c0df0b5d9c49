"""
Screenshot Thumbnails Audit
===========================

Host-facing entry point: "this is what the load of your site looked like".

Flow:
    1. Await the trace analysis collaborator once for the default pass
    2. Select one frame per evenly spaced target timestamp
    3. Render (scale + encode) each selection, reusing repeated frames

Either a full storyboard is returned or the error propagates; there is
no degraded output mode.

Example:
    from screenshot_thumbnails.audit import Artifacts, ScreenshotThumbnailsAudit

    artifacts = Artifacts.with_default_analyzer({"defaultPass": trace})
    result = asyncio.run(ScreenshotThumbnailsAudit().audit(artifacts))
    for thumbnail in result.raw_value:
        print(thumbnail.timing, len(thumbnail.data))
"""

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Awaitable, Callable, Dict, Optional

from screenshot_thumbnails.config import ThumbnailConfig, TraceConfig, settings
from screenshot_thumbnails.errors import InputUnavailableError, ThumbnailError
from screenshot_thumbnails.models.frame import VisualTimeline
from screenshot_thumbnails.models.output import AuditMeta, AuditResult
from screenshot_thumbnails.rendering.cache import FrameCache
from screenshot_thumbnails.rendering.encoder import Encoder
from screenshot_thumbnails.rendering.renderer import ThumbnailRenderer
from screenshot_thumbnails.selection.selector import select_frames
from screenshot_thumbnails.trace.speedline import request_speedline


logger = logging.getLogger(__name__)


DEFAULT_PASS = "defaultPass"


@dataclass
class Artifacts:
    """
    Inputs gathered by the host for one audit run.

    Attributes:
        traces: Raw traces keyed by pass name
        request_speedline: Async trace analysis collaborator
    """

    traces: Dict[str, Any]
    request_speedline: Callable[[Any], Awaitable[VisualTimeline]]

    @classmethod
    def with_default_analyzer(
        cls,
        traces: Dict[str, Any],
        trace_config: Optional[TraceConfig] = None,
    ) -> "Artifacts":
        """Artifacts wired to the bundled speedline analysis."""
        trace_config = trace_config or settings.trace
        return cls(
            traces=traces,
            request_speedline=partial(
                request_speedline,
                fast_mode=trace_config.fast_mode,
                screenshot_category=trace_config.screenshot_category,
            ),
        )


class ScreenshotThumbnailsAudit:
    """
    Extracts a fixed-size storyboard of thumbnails from a page-load trace.

    Attributes:
        config: Storyboard shape, encoding and concurrency settings
        renderer: Renderer built from config
    """

    meta = AuditMeta(
        category="Images",
        name="screenshot-thumbnails",
        description="Screenshot Thumbnails",
        help_text="This is what the load of your site looked like.",
        required_artifacts=["traces"],
    )

    def __init__(
        self,
        config: Optional[ThumbnailConfig] = None,
        encoder: Optional[Encoder] = None,
    ) -> None:
        """
        Initialize audit.

        Args:
            config: Thumbnail settings. Defaults to global settings.
            encoder: Encoder override. Defaults to JpegEncoder.
        """
        self.config = config or settings.thumbnails
        self.renderer = ThumbnailRenderer(
            encoder=encoder,
            quality=self.config.quality,
            height=self.config.height,
            max_workers=self.config.max_workers,
        )

    def compute(self, timeline: VisualTimeline) -> AuditResult:
        """
        Build the storyboard for an analyzed trace.

        Raises:
            InputUnavailableError: If a slot has no usable frame
            ImageDecodeError: If a selected frame cannot be decoded
            ImageEncodeError: If encoding fails
        """
        selections = select_frames(
            timeline.frames,
            beginning=timeline.beginning,
            complete=timeline.complete,
            count=self.config.count,
        )
        thumbnails = self.renderer.render(
            selections,
            beginning=timeline.beginning,
            cache=FrameCache(),
        )
        return AuditResult(raw_value=thumbnails)

    async def audit(self, artifacts: Artifacts) -> AuditResult:
        """
        Run the audit on the default pass trace.

        The timeout abandons the render loop rather than cancelling it:
        the worker thread keeps decoding and encoding until it finishes,
        and its result is discarded.

        Raises:
            InputUnavailableError: If the default pass trace is missing
                or has no usable frames
            ImageDecodeError, ImageEncodeError: On image failures
            asyncio.TimeoutError: If rendering exceeds timeout_seconds
        """
        trace = artifacts.traces.get(DEFAULT_PASS)
        if trace is None:
            raise InputUnavailableError(f"No trace for pass '{DEFAULT_PASS}'")

        try:
            timeline = await artifacts.request_speedline(trace)
            work = asyncio.to_thread(self.compute, timeline)
            if self.config.timeout_seconds is not None:
                return await asyncio.wait_for(work, timeout=self.config.timeout_seconds)
            return await work
        except ThumbnailError as e:
            logger.error(f"Screenshot thumbnails audit failed: {e}")
            raise
        except asyncio.TimeoutError:
            logger.error(
                f"Screenshot thumbnails audit exceeded "
                f"{self.config.timeout_seconds}s deadline"
            )
            raise
