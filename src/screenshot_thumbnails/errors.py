"""
Error Types
===========

Exceptions raised while extracting screenshot thumbnails.

None of these are retried locally. Every error aborts the whole
computation: either a full thumbnail set is produced or an error
reaches the caller.
"""


class ThumbnailError(Exception):
    """Base class for all thumbnail extraction errors."""
    pass


class InputUnavailableError(ThumbnailError):
    """
    Raised when the trace cannot supply a frame for a thumbnail slot.

    Covers traces without screenshots, traces whose frames are all
    interpolated, and non-final target timestamps that predate every
    analyzed frame.
    """
    pass


class ImageDecodeError(ThumbnailError):
    """Raised when image decoding fails."""
    pass


class ImageEncodeError(ThumbnailError):
    """Raised when the thumbnail encoder fails."""
    pass
