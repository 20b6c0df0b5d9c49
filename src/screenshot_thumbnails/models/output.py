"""
Audit Output Models
===================

This module defines the output contract of the screenshot thumbnails audit.

Output Contract:
    {
        "raw_value": [
            {"timing": 91, "timestamp": 225414262895.0, "data": "/9j/4AAQ..."},
            ...
        ]
    }

Design Rules:
    - raw_value always holds exactly the configured number of thumbnails
    - thumbnails are ordered by increasing timing
    - data is a base64-encoded JPEG
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Thumbnail(BaseModel):
    """
    One storyboard entry.

    Attributes:
        timing: Milliseconds from the start of the load, rounded
        timestamp: Absolute target time in microseconds
        data: Base64-encoded JPEG thumbnail
    """

    model_config = ConfigDict(frozen=True)

    timing: int = Field(
        ...,
        description="Target time relative to the beginning of the load (ms)",
    )

    timestamp: float = Field(
        ...,
        description="Absolute target timestamp (microseconds)",
    )

    data: str = Field(
        ...,
        description="Base64-encoded JPEG data",
    )

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the image."""
        return (
            f"Thumbnail(timing={self.timing}, "
            f"timestamp={self.timestamp:.0f}, "
            f"data=<{len(self.data)} chars>)"
        )


class AuditResult(BaseModel):
    """Result handed to the report layer."""

    raw_value: List[Thumbnail] = Field(
        default_factory=list,
        description="Thumbnails in increasing time order",
    )


class AuditMeta(BaseModel):
    """Static description of an audit."""

    category: str
    name: str
    description: str
    help_text: str
    required_artifacts: List[str] = Field(default_factory=list)
