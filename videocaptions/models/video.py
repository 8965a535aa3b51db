from __future__ import annotations

"""Pydantic models for the video discovery endpoint."""

from pydantic import BaseModel, Field

__all__ = ["VideoResponse"]


class VideoResponse(BaseModel):
    """Where the player finds the video, its captions and the flag endpoint."""

    videoUrl: str = Field(..., examples=["https://www.youtube.com/watch?v=dQw4w9WgXcQ"])
    vttUrl: str = Field(..., description="Relative URL of the caption track.")
    flaggingUrl: str = Field(..., description="Relative URL for submitting flags.")
