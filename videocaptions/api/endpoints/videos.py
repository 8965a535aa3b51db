"""API endpoint resolving a video's playback and caption URLs."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from videocaptions.api.dependencies import get_content_source
from videocaptions.external_services.content_source import ContentSource
from videocaptions.models.video import VideoResponse
from videocaptions.services import video_service

router = APIRouter(prefix="/videos", tags=["Videos"])


@router.get(
    "/{event}/{slug}/{lang}",
    response_model=VideoResponse,
    summary="Resolve video, caption and flagging URLs",
)
async def get_video(
    event: str,
    slug: str,
    lang: str,
    source: Annotated[ContentSource, Depends(get_content_source)],
):
    return await video_service.resolve_video(event, slug, lang, source)
