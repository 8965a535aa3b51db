"""API endpoint proxying caption tracks."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from videocaptions.api.dependencies import get_content_source
from videocaptions.external_services.content_source import ContentSource
from videocaptions.services import caption_service

router = APIRouter(prefix="/captions", tags=["Captions"])


class VTTResponse(PlainTextResponse):
    media_type = "text/vtt"


@router.get(
    "/{event}/{slug}/{lang}",
    response_class=VTTResponse,
    summary="Fetch the WebVTT caption track",
)
async def get_captions(
    event: str,
    slug: str,
    lang: str,
    source: Annotated[ContentSource, Depends(get_content_source)],
):
    """Return the caption file verbatim."""

    return VTTResponse(await caption_service.get_captions(event, slug, lang, source))
