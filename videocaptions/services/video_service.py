from __future__ import annotations

"""Resolve a video's playback URL from its content document."""

import logging
import re

from videocaptions.core.errors import MalformedContentError
from videocaptions.external_services.content_source import ContentSource
from videocaptions.models.video import VideoResponse
from videocaptions.services.paths import (
    caption_url,
    flagging_url,
    video_document_path,
)

logger = logging.getLogger(__name__)

# ``youtube: <id>`` in the document front matter; the id may be quoted.
YOUTUBE_ID_RE = re.compile(r"youtube:\s*[\"']?([a-zA-Z0-9_-]+)")

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={youtube_id}"


def parse_youtube_id(content: str) -> str:
    """Return the first YouTube id declared in *content*."""

    match = YOUTUBE_ID_RE.search(content)
    if match is None:
        raise MalformedContentError("YouTube ID not found in content")
    return match.group(1)


async def resolve_video(
    event: str, slug: str, lang: str, source: ContentSource
) -> VideoResponse:
    """Look up the video for *event*/*slug* and build the player URLs.

    ``lang`` only shapes the returned caption/flag URLs; it is not checked
    against the document.
    """

    content = await source.get(video_document_path(event, slug))
    youtube_id = parse_youtube_id(content)
    logger.debug("Resolved %s/%s to YouTube id %s", event, slug, youtube_id)

    return VideoResponse(
        videoUrl=YOUTUBE_WATCH_URL.format(youtube_id=youtube_id),
        vttUrl=caption_url(event, slug, lang),
        flaggingUrl=flagging_url(event, slug, lang),
    )
