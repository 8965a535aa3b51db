from __future__ import annotations

"""Caption proxy: hands caption tracks through unchanged."""

from videocaptions.external_services.content_source import ContentSource
from videocaptions.services.paths import caption_document_path


async def get_captions(event: str, slug: str, lang: str, source: ContentSource) -> str:
    return await source.get(caption_document_path(event, slug, lang))
