"""Locations of video documents and caption tracks in the content repository."""

CONTENT_ROOT = "data/videos"


def video_document_path(event: str, slug: str) -> str:
    return f"{CONTENT_ROOT}/{event}/{slug}.md"


def caption_file_name(event: str, slug: str, lang: str) -> str:
    """Caption path relative to ``CONTENT_ROOT``; also the flag's target."""

    return f"{event}/{slug}_{lang}.vtt"


def caption_document_path(event: str, slug: str, lang: str) -> str:
    return f"{CONTENT_ROOT}/{caption_file_name(event, slug, lang)}"


def caption_url(event: str, slug: str, lang: str) -> str:
    return f"/captions/{event}/{slug}/{lang}"


def flagging_url(event: str, slug: str, lang: str) -> str:
    return f"/flags/{event}/{slug}/{lang}"
