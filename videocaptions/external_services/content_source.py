"""Read-only access to the video content repository.

Video documents (``*.md``) and caption tracks (``*.vtt``) live in a Git
repository and are fetched by path through a ``ContentSource``:

1. ``GitHubContentSource`` – downloads the file from
   ``raw.githubusercontent.com`` for the configured repo/ref.
2. ``LocalContentSource`` – reads the file below a local directory.  Selected
   whenever ``VIDEOS_PATH`` is set so that development and tests never reach
   the network.

Missing files raise ``ContentNotFoundError`` in both implementations.
"""

from __future__ import annotations

import asyncio
import logging
import pathlib
from typing import Protocol

import httpx

from videocaptions.core.config import Settings
from videocaptions.core.errors import ContentFetchError, ContentNotFoundError
from videocaptions.metrics import CONTENT_FETCH_DURATION_SECONDS
from videocaptions.utils.instrumentation import observe

logger = logging.getLogger(__name__)

__all__ = [
    "ContentSource",
    "GitHubContentSource",
    "LocalContentSource",
    "build_content_source",
]


class ContentSource(Protocol):
    async def get(self, path: str) -> str:
        """Return the text of the document at *path*."""
        ...


class GitHubContentSource:
    """Fetch raw files from a GitHub repository."""

    def __init__(
        self,
        repo: str,
        ref: str,
        *,
        base_url: str = "https://raw.githubusercontent.com",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.repo = repo
        self.ref = ref
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{self.repo}/{self.ref}/{path}"

    async def _fetch(self, path: str) -> str:
        url = self.url_for(path)
        async with httpx.AsyncClient(
            timeout=self.timeout, follow_redirects=True, transport=self._transport
        ) as client:
            resp = await client.get(url)

        if resp.status_code == 404:
            raise ContentNotFoundError(path)
        if not resp.is_success:
            raise ContentFetchError(
                f"Failed to fetch {url}: {resp.status_code} {resp.reason_phrase}"
            )
        return resp.text

    async def get(self, path: str) -> str:
        logger.debug("Fetching %s from %s@%s", path, self.repo, self.ref)
        return await observe(
            "content.fetch",
            CONTENT_FETCH_DURATION_SECONDS,
            {"source": "github"},
            self._fetch(path),
        )


class LocalContentSource:
    """Read files from a local checkout of the content repository."""

    def __init__(self, root: str | pathlib.Path):
        self.root = pathlib.Path(root).resolve()

    def _read(self, path: str) -> str:
        target = (self.root / path).resolve()
        # Keep reads inside the checkout even for ".." path segments.
        if not target.is_relative_to(self.root) or not target.is_file():
            raise ContentNotFoundError(path)
        return target.read_text(encoding="utf-8")

    async def get(self, path: str) -> str:
        logger.debug("Reading %s from local content at %s", path, self.root)
        return await observe(
            "content.fetch",
            CONTENT_FETCH_DURATION_SECONDS,
            {"source": "local"},
            asyncio.to_thread(self._read, path),
        )


def build_content_source(settings: Settings) -> ContentSource:
    """Return the content source selected by *settings*."""

    if settings.VIDEOS_PATH:
        logger.info("Serving content from local directory %s", settings.VIDEOS_PATH)
        return LocalContentSource(settings.VIDEOS_PATH)
    return GitHubContentSource(
        settings.CONTENT_REPO,
        settings.CONTENT_REF,
        base_url=settings.CONTENT_BASE_URL,
        timeout=settings.CONTENT_FETCH_TIMEOUT,
    )
