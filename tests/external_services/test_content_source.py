import httpx
import pytest

from videocaptions.core.config import Settings
from videocaptions.core.errors import ContentFetchError, ContentNotFoundError
from videocaptions.external_services.content_source import (
    GitHubContentSource,
    LocalContentSource,
    build_content_source,
)


def _github(handler) -> GitHubContentSource:
    return GitHubContentSource(
        "creatorsgarten/videos",
        "refs/heads/main",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_github_source_fetches_raw_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, text="youtube: abc")

    text = await _github(handler).get("data/videos/ev/slug.md")

    assert text == "youtube: abc"
    assert seen == [
        "https://raw.githubusercontent.com/creatorsgarten/videos/refs/heads/main/data/videos/ev/slug.md"
    ]


@pytest.mark.asyncio
async def test_github_source_404_is_not_found():
    source = _github(lambda request: httpx.Response(404, text="404: Not Found"))
    with pytest.raises(ContentNotFoundError) as exc_info:
        await source.get("data/videos/ev/missing.md")
    assert exc_info.value.path == "data/videos/ev/missing.md"


@pytest.mark.asyncio
async def test_github_source_other_errors_are_fetch_errors():
    source = _github(lambda request: httpx.Response(503))
    with pytest.raises(ContentFetchError) as exc_info:
        await source.get("data/videos/ev/slug.md")
    assert "503" in str(exc_info.value)


@pytest.mark.asyncio
async def test_local_source_reads_files(content_root):
    source = LocalContentSource(content_root)
    text = await source.get("data/videos/bangkokjs/intro_th.vtt")
    assert text.startswith("WEBVTT")
    assert "สวัสดีครับ" in text


@pytest.mark.asyncio
async def test_local_source_missing_file(content_root):
    with pytest.raises(ContentNotFoundError):
        await LocalContentSource(content_root).get("data/videos/bangkokjs/nope.md")


@pytest.mark.asyncio
async def test_local_source_stays_inside_root(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("nope")

    with pytest.raises(ContentNotFoundError):
        await LocalContentSource(root).get("../secret.txt")


def test_build_content_source_prefers_local_override(tmp_path):
    settings = Settings(_env_file=None, VIDEOS_PATH=str(tmp_path))
    assert isinstance(build_content_source(settings), LocalContentSource)


def test_build_content_source_defaults_to_github(monkeypatch):
    monkeypatch.delenv("VIDEOS_PATH", raising=False)
    source = build_content_source(Settings(_env_file=None))
    assert isinstance(source, GitHubContentSource)
    assert source.repo == "creatorsgarten/videos"
