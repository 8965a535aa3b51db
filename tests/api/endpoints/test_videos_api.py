import pytest
from fastapi import status


@pytest.mark.asyncio
async def test_get_video(client, overrides):
    async with client as ac:
        resp = await ac.get("/videos/bangkokjs/intro/th")

    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {
        "videoUrl": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "vttUrl": "/captions/bangkokjs/intro/th",
        "flaggingUrl": "/flags/bangkokjs/intro/th",
    }


@pytest.mark.asyncio
async def test_get_video_not_found(client, overrides):
    async with client as ac:
        resp = await ac.get("/videos/bangkokjs/missing/th")

    assert resp.status_code == status.HTTP_404_NOT_FOUND
    assert resp.json()["status"] == 404


@pytest.mark.asyncio
async def test_get_video_without_youtube_key(client, overrides):
    async with client as ac:
        resp = await ac.get("/videos/bangkokjs/no-video/th")

    assert resp.status_code == status.HTTP_502_BAD_GATEWAY
    assert resp.json()["detail"] == "YouTube ID not found in content"
