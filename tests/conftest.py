"""Shared fixtures: a fixed signing secret, in-memory store and local content."""

import logging
import pathlib

import pytest
from httpx import ASGITransport, AsyncClient

from videocaptions.api.dependencies import (
    get_content_source,
    get_flag_signer,
    get_record_store,
)
from videocaptions.core.signing import FlagSigner
from videocaptions.external_services.content_source import LocalContentSource
from videocaptions.external_services.record_store import InMemoryRecordStore
from videocaptions.main import app

TEST_SECRET = "unit-test-secret"

VIDEO_DOCUMENT = """---
title: Intro to Bangkok.js
youtube: "dQw4w9WgXcQ"
speaker: Someone
---

Talk notes.
"""

CAPTIONS_VTT = """WEBVTT

00:00:01.000 --> 00:00:04.000
สวัสดีครับ
"""


@pytest.fixture
def signer() -> FlagSigner:
    return FlagSigner(TEST_SECRET)


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def content_root(tmp_path: pathlib.Path) -> pathlib.Path:
    event_dir = tmp_path / "data" / "videos" / "bangkokjs"
    event_dir.mkdir(parents=True)
    (event_dir / "intro.md").write_text(VIDEO_DOCUMENT, encoding="utf-8")
    (event_dir / "intro_th.vtt").write_text(CAPTIONS_VTT, encoding="utf-8")
    (event_dir / "no-video.md").write_text("---\ntitle: Slides only\n---\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def overrides(signer, memory_store, content_root):
    """Point the app's collaborators at test doubles for one test."""

    app.dependency_overrides[get_flag_signer] = lambda: signer
    app.dependency_overrides[get_record_store] = lambda: memory_store
    app.dependency_overrides[get_content_source] = lambda: LocalContentSource(content_root)
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> AsyncClient:
    """Unopened client for the app; use as ``async with client as ac``."""

    # raise_app_exceptions=False lets the generic 500 handler's response through.
    return AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    )


@pytest.fixture
def clean_root_logger():
    """Empty root logger for observability tests; restored afterwards."""

    root = logging.getLogger()
    saved = list(root.handlers)
    root.handlers.clear()
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = saved
