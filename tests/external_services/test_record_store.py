import json

import httpx
import pytest

from videocaptions.core.config import Settings
from videocaptions.core.errors import RecordStoreError
from videocaptions.external_services.record_store import (
    GristRecordStore,
    InMemoryRecordStore,
    build_record_store,
)


def _grist(handler) -> GristRecordStore:
    return GristRecordStore(
        "https://grist.example.com/",
        "doc123",
        "grist-key",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_grist_add_records():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"records": [{"id": 42}, {"id": 43}]})

    ids = await _grist(handler).add_records(
        "Flags", [{"text": "a"}, {"text": "b"}]
    )

    assert ids == [42, 43]
    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://grist.example.com/api/docs/doc123/tables/Flags/records"
    assert request.headers["Authorization"] == "Bearer grist-key"
    assert json.loads(request.content) == {
        "records": [{"fields": {"text": "a"}}, {"fields": {"text": "b"}}]
    }


@pytest.mark.asyncio
async def test_grist_delete_records():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=None)

    await _grist(handler).delete_records("Flags", [42])

    request = requests[0]
    assert str(request.url) == "https://grist.example.com/api/docs/doc123/tables/Flags/data/delete"
    assert json.loads(request.content) == [42]


@pytest.mark.asyncio
async def test_grist_error_status_raises():
    store = _grist(lambda request: httpx.Response(400, json={"error": "Invalid row ids"}))
    with pytest.raises(RecordStoreError) as exc_info:
        await store.delete_records("Flags", [999])
    assert "400" in str(exc_info.value)


@pytest.mark.asyncio
async def test_memory_store_assigns_increasing_ids():
    store = InMemoryRecordStore()
    assert await store.add_records("Flags", [{"text": "a"}, {"text": "b"}]) == [1, 2]
    assert await store.add_records("Flags", [{"text": "c"}]) == [3]
    assert store.tables["Flags"][2] == {"text": "b"}


@pytest.mark.asyncio
async def test_memory_store_delete():
    store = InMemoryRecordStore(start=42)
    [row_id] = await store.add_records("Flags", [{"text": "a"}])

    await store.delete_records("Flags", [row_id])

    assert store.tables["Flags"] == {}
    with pytest.raises(RecordStoreError):
        await store.delete_records("Flags", [row_id])


def test_build_record_store_memory():
    settings = Settings(_env_file=None, RECORD_STORE_BACKEND="memory")
    assert isinstance(build_record_store(settings), InMemoryRecordStore)


def test_build_record_store_grist_requires_credentials(monkeypatch):
    monkeypatch.delenv("GRIST_DOC_ID", raising=False)
    monkeypatch.delenv("GRIST_API_KEY", raising=False)
    with pytest.raises(RecordStoreError):
        build_record_store(Settings(_env_file=None, RECORD_STORE_BACKEND="grist"))


def test_build_record_store_grist():
    settings = Settings(
        _env_file=None,
        RECORD_STORE_BACKEND="grist",
        GRIST_DOC_ID="doc123",
        GRIST_API_KEY="key",
    )
    store = build_record_store(settings)
    assert isinstance(store, GristRecordStore)
    assert store.doc_id == "doc123"
