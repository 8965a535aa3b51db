"""Row-oriented record store holding submitted flags.

Production deployments keep flags in a Grist document; the store assigns the
integer row ids that flag tokens are derived from.  ``InMemoryRecordStore``
mirrors the same contract for local development and tests.

Both implementations return ids in the order the rows were submitted.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, List, Protocol, Sequence

import httpx

from videocaptions.core.config import Settings
from videocaptions.core.errors import RecordStoreError
from videocaptions.metrics import RECORD_STORE_DURATION_SECONDS
from videocaptions.utils.instrumentation import observe

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

__all__ = [
    "Row",
    "RecordStore",
    "GristRecordStore",
    "InMemoryRecordStore",
    "build_record_store",
]


class RecordStore(Protocol):
    async def add_records(self, table: str, rows: Sequence[Row]) -> List[int]:
        """Insert *rows* and return their ids, index-aligned with *rows*."""
        ...

    async def delete_records(self, table: str, ids: Sequence[int]) -> None:
        """Delete the rows with the given *ids*."""
        ...


class GristRecordStore:
    """Grist REST API client (``/api/docs/{doc}/tables/{table}/...``)."""

    def __init__(
        self,
        server_url: str,
        doc_id: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.server_url = server_url.rstrip("/")
        self.doc_id = doc_id
        self._api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _table_url(self, table: str) -> str:
        return f"{self.server_url}/api/docs/{self.doc_id}/tables/{table}"

    async def _post(self, url: str, payload: Any) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers={"Authorization": f"Bearer {self._api_key}"},
            transport=self._transport,
        ) as client:
            resp = await client.post(url, json=payload)
        if not resp.is_success:
            raise RecordStoreError(
                f"Grist returned HTTP {resp.status_code}: {resp.text[:200]}"
            )
        return resp

    async def _add(self, table: str, rows: Sequence[Row]) -> List[int]:
        resp = await self._post(
            f"{self._table_url(table)}/records",
            {"records": [{"fields": dict(row)} for row in rows]},
        )
        records = resp.json().get("records") or []
        return [int(record["id"]) for record in records]

    async def add_records(self, table: str, rows: Sequence[Row]) -> List[int]:
        return await observe(
            "record_store.add",
            RECORD_STORE_DURATION_SECONDS,
            {"operation": "add"},
            self._add(table, rows),
        )

    async def delete_records(self, table: str, ids: Sequence[int]) -> None:
        await observe(
            "record_store.delete",
            RECORD_STORE_DURATION_SECONDS,
            {"operation": "delete"},
            self._post(f"{self._table_url(table)}/data/delete", list(ids)),
        )


class InMemoryRecordStore:
    """Process-local store with monotonically increasing ids."""

    def __init__(self, start: int = 1):
        self._ids = itertools.count(start)
        self.tables: Dict[str, Dict[int, Row]] = {}

    async def add_records(self, table: str, rows: Sequence[Row]) -> List[int]:
        rows_by_id = self.tables.setdefault(table, {})
        ids = []
        for row in rows:
            row_id = next(self._ids)
            rows_by_id[row_id] = dict(row)
            ids.append(row_id)
        return ids

    async def delete_records(self, table: str, ids: Sequence[int]) -> None:
        rows_by_id = self.tables.get(table, {})
        missing = [row_id for row_id in ids if row_id not in rows_by_id]
        if missing:
            raise RecordStoreError(f"Invalid row ids for {table}: {missing}")
        for row_id in ids:
            del rows_by_id[row_id]


def build_record_store(settings: Settings) -> RecordStore:
    """Return the record store selected by ``RECORD_STORE_BACKEND``."""

    if settings.RECORD_STORE_BACKEND == "memory":
        logger.warning("Using in-memory record store; flags are not persisted")
        return InMemoryRecordStore()

    if not settings.GRIST_DOC_ID or not settings.GRIST_API_KEY:
        logger.error(
            "Grist settings are not fully configured. Please check GRIST_DOC_ID and GRIST_API_KEY."
        )
        raise RecordStoreError("Grist settings are not fully configured.")

    logger.info(
        "Initializing Grist record store for doc %s at %s",
        settings.GRIST_DOC_ID,
        settings.GRIST_SERVER_URL,
    )
    return GristRecordStore(
        settings.GRIST_SERVER_URL,
        settings.GRIST_DOC_ID,
        settings.GRIST_API_KEY,
        timeout=settings.RECORD_STORE_TIMEOUT,
    )
