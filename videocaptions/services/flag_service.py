from __future__ import annotations

"""Service layer handling creation and retraction of caption flags.

Flags are written to the record store and handed back to the submitter as a
signed token (see ``videocaptions.core.signing``).  Retraction only needs that
token: the record id is recovered from it after the signature checks out, so
the service keeps no session state of its own.
"""

import logging

from videocaptions.core.config import settings
from videocaptions.core.errors import InvalidFlagTokenError, RecordStoreError
from videocaptions.core.signing import FlagSigner
from videocaptions.external_services.record_store import RecordStore
from videocaptions.metrics import FLAG_TOKEN_VERIFICATIONS_TOTAL
from videocaptions.models.flag import (
    FlagCreatedResponse,
    FlagDeletedResponse,
    FlagRecord,
)
from videocaptions.utils.timefmt import format_timestamp, ms_to_seconds

logger = logging.getLogger(__name__)


async def create_flag(
    *,
    target_path: str,
    timestamp_ms: int | float,
    text: str,
    store: RecordStore,
    signer: FlagSigner,
    table: str | None = None,
) -> FlagCreatedResponse:
    """Store a new flag and return its token.

    If minting fails after the insert the row is left in place; it can still be
    deleted later by anyone who recovers its id and holds the secret.
    """

    record = FlagRecord(
        vtt=target_path,
        timestamp=format_timestamp(ms_to_seconds(timestamp_ms)),
        text=text,
    )

    ids = await store.add_records(table or settings.FLAGS_TABLE, [record.model_dump()])
    if len(ids) != 1:
        raise RecordStoreError(f"Expected 1 id for a single-row insert, got {len(ids)}")

    flag_id = ids[0]
    logger.info("Flag %s created for %s at %s", flag_id, target_path, record.timestamp)
    return FlagCreatedResponse(flagId=signer.mint(flag_id))


async def delete_flag(
    *,
    token: str,
    store: RecordStore,
    signer: FlagSigner,
    table: str | None = None,
) -> FlagDeletedResponse:
    """Delete the flag identified by *token*; the store is untouched if it is invalid."""

    try:
        flag_id = signer.verify(token)
    except InvalidFlagTokenError:
        FLAG_TOKEN_VERIFICATIONS_TOTAL.labels(result="invalid").inc()
        logger.info("Rejected invalid flag token")
        raise
    FLAG_TOKEN_VERIFICATIONS_TOTAL.labels(result="valid").inc()

    await store.delete_records(table or settings.FLAGS_TABLE, [flag_id])
    logger.info("Flag %s deleted", flag_id)
    return FlagDeletedResponse(ok=True)
