"""API endpoints letting viewers flag captions and retract their flags.

Neither route requires authentication.  Retraction is authorised solely by
the signed ``flagId`` returned when the flag was created.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from videocaptions.api.dependencies import get_flag_signer, get_record_store
from videocaptions.core.signing import FlagSigner
from videocaptions.external_services.record_store import RecordStore
from videocaptions.models.flag import (
    FlagCreateRequest,
    FlagCreatedResponse,
    FlagDeletedResponse,
)
from videocaptions.services import flag_service
from videocaptions.services.paths import caption_file_name

router = APIRouter(prefix="/flags", tags=["Flags"])


@router.post(
    "/{event}/{slug}/{lang}",
    response_model=FlagCreatedResponse,
    summary="Flag a moment in a caption track",
)
async def submit_flag(
    event: str,
    slug: str,
    lang: str,
    request: FlagCreateRequest,
    store: Annotated[RecordStore, Depends(get_record_store)],
    signer: Annotated[FlagSigner, Depends(get_flag_signer)],
):
    return await flag_service.create_flag(
        target_path=caption_file_name(event, slug, lang),
        timestamp_ms=request.timestamp,
        text=request.text,
        store=store,
        signer=signer,
    )


@router.delete(
    "/{event}/{slug}/{lang}/{flagId}",
    response_model=FlagDeletedResponse,
    summary="Retract a flag using its signed id",
)
async def retract_flag(
    event: str,
    slug: str,
    lang: str,
    flagId: str,
    store: Annotated[RecordStore, Depends(get_record_store)],
    signer: Annotated[FlagSigner, Depends(get_flag_signer)],
):
    # event/slug/lang only scope the URL; the token alone identifies the row.
    return await flag_service.delete_flag(token=flagId, store=store, signer=signer)
