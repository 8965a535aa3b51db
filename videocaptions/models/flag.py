from __future__ import annotations

"""Pydantic models related to caption flags."""

from typing import Annotated, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt

# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------
FlagToken = str


class FlagCreateRequest(BaseModel):
    """Payload a viewer submits when flagging a caption."""

    # Strict: JSON booleans and numeric strings are not offsets.
    timestamp: Union[StrictInt, Annotated[StrictFloat, Field(allow_inf_nan=False)]] = Field(
        ...,
        description="Playback offset in milliseconds the flag refers to.",
    )
    text: str = Field(..., description="Free-form annotation, e.g. a correction.")


class FlagRecord(BaseModel):
    """Row written to the flags table."""

    vtt: str  # "{event}/{slug}_{lang}.vtt"
    timestamp: str  # HH:MM:SS.mmm
    text: str


class FlagCreatedResponse(BaseModel):
    flagId: FlagToken


class FlagDeletedResponse(BaseModel):
    ok: bool = True


__all__ = [
    "FlagToken",
    "FlagCreateRequest",
    "FlagRecord",
    "FlagCreatedResponse",
    "FlagDeletedResponse",
]
