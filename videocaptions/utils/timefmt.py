from __future__ import annotations

"""Formatting helpers for caption timestamps."""

import math
from decimal import Decimal, getcontext, localcontext

__all__ = ["format_timestamp", "ms_to_seconds"]


def _pad(value: int, width: int) -> str:
    # Left-pad only; a negative or wide value is never truncated.
    return str(value).rjust(width, "0")


def _exact(value: Decimal):
    """Context wide enough that ``/ 1000``, ``* 1000`` and ``%`` on *value*
    never round and never raise ``DivisionImpossible``."""

    exponent = value.as_tuple().exponent
    positional = max(value.adjusted() + 1, 1) + max(-exponent, 0)
    ctx = getcontext().copy()
    ctx.prec = max(ctx.prec, positional + 10)
    return localcontext(ctx)


def ms_to_seconds(milliseconds: int | float) -> Decimal:
    """Convert a client supplied millisecond offset to seconds."""

    ms = Decimal(str(milliseconds))
    with _exact(ms):
        return ms / 1000


def format_timestamp(seconds: int | float | Decimal) -> str:  # noqa: D401
    """Return *seconds* as ``HH:MM:SS.mmm``.

    Each field is truncated, not rounded, and remainders keep the sign of the
    dividend, so negative inputs produce negative fields rather than being
    clamped.  Hours are not wrapped at 24, however large the input.  The
    arithmetic runs on the decimal text of the input so ``86399.999`` stays
    ``23:59:59.999``.
    """

    t = seconds if isinstance(seconds, Decimal) else Decimal(str(seconds))

    with _exact(t):
        hours = math.floor(t / 3600)
        minutes = math.floor((t % 3600) / 60)
        secs = math.floor(t % 60)
        millis = math.floor((t * 1000) % 1000)

    return f"{_pad(hours, 2)}:{_pad(minutes, 2)}:{_pad(secs, 2)}.{_pad(millis, 3)}"
