"""Span + histogram wrapper for outbound calls.

Content fetches and record store requests are awaited through ``observe`` so
every upstream round trip shows up both as an OpenTelemetry span and as a
Prometheus histogram sample.
"""
from __future__ import annotations

import time
from typing import Any, Awaitable

from opentelemetry import trace
from prometheus_client import Histogram

_tracer = trace.get_tracer(__name__)

__all__ = ["observe"]


async def observe(
    span_name: str,
    histogram: Histogram,
    labels: dict[str, str],
    coro: Awaitable[Any],
):  # noqa: D401
    """Await *coro* while recording a span and a *histogram* sample."""

    start = time.perf_counter()
    with _tracer.start_as_current_span(span_name) as span:
        for key, value in labels.items():
            span.set_attribute(key, value)
        try:
            return await coro
        finally:
            duration = time.perf_counter() - start
            histogram.labels(**labels).observe(duration)
            span.set_attribute("duration_ms", int(duration * 1000))
