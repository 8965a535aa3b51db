from prometheus_client import Counter, Histogram

# ---------------------------------------------------------------------------
# Custom Prometheus metrics – exported via the /metrics route exposed by
# prometheus_fastapi_instrumentator in
# videocaptions.utils.observability.configure_observability().
# ---------------------------------------------------------------------------

CONTENT_FETCH_DURATION_SECONDS = Histogram(
    "content_fetch_duration_seconds",
    "Latency of content document fetches (seconds)",
    ["source"],
)

RECORD_STORE_DURATION_SECONDS = Histogram(
    "record_store_duration_seconds",
    "Latency of record store calls (seconds)",
    ["operation"],
)

FLAG_TOKEN_VERIFICATIONS_TOTAL = Counter(
    "flag_token_verifications_total",
    "Flag token verification attempts by outcome",
    ["result"],
)
