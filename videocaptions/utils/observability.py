# Observability utilities – OpenTelemetry instrumentation, Prometheus metrics
# exposition and structured log shipping.
#
# Imported by main.py during application start-up.  Instrumentation is
# best-effort: if an exporter endpoint is unreachable or misconfigured we log
# a warning and keep serving requests.

from __future__ import annotations

import logging
import pathlib
import time
from logging.handlers import RotatingFileHandler
from typing import Any

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from prometheus_fastapi_instrumentator import Instrumentator
from pythonjsonlogger.json import JsonFormatter

from videocaptions.core import config as cfg

_logger = logging.getLogger(__name__)

__all__ = ["configure_observability"]


def _get_json_formatter() -> logging.Formatter:  # noqa: D401
    """Return a JSON formatter with OTEL trace/span correlation keys."""

    fmt_keys = ["asctime", "levelname", "name", "message", "trace_id", "span_id"]
    return JsonFormatter(" ".join(f"%({k})s" for k in fmt_keys))


def _parse_pairs(raw: str | None) -> dict[str, str]:
    """Parse ``k1=v1,k2=v2`` into a dict, skipping malformed pairs."""

    pairs: dict[str, str] = {}
    if not raw:
        return pairs
    for pair in raw.split(","):
        if "=" in pair:
            k, v = pair.split("=", 1)
            pairs[k.strip()] = v.strip()
    return pairs


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def configure_observability(app: FastAPI) -> None:  # noqa: D401
    """Initialise observability integrations.

    Safe to call repeatedly; module-level flags make every step run once.
    """

    if not cfg.settings.OBSERVABILITY_ENABLED:
        _logger.info("Observability explicitly disabled via settings")
        return

    _setup_prometheus(app)
    _setup_opentelemetry(app)
    _setup_log_shipping()


# ---------------------------------------------------------------------------
# Prometheus – latency histogram per route + custom metrics on /metrics
# ---------------------------------------------------------------------------

_prometheus_instrumented = False


def _setup_prometheus(app: FastAPI) -> None:
    global _prometheus_instrumented
    if _prometheus_instrumented:
        return

    try:
        start = time.perf_counter()
        Instrumentator().instrument(app).expose(
            app, include_in_schema=False, should_gzip=True
        )
        _prometheus_instrumented = True
        _logger.info(
            "Prometheus instrumentation initialised in %.2f ms",
            (time.perf_counter() - start) * 1000,
        )
    except Exception as exc:  # pragma: no cover
        _logger.warning("Failed to initialise Prometheus instrumentation: %s", exc)


# ---------------------------------------------------------------------------
# OpenTelemetry – traces + optional OTLP metric export
# ---------------------------------------------------------------------------

_otel_instrumented = False


def _setup_opentelemetry(app: FastAPI) -> None:
    global _otel_instrumented
    settings = cfg.settings
    if _otel_instrumented or not settings.OTEL_TRACES_ENABLED:
        return

    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        _logger.info(
            "OTEL_TRACES_ENABLED but no OTEL_EXPORTER_OTLP_ENDPOINT set – skipping"
        )
        return

    proto = (settings.OTEL_EXPORTER_OTLP_PROTOCOL or "grpc").lower()
    if proto not in {"grpc", "http"}:
        _logger.warning("Unsupported OTLP protocol '%s' – skipping tracing setup", proto)
        return

    try:
        start = time.perf_counter()

        resource_attrs: dict[str, Any] = {
            "service.name": settings.PROJECT_NAME,
            "service.version": settings.APP_VERSION,
            "deployment.environment": settings.ENVIRONMENT,
        }
        resource = Resource.create(resource_attrs)

        provider = TracerProvider(
            resource=resource,
            sampler=TraceIdRatioBased(settings.OTEL_TRACES_SAMPLER_RATIO),
        )
        trace.set_tracer_provider(provider)

        exporter_kwargs: dict[str, Any] = {
            "endpoint": settings.OTEL_EXPORTER_OTLP_ENDPOINT,
            "headers": _parse_pairs(settings.OTEL_EXPORTER_OTLP_HEADERS) or None,
        }

        if proto == "http":
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
                OTLPSpanExporter,
            )
        else:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                OTLPSpanExporter,
            )

            # Only the gRPC exporter understands plaintext channels.
            exporter_kwargs["insecure"] = True

        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**exporter_kwargs)))

        # Inbound requests and outbound content/record store calls
        FastAPIInstrumentor().instrument_app(app, tracer_provider=provider)
        HTTPXClientInstrumentor().instrument(tracer_provider=provider)

        # Correlate application logs with active spans
        LoggingInstrumentor().instrument(set_logging_format=True)

        if settings.OTEL_METRICS_ENABLED:
            from opentelemetry import metrics
            from opentelemetry.sdk.metrics import MeterProvider
            from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader

            if proto == "http":
                from opentelemetry.exporter.otlp.proto.http.metric_exporter import (
                    OTLPMetricExporter,
                )
            else:
                from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
                    OTLPMetricExporter,
                )

            reader = PeriodicExportingMetricReader(OTLPMetricExporter(**exporter_kwargs))
            metrics.set_meter_provider(
                MeterProvider(resource=resource, metric_readers=[reader])
            )

        _otel_instrumented = True
        _logger.info(
            "OpenTelemetry tracing initialised (%.2f ms)",
            (time.perf_counter() - start) * 1000,
        )
    except Exception as exc:  # pragma: no cover
        _logger.warning("Failed to initialise OpenTelemetry tracing: %s", exc)


# ---------------------------------------------------------------------------
# Loki or rotating file handler
# ---------------------------------------------------------------------------

_log_handler_added = False


def _setup_log_shipping() -> None:
    global _log_handler_added
    if _log_handler_added:
        return

    settings = cfg.settings
    try:
        if settings.LOKI_ENABLED and settings.LOKI_ENDPOINT:
            import logging_loki

            tags = {
                "service": settings.PROJECT_NAME,
                "environment": settings.ENVIRONMENT,
            }
            tags.update(_parse_pairs(settings.LOKI_EXTRA_LABELS))

            handler: logging.Handler = logging_loki.LokiHandler(
                url=settings.LOKI_ENDPOINT,
                tags=tags,
                version="1",
            )
            _logger.info("Loki logging handler attached (endpoint=%s)", settings.LOKI_ENDPOINT)
        else:
            log_dir = pathlib.Path(settings.LOG_DIR)
            log_dir.mkdir(parents=True, exist_ok=True)
            file_path = log_dir / "app.log"
            handler = RotatingFileHandler(
                file_path, maxBytes=5 * 1024 * 1024, backupCount=5
            )
            _logger.info("File logging handler attached (%s)", file_path)

        handler.setFormatter(_get_json_formatter())
        logging.getLogger().addHandler(handler)
        _log_handler_added = True
    except Exception as exc:  # pragma: no cover
        _logger.warning("Failed to attach logging handler: %s", exc)
