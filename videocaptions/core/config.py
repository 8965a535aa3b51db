import pathlib
import os
import logging
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pydantic import model_validator

from videocaptions.version import __version__ as app_version

# --------------------------------------------------------------
# Root logging configuration
# --------------------------------------------------------------
# Honour a LOG_LEVEL environment variable (default INFO).  This runs before
# the rest of the app is imported so it governs every module logger.

_root_log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

# Only configure the root logger if nobody else (pytest, uvicorn) did.
if not logging.getLogger().hasHandlers():  # pragma: no cover
    logging.basicConfig(
        level=_root_log_level, format="%(levelname)s:%(name)s:%(message)s"
    )
else:
    logging.getLogger().setLevel(_root_log_level)

# Resolve the .env file relative to this module so that loading it does not
# depend on the working directory (``uvicorn --reload`` changes it).
_project_root = pathlib.Path(__file__).parent.parent.parent
_ENV_FILE = _project_root / ".env"
if not _ENV_FILE.is_file():
    logging.debug("No .env file found at %s, falling back to ./.env", _ENV_FILE)
    _ENV_FILE = pathlib.Path(".env")


class Settings(BaseSettings):
    # Populated from the .env file and environment variables.
    # See: https://docs.pydantic.dev/latest/concepts/pydantic_settings/

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Video Captions Backend"

    # Application build version (surfaced in OpenAPI docs)
    APP_VERSION: str = app_version

    ENVIRONMENT: str = Field(default="dev")

    # CORS – provide comma-separated string in env ("*" for all)
    CORS_ALLOW_ORIGINS: str = "*"

    @property
    def parsed_cors_origins(self) -> list[str]:  # noqa: D401
        raw = self.CORS_ALLOW_ORIGINS
        if raw.strip() == "*":
            return ["*"]
        origins = []
        for o in raw.split(","):
            o_strip = o.strip()
            if not o_strip:
                continue
            # "http://localhost:8080/" and "http://localhost:8080" must match.
            origins.append(o_strip.rstrip("/"))
        return origins

    # ------------------------------------------------------------------
    # Flag tokens
    # ------------------------------------------------------------------

    FLAG_SECRET: str | None = Field(
        default=None,
        description="HMAC key used to sign flag ids. Required by the /flags routes.",
    )

    FLAGS_TABLE: str = "Flags"

    # ------------------------------------------------------------------
    # Content source (video documents and caption tracks)
    # ------------------------------------------------------------------

    VIDEOS_PATH: str | None = Field(
        default=None,
        description="Local directory that replaces the remote content repository (development/testing).",
    )

    CONTENT_BASE_URL: str = "https://raw.githubusercontent.com"
    CONTENT_REPO: str = "creatorsgarten/videos"
    CONTENT_REF: str = "refs/heads/main"

    CONTENT_FETCH_TIMEOUT: float = Field(
        default=10.0,
        description="Timeout (seconds) for outbound content requests.",
        ge=0.5,
    )

    # ------------------------------------------------------------------
    # Record store
    # ------------------------------------------------------------------

    RECORD_STORE_BACKEND: Literal["grist", "memory"] = "grist"

    GRIST_SERVER_URL: str = "https://docs.getgrist.com"
    GRIST_DOC_ID: str | None = None
    GRIST_API_KEY: str | None = None

    RECORD_STORE_TIMEOUT: float = Field(default=10.0, ge=0.5)

    # ------------------------------------------------------------------
    # Pydantic hook: coerce boolean env vars that may carry inline
    # descriptors (e.g. "false   # disable tracing") coming from env
    # files.  Everything after the first whitespace/# is dropped.
    # ------------------------------------------------------------------

    @model_validator(mode="before")
    @classmethod
    def _sanitize_bool_tokens(cls, data):  # type: ignore[return-value]
        for key in (
            "OBSERVABILITY_ENABLED",
            "OTEL_TRACES_ENABLED",
            "OTEL_METRICS_ENABLED",
            "LOKI_ENABLED",
        ):
            if key in data and isinstance(data[key], str):
                token = data[key].split("#", 1)[0].strip().split()[0]
                data[key] = token
        return data

    # ------------------------------------------------------------------
    # Observability / Telemetry
    # ------------------------------------------------------------------

    OBSERVABILITY_ENABLED: bool = Field(
        default=True,
        description="Globally enable/disable all extra observability (metrics/traces/log shipping).",
    )

    # --- OpenTelemetry ---------------------------------------------------

    OTEL_EXPORTER_OTLP_ENDPOINT: str | None = Field(
        default=None,
        description="Base OTLP endpoint, e.g. http://otelcol:4317.  If unset OTLP export is disabled.",
    )

    OTEL_TRACES_ENABLED: bool = True

    # The Prometheus scrape endpoint stays active regardless of this flag.
    OTEL_METRICS_ENABLED: bool = False

    # "grpc" (default) or "http"
    OTEL_EXPORTER_OTLP_PROTOCOL: str = Field(default="grpc")

    # Comma-separated key=value list, e.g. "token=abcd123,env=dev".
    OTEL_EXPORTER_OTLP_HEADERS: str | None = Field(default=None)

    OTEL_TRACES_SAMPLER_RATIO: float = Field(default=1.0, ge=0.0, le=1.0)

    # --- Centralised logging (Loki) --------------------------------------

    LOKI_ENABLED: bool = Field(
        default=False, description="Enable structured log shipping to Loki."
    )
    LOKI_ENDPOINT: str | None = Field(
        default=None,
        description="Loki push API endpoint, e.g. http://loki:3100/loki/api/v1/push.",
    )
    LOKI_EXTRA_LABELS: str | None = Field(default=None)

    # Directory for the rotating file handler used when Loki is off.
    LOG_DIR: str = "logs"


settings = Settings()
