"""FastAPI dependency providers for collaborators shared across requests.

Each provider builds its object once per process from ``settings`` and then
hands out the same instance.  Tests replace them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from videocaptions.core.config import settings
from videocaptions.core.signing import FlagSigner
from videocaptions.external_services.content_source import (
    ContentSource,
    build_content_source,
)
from videocaptions.external_services.record_store import (
    RecordStore,
    build_record_store,
)


@lru_cache(maxsize=1)
def get_flag_signer() -> FlagSigner:
    # Raises FlagSecretMissingError on first use when FLAG_SECRET is unset;
    # lru_cache does not memoise the failure, so every flag request fails.
    return FlagSigner(settings.FLAG_SECRET)


@lru_cache(maxsize=1)
def get_record_store() -> RecordStore:
    return build_record_store(settings)


@lru_cache(maxsize=1)
def get_content_source() -> ContentSource:
    return build_content_source(settings)


def reset_dependency_caches() -> None:
    """Forget cached collaborators (after settings change, e.g. in tests)."""

    for provider in (get_flag_signer, get_record_store, get_content_source):
        provider.cache_clear()
