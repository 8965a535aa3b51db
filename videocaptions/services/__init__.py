"""Service layer package initializer.

This re-exports individual domain services so that callers can simply
``from videocaptions.services import flag_service, video_service``.
"""

from importlib import import_module
from types import ModuleType
from typing import TYPE_CHECKING

__all__ = [
    "video_service",
    "caption_service",
    "flag_service",
]

if TYPE_CHECKING:
    from . import video_service as video_service  # noqa: F401
    from . import caption_service as caption_service  # noqa: F401
    from . import flag_service as flag_service  # noqa: F401
else:
    # Import lazily at runtime to keep the import graph light.
    def __getattr__(name: str) -> ModuleType:  # noqa: D401
        if name in __all__:
            module = import_module(f"videocaptions.services.{name}")
            globals()[name] = module
            return module
        raise AttributeError(name)
