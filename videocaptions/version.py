from __future__ import annotations

"""Resolve the running application version.

Priority order:
1. Version recorded in the installed distribution metadata.
2. The ``APP_VERSION`` environment variable (source checkout).
3. ``0.0.0-dev``.
"""

from importlib.metadata import PackageNotFoundError, version as pkg_version
import os

PACKAGE_NAME = "videocaptions-python-fastapi-backend"

try:
    __version__: str = pkg_version(PACKAGE_NAME)
except PackageNotFoundError:  # running from a source checkout
    __version__ = os.getenv("APP_VERSION", "0.0.0-dev")

__all__ = ["__version__", "PACKAGE_NAME"]
