"""Map a platform key to the expected location of its binary."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dits.bootstrap.paths import DitsPaths
from dits.bootstrap.platform import SUPPORTED_PLATFORMS
from dits.core.logging import get_logger
from dits.errors import UnsupportedPlatformError

LOGGER = get_logger(__name__)

BINARY_NAME = "dits"
WINDOWS_SUFFIX = ".exe"


def binary_filename(platform_key: str) -> str:
    """Return the binary filename for a platform key.

    Windows builds carry an ``.exe`` suffix; everything else has none.
    """
    if platform_key.startswith("win32-"):
        return f"{BINARY_NAME}{WINDOWS_SUFFIX}"
    return BINARY_NAME


def locate(platform_key: str, paths: Optional[DitsPaths] = None) -> Path:
    """Build the candidate path of the binary for ``platform_key``.

    The file is not checked for existence here.

    Args:
        platform_key: Key produced by platform detection.
        paths: Package layout; defaults to the installed package.

    Returns:
        ``<install-root>/bin/<platform-dir>/<binary-name>``.

    Raises:
        UnsupportedPlatformError: If the key is not in the supported table.
    """
    platform_dir = SUPPORTED_PLATFORMS.get(platform_key)
    if platform_dir is None:
        raise UnsupportedPlatformError(platform_key, SUPPORTED_PLATFORMS.keys())

    if paths is None:
        paths = DitsPaths.default()

    candidate = paths.platform_bin_dir(platform_dir) / binary_filename(platform_key)
    LOGGER.debug(f"Binary for {platform_key} expected at {candidate}")
    return candidate
