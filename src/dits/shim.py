"""Resolve and run the bundled dits binary.

Detect -> Locate -> Validate -> Launch, with no retries. This module never
exits the interpreter, so it can be embedded and tested; the console
script in ``dits.cli`` turns results into an exit status.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

from dits.bootstrap.locator import locate
from dits.bootstrap.paths import DitsPaths
from dits.bootstrap.platform import detect
from dits.bootstrap.validation import ResolvedBinary, validate
from dits.config.models import ShimConfig
from dits.core.logging import get_logger
from dits.launcher import LaunchResult, launch

LOGGER = get_logger(__name__)


def _paths_for(config: Optional[ShimConfig]) -> DitsPaths:
    install_root = config.install_root if config is not None else None
    return DitsPaths.default(install_root)


def get_platform_key() -> str:
    """Return the platform key for this host.

    Raises:
        UnsupportedPlatformError: If the host is not supported.
    """
    return detect()


def resolve_binary(config: Optional[ShimConfig] = None) -> ResolvedBinary:
    """Find the binary for this host.

    Raises:
        UnsupportedPlatformError: If the host is not supported.
        BinaryNotFoundError: If the binary is missing from the package.
    """
    platform_key = detect()
    candidate = locate(platform_key, _paths_for(config))
    resolved = validate(candidate, platform_key)
    LOGGER.debug(f"Resolved {resolved.filename} for {platform_key} at {resolved.path}")
    return resolved


def get_binary_path(config: Optional[ShimConfig] = None) -> Path:
    """Return the absolute path of the binary for this host."""
    return resolve_binary(config).path


def run(
    args: Optional[Sequence[str]] = None,
    config: Optional[ShimConfig] = None,
) -> LaunchResult:
    """Resolve the binary and run it to completion.

    Args:
        args: Arguments for the binary; defaults to ``sys.argv[1:]``.
        config: Shim configuration; defaults to built-in settings.

    Returns:
        LaunchResult of the child process.

    Raises:
        UnsupportedPlatformError: If the host is not supported.
        BinaryNotFoundError: If the binary is missing from the package.
    """
    if args is None:
        args = sys.argv[1:]
    resolved = resolve_binary(config)
    return launch(resolved.path, list(args))
