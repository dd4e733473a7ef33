"""dits - pip distribution of the dits command-line tool.

The package bundles one pre-built binary per supported platform under
``bin/<platform-key>/`` and exposes helpers that resolve and run the right
one for the current host.
"""

from __future__ import annotations

from dits.errors import (
    BinaryNotFoundError,
    ShimError,
    SpawnError,
    UnsupportedPlatformError,
)
from dits.bootstrap.platform import is_musl
from dits.launcher import LaunchResult
from dits.shim import get_binary_path, get_platform_key, resolve_binary, run

__version__ = "0.1.0"

__all__ = [
    "BinaryNotFoundError",
    "ShimError",
    "SpawnError",
    "UnsupportedPlatformError",
    "LaunchResult",
    "get_binary_path",
    "get_platform_key",
    "is_musl",
    "resolve_binary",
    "run",
    "__version__",
]
