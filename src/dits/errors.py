"""Error taxonomy for the dits shim.

Every error carries a complete, human-readable message. The CLI prints
``str(error)`` and exits with status 1; no traceback is shown.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

SOURCE_INSTALL_HINT = "cargo install dits"
RELEASES_URL = "https://github.com/byronwade/dits/releases"


class ShimError(Exception):
    """Base class for failures of the shim itself (not of the wrapped binary)."""

    pass


class UnsupportedPlatformError(ShimError):
    """The host platform has no entry in the supported platform table."""

    def __init__(self, platform_key: str, supported: Iterable[str]) -> None:
        self.platform_key = platform_key
        self.supported: List[str] = list(supported)
        super().__init__(
            f"Unsupported platform: {platform_key}\n"
            f"Supported platforms: {', '.join(self.supported)}\n"
            f"You can try building from source: {SOURCE_INSTALL_HINT}"
        )


class BinaryNotFoundError(ShimError):
    """The platform is supported but its binary is missing from the package."""

    def __init__(self, platform_key: str, expected_path: Path) -> None:
        self.platform_key = platform_key
        self.expected_path = expected_path
        super().__init__(
            f"Binary not found for your platform ({platform_key}).\n"
            f"Expected at: {expected_path}\n\n"
            "This platform may not be supported in this version.\n"
            "Try installing from source:\n"
            f"  {SOURCE_INSTALL_HINT}\n\n"
            "Or download from GitHub releases:\n"
            f"  {RELEASES_URL}"
        )


class SpawnError(ShimError):
    """The operating system refused to start the binary."""

    def __init__(self, binary_path: Path, reason: str) -> None:
        self.binary_path = binary_path
        self.reason = reason
        super().__init__(reason)
