"""Binary validation for the dits shim.

Confirms that the located binary is actually present in the package tree.
Execute permission is not checked here; a non-executable file surfaces as
a spawn error with a ``chmod`` hint instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dits.core.logging import get_logger
from dits.errors import BinaryNotFoundError

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedBinary:
    """A binary that was located and found on disk."""

    path: Path
    platform_key: str

    @property
    def filename(self) -> str:
        """OS-appropriate filename, including any ``.exe`` suffix."""
        return self.path.name


def validate(candidate_path: Path, platform_key: str) -> ResolvedBinary:
    """Validate a located binary.

    Args:
        candidate_path: Path returned by the locator.
        platform_key: Detected platform, used in diagnostics.

    Returns:
        ResolvedBinary with an absolute path.

    Raises:
        BinaryNotFoundError: If no file exists at ``candidate_path``.
    """
    path = Path(candidate_path).absolute()
    if not path.is_file():
        LOGGER.debug(f"No binary at {path}")
        raise BinaryNotFoundError(platform_key, path)
    return ResolvedBinary(path=path, platform_key=platform_key)
