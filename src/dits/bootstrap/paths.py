"""Path management for the bundled dits binaries.

Handles the on-disk layout of the installed package:

    <install-root>/
        bin/
            darwin-arm64/dits
            linux-x64/dits
            linux-x64-musl/dits
            win32-x64/dits.exe
            ...

The install root defaults to the directory of the installed ``dits``
package and can be overridden through configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Mapping, Optional

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".dits"

# Environment variable to override home directory
DITS_HOME_ENV = "DITS_HOME"

# Installed package directory (src/dits/)
PACKAGE_ROOT = Path(__file__).resolve().parent.parent


def get_dits_home(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Get the dits home directory path.

    Resolution order:
    1. DITS_HOME environment variable (if set)
    2. ~/.dits (default)

    Args:
        environ: Environment to read; defaults to os.environ.

    Returns:
        Path to the dits home directory.
    """
    env = os.environ if environ is None else environ
    env_home = env.get(DITS_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


@dataclass(frozen=True)
class DitsPaths:
    """Paths within an installed dits package tree."""

    install_root: Path

    _BIN_DIR: ClassVar[str] = "bin"

    @classmethod
    def default(cls, install_root: Optional[Path] = None) -> "DitsPaths":
        """Create paths for the installed package, or for ``install_root``."""
        root = install_root if install_root is not None else PACKAGE_ROOT
        return cls(Path(root).resolve())

    @property
    def bin_dir(self) -> Path:
        """Directory containing one subdirectory per platform."""
        return self.install_root / self._BIN_DIR

    def platform_bin_dir(self, platform_dir: str) -> Path:
        """Get the binary directory for a platform subdirectory name.

        Args:
            platform_dir: Subdirectory name from the supported platform table.

        Returns:
            Path to the platform's binary directory.
        """
        return self.bin_dir / platform_dir
