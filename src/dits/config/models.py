"""Configuration models for the dits shim."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class ShimConfig:
    """Settings for binary resolution and shim diagnostics.

    Attributes:
        log_level: Level name for shim diagnostics on stderr.
        install_root: Overrides the package directory that holds ``bin/``.
    """

    log_level: str = "warning"
    install_root: Optional[Path] = None

    # Where the values came from, for debug output
    _config_sources: List[str] = field(default_factory=list, repr=False)

    @property
    def sources(self) -> List[str]:
        return list(self._config_sources)
