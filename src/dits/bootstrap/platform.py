"""Host platform detection.

Resolves the OS family, CPU architecture and, on Linux, the C library
variant into the platform key used to pick a bundled binary.

Keys follow the naming of the published release artifacts:
``darwin-arm64``, ``linux-x64``, ``linux-x64-musl``, ``win32-x64`` and so on.
"""

from __future__ import annotations

import platform
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from dits.core.logging import get_logger
from dits.errors import UnsupportedPlatformError

LOGGER = get_logger(__name__)

# Platform key -> binary subdirectory under <package-root>/bin/.
# Must match what the release pipeline publishes.
SUPPORTED_PLATFORMS: Mapping[str, str] = MappingProxyType({
    "darwin-arm64": "darwin-arm64",
    "darwin-x64": "darwin-x64",
    "linux-x64": "linux-x64",
    "linux-arm64": "linux-arm64",
    "linux-x64-musl": "linux-x64-musl",
    "linux-arm64-musl": "linux-arm64-musl",
    "win32-x64": "win32-x64",
    "win32-arm64": "win32-arm64",
})

_OS_NAMES = {
    "darwin": "darwin",
    "linux": "linux",
    "win32": "win32",
    "cygwin": "win32",
}

_ARCH_NAMES = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv8l": "arm64",
}

LIBC_GNU = "gnu"
LIBC_MUSL = "musl"

OS_RELEASE_PATH = Path("/etc/os-release")
SYSTEM_LIB_DIR = Path("/lib")
MUSL_LOADER_PREFIX = "ld-musl"
LDD_TIMEOUT_SECONDS = 5


@dataclass(frozen=True)
class PlatformInfo:
    """Normalized description of the host platform."""

    os: str
    arch: str
    libc: Optional[str] = None

    @property
    def key(self) -> str:
        """Canonical platform key, e.g. ``linux-arm64-musl``."""
        parts = [self.os, self.arch]
        if self.libc == LIBC_MUSL:
            parts.append(LIBC_MUSL)
        return "-".join(parts)


def _probe_ldd() -> bool:
    """Look for musl in the dynamic linker's version banner."""
    try:
        # musl's ldd prints its banner to stderr and exits non-zero
        result = subprocess.run(
            ["ldd", "--version"],
            capture_output=True,
            text=True,
            timeout=LDD_TIMEOUT_SECONDS,
        )
    except (subprocess.SubprocessError, OSError) as e:
        LOGGER.debug(f"ldd probe failed: {e}")
        return False
    banner = f"{result.stdout}\n{result.stderr}".lower()
    return "musl" in banner


def _probe_os_release() -> bool:
    """Check /etc/os-release for a musl-based distribution."""
    try:
        content = OS_RELEASE_PATH.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        LOGGER.debug(f"os-release probe failed: {e}")
        return False
    return "alpine" in content.lower()


def _probe_lib_dir() -> bool:
    """Check /lib for the musl dynamic loader."""
    try:
        return any(
            entry.name.startswith(MUSL_LOADER_PREFIX)
            for entry in SYSTEM_LIB_DIR.iterdir()
        )
    except OSError as e:
        LOGGER.debug(f"lib dir probe failed: {e}")
        return False


# Tried in order; the first probe that reports musl wins.
MUSL_PROBES: Tuple[Callable[[], bool], ...] = (
    _probe_ldd,
    _probe_os_release,
    _probe_lib_dir,
)


def detect_libc() -> str:
    """Detect the C library variant of a Linux host.

    Never raises: a probe that errors counts as "not detected" and the
    next probe is tried. Falls back to glibc when nothing matches.

    Returns:
        ``"musl"`` or ``"gnu"``.
    """
    for probe in MUSL_PROBES:
        try:
            detected = probe()
        except Exception as e:
            LOGGER.debug(f"libc probe {probe.__name__} raised: {e}")
            continue
        if detected:
            LOGGER.debug(f"musl detected by {probe.__name__}")
            return LIBC_MUSL
    return LIBC_GNU


def is_musl() -> bool:
    """Return True when running on a musl-based Linux (e.g. Alpine)."""
    if not sys.platform.startswith("linux"):
        return False
    return detect_libc() == LIBC_MUSL


def _normalize_os(raw: str) -> str:
    if raw.startswith("linux"):
        return "linux"
    return _OS_NAMES.get(raw, raw)


def _normalize_arch(raw: str) -> str:
    raw = raw.lower()
    return _ARCH_NAMES.get(raw, raw)


def get_platform_info() -> PlatformInfo:
    """Get information about the current platform.

    Returns:
        PlatformInfo for the host. Unknown OS or architecture names are
        passed through so they show up verbatim in error messages.
    """
    os_name = _normalize_os(sys.platform)
    arch = _normalize_arch(platform.machine() or "unknown")
    libc = detect_libc() if os_name == "linux" else None
    return PlatformInfo(os=os_name, arch=arch, libc=libc)


def detect() -> str:
    """Compute the platform key for this host.

    Returns:
        A key present in SUPPORTED_PLATFORMS.

    Raises:
        UnsupportedPlatformError: If the host is not in the supported table.
    """
    info = get_platform_info()
    key = info.key
    LOGGER.debug(f"Detected platform {key}")
    if key not in SUPPORTED_PLATFORMS:
        raise UnsupportedPlatformError(key, SUPPORTED_PLATFORMS.keys())
    return key
