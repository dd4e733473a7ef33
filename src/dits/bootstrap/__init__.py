"""
Bootstrap module for resolving the bundled dits binary.

This module handles:
- Platform detection (OS + architecture + libc)
- Binary location inside the package tree (<package-root>/bin/<platform>/)
- Binary validation
"""

from dits.bootstrap.platform import (
    SUPPORTED_PLATFORMS,
    PlatformInfo,
    detect,
    detect_libc,
    get_platform_info,
    is_musl,
)
from dits.bootstrap.paths import DitsPaths, get_dits_home
from dits.bootstrap.locator import binary_filename, locate
from dits.bootstrap.validation import ResolvedBinary, validate

__all__ = [
    "SUPPORTED_PLATFORMS",
    "PlatformInfo",
    "detect",
    "detect_libc",
    "get_platform_info",
    "is_musl",
    "DitsPaths",
    "get_dits_home",
    "binary_filename",
    "locate",
    "ResolvedBinary",
    "validate",
]
