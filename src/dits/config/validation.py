"""Configuration validation for the dits shim.

Warns on unknown keys and bad values but never raises, so a stale config
file cannot stop the wrapped binary from running.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, Iterable, List, Optional, Set

from dits.core.logging import LOG_LEVELS, get_logger

LOGGER = get_logger(__name__)

VALID_TOP_LEVEL_KEYS: Set[str] = {
    "log_level",
    "install_root",
}


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


def validate_config(
    data: Any,
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate a configuration dictionary.

    Args:
        data: Parsed config data.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):
        warning = ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
        )
        _log_warning(warning)
        return [warning]

    for key in data.keys():
        if key not in VALID_TOP_LEVEL_KEYS:
            warnings.append(ConfigValidationWarning(
                message=f"Unknown top-level key '{key}'",
                source=source,
                key=str(key),
                suggestion=_suggest_key(str(key), VALID_TOP_LEVEL_KEYS),
            ))

    log_level = data.get("log_level")
    if log_level is not None:
        if not isinstance(log_level, str):
            warnings.append(ConfigValidationWarning(
                message=f"'log_level' must be a string, got {type(log_level).__name__}",
                source=source,
                key="log_level",
            ))
        elif log_level.lower() not in LOG_LEVELS:
            warnings.append(ConfigValidationWarning(
                message=f"Invalid log level '{log_level}'",
                source=source,
                key="log_level",
                suggestion=_suggest_key(log_level.lower(), LOG_LEVELS.keys()),
            ))

    install_root = data.get("install_root")
    if install_root is not None and not isinstance(install_root, str):
        warnings.append(ConfigValidationWarning(
            message=f"'install_root' must be a path string, got {type(install_root).__name__}",
            source=source,
            key="install_root",
        ))

    for warning in warnings:
        _log_warning(warning)
    return warnings


def _suggest_key(key: str, valid: Iterable[str]) -> Optional[str]:
    matches = get_close_matches(key, list(valid), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    message = f"{warning.source}: {warning.message}"
    if warning.suggestion:
        message += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(message)
