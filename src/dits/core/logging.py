"""Logging helpers for the dits shim.

All loggers live under the ``dits`` namespace so the shim's diagnostics
can be switched on without touching the root logger of an embedding
application.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "dits"
LOG_FORMAT = "dits-shim: %(levelname)s %(name)s: %(message)s"

# Names accepted in configuration files
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class _StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stderr``."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


_HANDLER: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``dits`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    level: Optional[str] = None,
) -> None:
    """Configure the ``dits`` logger.

    Precedence: ``debug`` > ``verbose`` > ``quiet`` > ``level`` > WARNING.
    Calling this more than once replaces the level but never installs a
    second handler.

    Args:
        debug: Enable debug output.
        verbose: Enable info-level output.
        quiet: Only report errors.
        level: Level name from configuration (e.g. ``"info"``).
    """
    global _HANDLER

    if debug:
        resolved = logging.DEBUG
    elif verbose:
        resolved = logging.INFO
    elif quiet:
        resolved = logging.ERROR
    elif level:
        resolved = LOG_LEVELS.get(level.lower(), logging.WARNING)
    else:
        resolved = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _HANDLER is None:
        _HANDLER = _StderrHandler()
        _HANDLER.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_HANDLER)
        # Keep shim diagnostics out of an embedding application's handlers
        logger.propagate = False

    logger.setLevel(resolved)
    _HANDLER.setLevel(resolved)
