"""Launch the resolved dits binary.

The binary runs as a child process with the wrapper's stdin, stdout and
stderr, so prompts, progress bars and colors work unchanged. Arguments
are passed as a vector and never go through a shell.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from dits.core.logging import get_logger
from dits.errors import SpawnError
from dits.exit_codes import EXIT_SHIM_FAILURE, EXIT_SUCCESS

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class LaunchResult:
    """Outcome of running the binary once."""

    exit_code: int
    signal: Optional[int] = None
    error: Optional[SpawnError] = None

    @property
    def ok(self) -> bool:
        """True if the child ran and exited with status 0."""
        return self.error is None and self.exit_code == EXIT_SUCCESS


def _spawn_error(binary_path: Path, exc: OSError) -> SpawnError:
    """Translate an OS error from process creation into a SpawnError."""
    if isinstance(exc, FileNotFoundError):
        reason = f"Could not find dits binary at {binary_path}"
    elif isinstance(exc, PermissionError):
        reason = (
            f"Permission denied executing {binary_path}\n"
            f"Try: chmod +x {binary_path}"
        )
    else:
        reason = f"Error executing dits: {exc.strerror or exc}"
    return SpawnError(binary_path, reason)


def _wait(process: subprocess.Popen) -> int:
    """Wait for the child without a timeout.

    Ctrl-C reaches the child through the terminal's process group, so an
    interrupt in the wrapper just keeps waiting for the child to decide
    how to exit.
    """
    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            LOGGER.debug("Interrupted, waiting for child to exit")


def launch(binary_path: Path, args: Sequence[str]) -> LaunchResult:
    """Run the binary to completion.

    Args:
        binary_path: Validated path to the binary.
        args: Arguments forwarded verbatim (without argv[0]).

    Returns:
        LaunchResult. Spawn failures are reported in ``error`` rather than
        raised, with ``exit_code`` set to 1.
    """
    cmd = [str(binary_path), *args]
    LOGGER.debug(f"Running: {cmd}")

    try:
        process = subprocess.Popen(cmd, shell=False)
    except OSError as e:
        error = _spawn_error(binary_path, e)
        LOGGER.debug(f"Spawn failed: {e}")
        return LaunchResult(exit_code=EXIT_SHIM_FAILURE, error=error)

    returncode = _wait(process)

    if returncode < 0:
        LOGGER.debug(f"Child terminated by signal {-returncode}")
        return LaunchResult(exit_code=EXIT_SHIM_FAILURE, signal=-returncode)

    LOGGER.debug(f"Child exited with status {returncode}")
    return LaunchResult(exit_code=returncode)
