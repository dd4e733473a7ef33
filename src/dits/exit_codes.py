"""Exit codes for the dits shim.

- 0: Success (the wrapped binary exited cleanly)
- 1: Shim failure (unsupported platform, missing binary, spawn error,
  invalid configuration, or child killed by a signal)

Any other non-zero code is the wrapped binary's own exit status, passed
through unchanged.
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_SHIM_FAILURE = 1
