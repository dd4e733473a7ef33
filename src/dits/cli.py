"""Console entry point for the dits shim.

The shim has no options of its own: every argument is forwarded to the
bundled binary unchanged.
"""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from dits.config.loader import ConfigError, load_config
from dits.core.logging import configure_logging, get_logger
from dits.errors import ShimError
from dits.exit_codes import EXIT_SHIM_FAILURE
from dits.shim import run

LOGGER = get_logger(__name__)


def _report(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Returns an exit code suitable for use as a console script: the child's
    own status, or 1 if the shim could not run it.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        config = load_config()
    except ConfigError as e:
        _report(str(e))
        return EXIT_SHIM_FAILURE

    configure_logging(level=config.log_level)
    if config.sources:
        LOGGER.debug(f"Config loaded from sources: {config.sources}")

    try:
        result = run(args, config)
    except ShimError as e:
        LOGGER.debug(f"Resolution failed: {type(e).__name__}")
        _report(str(e))
        return EXIT_SHIM_FAILURE

    if result.error is not None:
        _report(str(result.error))
    elif result.signal is not None:
        LOGGER.info(f"dits terminated by signal {result.signal}")
    return result.exit_code
