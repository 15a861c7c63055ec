"""
Logging for metaresolver.

metaresolver logs through loguru but, being a library, never touches the
host application's handlers: its records are disabled on import (see
metaresolver/__init__.py) until the application opts in with
logger.enable("metaresolver") or setup_logging().
"""

import os
import sys
from typing import Optional

from loguru import logger

LOGGER_NAME = "metaresolver"

# Handler added by setup_logging(), if any
_handler_id: Optional[int] = None


def setup_logging(level="INFO", suppress_console=None):
    """
    Enable metaresolver's log records and optionally show them on stderr.

    Only the handler added here is ever replaced or removed; handlers owned by
    the application are left alone. Calling again swaps the stderr handler for
    one at the new level.

    Args:
        level: Minimum level for the stderr handler (default: INFO)
        suppress_console: If True, enable records without adding a stderr
            handler. If None, check METARESOLVER_MACHINE_MODE env var.
    """
    global _handler_id

    logger.enable(LOGGER_NAME)

    if suppress_console is None:
        suppress_console = os.getenv("METARESOLVER_MACHINE_MODE", "").lower() in ("1", "true", "yes")

    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None

    if not suppress_console:
        _handler_id = logger.add(
            sys.stderr,
            level=level,
            filter=LOGGER_NAME,
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
            colorize=True,
        )


def teardown_logging():
    """Remove the handler added by setup_logging() and disable metaresolver records again."""
    global _handler_id

    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None
    logger.disable(LOGGER_NAME)
