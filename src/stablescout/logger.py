"""
Logging for stablescout.

Every message is pre-rendered with a fixed-width tag so CI logs scan well:

    ACTION  ▸ click → Submit button
    FAILED  ▸ click → Submit button | Error: Timeout 10000ms exceeded.
    NAV     ▸ goto → https://example.com/login
    SECURITY ▸ assert_no_injection → scanning search term
"""

import logging
import os
from typing import Callable, Optional

LOGGER_NAME = "stablescout"

logger = logging.getLogger(LOGGER_NAME)

TAG_WIDTH = 8
RESULT_INDENT = " " * (TAG_WIDTH + 1)

_HANDLER_MARKER = "_stablescout_handler"


def tag(name: str) -> str:
    """Pad a tag to the fixed column width."""
    return name.ljust(TAG_WIDTH)


def safe_log(log_fn: Callable[[str], None], message: str) -> None:
    """
    Emit a log message without ever raising.

    A broken handler or a custom logger that throws must not replace the
    outcome of the browser action being logged.
    """
    try:
        log_fn(message)
    except Exception:
        pass


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a single stream handler to the stablescout logger.

    Safe to call more than once; later calls only adjust the level.

    Args:
        level: Level name (default: STABLESCOUT_LOG_LEVEL or INFO)
    """
    level_name = (level or os.environ.get("STABLESCOUT_LOG_LEVEL") or "INFO").upper()
    logger.setLevel(level_name)

    if not any(getattr(h, _HANDLER_MARKER, False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-5s %(message)s"))
        setattr(handler, _HANDLER_MARKER, True)
        logger.addHandler(handler)

    return logger
