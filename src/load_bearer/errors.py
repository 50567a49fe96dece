"""
Error handling for the load-bearer server.

Everything the server does is local, so failures are either programming
errors on a request handle (HandleConsumedError) or fatal conditions that
abort the process immediately. Nothing is retried.
"""

import logging
import os
from typing import NoReturn

# Module logger
logger = logging.getLogger(__name__)


class HandleConsumedError(RuntimeError):
    """Raised when a request handle or pending response is used after its reply was sent."""


def fail_fast(reason: str) -> NoReturn:
    """
    Log the reason at CRITICAL level and abort the process.

    Used for conditions the server never tries to recover from, such as a
    failed allocation while building a response or a blocking stall that
    ended before the requested delay.

    Args:
        reason: Human-readable description of the fatal condition.
    """
    logger.critical(f"Fatal: {reason}. Aborting.")
    logging.shutdown()
    os.abort()
