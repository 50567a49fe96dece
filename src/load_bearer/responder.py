"""
Delivery of pending responses.

The responder is the only place a PendingResponse is consumed. It is called
either from a timer callback on the event loop or in-line by the blocking
handler, and in both cases it runs on the loop thread.
"""

import logging

from load_bearer.config.constants import SUCCESS_STATUS
from load_bearer.domain import PendingResponse
from load_bearer.errors import HandleConsumedError

# Module logger
logger = logging.getLogger(__name__)


def deliver(pending: PendingResponse) -> None:
    """
    Send a pending response to its request with a 200 status, then release it.

    After the body is handed to the request handle, the handle is cleared
    first and the body second, leaving an empty container behind. The
    connection belongs to aiohttp from the moment the reply is sent and is
    never touched here again.

    Args:
        pending: The response to deliver; its caller gives up ownership.

    Raises:
        HandleConsumedError: If this pending response was already delivered.
    """
    request, body = pending.request, pending.body
    if request is None or body is None:
        raise HandleConsumedError("Pending response was already delivered")

    request.send_reply(SUCCESS_STATUS, body)
    pending.request = None
    pending.body = None
    logger.debug(f"Delivered {len(body)} byte response for {request.path}")
