"""
Deferred handler, non-blocking version.

This module answers requests after the delay given in their query string by
scheduling delivery on the event loop's timer. The loop keeps serving other
requests while the timer runs.
"""

import asyncio
import logging

from load_bearer.config.constants import WAITED_BODY_TEMPLATE
from load_bearer.contracts import RequestHandler
from load_bearer.domain import PendingResponse, RequestHandle
from load_bearer.query import requested_delay
from load_bearer.responder import deliver

# Module logger
logger = logging.getLogger(__name__)


def waited_body(wait: int) -> bytes:
    """Build the body sent back by both delayed endpoints."""
    return WAITED_BODY_TEMPLATE.format(wait=wait).encode("ascii")


class DeferredHandler(RequestHandler):
    """
    Replies "Waited {wait} ms" after `wait` milliseconds without blocking the loop.

    Delivery happens in a timer callback even when the delay is 0, so the
    handler always returns to the loop before the reply is sent. Responses to
    different requests go out in timer expiry order, not arrival order.
    """

    def handle(self, request: RequestHandle) -> None:
        """
        Prepares the reply and schedules its delivery after the requested delay.

        Args:
            request: The in-flight request; ownership moves into the scheduled callback.

        Returns:
            None
        """
        wait: int = requested_delay(request)
        pending = PendingResponse(request, waited_body(wait))

        loop = asyncio.get_running_loop()
        loop.call_later(wait / 1000, deliver, pending)
        logger.debug(f"Scheduled reply for {request.path} in {wait} ms")
