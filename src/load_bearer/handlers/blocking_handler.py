"""
Deferred handler, blocking version.

This module answers requests after the delay given in their query string by
sleeping on the event loop thread. Useful to simulate single-threaded
backend processes that can only serve one request at a time.
"""

import logging
import time

from load_bearer.contracts import RequestHandler
from load_bearer.domain import PendingResponse, RequestHandle
from load_bearer.errors import fail_fast
from load_bearer.handlers.deferred_handler import waited_body
from load_bearer.query import requested_delay
from load_bearer.responder import deliver

# Module logger
logger = logging.getLogger(__name__)

# Slack for clock granularity when checking that a stall lasted long enough.
_CLOCK_TOLERANCE = 0.001


def stall_process(wait: int) -> None:
    """
    Sleep for `wait` milliseconds on the calling thread.

    STALLS THE ENTIRE SCHEDULER: called from a handler, nothing else on the
    event loop runs until it returns. No connection is accepted and no timer
    fires in the meantime.

    A sleep that ends before the requested delay aborts the process.

    Args:
        wait: Duration of the stall in milliseconds.
    """
    seconds = wait / 1000
    started = time.perf_counter()
    time.sleep(seconds)
    elapsed = time.perf_counter() - started
    if elapsed < seconds - _CLOCK_TOLERANCE:
        fail_fast(f"Blocking sleep of {wait} ms ended after {elapsed * 1000:.3f} ms")


class BlockingHandler(RequestHandler):
    """
    Replies "Waited {wait} ms" after stalling the whole process for `wait` milliseconds.

    Every other request, deferred timers included, waits behind the stall.
    """

    def handle(self, request: RequestHandle) -> None:
        wait: int = requested_delay(request)
        pending = PendingResponse(request, waited_body(wait))

        logger.debug(f"Blocking the event loop for {wait} ms ({request.path})")
        stall_process(wait)

        deliver(pending)
