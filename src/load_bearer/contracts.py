"""
Core interfaces for the load-bearer server.

Handlers are invoked by the dispatcher, synchronously and on the event loop
thread, once per incoming request. A handler must arrange for exactly one
reply to be sent through the request handle it receives: right away, from a
timer callback, or after stalling the loop.
"""

import abc

from .domain import RequestHandle


class RequestHandler(abc.ABC):
    """
    Abstract interface for the behaviour bound to one path.
    """

    @abc.abstractmethod
    def handle(self, request: RequestHandle) -> None:
        """
        Handles a single request.

        This method runs on the event loop thread and must not await. It
        owns the request handle until it replies through it or hands it off
        inside a PendingResponse.

        Args:
            request: The in-flight request to answer exactly once.

        Returns:
            None
        """
        pass
