"""
Domain models for the load-bearer server.

This module defines the two values that flow between the dispatcher, the
handlers and the responder: the handle of an in-flight request and the
pending response that pairs such a handle with its prepared body.
"""

import asyncio
import logging
from typing import Optional

from aiohttp import web
from multidict import MultiDictProxy

from .errors import HandleConsumedError

# Module logger
logger = logging.getLogger(__name__)


class RequestHandle:
    """
    Reference to one in-flight client request.

    A handle is valid from receipt until exactly one reply is sent through
    it. Sending the reply resolves the future the dispatcher is awaiting and
    consumes the handle; the connection itself stays owned by aiohttp, which
    writes the reply and recycles the transport.
    """

    def __init__(self, request: web.Request, reply: "asyncio.Future[web.Response]") -> None:
        """
        Args:
            request: The aiohttp request this handle answers.
            reply: Future the dispatcher awaits to obtain the response to write.
        """
        self._request: web.Request = request
        self._reply: "asyncio.Future[web.Response]" = reply
        self._consumed: bool = False

    @property
    def path(self) -> str:
        return self._request.path

    @property
    def query(self) -> "MultiDictProxy[str]":
        """Query parameters in the order they appear, duplicates included."""
        return self._request.query

    @property
    def consumed(self) -> bool:
        return self._consumed

    def send_reply(self, status: int, body: bytes) -> None:
        """
        Send the one terminal reply for this request.

        Args:
            status: HTTP status code.
            body: Response body, handed over to aiohttp for transmission.

        Raises:
            HandleConsumedError: If a reply was already sent through this handle.
        """
        if self._consumed:
            raise HandleConsumedError(f"Reply already sent for {self._request.path}")
        self._consumed = True

        if self._reply.done():
            # The dispatcher stopped waiting (client disconnected, server shutting down).
            logger.debug(f"Dropping reply for {self._request.path}: client went away")
            return

        self._reply.set_result(web.Response(status=status, body=body, content_type="text/plain"))


class PendingResponse:
    """
    A prepared reply waiting to be delivered to its request.

    The pending response owns both its request handle and its body. It is
    handed off whole (for example into a timer callback), never copied, and
    delivering it clears both fields so it cannot be delivered twice.

    Attributes:
        request: The handle to answer, or None once delivered.
        body: The body to send, or None once delivered.
    """

    __slots__ = ("request", "body")

    def __init__(self, request: RequestHandle, body: bytes) -> None:
        self.request: Optional[RequestHandle] = request
        self.body: Optional[bytes] = body

    @property
    def delivered(self) -> bool:
        return self.request is None

    def __repr__(self) -> str:
        state = "delivered" if self.delivered else f"pending for {self.request.path}"
        return f"<PendingResponse {state}>"
