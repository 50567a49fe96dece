"""
Immediate handler: answers 200 "OK" as soon as the request arrives.
"""

from load_bearer.config.constants import NULL_RESPONSE_BODY, SUCCESS_STATUS
from load_bearer.contracts import RequestHandler
from load_bearer.domain import RequestHandle


class ImmediateHandler(RequestHandler):
    """The simplest possible responder. The query string is ignored."""

    def handle(self, request: RequestHandle) -> None:
        request.send_reply(SUCCESS_STATUS, NULL_RESPONSE_BODY)
