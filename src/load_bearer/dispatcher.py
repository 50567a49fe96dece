"""
Request dispatch on top of aiohttp.

This module binds each fixed path to its handler. aiohttp owns the
listening socket, parses requests and writes replies; the dispatcher turns
every request into a RequestHandle, invokes the matching handler on the
loop thread and waits until the handler (or its timer) replies.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional

from aiohttp import web

from load_bearer.config.constants import (
    BLOCKING_RESPONSE_PATH,
    DELAYED_RESPONSE_PATH,
    NULL_RESPONSE_PATH,
)
from load_bearer.config.server_context import ServerContext
from load_bearer.contracts import RequestHandler
from load_bearer.domain import RequestHandle
from load_bearer.errors import fail_fast
from load_bearer.handlers.blocking_handler import BlockingHandler
from load_bearer.handlers.deferred_handler import DeferredHandler
from load_bearer.handlers.immediate_handler import ImmediateHandler

# Module logger
logger = logging.getLogger(__name__)

AiohttpHandler = Callable[[web.Request], Awaitable[web.StreamResponse]]

CONTEXT_KEY = web.AppKey("context", ServerContext)


def default_handlers() -> Dict[str, RequestHandler]:
    """Return the handler bound to each path of the HTTP surface."""
    return {
        NULL_RESPONSE_PATH: ImmediateHandler(),
        DELAYED_RESPONSE_PATH: DeferredHandler(),
        BLOCKING_RESPONSE_PATH: BlockingHandler(),
    }


def dispatch_to(handler: RequestHandler) -> AiohttpHandler:
    """
    Adapt a RequestHandler to an aiohttp request handler.

    Args:
        handler: The handler to invoke for every request on a path.

    Returns:
        A coroutine function aiohttp can route requests to.
    """

    async def _dispatch(request: web.Request) -> web.StreamResponse:
        reply: "asyncio.Future[web.Response]" = asyncio.get_running_loop().create_future()
        handle = RequestHandle(request, reply)

        try:
            handler.handle(handle)
        except MemoryError:
            fail_fast(f"Out of memory while handling {request.path_qs}")

        return await reply

    return _dispatch


async def _on_cleanup(app: web.Application) -> None:
    logger.debug(f"[{app[CONTEXT_KEY].server_id}] Dispatcher torn down")


def create_app(
    context: ServerContext, handlers: Optional[Dict[str, RequestHandler]] = None
) -> web.Application:
    """
    Build the aiohttp application serving the fixed paths.

    Paths match exactly and accept any method; anything else gets
    aiohttp's standard 404. The context is stored on the application
    under CONTEXT_KEY, so each application carries its own settings.

    Args:
        context: Settings of the server instance owning the application.
        handlers: Path to handler mapping, defaults to default_handlers().

    Returns:
        web.Application: The application to hand to a runner.
    """
    if handlers is None:
        handlers = default_handlers()

    app = web.Application()
    app[CONTEXT_KEY] = context
    app.on_cleanup.append(_on_cleanup)
    app.add_routes(
        [web.route("*", path, dispatch_to(handler)) for path, handler in handlers.items()]
    )
    logger.debug(f"[{context.server_id}] Routes registered: {', '.join(handlers)}")
    return app
