"""
Server lifecycle for load-bearer.

This module provides the LoadBearerServer class, which owns one listening
socket and the aiohttp runner behind it. Each instance is set up with
start() and torn down with stop(), so tests can run several side by side
in one process.
"""

import asyncio
import logging
from typing import Dict, Optional

from aiohttp import web

from .config.server_context import ServerContext
from .contracts import RequestHandler
from .dispatcher import create_app


class LoadBearerServer:
    """
    Serves the fixed load-test endpoints on one host and port.
    """

    def __init__(
        self,
        context: ServerContext,
        handlers: Optional[Dict[str, RequestHandler]] = None,
    ) -> None:
        """
        Initializes a new LoadBearerServer instance.

        Args:
            context: Settings of this instance. The host, port (0 lets the OS
                pick a free one) and access log switch are read from it, and
                it is handed to the dispatcher.
            handlers: Optional path to handler mapping replacing the defaults.
        """
        self._context: ServerContext = context
        self._handlers: Optional[Dict[str, RequestHandler]] = handlers
        self._logger: logging.Logger = logging.getLogger(__name__)
        self._runner: Optional[web.AppRunner] = None

    @property
    def port(self) -> int:
        """
        The port actually bound, which differs from the requested one when it was 0.

        Raises:
            RuntimeError: If the server is not started.
        """
        if self._runner is None:
            raise RuntimeError("Server is not started")
        return self._runner.addresses[0][1]

    @property
    def running(self) -> bool:
        return self._runner is not None

    async def start(self) -> None:
        """
        Binds the listening socket and starts accepting requests.

        Raises:
            RuntimeError: If the server is already started.
            OSError: If the address cannot be bound.
        """
        if self._runner is not None:
            raise RuntimeError("Server is already started")

        runner_kwargs = {} if self._context.access_log else {"access_log": None}
        runner = web.AppRunner(create_app(self._context, self._handlers), **runner_kwargs)
        await runner.setup()
        try:
            await web.TCPSite(runner, self._context.host, self._context.port).start()
        except Exception:
            await runner.cleanup()
            raise

        self._runner = runner
        self._logger.info(
            f"[{self._context.server_id}] Listening on http://{self._context.host}:{self.port}"
        )

    async def stop(self) -> None:
        """
        Closes the listening socket and releases the runner.

        Calling it on a server that is not started does nothing.
        """
        if self._runner is None:
            return

        self._logger.info("Shutting down server...")
        runner, self._runner = self._runner, None
        await runner.cleanup()
        self._logger.info("Server shutdown complete")

    async def serve(self) -> None:
        """
        Starts the server and runs until cancelled, then stops it.
        """
        await self.start()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self._logger.info("Server shutdown requested.")
        finally:
            await self.stop()
