"""
Shared fixtures for the load-bearer test suite.
"""

import asyncio
import threading
from typing import Iterator

import pytest

from load_bearer.config.server_context import ServerContext
from load_bearer.server import LoadBearerServer


@pytest.fixture
def local_context() -> ServerContext:
    """
    Creates a ServerContext bound to the loopback interface on a free port.

    Returns:
        ServerContext: A context with test values and the access log disabled.
    """
    return ServerContext(
        host="127.0.0.1",
        port=0,
        server_id="test-server",
        logging_type="dev",
        logging_config_file="",
        access_log=False,
    )


@pytest.fixture
def live_server_url(local_context: ServerContext) -> Iterator[str]:
    """
    Runs a LoadBearerServer on its own event loop in a background thread.

    The server must not share the test's event loop: /block stalls the loop
    it runs on, and the tests need a client that keeps running meanwhile.

    Yields:
        str: Base URL of the running server.
    """
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()

    server = LoadBearerServer(local_context)
    asyncio.run_coroutine_threadsafe(server.start(), loop).result(timeout=10)

    yield f"http://127.0.0.1:{server.port}"

    asyncio.run_coroutine_threadsafe(server.stop(), loop).result(timeout=10)
    loop.call_soon_threadsafe(loop.stop)
    thread.join(timeout=10)
    loop.close()
