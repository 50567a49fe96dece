"""
Unit tests for the dispatcher.

The tests follow the Arrange-Act-Assert (AAA) pattern. The application is
served with aiohttp's TestServer, which shares the test's event loop; the
blocking path is therefore covered separately in the end-to-end tests.
"""

from unittest.mock import MagicMock, patch

import asyncio

import pytest
from aiohttp.test_utils import TestClient, TestServer, make_mocked_request

from load_bearer.config.server_context import ServerContext
from load_bearer.contracts import RequestHandler
from load_bearer.dispatcher import CONTEXT_KEY, create_app, default_handlers, dispatch_to
from load_bearer.handlers.blocking_handler import BlockingHandler
from load_bearer.handlers.deferred_handler import DeferredHandler
from load_bearer.handlers.immediate_handler import ImmediateHandler


def test_default_handlers_should_bind_fixed_paths() -> None:
    """
    Tests the path to handler binding of the HTTP surface.
    """
    # Act
    handlers = default_handlers()

    # Assert
    assert set(handlers) == {"/", "/delay", "/block"}
    assert isinstance(handlers["/"], ImmediateHandler)
    assert isinstance(handlers["/delay"], DeferredHandler)
    assert isinstance(handlers["/block"], BlockingHandler)


@pytest.mark.asyncio
async def test_root_should_reply_ok_regardless_of_query(local_context: ServerContext) -> None:
    """
    Tests that / answers 200 OK and ignores its query string.
    """
    # Arrange
    async with TestClient(TestServer(create_app(local_context))) as client:
        # Act
        response = await client.get("/?delay=5000")

        # Assert
        assert response.status == 200
        assert await response.text() == "OK"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
async def test_paths_should_accept_any_method(
    local_context: ServerContext, method: str
) -> None:
    """
    Tests that routing is by path only.
    """
    # Arrange
    async with TestClient(TestServer(create_app(local_context))) as client:
        # Act
        response = await client.request(method, "/delay?delay=1")

        # Assert
        assert response.status == 200
        assert await response.text() == "Waited 1 ms"


@pytest.mark.asyncio
async def test_delay_should_default_to_zero(local_context: ServerContext) -> None:
    """
    Tests that /delay without a delay parameter waits 0 ms.
    """
    # Arrange
    async with TestClient(TestServer(create_app(local_context))) as client:
        # Act
        response = await client.get("/delay?delay=abc")

        # Assert
        assert response.status == 200
        assert await response.text() == "Waited 0 ms"


@pytest.mark.asyncio
async def test_block_should_reply_with_waited_body(local_context: ServerContext) -> None:
    """
    Tests the /block reply for a short delay.
    """
    # Arrange
    async with TestClient(TestServer(create_app(local_context))) as client:
        # Act
        response = await client.get("/block?delay=5&delay=10")

        # Assert
        assert response.status == 200
        assert await response.text() == "Waited 10 ms"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/unknown", "/delay/", "/blocking"])
async def test_unknown_paths_should_be_not_found(
    local_context: ServerContext, path: str
) -> None:
    """
    Tests that only exact paths are dispatched.
    """
    # Arrange
    async with TestClient(TestServer(create_app(local_context))) as client:
        # Act
        response = await client.get(path)

        # Assert
        assert response.status == 404


@pytest.mark.asyncio
async def test_create_app_should_use_given_handlers(local_context: ServerContext) -> None:
    """
    Tests that a custom path to handler mapping replaces the defaults.
    """

    # Arrange
    class TeapotHandler(RequestHandler):
        def handle(self, request):
            request.send_reply(418, b"teapot")

    app = create_app(local_context, {"/tea": TeapotHandler()})
    async with TestClient(TestServer(app)) as client:
        # Act
        tea = await client.get("/tea")
        root = await client.get("/")

        # Assert
        assert tea.status == 418
        assert await tea.text() == "teapot"
        assert root.status == 404


@pytest.mark.asyncio
async def test_dispatch_should_fail_fast_on_memory_error() -> None:
    """
    Tests that an allocation failure inside a handler aborts the process.
    """
    # Arrange
    handler = MagicMock(spec=RequestHandler)
    handler.handle.side_effect = MemoryError()
    request = make_mocked_request("GET", "/delay?delay=5")

    with patch(
        "load_bearer.dispatcher.fail_fast", side_effect=SystemExit("aborted")
    ) as mock_fail_fast:
        # Act & Assert
        with pytest.raises(SystemExit):
            await dispatch_to(handler)(request)

    mock_fail_fast.assert_called_once()
    assert "/delay?delay=5" in mock_fail_fast.call_args.args[0]


def test_create_app_should_store_context(local_context: ServerContext) -> None:
    """
    Tests that each application carries the context it was built from.
    """
    # Act
    app = create_app(local_context)

    # Assert
    assert app[CONTEXT_KEY] is local_context


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "value",
    ["9" * 400, "9" * 5000, "99999999999999999", "2147483648"],
)
async def test_delay_should_saturate_oversized_values(value: str) -> None:
    """
    Tests that /delay answers with the largest C int instead of failing on huge values.
    """
    # Arrange
    loop = asyncio.get_running_loop()
    request = make_mocked_request("GET", f"/delay?delay={value}")
    scheduled = []

    def _fire_now(delay, callback, *args):
        scheduled.append(delay)
        callback(*args)

    with patch.object(loop, "call_later", side_effect=_fire_now):
        # Act
        response = await dispatch_to(DeferredHandler())(request)

    # Assert
    assert response.status == 200
    assert response.body == b"Waited 2147483647 ms"
    assert scheduled == [2147483.647]


@pytest.mark.asyncio
@pytest.mark.parametrize("value", ["9" * 5000, "99999999999999999"])
async def test_block_should_saturate_oversized_values(value: str) -> None:
    """
    Tests that /block stalls for the largest C int instead of failing on huge values.
    """
    # Arrange
    request = make_mocked_request("GET", f"/block?delay={value}")

    with patch("load_bearer.handlers.blocking_handler.stall_process") as mock_stall:
        # Act
        response = await dispatch_to(BlockingHandler())(request)

    # Assert
    mock_stall.assert_called_once_with(2147483647)
    assert response.status == 200
    assert response.body == b"Waited 2147483647 ms"
