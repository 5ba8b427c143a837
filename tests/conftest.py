"""Shared test fixtures for all test modules."""

import io

import pytest

from lagercheck.adapters.sinks.in_memory import CaptureSink
from lagercheck.core.logger import Logger

try:
    import httpx
except ImportError:
    httpx = None


class SomeError(Exception):
    """Error type used by tests that log errors."""


@pytest.fixture
def fatal_calls() -> list[BaseException | None]:
    """Collects the errors passed to a logger's fatal hook."""
    return []


@pytest.fixture
def capture_sink() -> CaptureSink:
    """Provide an empty capture sink accepting every level."""
    return CaptureSink()


@pytest.fixture
def logger(capture_sink: CaptureSink, fatal_calls: list) -> Logger:
    """Root logger named "logger" writing into ``capture_sink``.

    Fatal records call ``fatal_calls.append`` instead of exiting.
    """
    log = Logger("logger", on_fatal=fatal_calls.append)
    log.register_sink(capture_sink)
    return log


@pytest.fixture
def expected_error() -> SomeError:
    return SomeError("some-error")


@pytest.fixture
def task_log(logger: Logger, capture_sink: CaptureSink, expected_error: SomeError) -> bytes:
    """Serialized output of an info, a debug and an error record for one task."""
    logger.info("action", {"event": "starting", "task": "my-task"})
    logger.debug("action", {"event": "debugging", "task": "my-task"})
    logger.error("action", expected_error, {"event": "failed", "task": "my-task"})
    return capture_sink.contents()


@pytest.fixture
def task_stream(task_log: bytes) -> io.BufferedReader:
    """Forward-only reader over ``task_log``."""
    return io.BufferedReader(io.BytesIO(task_log))


# === ASGI Test Fixtures ===


@pytest.fixture
def basic_asgi_app():
    """Basic ASGI app fixture that returns 200 OK."""
    from lagercheck.adapters.frameworks.asgi import Receive, Scope, Send

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        """Simple ASGI app that returns 200 OK."""
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b"OK"})

    return app


@pytest.fixture
def asgi_scope():
    """Factory fixture for creating ASGI scope dicts."""
    from lagercheck.adapters.frameworks.asgi import Scope

    def _scope(method: str = "GET", path: str = "/test") -> Scope:
        return {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": b"",
            "headers": [],
        }

    return _scope


@pytest.fixture
def asgi_send_capture():
    """Fixture that returns a send callable and a responses list for capture."""

    responses: list[dict[str, object]] = []

    async def send(message: dict[str, object]) -> None:
        """Capture ASGI messages."""
        responses.append(message)

    return send, responses


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            async with asgi_test_client(app) as client:
                response = await client.get("/endpoint")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
