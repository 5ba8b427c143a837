"""ASGI middleware that gives every request its own logger session.

Framework-agnostic: works with any ASGI server (uvicorn, hypercorn) and
any ASGI framework without importing one.
"""

from collections.abc import Callable, Coroutine
from typing import Any

from lagercheck.core.logger import Logger

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]


class ASGILoggingMiddleware:
    """ASGI middleware deriving a per-request logger.

    For each HTTP request the middleware opens a session on ``logger``
    carrying the method, path and trace ids from ``X-Vcap-Request-Id``,
    stores it in ``scope["state"]["logger"]`` for the application, and
    logs ``start`` and ``done`` (or ``failed``) records on it.
    """

    def __init__(self, app: ASGIApp, logger: Logger, session_name: str = "request") -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
            logger: Parent logger for the request sessions.
            session_name: Task name of each request session.
        """
        self.app = app
        self.logger = logger
        self.session_name = session_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI callable interface that processes requests through the wrapped app."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_log = self.logger.session(
            self.session_name,
            {"method": scope["method"], "path": scope["path"]},
        ).with_trace_info(scope)
        scope.setdefault("state", {})["logger"] = request_log
        captured: dict[str, Any] = {"status": None}

        async def wrapped_send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                captured["status"] = message["status"]
            await send(message)

        request_log.info("start")
        try:
            await self.app(scope, receive, wrapped_send)
        except Exception as e:
            request_log.error("failed", e, {"status": captured["status"] or 500})
            raise
        request_log.info("done", {"status": captured["status"] or 0})
