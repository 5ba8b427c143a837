"""Example ASGI application logging every request as a session.

Run with:
    uvicorn examples.asgi_example:app --reload

Every request opens a ``demo.request`` session; records are written as
NDJSON to stdout. Send ``X-Vcap-Request-Id`` to see ``trace-id`` and
``span-id`` attached:

    curl -H "X-Vcap-Request-Id: 7f461654-74d1-1ee5-8367-77d85df2cdab" localhost:8000/
"""

import json
import logging
import sys

from lagercheck import LagerHandler, Logger, LogLevel, WriterSink
from lagercheck.adapters.frameworks.asgi import ASGILoggingMiddleware, Receive, Scope, Send

logger = Logger("demo")
logger.register_sink(WriterSink(sys.stdout, min_level=LogLevel.INFO))

# Forward records from stdlib loggers (uvicorn, libraries) into the same sink
logging.getLogger("uvicorn.error").addHandler(LagerHandler(logger.session("uvicorn")))


async def hello(scope: Scope, receive: Receive, send: Send) -> None:
    request_log: Logger = scope["state"]["logger"]
    request_log.info("greeting", {"who": "world"})
    body = json.dumps({"message": "hello"}).encode()
    await send(
        {
            "type": "http.response.start",
            "status": 200,
            "headers": [(b"content-type", b"application/json")],
        }
    )
    await send({"type": "http.response.body", "body": body})


app = ASGILoggingMiddleware(hello, logger)
