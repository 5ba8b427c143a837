"""Structured logger with sessions and pluggable sinks."""

import sys
import threading
import time
import traceback
from collections.abc import Callable
from typing import Any

from lagercheck.core.models import Data, LogLevel, Record
from lagercheck.core.ports import Sink
from lagercheck.core.trace import trace_data

STACK_TRACE_BUFFER_SIZE = 1024 * 100

FatalHook = Callable[[BaseException | None], None]


def format_timestamp(ns: int) -> str:
    """Format nanoseconds since epoch as seconds with nine fractional digits."""
    return f"{ns // 1_000_000_000}.{ns % 1_000_000_000:09d}"


def exit_process(err: BaseException | None) -> None:
    """Default fatal hook: terminate the process with status 1."""
    sys.exit(1)


class Logger:
    """Leveled logger writing one Record per call to its sinks.

    Derived loggers (``session``, ``with_data``, ``with_trace_info``) share
    the sink tuple of their parent as it was at derivation time.

    Example:
        ```python
        from lagercheck import Logger, WriterSink

        logger = Logger("svc")
        logger.register_sink(WriterSink(sys.stdout))
        task_log = logger.session("task", {"task": "t1"})
        task_log.info("starting")
        ```
    """

    def __init__(self, component: str, *, on_fatal: FatalHook | None = None) -> None:
        """Create a root logger.

        Args:
            component: Name written as ``source`` on every record and used
                as the root of every ``message``.
            on_fatal: Called with the error after a fatal record has been
                dispatched. Defaults to exiting the process.
        """
        self._component = component
        self._task = component
        self._session_id = ""
        self._data: Data = {}
        self._sinks: tuple[Sink, ...] = ()
        self._on_fatal = on_fatal or exit_process
        self._next_session = 0
        self._session_lock = threading.Lock()
        self._sinks_lock = threading.Lock()

    @property
    def component(self) -> str:
        return self._component

    @property
    def session_id(self) -> str:
        return self._session_id

    def session_name(self) -> str:
        return self._task

    def register_sink(self, sink: Sink) -> None:
        """Register a sink on this logger.

        Loggers already derived from this one do not see the new sink.
        """
        with self._sinks_lock:
            self._sinks = (*self._sinks, sink)

    def _derive(self, task: str, session_id: str, data: Data) -> "Logger":
        child = Logger(self._component, on_fatal=self._on_fatal)
        child._task = task
        child._session_id = session_id
        child._data = data
        child._sinks = self._sinks
        return child

    def _allocate_session(self) -> int:
        with self._session_lock:
            self._next_session += 1
            return self._next_session

    def session(self, task: str, *data: Data | None) -> "Logger":
        """Derive a sub-session logger.

        The child's messages are prefixed with ``<parent prefix>.<task>`` and
        its records carry a new session id segment allocated by this logger.
        """
        sid = self._allocate_session()
        session_id = f"{self._session_id}.{sid}" if self._session_id else str(sid)
        return self._derive(f"{self._task}.{task}", session_id, self._merge(data))

    def with_data(self, data: Data | None) -> "Logger":
        """Derive a logger whose baseline data is merged with ``data``."""
        return self._derive(self._task, self._session_id, self._merge((data,)))

    def with_trace_info(self, request: Any) -> "Logger":
        """Derive a logger carrying trace and span ids from a request.

        Requests without a usable ``X-Vcap-Request-Id`` header get no trace
        data.
        """
        return self.with_data(trace_data(request))

    def _merge(self, given: tuple[Data | None, ...]) -> Data:
        data = dict(self._data)
        for extra in given:
            if extra:
                data.update(extra)
        return data

    def _base_data(self, given: tuple[Data | None, ...], **injected: Any) -> Data:
        data = self._merge(given)
        data.update(injected)
        if self._session_id:
            data["session"] = self._session_id
        return data

    def _emit(self, level: LogLevel, action: str, data: Data, error: str | None) -> None:
        record = Record(
            timestamp=format_timestamp(time.time_ns()),
            source=self._component,
            message=f"{self._task}.{action}",
            log_level=level,
            data=data,
            error=error,
        )
        for sink in self._sinks:
            if level >= sink.min_level:
                sink.write(record.copy())

    def debug(self, action: str, *data: Data | None) -> None:
        self._emit(LogLevel.DEBUG, action, self._base_data(data), None)

    def info(self, action: str, *data: Data | None) -> None:
        self._emit(LogLevel.INFO, action, self._base_data(data), None)

    def error(self, action: str, err: BaseException | None, *data: Data | None) -> None:
        """Log an error. ``err`` may be None, in which case no error is recorded."""
        injected: Data = {}
        message = None
        if err is not None:
            message = str(err)
            injected["error"] = message
        self._emit(LogLevel.ERROR, action, self._base_data(data, **injected), message)

    def fatal(self, action: str, err: BaseException | None, *data: Data | None) -> None:
        """Log a fatal error with the current stack, then call the fatal hook.

        The stack trace is stored in ``data["trace"]``, truncated to
        ``STACK_TRACE_BUFFER_SIZE`` characters.
        """
        stack = "".join(traceback.format_stack()[:-1])[:STACK_TRACE_BUFFER_SIZE]
        injected: Data = {}
        message = None
        if err is not None:
            message = str(err)
            injected["error"] = message
        injected["trace"] = stack
        self._emit(LogLevel.FATAL, action, self._base_data(data, **injected), message)
        self._on_fatal(err)
