"""Logger pre-wired to an in-memory capture buffer."""

from lagercheck.adapters.sinks.in_memory import CaptureBuffer, CaptureSink
from lagercheck.core.logger import FatalHook, Logger
from lagercheck.core.models import LogLevel


class CapturingLogger(Logger):
    """Logger that records everything it logs, at every level.

    ``buffer()`` returns the capture buffer, which can be handed straight to
    the sequence matcher.
    """

    def __init__(self, component: str, *, on_fatal: FatalHook | None = None) -> None:
        super().__init__(component, on_fatal=on_fatal)
        self.sink = CaptureSink(min_level=LogLevel.DEBUG)
        self.register_sink(self.sink)

    def buffer(self) -> CaptureBuffer:
        return self.sink.buffer()
