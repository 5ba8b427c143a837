"""Port interfaces for sinks and record sources.

These protocols define the contracts that sink adapters and matcher sources
must implement. The logger and the matcher depend only on these interfaces,
not on concrete implementations.
"""

from typing import Protocol, runtime_checkable

from lagercheck.core.models import LogLevel, Record


@runtime_checkable
class Sink(Protocol):
    """Port for record destinations.

    The logger compares ``min_level`` against each record's level and only
    calls ``write`` for records at or above it.
    Examples: WriterSink, CaptureSink, RingBufferSink.
    """

    min_level: LogLevel

    def write(self, record: Record) -> None:
        """Append a record to the sink."""
        ...


@runtime_checkable
class ContentsProvider(Protocol):
    """Anything that can hand out all of its buffered bytes."""

    def contents(self) -> bytes:
        """Return every byte written so far, without consuming it."""
        ...


@runtime_checkable
class BufferProvider(Protocol):
    """Anything that owns a buffer of serialized records."""

    def buffer(self) -> ContentsProvider:
        """Return the underlying buffer."""
        ...
