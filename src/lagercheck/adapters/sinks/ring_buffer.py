"""Ring buffer sink.

Provides bounded in-memory storage that automatically evicts the oldest
records when the buffer is full. Useful for services that want the recent
log tail available for inspection with predictable memory usage.
"""

import threading
from collections import deque

from lagercheck.core.encoding.ndjson import encode_records
from lagercheck.core.models import LogLevel, Record


class RingBufferSink:
    """Ring buffer implementation of Sink.

    Stores records in a fixed-size circular buffer. When the buffer is full,
    the oldest record is automatically evicted to make room for new ones.

    Args:
        max_size: Maximum number of records to keep.
        min_level: Lowest level the logger forwards to this sink.
    """

    def __init__(self, max_size: int, min_level: LogLevel = LogLevel.DEBUG) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.min_level = LogLevel.parse(min_level)
        self._buffer: deque[Record] = deque(maxlen=max_size)
        self._lock = threading.Lock()

    def write(self, record: Record) -> None:
        """Append a record, evicting the oldest one when full."""
        with self._lock:
            self._buffer.append(record)

    def records(self) -> list[Record]:
        """Return the retained records, oldest first."""
        with self._lock:
            return list(self._buffer)

    def contents(self) -> bytes:
        """Return the retained records serialized as NDJSON."""
        return encode_records(self.records()).encode("utf-8")
