"""In-memory capture of serialized records, for tests."""

import threading

from lagercheck.core.encoding.ndjson import encode_record
from lagercheck.core.models import LogLevel, Record


class CaptureBuffer:
    """Thread-safe byte buffer.

    ``contents`` always returns everything written so far, while ``read``
    consumes from a forward-only cursor, so the same buffer can back both
    repeatable and one-shot matcher sources.
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._read_pos = 0
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        with self._lock:
            self._data.extend(data)
        return len(data)

    def contents(self) -> bytes:
        """Return all bytes written so far."""
        with self._lock:
            return bytes(self._data)

    def read(self, size: int = -1, /) -> bytes:
        """Read unread bytes, advancing the cursor."""
        with self._lock:
            end = len(self._data) if size < 0 else min(len(self._data), self._read_pos + size)
            chunk = bytes(self._data[self._read_pos : end])
            self._read_pos = end
            return chunk

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._read_pos = 0


class CaptureSink:
    """Sink that keeps records in memory.

    Stores each record and its serialized form. Suitable for testing where
    the written log has to be inspected or matched afterwards.
    """

    def __init__(self, min_level: LogLevel = LogLevel.DEBUG) -> None:
        self.min_level = LogLevel.parse(min_level)
        self._buffer = CaptureBuffer()
        self._records: list[Record] = []
        self._lock = threading.Lock()

    def write(self, record: Record) -> None:
        """Write a record to the capture buffer."""
        with self._lock:
            self._records.append(record)
            self._buffer.write(encode_record(record))

    def buffer(self) -> CaptureBuffer:
        return self._buffer

    def contents(self) -> bytes:
        return self._buffer.contents()

    def records(self) -> list[Record]:
        """Return a snapshot of the records written so far."""
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._buffer.clear()
