"""Sink writing serialized records to a file-like object."""

import io
import threading
from typing import IO, Any

from lagercheck.core.encoding.ndjson import encode_record
from lagercheck.core.models import LogLevel, Record


class WriterSink:
    """Sink implementation that writes one JSON line per record.

    Works with binary writers (files opened in ``"wb"`` mode, sockets wrapped
    by ``makefile``) and text writers such as ``sys.stdout``.

    Args:
        writer: Destination for the serialized records.
        min_level: Lowest level the logger forwards to this sink.
    """

    def __init__(self, writer: IO[Any], min_level: LogLevel = LogLevel.DEBUG) -> None:
        self.min_level = LogLevel.parse(min_level)
        self._writer = writer
        self._text = isinstance(writer, io.TextIOBase)
        self._lock = threading.Lock()

    def write(self, record: Record) -> None:
        """Serialize and write a record."""
        line = encode_record(record)
        with self._lock:
            if self._text:
                self._writer.write(line.decode("utf-8"))
            else:
                self._writer.write(line)
