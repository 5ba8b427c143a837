"""lagercheck: structured session logging and log sequence matching."""

from lagercheck.adapters.logging import LagerHandler
from lagercheck.adapters.sinks import CaptureBuffer, CaptureSink, RingBufferSink, WriterSink
from lagercheck.core.encoding.ndjson import (
    canonical_json,
    decode_records,
    encode_record,
    encode_records,
    iter_records,
)
from lagercheck.core.errors import (
    InvalidTraceIDError,
    LagerCheckError,
    LogDecodeError,
    UnsupportedSourceError,
)
from lagercheck.core.logger import STACK_TRACE_BUFFER_SIZE, Logger
from lagercheck.core.models import Data, LogLevel, Record
from lagercheck.core.ports import BufferProvider, ContentsProvider, Sink
from lagercheck.core.trace import REQUEST_ID_HEADER
from lagercheck.matchers import (
    ContainSequence,
    assert_contains_sequence,
    assert_not_contains_sequence,
    contain_sequence,
)
from lagercheck.testing import CapturingLogger

__all__ = [
    "REQUEST_ID_HEADER",
    "STACK_TRACE_BUFFER_SIZE",
    "BufferProvider",
    "CaptureBuffer",
    "CaptureSink",
    "CapturingLogger",
    "ContainSequence",
    "ContentsProvider",
    "Data",
    "InvalidTraceIDError",
    "LagerCheckError",
    "LagerHandler",
    "LogDecodeError",
    "LogLevel",
    "Logger",
    "Record",
    "RingBufferSink",
    "Sink",
    "UnsupportedSourceError",
    "WriterSink",
    "assert_contains_sequence",
    "assert_not_contains_sequence",
    "canonical_json",
    "contain_sequence",
    "decode_records",
    "encode_record",
    "encode_records",
    "iter_records",
]
