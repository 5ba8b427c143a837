"""Sink adapters implementing the core Sink port."""

from lagercheck.adapters.sinks.in_memory import CaptureBuffer, CaptureSink
from lagercheck.adapters.sinks.ring_buffer import RingBufferSink
from lagercheck.adapters.sinks.writer import WriterSink

__all__ = [
    "CaptureBuffer",
    "CaptureSink",
    "RingBufferSink",
    "WriterSink",
]
