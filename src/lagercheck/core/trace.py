"""Trace and span ids derived from the ``X-Vcap-Request-Id`` header."""

import random
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from lagercheck.core.errors import InvalidTraceIDError
from lagercheck.core.models import Data

REQUEST_ID_HEADER = "X-Vcap-Request-Id"

_HEX = re.compile(r"[0-9a-fA-F]+")
_MAX_UINT64 = (1 << 64) - 1


@dataclass(frozen=True)
class TraceID:
    """A 128-bit trace id split into high and low halves."""

    high: int = 0
    low: int = 0

    def empty(self) -> bool:
        return self.high == 0 and self.low == 0

    def __str__(self) -> str:
        if self.high == 0:
            return f"{self.low:016x}"
        return f"{self.high:016x}{self.low:016x}"


def _parse_uint64(text: str) -> int:
    if not _HEX.fullmatch(text):
        raise InvalidTraceIDError(f"not a hex number: {text!r}")
    value = int(text, 16)
    if value > _MAX_UINT64:
        raise InvalidTraceIDError(f"value out of range: {text!r}")
    return value


def trace_id_from_hex(text: str) -> TraceID:
    """Parse a 64- or 128-bit trace id from its hex form.

    Raises:
        InvalidTraceIDError: If the text is empty, not hex, or too long.
    """
    if len(text) > 32:
        raise InvalidTraceIDError(f"trace id longer than 32 hex digits: {text!r}")
    if len(text) > 16:
        return TraceID(high=_parse_uint64(text[:-16]), low=_parse_uint64(text[-16:]))
    return TraceID(low=_parse_uint64(text))


def span_id_for(trace_id: TraceID) -> str:
    """Derive the span id for a trace: its low half, or random if empty."""
    span = trace_id.low if not trace_id.empty() else random.getrandbits(64)
    return f"{span:016x}"


def _header_value(request: Any, name: str) -> str:
    """Look up a header case-insensitively.

    Accepts an ASGI scope, an object exposing ``headers``, or a mapping of
    header names to values.
    """
    if isinstance(request, Mapping) and "type" in request and "headers" in request:
        wanted = name.lower().encode("latin-1")
        for key, value in request["headers"]:
            if key.lower() == wanted:
                return value.decode("latin-1")
        return ""

    headers = getattr(request, "headers", request)
    if not isinstance(headers, Mapping):
        return ""
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if isinstance(key, str) and key.lower() == lowered:
                value = candidate
                break
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return "" if value is None else str(value)


def trace_data(request: Any) -> Data | None:
    """Return ``trace-id`` and ``span-id`` data for a request.

    Returns None when the request id header is absent or malformed.
    """
    header = _header_value(request, REQUEST_ID_HEADER)
    if not header:
        return None
    try:
        trace_id = trace_id_from_hex(header.replace("-", ""))
    except InvalidTraceIDError:
        return None
    return {"trace-id": str(trace_id), "span-id": span_id_for(trace_id)}
