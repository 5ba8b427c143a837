"""NDJSON encoding and streaming decoding of log records."""

import codecs
import io
import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Protocol

from lagercheck.core.errors import LogDecodeError
from lagercheck.core.models import LogLevel, Record

DEFAULT_CHUNK_SIZE = 64 * 1024

_WHITESPACE = " \t\n\r"
_decoder = json.JSONDecoder()


class Reader(Protocol):
    """Anything with a forward-only ``read``."""

    def read(self, size: int = -1, /) -> bytes | str: ...


def encode_record(record: Record) -> bytes:
    """Encode a single record as one JSON line.

    Values in ``data`` that JSON cannot represent are written with ``str()``.
    """
    return (json.dumps(record.to_dict(), default=str) + "\n").encode("utf-8")


def encode_records(records: Iterable[Record]) -> str:
    """Encode records to newline-delimited JSON.

    Args:
        records: An iterable of Record objects.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no records.
    """
    return "".join(encode_record(record).decode("utf-8") for record in records)


def _normalize(value: Any) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Mapping):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def canonical_json(value: Any) -> str:
    """Render a value in the form used to compare record data.

    Keys are sorted and integral floats are rendered as integers, so ``1``
    and ``1.0`` share one form while ``True`` and ``1`` do not.

    Raises:
        TypeError: If the value is not JSON-serializable.
    """
    return json.dumps(
        _normalize(value), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


def record_from_dict(obj: Any) -> Record:
    """Build a Record from one decoded JSON value.

    Raises:
        LogDecodeError: If the value does not have the shape of a record.
    """
    if not isinstance(obj, dict):
        raise LogDecodeError(f"expected a JSON object, got {type(obj).__name__}")

    raw_level = obj.get("log_level", 0)
    if isinstance(raw_level, bool) or not isinstance(raw_level, int):
        raise LogDecodeError(f"invalid log_level: {raw_level!r}")
    try:
        level = LogLevel(raw_level)
    except ValueError:
        raise LogDecodeError(f"invalid log_level: {raw_level!r}") from None

    data = obj.get("data")
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise LogDecodeError(f"expected data to be an object, got {type(data).__name__}")

    error = obj.get("error")
    if error is not None and not isinstance(error, str):
        raise LogDecodeError(f"invalid error: {error!r}")
    return Record(
        timestamp=_string_field(obj, "timestamp"),
        source=_string_field(obj, "source"),
        message=_string_field(obj, "message"),
        log_level=level,
        data=data,
        error=error,
    )


def _string_field(obj: dict[str, Any], name: str) -> str:
    value = obj.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise LogDecodeError(f"invalid {name}: {value!r}")
    return value


def iter_records(reader: Reader, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Record]:
    """Decode back-to-back JSON records from a reader.

    Records may be separated by any amount of whitespace, including none.
    The reader is consumed in chunks of at least ``chunk_size``; it may return
    bytes (decoded as UTF-8) or text. A malformed record is reported as soon
    as a line break follows the point where decoding failed; only an
    unfinished record at the end of the buffered text waits for more input.

    Raises:
        LogDecodeError: If the stream holds a malformed or truncated record.
    """
    utf8 = codecs.getincrementaldecoder("utf-8")()
    pending = ""
    eof = False

    while True:
        pending = pending.lstrip(_WHITESPACE)
        if not pending:
            if eof:
                return
            pending, eof = _fill(reader, utf8, pending, chunk_size)
            continue

        try:
            obj, end = _decoder.raw_decode(pending)
        except json.JSONDecodeError as e:
            if eof or pending.find("\n", e.pos) != -1:
                raise LogDecodeError(f"malformed log record: {e.msg}") from e
            # Reads grow with the pending record.
            pending, eof = _fill(reader, utf8, pending, max(chunk_size, len(pending)))
            continue

        yield record_from_dict(obj)
        pending = pending[end:]


def _fill(
    reader: Reader,
    utf8: codecs.IncrementalDecoder,
    pending: str,
    chunk_size: int,
) -> tuple[str, bool]:
    """Append the next chunk from the reader, reporting end of input."""
    chunk = reader.read(chunk_size)
    if not chunk:
        try:
            return pending + utf8.decode(b"", final=True), True
        except UnicodeDecodeError as e:
            raise LogDecodeError(f"invalid UTF-8 in log stream: {e.reason}") from e
    if isinstance(chunk, str):
        return pending + chunk, False
    try:
        return pending + utf8.decode(chunk), False
    except UnicodeDecodeError as e:
        raise LogDecodeError(f"invalid UTF-8 in log stream: {e.reason}") from e


def decode_records(data: bytes | bytearray | memoryview | str) -> list[Record]:
    """Decode every record held in an in-memory buffer."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return list(iter_records(io.BytesIO(bytes(data))))
