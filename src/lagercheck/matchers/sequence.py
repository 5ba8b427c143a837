"""Matcher checking that a log contains an ordered sequence of entries."""

import io
import pprint
from collections.abc import Sequence
from typing import Any

from lagercheck.core.encoding.ndjson import (
    DEFAULT_CHUNK_SIZE,
    Reader,
    canonical_json,
    iter_records,
)
from lagercheck.core.errors import UnsupportedSourceError
from lagercheck.core.models import Data, Record


def _has_method(obj: Any, name: str) -> bool:
    return callable(getattr(obj, name, None))


def _open_source(actual: Any) -> Reader:
    """Return a reader positioned at the start of the records to match.

    Buffer and contents providers are re-read in full on every call; plain
    readers are consumed from wherever they currently are.
    """
    if _has_method(actual, "buffer"):
        return io.BytesIO(actual.buffer().contents())
    if _has_method(actual, "contents"):
        return io.BytesIO(actual.contents())
    if isinstance(actual, str):
        return io.StringIO(actual)
    if isinstance(actual, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(actual))
    if _has_method(actual, "read"):
        return actual
    raise UnsupportedSourceError(
        "contain_sequence must be passed a reader, a contents provider, "
        f"a buffer provider, or bytes. Got {type(actual).__name__}:\n"
        f"{pprint.pformat(actual)}"
    )


def data_contains(actual: Data, expected: Data) -> bool:
    """Check that every expected key is present in actual with an equal value.

    Values are compared through their canonical JSON form.
    """
    for key, expected_value in expected.items():
        if key not in actual:
            return False
        if canonical_json(actual[key]) != canonical_json(expected_value):
            return False
    return True


def record_contains(actual: Record, expected: Record) -> bool:
    """Check whether an actual record satisfies a partial expected record."""
    if expected.source and actual.source != expected.source:
        return False
    if expected.message and actual.message != expected.message:
        return False
    if actual.log_level != expected.log_level:
        return False
    return data_contains(actual.data, expected.data)


def index_of(records: Sequence[Record], expected: Record, start: int = 0) -> int:
    """Return the first index at or after ``start`` containing ``expected``, or -1."""
    for i in range(start, len(records)):
        if record_contains(records[i], expected):
            return i
    return -1


def contains_subsequence(actual: Sequence[Record], expected: Sequence[Record]) -> bool:
    """Check that ``expected`` occurs in ``actual`` in order.

    Each actual record satisfies at most one expected entry, and every
    search resumes just past the previous match.
    """
    cursor = 0
    for wanted in expected:
        i = index_of(actual, wanted, cursor)
        if i < 0:
            return False
        cursor = i + 1
    return True


def _render(records: Sequence[Record]) -> str:
    return pprint.pformat([r.to_dict() for r in records], indent=1).replace("\n", "\n\t")


class ContainSequence:
    """Matcher for an ordered sequence of expected log entries.

    The actual value is decoded again on every ``match`` call. Decode and
    usage errors propagate; a missing sequence is reported as False.

    Example:
        ```python
        matcher = contain_sequence(info(data("event", "starting")))
        assert matcher.match(sink), matcher.failure_message()
        ```
    """

    def __init__(self, expected: Sequence[Record], chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.expected: list[Record] = list(expected)
        self.actual: list[Record] = []
        self._chunk_size = chunk_size

    def match(self, actual: Any) -> bool:
        """Decode ``actual`` and search it for the expected sequence.

        Raises:
            UnsupportedSourceError: If ``actual`` cannot be read from.
            LogDecodeError: If ``actual`` contains a malformed record.
        """
        reader = _open_source(actual)
        self.actual = []
        self.actual = list(iter_records(reader, self._chunk_size))
        return contains_subsequence(self.actual, self.expected)

    def failure_message(self) -> str:
        return (
            f"Expected\n\t{_render(self.actual)}\n"
            f"to contain log sequence\n\t{_render(self.expected)}"
        )

    def negated_failure_message(self) -> str:
        return (
            f"Expected\n\t{_render(self.actual)}\n"
            f"not to contain log sequence\n\t{_render(self.expected)}"
        )

    def __repr__(self) -> str:
        return f"ContainSequence({self.expected!r})"


def contain_sequence(*expected: Record) -> ContainSequence:
    """Create a matcher for the given expected entries, in order."""
    return ContainSequence(expected)


def assert_contains_sequence(actual: Any, *expected: Record) -> None:
    """Assert that ``actual`` contains the expected entries in order.

    Raises:
        AssertionError: With the decoded log and the expected sequence.
    """
    matcher = ContainSequence(expected)
    if not matcher.match(actual):
        raise AssertionError(matcher.failure_message())


def assert_not_contains_sequence(actual: Any, *expected: Record) -> None:
    """Assert that ``actual`` does not contain the expected entries in order."""
    matcher = ContainSequence(expected)
    if matcher.match(actual):
        raise AssertionError(matcher.negated_failure_message())
