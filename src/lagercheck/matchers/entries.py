"""Builders for expected log entries.

An expected entry is a partially filled Record: an empty ``source`` or
``message`` matches anything, every ``data`` key must be present, and the
level always has to match.

Example:
    ```python
    from lagercheck.matchers import data, error, info, source

    expected = [
        info(source("svc"), data("event", "starting")),
        error(err, data("event", "failed")),
    ]
    ```
"""

from collections.abc import Callable
from typing import Any

from lagercheck.core.models import LogLevel, Record

Option = Callable[[Record], None]

# Passing ANY_ERR to error() or fatal() leaves the "error" key unconstrained.
ANY_ERR: BaseException | None = None


def entry(level: LogLevel, *options: Option) -> Record:
    """Build an expected entry with the given level, then apply each option."""
    record = Record(log_level=level, data={})
    for option in options:
        option(record)
    return record


def debug(*options: Option) -> Record:
    return entry(LogLevel.DEBUG, *options)


def info(*options: Option) -> Record:
    return entry(LogLevel.INFO, *options)


def _with_error(err: object, options: tuple[Option, ...]) -> tuple[Option, ...]:
    if err is None:
        return options
    return (*options, data("error", str(err)))


def error(err: object, *options: Option) -> Record:
    """Build an expected ERROR entry.

    When ``err`` is not None its display string is required in
    ``data["error"]``.
    """
    return entry(LogLevel.ERROR, *_with_error(err, options))


def fatal(err: object = None, *options: Option) -> Record:
    """Build an expected FATAL entry.

    ``err`` is optional; a callable first argument is read as an option, so
    ``fatal(source("svc"))`` has no error constraint.
    """
    if callable(err):
        options = (err, *options)
        err = None
    return entry(LogLevel.FATAL, *_with_error(err, options))


def message(msg: str) -> Option:
    """Require the record message to equal ``msg``."""

    def apply(record: Record) -> None:
        record.message = msg

    return apply


def action(name: str) -> Option:
    """Alias of message()."""
    return message(name)


def source(name: str) -> Option:
    """Require the record source to equal ``name``."""

    def apply(record: Record) -> None:
        record.source = name

    return apply


def data(*kv: Any) -> Option:
    """Require key/value pairs in the record data.

    Arguments alternate key, value. A trailing key without a value expects
    the empty string.

    Raises:
        TypeError: When the option is applied and a key is not a string.
    """
    if len(kv) % 2 == 1:
        kv = (*kv, "")

    def apply(record: Record) -> None:
        for i in range(0, len(kv), 2):
            key = kv[i]
            if not isinstance(key, str):
                raise TypeError(
                    f"invalid type for data key, want str, got {type(key).__name__}: {key!r}"
                )
            record.data[key] = kv[i + 1]

    return apply
