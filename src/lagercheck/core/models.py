"""Core domain models for structured log records."""

import copy
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

Data = dict[str, Any]


class LogLevel(IntEnum):
    """Ordered log severities.

    The integer value is the ``log_level`` written on the wire.
    """

    DEBUG = 0
    INFO = 1
    ERROR = 2
    FATAL = 3

    @classmethod
    def parse(cls, value: "str | int | LogLevel") -> "LogLevel":
        """Convert a configuration value such as ``"info"`` or ``"2"``.

        Raises:
            ValueError: If the value names no known level.
        """
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)
        text = value.strip()
        if text.isdigit():
            return cls(int(text))
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"unknown log level: {value!r}") from None


@dataclass
class Record:
    """A structured log record.

    Attributes:
        timestamp: Seconds since epoch with nine fractional digits.
        source: Component name of the logger lineage.
        message: Session path and action joined with a dot.
        log_level: Severity of the record.
        data: Additional structured fields.
        error: Display string of the error, if one was logged.
    """

    timestamp: str = ""
    source: str = ""
    message: str = ""
    log_level: LogLevel = LogLevel.DEBUG
    data: Data = field(default_factory=dict)
    error: str | None = None

    def copy(self) -> "Record":
        """Return a copy whose data can be mutated independently."""
        return Record(
            timestamp=self.timestamp,
            source=self.source,
            message=self.message,
            log_level=self.log_level,
            data=copy.deepcopy(self.data),
            error=self.error,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of the record."""
        obj: dict[str, Any] = {
            "timestamp": self.timestamp,
            "source": self.source,
            "message": self.message,
            "log_level": int(self.log_level),
            "data": self.data,
        }
        if self.error is not None:
            obj["error"] = self.error
        return obj
