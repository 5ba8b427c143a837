"""Python logging handler adapter for lagercheck.

This adapter bridges Python's standard library logging module to a
lagercheck Logger, so records emitted by third-party libraries end up in
the same sinks as the application's structured log.
"""

import logging

from lagercheck.core.logger import Logger
from lagercheck.core.models import Data

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


# Default attributes to extract from LogRecord
_DEFAULT_INCLUDE_ATTRS = ["module", "funcName", "lineno", "pathname"]


class LagerHandler(logging.Handler):
    """Logging handler that forwards log records to a lagercheck Logger.

    The stdlib logger name becomes the action, the formatted message is
    stored in ``data["message"]``. CRITICAL records are logged as ERROR:
    the handler never triggers the fatal hook.

    Example:
        ```python
        from lagercheck import LagerHandler, Logger

        logger = Logger("svc")
        logging.getLogger().addHandler(LagerHandler(logger))
        ```
    """

    def __init__(
        self,
        logger: Logger,
        include_attrs: list[str] | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with a target logger.

        Args:
            logger: Logger receiving the forwarded records.
            include_attrs: List of LogRecord attributes to include. Defaults to
                ["module", "funcName", "lineno", "pathname"].
            level: Minimum stdlib level handled.
        """
        super().__init__(level)
        self._logger = logger
        self._include_attrs = _DEFAULT_INCLUDE_ATTRS if include_attrs is None else include_attrs

    def emit(self, record: logging.LogRecord) -> None:
        """Forward a log record to the logger.

        Args:
            record: The log record to emit.
        """
        try:
            attr_mapping: dict[str, str | int | float | bool] = {
                "module": record.module,
                "funcName": record.funcName or "",
                "lineno": record.lineno,
                "pathname": record.pathname,
            }

            data: Data = {
                key: attr_mapping[key] for key in self._include_attrs if key in attr_mapping
            }

            # Add any extra attributes passed via logging call
            for key, value in record.__dict__.items():
                if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                    value, (str, int, float, bool)
                ):
                    data[key] = value

            data["message"] = record.getMessage()
            action = record.name

            if record.levelno >= logging.ERROR:
                err = record.exc_info[1] if record.exc_info else None
                self._logger.error(action, err, data)
            elif record.levelno >= logging.INFO:
                self._logger.info(action, data)
            else:
                self._logger.debug(action, data)
        except Exception:
            self.handleError(record)
