"""Exceptions raised by lagercheck."""


class LagerCheckError(Exception):
    """Base class for all lagercheck errors."""


class UnsupportedSourceError(LagerCheckError, TypeError):
    """The matcher was given an actual value it cannot read records from."""


class LogDecodeError(LagerCheckError, ValueError):
    """A record stream contained a malformed record."""


class InvalidTraceIDError(LagerCheckError, ValueError):
    """A request id header could not be parsed as a trace id."""
