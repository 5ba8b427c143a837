"""Expected-entry builders and the log sequence matcher."""

from lagercheck.matchers.entries import (
    ANY_ERR,
    Option,
    action,
    data,
    debug,
    entry,
    error,
    fatal,
    info,
    message,
    source,
)
from lagercheck.matchers.sequence import (
    ContainSequence,
    assert_contains_sequence,
    assert_not_contains_sequence,
    contain_sequence,
    contains_subsequence,
    record_contains,
)

__all__ = [
    "ANY_ERR",
    "ContainSequence",
    "Option",
    "action",
    "assert_contains_sequence",
    "assert_not_contains_sequence",
    "contain_sequence",
    "contains_subsequence",
    "data",
    "debug",
    "entry",
    "error",
    "fatal",
    "info",
    "message",
    "record_contains",
    "source",
]
