"""Integration tests running logger output through the sequence matcher."""

import io

import pytest

from lagercheck.adapters.sinks import CaptureSink, RingBufferSink, WriterSink
from lagercheck.core.logger import Logger
from lagercheck.core.models import LogLevel
from lagercheck.matchers import (
    assert_contains_sequence,
    assert_not_contains_sequence,
    contain_sequence,
    data,
    debug,
    error,
    fatal,
    info,
    message,
    source,
)
from lagercheck.testing import CapturingLogger

pytestmark = [pytest.mark.integration]


class TaskFailed(Exception):
    pass


def test_service_scenario_in_order_and_reversed() -> None:
    """Info then error is found in order; the reverse order is not."""
    log = CapturingLogger("svc")
    err = TaskFailed("disk full")

    log.info("action", {"event": "starting", "task": "t"})
    log.error("action", err, {"event": "failed", "task": "t"})

    assert_contains_sequence(
        log.buffer(),
        info(data("event", "starting")),
        error(err, data("event", "failed")),
    )
    assert_not_contains_sequence(
        log.buffer(),
        error(err, data("event", "failed")),
        info(data("event", "starting")),
    )


def test_sessions_are_matched_by_message_and_session_id() -> None:
    log = CapturingLogger("svc")
    first = log.session("worker", {"worker": 1})
    second = log.session("worker", {"worker": 2})

    second.info("begin")
    first.info("begin")
    first.session("step").debug("run")

    assert_contains_sequence(
        log,
        info(message("svc.worker.begin"), data("session", "2", "worker", 2)),
        info(data("session", "1")),
        debug(message("svc.worker.step.run"), data("session", "1.1", "worker", 1)),
    )


def test_fatal_record_is_matchable_after_hook() -> None:
    calls: list = []
    log = CapturingLogger("svc", on_fatal=calls.append)

    log.error("action", TaskFailed("boom"), {"event": "failed"})
    log.fatal("action", TaskFailed("boom"), {"event": "failed"})

    assert len(calls) == 1
    matcher = contain_sequence(fatal(TaskFailed("boom"), source("svc"), data("event", "failed")))
    assert matcher.match(log.buffer())
    assert "trace" in matcher.actual[1].data
    assert matcher.actual[0].log_level is LogLevel.ERROR


def test_writer_sink_file_round_trip(tmp_path) -> None:
    """Records written to a file are matched by reading the file back."""
    path = tmp_path / "svc.log"
    log = Logger("svc")
    with path.open("wb") as out:
        log.register_sink(WriterSink(out, min_level=LogLevel.INFO))
        log.debug("hidden")
        log.info("shown", {"n": 1})
        log.error("broken", None)

    with path.open("rb") as stream:
        assert contain_sequence(info(message("svc.shown"), data("n", 1.0)), error(None)).match(stream)
        assert not contain_sequence(info()).match(stream)

    assert not contain_sequence(debug()).match(path.read_bytes())


def test_text_stream_source() -> None:
    out = io.StringIO()
    log = Logger("svc")
    log.register_sink(WriterSink(out))
    log.info("a")

    out.seek(0)
    assert contain_sequence(info(message("svc.a"))).match(out)


def test_ring_buffer_only_sees_recent_records() -> None:
    ring = RingBufferSink(max_size=2)
    log = Logger("svc")
    log.register_sink(ring)

    for n in range(3):
        log.info("tick", {"n": n})

    assert contain_sequence(info(data("n", 1)), info(data("n", 2))).match(ring)
    assert not contain_sequence(info(data("n", 0))).match(ring)


def test_each_sink_filters_independently() -> None:
    everything = CaptureSink()
    errors = CaptureSink(min_level=LogLevel.ERROR)
    log = Logger("svc")
    log.register_sink(everything)
    log.register_sink(errors)

    log.info("a")
    log.error("b", None)

    assert contain_sequence(info(), error(None)).match(everything)
    assert not contain_sequence(info()).match(errors)
    assert contain_sequence(error(None, message("svc.b"))).match(errors)
