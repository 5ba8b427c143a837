"""BDD step definitions for log sequence matching features."""

import io
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from lagercheck.core.models import Record
from lagercheck.matchers import contain_sequence, data, error, fatal, info
from lagercheck.testing import CapturingLogger


@dataclass
class SequenceScenarioContext:
    """State shared between the steps of one scenario."""

    logger: CapturingLogger | None = None
    source: Any = None
    expected: list[Record] = field(default_factory=list)


@pytest.fixture
def ctx() -> SequenceScenarioContext:
    """Fresh scenario context for each test."""
    return SequenceScenarioContext()


# === Background Steps ===
@given(parsers.parse('a logger for component "{component}" writing to a capture buffer'))
def step_logger(ctx: SequenceScenarioContext, component: str) -> None:
    ctx.logger = CapturingLogger(component)
    ctx.source = ctx.logger.buffer()


@given(parsers.parse('the logger logs info "{action}" with event "{event}" and task "{task}"'))
def step_log_info(ctx: SequenceScenarioContext, action: str, event: str, task: str) -> None:
    ctx.logger.info(action, {"event": event, "task": task})


@given(
    parsers.parse(
        'the logger logs error "{action}" with error "{err}", event "{event}" and task "{task}"'
    )
)
def step_log_error(
    ctx: SequenceScenarioContext, action: str, err: str, event: str, task: str
) -> None:
    ctx.logger.error(action, RuntimeError(err), {"event": event, "task": task})


@given("the log is read as a stream")
def step_stream(ctx: SequenceScenarioContext) -> None:
    ctx.source = io.BytesIO(ctx.logger.buffer().contents())


# === Expectation Steps ===
@when(
    parsers.parse(
        'I expect info with event "{event}" followed by error "{err}" with event "{err_event}"'
    )
)
def step_expect_info_then_error(
    ctx: SequenceScenarioContext, event: str, err: str, err_event: str
) -> None:
    ctx.expected = [
        info(data("event", event)),
        error(RuntimeError(err), data("event", err_event)),
    ]


@when(
    parsers.parse(
        'I expect error "{err}" with event "{err_event}" followed by info with event "{event}"'
    )
)
def step_expect_error_then_info(
    ctx: SequenceScenarioContext, event: str, err: str, err_event: str
) -> None:
    ctx.expected = [
        error(RuntimeError(err), data("event", err_event)),
        info(data("event", event)),
    ]


@when(parsers.parse('I expect fatal with event "{event}"'))
def step_expect_fatal(ctx: SequenceScenarioContext, event: str) -> None:
    ctx.expected = [fatal(data("event", event))]


@when(parsers.parse('I expect info with event "{event}" twice'))
def step_expect_info_twice(ctx: SequenceScenarioContext, event: str) -> None:
    ctx.expected = [info(data("event", event)), info(data("event", event))]


# === Outcome Steps ===
@then("the log contains the sequence")
def step_contains(ctx: SequenceScenarioContext) -> None:
    matcher = contain_sequence(*ctx.expected)
    assert matcher.match(ctx.source), matcher.failure_message()


@then("the log does not contain the sequence")
def step_does_not_contain(ctx: SequenceScenarioContext) -> None:
    matcher = contain_sequence(*ctx.expected)
    assert not matcher.match(ctx.source), matcher.negated_failure_message()
