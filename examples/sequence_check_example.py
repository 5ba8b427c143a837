"""Example: asserting on the order of log records.

Run with:
    python -m examples.sequence_check_example
"""

from lagercheck.matchers import contain_sequence, data, error, info, source
from lagercheck.testing import CapturingLogger


class DeployError(Exception):
    pass


def deploy(logger, task: str) -> None:
    task_log = logger.session("deploy", {"task": task})
    task_log.info("action", {"event": "starting"})
    task_log.error("action", DeployError("no capacity"), {"event": "failed"})


if __name__ == "__main__":
    log = CapturingLogger("svc")
    deploy(log, "t1")

    matcher = contain_sequence(
        info(source("svc"), data("event", "starting", "task", "t1")),
        error(DeployError("no capacity"), data("event", "failed")),
    )
    if matcher.match(log.buffer()):
        print("sequence found")
    else:
        print(matcher.failure_message())
