"""Aggregate result of a single test run."""

import logging
from collections.abc import Sequence

from kevlar.models.event import TestEvent
from kevlar.models.status import TestStatus

# None signals unconditional success, an event explains a failure.
type TestOutcome = TestEvent | None


class TestRecord:
    """Name, running status and event history of one test run.

    The status starts at PASSED and only ever escalates: every applied event
    is merged by precedence and appended to the history. A record is owned by
    a single run and is not safe for concurrent mutation.
    """

    __test__ = False

    def __init__(self, name: str, log: logging.Logger | None = None) -> None:
        self._name = name
        self._status = TestStatus.PASSED
        self._history: list[TestEvent] = []
        self._log = log or logging.getLogger(__name__)

    def __repr__(self) -> str:
        return (
            f"TestRecord(name={self._name!r}, status={self._status.label}, "
            f"events={len(self._history)})"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> TestStatus:
        return self._status

    @property
    def history(self) -> Sequence[TestEvent]:
        """Applied events in the order they were applied."""
        return tuple(self._history)

    def apply(self, event: TestEvent) -> None:
        """Log the event, merge its status and append it to the history."""
        self._log.log(event.status.log_level, "%s", event)
        self._status = self._status.merge(event.status)
        self._history.append(event)

    def apply_outcome(self, outcome: TestOutcome) -> None:
        """Apply the outcome of a test body.

        A successful outcome carries no event: nothing is logged or recorded
        and the status, already at least PASSED, is left as it is.
        """
        if outcome is None:
            self._status = self._status.merge(TestStatus.PASSED)
            return
        self.apply(outcome)
