"""Test status values and their merge precedence."""

import logging
from enum import Enum


class TestStatus(Enum):
    """Overall or per-event status of a test run.

    Statuses are merged by precedence, highest wins:
    PASSED < KNOWN_FAILURE < FAILED < SKIPPED.
    """

    __test__ = False

    # The test passed.
    PASSED = "passed"
    # The issue is known and not going to be fixed soon. Basically a pass,
    # but we still want to know when it is encountered.
    KNOWN_FAILURE = "known_failure"
    # A bug either in the system under test or in the test itself.
    FAILED = "failed"
    # Skipped by manual intervention or unmet requirements. Provides no
    # signal at all, so it outranks every other status.
    SKIPPED = "skipped"

    @property
    def precedence(self) -> int:
        """Rank used when merging statuses. Do not renumber."""
        return _PRECEDENCE[self]

    @property
    def label(self) -> str:
        """Upper-case label used in human-readable output."""
        return _LABELS[self]

    @property
    def log_level(self) -> int:
        """Logging level an event with this status is reported at."""
        return _LOG_LEVELS[self]

    @property
    def is_failing(self) -> bool:
        """Whether a run ending with this status should fail the process."""
        return self in {TestStatus.FAILED, TestStatus.SKIPPED}

    def merge(self, other: "TestStatus") -> "TestStatus":
        """Return whichever status has the higher precedence.

        Ties keep ``self``.
        """
        if other.precedence > self.precedence:
            return other
        return self


_PRECEDENCE = {
    TestStatus.PASSED: 0,
    TestStatus.KNOWN_FAILURE: 1,
    TestStatus.FAILED: 2,
    TestStatus.SKIPPED: 3,
}

_LABELS = {
    TestStatus.PASSED: "PASSED",
    TestStatus.KNOWN_FAILURE: "KNOWNFAIL",
    TestStatus.FAILED: "FAILED",
    TestStatus.SKIPPED: "SKIPPED",
}

_LOG_LEVELS = {
    TestStatus.PASSED: logging.INFO,
    TestStatus.KNOWN_FAILURE: logging.WARNING,
    TestStatus.FAILED: logging.ERROR,
    TestStatus.SKIPPED: logging.WARNING,
}
