"""Protocols implemented by test bodies run through the harness."""

from typing import Protocol, runtime_checkable

from kevlar.config import TestConfig
from kevlar.models.record import TestOutcome, TestRecord


@runtime_checkable
class TestCase(Protocol):
    """A test body run synchronously."""

    def run(self, test_config: TestConfig, test_record: TestRecord) -> TestOutcome:
        """Run the test.

        Args:
            test_config: Run configuration, including the workspace path
            test_record: Record to apply intermediate events to

        Returns:
            None on success, or the event explaining the failure

        """
        ...


@runtime_checkable
class AsyncTestCase(Protocol):
    """A test body run on the event loop."""

    async def run_async(
        self, test_config: TestConfig, test_record: TestRecord
    ) -> TestOutcome:
        """Run the test. Same contract as TestCase.run."""
        ...
