"""Test harness driving a single test run."""

import logging
import platform
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from kevlar.config import TestConfig, load_config
from kevlar.models.event import TestEvent, TestFailure
from kevlar.models.record import TestOutcome, TestRecord
from kevlar.models.status import TestStatus
from kevlar.testcase import AsyncTestCase, TestCase
from kevlar.workspace import normalize_test_name

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class HarnessError(Exception):
    """Raised when the harness is used incorrectly."""


def get_version() -> str:
    """Return the installed package version."""
    try:
        return version("kevlar")
    except PackageNotFoundError:
        return "unknown"


@dataclass(frozen=True, kw_only=True)
class LogSinks:
    """Handlers attached to the root logger for one run."""

    handlers: Sequence[logging.Handler]
    previous_level: int


def init_logging(test_name: str, workspace: Path, level: str = "INFO") -> LogSinks:
    """Send log records to stderr and to a log file in the workspace.

    Returns:
        The attached sinks, to be passed to close_logging

    """
    formatter = logging.Formatter(LOG_FORMAT)
    log_file = workspace / f"{normalize_test_name(test_name)}.log"
    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stderr),
        logging.FileHandler(log_file, encoding="utf-8"),
    ]

    root = logging.getLogger()
    sinks = LogSinks(handlers=handlers, previous_level=root.level)
    root.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return sinks


def close_logging(sinks: LogSinks) -> None:
    """Detach sinks attached by init_logging and restore the root level."""
    root = logging.getLogger()
    for handler in sinks.handlers:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(sinks.previous_level)


def log_record_summary(logger: logging.Logger, record: TestRecord) -> None:
    """Log the final status followed by every event of the run."""
    logger.info("=" * 80)
    logger.info("Test Result: %s", record.status.label)
    logger.info("=" * 80)
    for event in record.history:
        logger.info("  %s", event)


class TestHarness:
    """Runs one test body against a provisioned workspace.

    Use TestHarness.create to load configuration, create the workspace and
    wire logging, then call run or run_async exactly once.
    """

    __test__ = False

    def __init__(
        self,
        config: TestConfig,
        record: TestRecord,
        log_sinks: LogSinks | None = None,
    ) -> None:
        self.config = config
        self.record = record
        self._log_sinks = log_sinks
        self._has_run = False

    @classmethod
    def create(cls, test_name: str, config_file: Path | None = None) -> "TestHarness":
        """Set up a harness for a new run.

        Raises:
            ConfigError: If the configuration is missing or invalid
            WorkspaceError: If the workspace cannot be created

        """
        config = load_config(test_name, config_file)
        sinks = init_logging(test_name, config.path, config.log_level)
        log.info("Kevlar Test Harness :: %s", get_version())
        log.info("-" * 29)
        log.info(
            "Host: %s (%s %s), Python %s",
            platform.node(),
            platform.system(),
            platform.release(),
            platform.python_version(),
        )
        log.info("Test workspace: %s", config.path)
        record = TestRecord(test_name, log=logging.getLogger("kevlar.record"))
        return cls(config=config, record=record, log_sinks=sinks)

    def run(self, test_case: TestCase) -> TestRecord:
        """Run a synchronous test body and return the final record."""
        self._start()
        try:
            try:
                outcome = test_case.run(self.config, self.record)
            except TestFailure as e:
                outcome = e.event
            except Exception as e:
                outcome = self._unhandled(test_case, e)
            return self._finish(outcome)
        finally:
            self._close_logging()

    async def run_async(self, test_case: AsyncTestCase) -> TestRecord:
        """Run an asynchronous test body and return the final record."""
        self._start()
        try:
            try:
                outcome = await test_case.run_async(self.config, self.record)
            except TestFailure as e:
                outcome = e.event
            except Exception as e:
                outcome = self._unhandled(test_case, e)
            return self._finish(outcome)
        finally:
            self._close_logging()

    def _close_logging(self) -> None:
        if self._log_sinks is not None:
            close_logging(self._log_sinks)
            self._log_sinks = None

    def _start(self) -> None:
        if self._has_run:
            raise HarnessError("Test harness has already run")
        self._has_run = True
        log.info("Running test %s", self.record.name)

    def _unhandled(self, test_case: object, error: Exception) -> TestEvent:
        log.error(
            "Test %s raised an unhandled exception: %s",
            type(test_case).__name__,
            error,
            exc_info=error,
        )
        return TestEvent(
            status=TestStatus.FAILED,
            description=f"Unhandled exception: {type(error).__name__}: {error}",
        )

    def _finish(self, outcome: TestOutcome) -> TestRecord:
        self.record.apply_outcome(outcome)
        log_record_summary(log, self.record)
        return self.record
