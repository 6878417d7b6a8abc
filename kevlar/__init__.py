"""Kevlar, a light-weight harness for running a single test.

It sets up a test workspace and logging, runs the test body and keeps the
result record, so tests can focus on the system they exercise.
"""

from kevlar.config import ConfigError, TestConfig, load_config
from kevlar.harness import HarnessError, TestHarness
from kevlar.models.artifact import TestArtifact, TestArtifactType
from kevlar.models.event import TestEvent, TestFailure
from kevlar.models.record import TestOutcome, TestRecord
from kevlar.models.status import TestStatus
from kevlar.testcase import AsyncTestCase, TestCase
from kevlar.workspace import WorkspaceError, create_unique_dir, normalize_test_name

__all__ = [
    "AsyncTestCase",
    "ConfigError",
    "HarnessError",
    "TestArtifact",
    "TestArtifactType",
    "TestCase",
    "TestConfig",
    "TestEvent",
    "TestFailure",
    "TestHarness",
    "TestOutcome",
    "TestRecord",
    "TestStatus",
    "WorkspaceError",
    "create_unique_dir",
    "load_config",
    "normalize_test_name",
]
