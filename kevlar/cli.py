"""CLI entry point for running a single test through the harness."""

import argparse
import asyncio
import importlib
import json
import sys
from pathlib import Path
from typing import Any

from kevlar.config import ConfigError
from kevlar.harness import TestHarness
from kevlar.models.record import TestRecord
from kevlar.testcase import AsyncTestCase, TestCase
from kevlar.workspace import WorkspaceError

EXIT_SETUP_ERROR = 2


class TargetNotFoundError(Exception):
    """Raised when the test target cannot be imported."""


def load_target(target: str) -> type:
    """Import a test class given as ``package.module:ClassName``."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise TargetNotFoundError(
            f"Invalid target '{target}', expected 'package.module:ClassName'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetNotFoundError(f"Cannot import module '{module_name}': {e}") from e

    try:
        test_cls: type = getattr(module, attr)
    except AttributeError as e:
        raise TargetNotFoundError(
            f"Module '{module_name}' has no attribute '{attr}'"
        ) from e
    return test_cls


def create_test_case(test_cls: type) -> TestCase | AsyncTestCase:
    """Instantiate a test class and check it implements a run method.

    Raises:
        TargetNotFoundError: If the class cannot be instantiated without
            arguments or has neither run nor run_async

    """
    try:
        test_case = test_cls()
    except TypeError as e:
        raise TargetNotFoundError(
            f"Cannot instantiate '{test_cls.__name__}' without arguments: {e}"
        ) from e

    if not isinstance(test_case, (AsyncTestCase, TestCase)):
        raise TargetNotFoundError(
            f"'{test_cls.__name__}' defines neither run nor run_async"
        )
    return test_case


def run(test_cls: type, test_name: str, config_file: Path | None = None) -> int:
    """Run the test class and return the process exit code."""
    test_case = create_test_case(test_cls)
    harness = TestHarness.create(test_name, config_file)

    if isinstance(test_case, AsyncTestCase):
        record = asyncio.run(harness.run_async(test_case))
    else:
        record = harness.run(test_case)

    print(json.dumps(format_output(record, harness.config.path), indent=2))
    return 1 if record.status.is_failing else 0


def format_output(record: TestRecord, workspace: Path) -> dict[str, Any]:
    """Format a test record for JSON output."""
    return {
        "name": record.name,
        "status": record.status.value,
        "workspace": str(workspace),
        "events": [
            {
                "status": event.status.value,
                "description": event.description,
                "artifacts": [
                    artifact.model_dump(mode="json") for artifact in event.artifacts
                ],
            }
            for event in record.history
        ],
    }


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Run a test through the harness")
    parser.add_argument(
        "target",
        help="Test class to run, as package.module:ClassName",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML or JSON config file (defaults to KEVLAR_* environment variables)",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Test name used for the workspace and log file (defaults to class name)",
    )

    args = parser.parse_args()

    try:
        test_cls = load_target(args.target)
        exit_code = run(test_cls, args.name or test_cls.__name__, args.config)
    except (TargetNotFoundError, ConfigError, WorkspaceError) as e:
        print(f"error: test setup failed: {e}", file=sys.stderr)
        exit_code = EXIT_SETUP_ERROR
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
