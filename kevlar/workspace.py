"""Provisioning of unique per-run workspace directories."""

import logging
import re
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

log = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9]")


class WorkspaceError(Exception):
    """Raised when a test workspace cannot be created."""


def normalize_test_name(test_name: str) -> str:
    """Reduce a test name to lowercase ASCII letters and digits.

    Raises:
        WorkspaceError: If nothing is left after normalization

    """
    normalized = _INVALID_NAME_CHARS.sub("", test_name.lower())
    if not normalized:
        raise WorkspaceError(f"Invalid test name: {test_name!r}")
    return normalized


def create_unique_dir(
    base_path: Path,
    test_name: str,
    now: Callable[[], datetime] = datetime.now,
) -> Path:
    """Create a fresh workspace directory for a test run.

    The directory is named ``<name>_<timestamp>`` under ``base_path``, with
    a ``_<n>`` suffix added when a directory of that name already exists.
    The timestamp is re-read on every attempt.

    Args:
        base_path: Directory to create the workspace in, created if missing
        test_name: Raw test name, normalized with normalize_test_name
        now: Clock returning the current local time

    Returns:
        Path of the newly created, empty directory

    Raises:
        WorkspaceError: If the base directory or the workspace cannot be
            created for any reason other than a name collision

    """
    try:
        base_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WorkspaceError(f"Unable to create test workspace: {base_path}") from e

    name = normalize_test_name(test_name)

    attempt = 0
    while True:
        timestamp = now().strftime(TIMESTAMP_FORMAT)
        candidate_name = f"{name}_{timestamp}"
        if attempt > 0:
            candidate_name = f"{candidate_name}_{attempt}"
        candidate = base_path / candidate_name

        try:
            candidate.mkdir()
        except FileExistsError:
            log.debug("Workspace %s already exists, retrying", candidate)
            attempt += 1
            continue
        except OSError as e:
            raise WorkspaceError(f"Error creating directory '{candidate}'") from e

        log.debug("Created test workspace %s", candidate)
        return candidate
