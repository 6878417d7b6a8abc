"""Tests for TestStatus precedence and merging."""

import itertools
import logging

import pytest

from kevlar.models.status import TestStatus

ORDERED = [
    TestStatus.PASSED,
    TestStatus.KNOWN_FAILURE,
    TestStatus.FAILED,
    TestStatus.SKIPPED,
]


def test_precedence_values_are_stable() -> None:
    """Precedence ranks are fixed."""
    assert [status.precedence for status in ORDERED] == [0, 1, 2, 3]


def test_precedence_is_strict_total_order() -> None:
    """Exactly one of any two distinct statuses outranks the other."""
    for a, b in itertools.combinations(TestStatus, 2):
        assert (a.precedence > b.precedence) != (b.precedence > a.precedence)


def test_passed_is_minimum_and_skipped_is_maximum() -> None:
    """PASSED is the unique minimum and SKIPPED the unique maximum."""
    assert min(TestStatus, key=lambda s: s.precedence) is TestStatus.PASSED
    assert max(TestStatus, key=lambda s: s.precedence) is TestStatus.SKIPPED


@pytest.mark.parametrize(
    ("status", "label"),
    [
        (TestStatus.PASSED, "PASSED"),
        (TestStatus.KNOWN_FAILURE, "KNOWNFAIL"),
        (TestStatus.FAILED, "FAILED"),
        (TestStatus.SKIPPED, "SKIPPED"),
    ],
)
def test_label(status: TestStatus, label: str) -> None:
    """Each status has an upper-case display label."""
    assert status.label == label


@pytest.mark.parametrize(
    ("status", "level"),
    [
        (TestStatus.PASSED, logging.INFO),
        (TestStatus.KNOWN_FAILURE, logging.WARNING),
        (TestStatus.FAILED, logging.ERROR),
        (TestStatus.SKIPPED, logging.WARNING),
    ],
)
def test_log_level(status: TestStatus, level: int) -> None:
    """Statuses are reported at the matching logging level."""
    assert status.log_level == level


def test_merge_returns_higher_precedence() -> None:
    """Merging keeps whichever status ranks higher, in either order."""
    for a, b in itertools.combinations(ORDERED, 2):
        assert a.merge(b) is b
        assert b.merge(a) is b


def test_merge_is_idempotent() -> None:
    """Merging a status with itself is a no-op."""
    for status in TestStatus:
        assert status.merge(status) is status


def test_is_failing() -> None:
    """Only FAILED and SKIPPED fail the process."""
    assert {s for s in TestStatus if s.is_failing} == {
        TestStatus.FAILED,
        TestStatus.SKIPPED,
    }
