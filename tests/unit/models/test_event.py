"""Tests for TestEvent and TestFailure."""

from pathlib import Path

from kevlar.models.artifact import TestArtifact, TestArtifactType
from kevlar.models.event import TestEvent, TestFailure
from kevlar.models.status import TestStatus
from kevlar.testing.factories import TestArtifactFactory


def test_new_event_is_empty() -> None:
    """New events have no description and no artifacts."""
    event = TestEvent(status=TestStatus.FAILED)

    assert event.description == ""
    assert event.artifacts == []


def test_str_status_only() -> None:
    """An event without details renders as its label."""
    assert str(TestEvent(status=TestStatus.PASSED)) == "PASSED"


def test_str_with_description() -> None:
    """The description follows the label."""
    event = TestEvent(status=TestStatus.KNOWN_FAILURE, description="ticket 42")

    assert str(event) == "KNOWNFAIL :: ticket 42"


def test_str_with_single_artifact() -> None:
    """A single artifact uses the singular noun."""
    event = TestEvent(status=TestStatus.SKIPPED, artifacts=[TestArtifactFactory.build()])

    assert str(event) == "SKIPPED :: Captured 1 artifact"


def test_str_with_description_and_artifacts() -> None:
    """Description and plural artifact count are both rendered."""
    event = TestEvent(status=TestStatus.FAILED).with_description("timeout")
    event.add_artifact(TestArtifactFactory.build())
    event.add_artifact(TestArtifactFactory.build())

    assert str(event) == "FAILED :: timeout :: Captured 2 artifacts"


def test_with_description_returns_independent_copy() -> None:
    """with_description does not share state with the original."""
    original = TestEvent(status=TestStatus.FAILED)

    described = original.with_description("boom")
    described.add_artifact(TestArtifactFactory.build())

    assert original.description == ""
    assert original.artifacts == []
    assert described.status is TestStatus.FAILED


def test_with_artifact_appends_to_copy() -> None:
    """with_artifact returns a copy with the artifact at the end."""
    first = TestArtifactFactory.build(label="first")
    second = TestArtifactFactory.build(label="second")
    event = TestEvent(status=TestStatus.FAILED).with_artifact(first)

    extended = event.with_artifact(second)

    assert [a.label for a in extended.artifacts] == ["first", "second"]
    assert [a.label for a in event.artifacts] == ["first"]


def test_set_description_mutates_in_place() -> None:
    """set_description updates the event itself."""
    event = TestEvent(status=TestStatus.PASSED)

    event.set_description("all good")

    assert event.description == "all good"


def test_add_artifact_preserves_order_and_status() -> None:
    """Artifacts are appended in order and the status never changes."""
    event = TestEvent(status=TestStatus.KNOWN_FAILURE)
    log_file = TestArtifact(path=Path("run.log"), label="log").with_kind(
        TestArtifactType.LOG
    )
    image = TestArtifact(path=Path("screen.png"), label="screen").with_kind(
        TestArtifactType.IMAGE
    )

    event.add_artifact(log_file)
    event.add_artifact(image)

    assert event.artifacts == [log_file, image]
    assert event.status is TestStatus.KNOWN_FAILURE


def test_failure_carries_event() -> None:
    """TestFailure keeps the event and uses its rendering as message."""
    event = TestEvent(status=TestStatus.FAILED, description="bad response")

    failure = TestFailure(event)

    assert failure.event is event
    assert str(failure) == "FAILED :: bad response"
