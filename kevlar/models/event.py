"""Models for notable occurrences during a test run."""

from dataclasses import dataclass, field, replace
from typing import Self

from kevlar.models.artifact import TestArtifact
from kevlar.models.status import TestStatus


@dataclass(kw_only=True)
class TestEvent:
    """A single notable occurrence during a test run.

    The status is fixed at construction. The description and artifact list
    may still be filled in by the owner until the event is applied to a
    record.
    """

    __test__ = False

    status: TestStatus
    description: str = ""
    artifacts: list[TestArtifact] = field(default_factory=list)

    def with_description(self, description: str) -> Self:
        """Return a copy of this event with the given description."""
        return replace(self, description=description, artifacts=list(self.artifacts))

    def with_artifact(self, artifact: TestArtifact) -> Self:
        """Return a copy of this event with the artifact appended."""
        return replace(self, artifacts=[*self.artifacts, artifact])

    def set_description(self, description: str) -> None:
        """Replace the description in place."""
        self.description = description

    def add_artifact(self, artifact: TestArtifact) -> None:
        """Append an artifact in place."""
        self.artifacts.append(artifact)

    def __str__(self) -> str:
        parts = [self.status.label]
        if self.description:
            parts.append(self.description)
        if count := len(self.artifacts):
            noun = "artifact" if count == 1 else "artifacts"
            parts.append(f"Captured {count} {noun}")
        return " :: ".join(parts)


class TestFailure(Exception):
    """Raised by a test body to end the run with an explanatory event."""

    __test__ = False

    def __init__(self, event: TestEvent) -> None:
        super().__init__(str(event))
        self.event = event
