"""Models for files produced or collected during a test run."""

from enum import StrEnum
from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class TestArtifactType(StrEnum):
    """Semantic type of an artifact file."""

    __test__ = False

    LOG = "log"
    DATA = "data"
    PDF = "pdf"
    IMAGE = "image"
    VIDEO = "video"
    UNKNOWN = "unknown"


class TestArtifact(BaseModel):
    """Reference to a file attached to a test event.

    Only metadata is kept. The file does not need to exist yet.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Location of the artifact file")
    label: str = Field(..., description="Short name shown in reports")
    kind: TestArtifactType = Field(
        default=TestArtifactType.UNKNOWN, description="Semantic type of the file"
    )
    description: str = Field(default="", description="Free-text description")

    def with_kind(self, kind: TestArtifactType) -> Self:
        """Return a copy with the given kind."""
        return self.model_copy(update={"kind": kind})

    def with_description(self, description: str) -> Self:
        """Return a copy with the given description."""
        return self.model_copy(update={"description": description})
