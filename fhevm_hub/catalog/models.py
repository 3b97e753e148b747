"""Pydantic v2 models for the example hub catalog.

Defines the tagged identifier used to address catalog entries, the artifact
records that materialization and documentation consume, and the two entry
kinds themselves (single examples and categories of examples).
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath, PureWindowsPath

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class IdentifierKind(str, Enum):
    """Namespace an identifier belongs to."""
    EXAMPLE = "example"
    CATEGORY = "category"


class ArtifactKind(str, Enum):
    """Kind of file an artifact is; decides where it lands in a project."""
    CONTRACT = "contract"
    TEST = "test"
    SUPPORT = "support"

    @property
    def subdir(self) -> str:
        """Directory inside a generated project that receives this kind."""
        return _ARTIFACT_SUBDIRS[self]


_ARTIFACT_SUBDIRS: dict[ArtifactKind, str] = {
    ArtifactKind.CONTRACT: "contracts",
    ArtifactKind.TEST: "test",
    ArtifactKind.SUPPORT: "test/utils",
}


# ---------------------------------------------------------------------------
# Identifier & artifact
# ---------------------------------------------------------------------------

class Identifier(BaseModel):
    """An example or category id tagged with the namespace it lives in."""

    model_config = ConfigDict(frozen=True)

    kind: IdentifierKind
    id: str = Field(..., min_length=1)

    @classmethod
    def example(cls, identifier: str) -> "Identifier":
        return cls(kind=IdentifierKind.EXAMPLE, id=identifier)

    @classmethod
    def category(cls, identifier: str) -> "Identifier":
        return cls(kind=IdentifierKind.CATEGORY, id=identifier)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


class Artifact(BaseModel):
    """A contract or test source file referenced by a catalog entry.

    ``source`` is relative to the hub's contracts root (contracts) or tests
    root (tests).
    """

    model_config = ConfigDict(frozen=True)

    kind: ArtifactKind
    source: str

    @property
    def filename(self) -> str:
        return PurePosixPath(self.source).name

    @property
    def destination(self) -> str:
        """Project-relative path the artifact is copied to."""
        return f"{self.kind.subdir}/{self.filename}"


def _check_relative_path(value: str) -> str:
    """Reject absolute paths and parent-directory escapes."""
    if not value or not value.strip():
        raise ValueError("artifact path must not be empty")
    if PurePosixPath(value).is_absolute() or PureWindowsPath(value).is_absolute():
        raise ValueError(f"artifact path must be relative: {value!r}")
    if ".." in PurePosixPath(value.replace("\\", "/")).parts:
        raise ValueError(f"artifact path must not escape its root: {value!r}")
    return value


# ---------------------------------------------------------------------------
# Catalog entries
# ---------------------------------------------------------------------------

class ExampleEntry(BaseModel):
    """A single example: one contract plus its test suite."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique key, e.g. 'fhe-counter'")
    title: str = Field(..., description="Human title, e.g. 'FHE Counter'")
    description: str = Field(default="", description="One-line description")
    doc_description: str = Field(
        default="", description="Description used on the documentation page; falls back to description"
    )
    category: str = Field(..., description="Category tag, e.g. 'basic'")
    contract: str = Field(..., description="Path under the contracts root")
    test: str = Field(..., description="Path under the tests root")
    section: str = Field(default="Examples", description="Documentation section heading")
    concepts: tuple[str, ...] = Field(default=(), description="Key concepts shown in the docs")

    @field_validator("contract", "test")
    @classmethod
    def _check_paths(cls, value: str) -> str:
        return _check_relative_path(value)

    @property
    def page_description(self) -> str:
        return self.doc_description or self.description

    @property
    def kind(self) -> IdentifierKind:
        return IdentifierKind.EXAMPLE

    @property
    def identifier(self) -> Identifier:
        return Identifier.example(self.id)

    def artifacts(self) -> list[Artifact]:
        return [
            Artifact(kind=ArtifactKind.CONTRACT, source=self.contract),
            Artifact(kind=ArtifactKind.TEST, source=self.test),
        ]


class CategoryEntry(BaseModel):
    """A category aggregating several examples into one project."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique key, e.g. 'auctions'")
    description: str = Field(default="")
    title: str = Field(default="", description="Display title; derived from the id when empty")
    examples: tuple[str, ...] = Field(default=(), description="Example ids, in order")
    contracts: tuple[str, ...] = Field(default=())
    tests: tuple[str, ...] = Field(default=())

    @field_validator("contracts", "tests")
    @classmethod
    def _check_paths(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(_check_relative_path(v) for v in value)

    @property
    def kind(self) -> IdentifierKind:
        return IdentifierKind.CATEGORY

    @property
    def identifier(self) -> Identifier:
        return Identifier.category(self.id)

    @property
    def display_title(self) -> str:
        if self.title:
            return self.title
        return f"{self.id[:1].upper()}{self.id[1:]} Examples"

    def artifacts(self) -> list[Artifact]:
        return [
            *(Artifact(kind=ArtifactKind.CONTRACT, source=c) for c in self.contracts),
            *(Artifact(kind=ArtifactKind.TEST, source=t) for t in self.tests),
        ]
