"""Read-only registry of the examples and categories the hub knows about.

The registry is built once from a YAML resource and only exposes lookups.
Adding an example means editing the resource, never mutating a live
``Catalog``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from fhevm_hub.catalog.models import (
    CategoryEntry,
    ExampleEntry,
    Identifier,
    IdentifierKind,
)
from fhevm_hub.config import HubConfig
from fhevm_hub.errors import CatalogError, UnknownIdentifier

_DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.yaml"

FALLBACK_EXAMPLE_DESCRIPTION = "FHEVM example"


class _CatalogDocument(BaseModel):
    """Shape of the YAML resource."""

    examples: list[ExampleEntry] = Field(default_factory=list)
    categories: list[CategoryEntry] = Field(default_factory=list)
    example_descriptions: dict[str, str] = Field(
        default_factory=dict,
        description="Descriptions for example ids referenced by categories but not registered",
    )


class Catalog:
    """Immutable lookup tables for examples and categories.

    Lookups are exact-match and case-sensitive.  Iteration follows
    registration order (the order entries appear in the resource).
    """

    def __init__(
        self,
        examples: list[ExampleEntry],
        categories: list[CategoryEntry],
        example_descriptions: Mapping[str, str] | None = None,
    ) -> None:
        self._examples: Mapping[str, ExampleEntry] = MappingProxyType(
            _index("example", examples)
        )
        self._categories: Mapping[str, CategoryEntry] = MappingProxyType(
            _index("category", categories)
        )
        shared = sorted(set(self._examples) & set(self._categories))
        if shared:
            raise CatalogError(
                f"Identifiers registered as both example and category: {', '.join(shared)}"
            )
        self._descriptions: Mapping[str, str] = MappingProxyType(dict(example_descriptions or {}))

    # -- Construction ------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Catalog":
        """Build a catalog from an already-parsed document."""
        try:
            document = _CatalogDocument.model_validate(data)
        except ValidationError as exc:
            raise CatalogError(f"Invalid catalog: {exc}") from exc
        return cls(document.examples, document.categories, document.example_descriptions)

    @classmethod
    def load(cls, path: str | Path) -> "Catalog":
        """Load a catalog from a YAML file."""
        catalog_path = Path(path)
        try:
            raw = yaml.safe_load(catalog_path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            raise CatalogError(f"Cannot read catalog {catalog_path}: not valid UTF-8 ({exc.reason})") from exc
        except OSError as exc:
            raise CatalogError(f"Cannot read catalog {catalog_path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise CatalogError(f"Cannot parse catalog {catalog_path}: {exc}") from exc
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise CatalogError(f"Catalog {catalog_path} must be a mapping at top level")
        return cls.from_dict(raw)

    @classmethod
    def default(cls) -> "Catalog":
        """Load the catalog bundled with the package."""
        return cls.load(_DEFAULT_CATALOG_PATH)

    @classmethod
    def for_config(cls, config: HubConfig) -> "Catalog":
        """Load the catalog *config* points at, or the bundled one."""
        if config.catalog_path is not None:
            return cls.load(config.catalog_path)
        return cls.default()

    # -- Lookups -----------------------------------------------------------

    def resolve_example(self, identifier: str) -> ExampleEntry:
        try:
            return self._examples[identifier]
        except KeyError:
            raise UnknownIdentifier("example", identifier, list(self._examples)) from None

    def resolve_category(self, identifier: str) -> CategoryEntry:
        try:
            return self._categories[identifier]
        except KeyError:
            raise UnknownIdentifier("category", identifier, list(self._categories)) from None

    def resolve(self, identifier: Identifier) -> ExampleEntry | CategoryEntry:
        """Resolve a tagged identifier in the namespace its tag names."""
        if identifier.kind is IdentifierKind.CATEGORY:
            return self.resolve_category(identifier.id)
        return self.resolve_example(identifier.id)

    def example_ids(self) -> list[str]:
        return list(self._examples)

    def category_ids(self) -> list[str]:
        return list(self._categories)

    def valid_ids(self, kind: IdentifierKind) -> list[str]:
        """Sorted identifiers of one kind, for user-facing listings."""
        if kind is IdentifierKind.CATEGORY:
            return sorted(self._categories)
        return sorted(self._examples)

    def examples(self) -> Iterator[ExampleEntry]:
        return iter(self._examples.values())

    def categories(self) -> Iterator[CategoryEntry]:
        return iter(self._categories.values())

    def describe_example(self, identifier: str) -> str:
        """Description of an example, tolerating ids with no entry.

        Registered examples use their own description; other ids are looked
        up in the description table and finally get a generic fallback.
        """
        entry = self._examples.get(identifier)
        if entry is not None and entry.description:
            return entry.description
        return self._descriptions.get(identifier) or FALLBACK_EXAMPLE_DESCRIPTION


def _index(kind: str, entries: list[Any]) -> dict[str, Any]:
    """Map entries by id, rejecting duplicates."""
    table: dict[str, Any] = {}
    for entry in entries:
        if entry.id in table:
            raise CatalogError(f"Duplicate {kind} identifier: {entry.id}")
        table[entry.id] = entry
    return table
