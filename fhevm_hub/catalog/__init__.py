"""Catalog of the examples and categories published by the hub.

Quick usage::

    from fhevm_hub.catalog import Catalog, Identifier

    catalog = Catalog.default()
    entry = catalog.resolve(Identifier.example("fhe-counter"))
"""

from fhevm_hub.catalog.models import (
    Artifact,
    ArtifactKind,
    CategoryEntry,
    ExampleEntry,
    Identifier,
    IdentifierKind,
)
from fhevm_hub.catalog.registry import Catalog

__all__ = [
    "Artifact",
    "ArtifactKind",
    "Catalog",
    "CategoryEntry",
    "ExampleEntry",
    "Identifier",
    "IdentifierKind",
]
