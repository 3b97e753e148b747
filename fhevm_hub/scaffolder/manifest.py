"""Identity rewriting for the manifest of a materialized project.

The template's ``package.json`` is copied verbatim; this module replaces
its ``name``, ``description`` and ``keywords`` so the project can be built
and published on its own.  Every other field passes through untouched and
in its original order.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fhevm_hub.catalog.models import CategoryEntry, ExampleEntry, Identifier, IdentifierKind
from fhevm_hub.config import HubConfig
from fhevm_hub.errors import DestinationWriteFailure, ManifestParseFailure
from fhevm_hub.utils import dump_json

CATEGORY_SUFFIX = "examples"


class ManifestRewriter:
    """Patches identity metadata of a copied project manifest."""

    def __init__(self, config: HubConfig) -> None:
        self.config = config

    # -- Public API --------------------------------------------------------

    def rewrite(
        self,
        destination: str | Path,
        identifier: Identifier,
        entry: ExampleEntry | CategoryEntry,
    ) -> Path:
        """Rewrite ``<destination>/<manifest_file>`` in place.

        Raises:
            ManifestParseFailure: The manifest is missing, is not valid JSON
                or is not a JSON object.  The file is left untouched.
            DestinationWriteFailure: The rewritten manifest cannot be saved.
        """
        path = Path(destination) / self.config.manifest_file
        manifest = self.load(path)

        manifest["name"] = self.package_name(identifier)
        manifest["description"] = entry.description
        manifest["keywords"] = self.keywords(identifier, entry)

        # Serialise fully before touching the file.
        content = dump_json(manifest)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise DestinationWriteFailure(path, exc) from exc
        return path

    def load(self, path: Path) -> dict[str, Any]:
        """Parse the manifest at *path* into a key-ordered dict."""
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ManifestParseFailure(path, "file not found") from None
        except UnicodeDecodeError as exc:
            raise ManifestParseFailure(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
        except OSError as exc:
            raise ManifestParseFailure(path, str(exc)) from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ManifestParseFailure(path, f"invalid JSON ({exc})") from exc
        if not isinstance(data, dict):
            raise ManifestParseFailure(path, "top-level value is not an object")
        return data

    # -- Derived fields ----------------------------------------------------

    def package_name(self, identifier: Identifier) -> str:
        """``<namespace>-<id>``, with an ``-examples`` suffix for categories."""
        name = f"{self.config.namespace}-{identifier.id}"
        if identifier.kind is IdentifierKind.CATEGORY:
            name = f"{name}-{CATEGORY_SUFFIX}"
        return name

    def keywords(
        self, identifier: Identifier, entry: ExampleEntry | CategoryEntry
    ) -> list[str]:
        """Domain tags followed by the category tag, without duplicates."""
        if identifier.kind is IdentifierKind.CATEGORY:
            tags = [*self.config.domain_keywords, entry.id, CATEGORY_SUFFIX]
        else:
            tags = [*self.config.domain_keywords, entry.category]
        return _unique(tags)


def _unique(values: list[str]) -> list[str]:
    """Drop repeated values, keeping first occurrences in order."""
    return list(dict.fromkeys(values))
