"""Tests for the catalog registry (fhevm_hub.catalog.registry).

Covers:
- The bundled catalog contents and registration order
- Exact, case-sensitive lookups and UnknownIdentifier listings
- Tagged identifier dispatch
- Loading from YAML and rejecting malformed resources
- Duplicate and cross-namespace identifier checks
"""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from fhevm_hub.catalog import Catalog, Identifier, IdentifierKind
from fhevm_hub.catalog.models import CategoryEntry, ExampleEntry
from fhevm_hub.catalog.registry import FALLBACK_EXAMPLE_DESCRIPTION
from fhevm_hub.config import HubConfig
from fhevm_hub.errors import CatalogError, UnknownIdentifier

pytestmark = pytest.mark.unit


def _entry(identifier: str, category: str = "basic") -> ExampleEntry:
    return ExampleEntry(
        id=identifier,
        title=identifier.title(),
        category=category,
        contract=f"{category}/{identifier}.sol",
        test=f"{category}/{identifier}.ts",
    )


class TestBundledCatalog:
    def test_fhe_counter_entry(self, catalog):
        entry = catalog.resolve_example("fhe-counter")
        assert entry.title == "FHE Counter"
        assert entry.contract == "basic/FHECounter.sol"
        assert entry.test == "basic/FHECounter.ts"
        assert entry.category == "basic"

    def test_registration_order(self, catalog):
        assert catalog.example_ids() == ["blind-auction", "fhe-counter"]
        assert catalog.category_ids() == ["auctions", "basic"]

    def test_every_entry_has_relative_paths(self, catalog):
        entries = [*catalog.examples(), *catalog.categories()]
        assert entries
        for entry in entries:
            for artifact in entry.artifacts():
                path = PurePosixPath(artifact.source)
                assert not path.is_absolute(), artifact.source
                assert ".." not in path.parts, artifact.source

    def test_every_registered_id_resolves(self, catalog):
        for identifier in catalog.example_ids():
            assert catalog.resolve(Identifier.example(identifier)).id == identifier
        for identifier in catalog.category_ids():
            assert catalog.resolve(Identifier.category(identifier)).id == identifier

    def test_category_may_reference_unregistered_example(self, catalog):
        basic = catalog.resolve_category("basic")
        assert "encrypt-single-value" in basic.examples
        assert catalog.describe_example("encrypt-single-value") == "Basic FHE encryption patterns"
        with pytest.raises(UnknownIdentifier):
            catalog.resolve_example("encrypt-single-value")
        assert "encrypt-single-value" not in catalog.example_ids()

    def test_describe_truly_unknown_example(self, catalog):
        assert catalog.describe_example("never-heard-of-it") == FALLBACK_EXAMPLE_DESCRIPTION

    def test_describe_known_example(self, catalog):
        assert catalog.describe_example("blind-auction") == "Sealed-bid auction with encrypted bids"


class TestLookups:
    def test_unknown_example_lists_sorted_ids(self, catalog):
        with pytest.raises(UnknownIdentifier) as exc_info:
            catalog.resolve_example("does-not-exist")
        assert exc_info.value.kind == "example"
        assert exc_info.value.identifier == "does-not-exist"
        assert exc_info.value.available == ["blind-auction", "fhe-counter"]

    def test_unknown_category(self, catalog):
        with pytest.raises(UnknownIdentifier) as exc_info:
            catalog.resolve_category("fhe-counter")
        assert exc_info.value.available == ["auctions", "basic"]

    def test_case_sensitive(self, catalog):
        with pytest.raises(UnknownIdentifier):
            catalog.resolve_example("FHE-Counter")

    def test_tagged_identifier_selects_namespace(self, catalog):
        assert isinstance(catalog.resolve(Identifier.category("basic")), CategoryEntry)
        with pytest.raises(UnknownIdentifier):
            catalog.resolve(Identifier.example("basic"))

    def test_valid_ids_sorted(self):
        catalog = Catalog([_entry("zeta"), _entry("alpha")], [])
        assert catalog.example_ids() == ["zeta", "alpha"]
        assert catalog.valid_ids(IdentifierKind.EXAMPLE) == ["alpha", "zeta"]

    def test_id_lists_are_copies(self, catalog):
        catalog.example_ids().append("injected")
        assert "injected" not in catalog.example_ids()

    def test_registered_description_wins_over_table(self):
        catalog = Catalog([_entry("alpha").model_copy(update={"description": "own"})], [], {"alpha": "table"})
        assert catalog.describe_example("alpha") == "own"


class TestConstruction:
    def test_duplicate_example_rejected(self):
        with pytest.raises(CatalogError, match="Duplicate example"):
            Catalog([_entry("a"), _entry("a")], [])

    def test_shared_namespace_rejected(self):
        with pytest.raises(CatalogError, match="both example and category"):
            Catalog([_entry("basic")], [CategoryEntry(id="basic")])

    def test_from_dict_invalid_entry(self):
        with pytest.raises(CatalogError):
            Catalog.from_dict({"examples": [{"id": "x"}]})

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "examples:\n"
            "  - id: one\n"
            "    title: One\n"
            "    category: misc\n"
            "    contract: misc/One.sol\n"
            "    test: misc/One.ts\n"
            "categories:\n"
            "  - id: misc\n"
            "    examples: [one]\n",
            encoding="utf-8",
        )
        catalog = Catalog.load(path)
        assert catalog.example_ids() == ["one"]
        assert catalog.resolve_category("misc").examples == ("one",)

    def test_load_description_table(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "categories:\n"
            "  - id: misc\n"
            "    examples: [planned]\n"
            "example_descriptions:\n"
            "  planned: Coming soon\n",
            encoding="utf-8",
        )
        catalog = Catalog.load(path)
        assert catalog.describe_example("planned") == "Coming soon"
        assert catalog.example_ids() == []

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        catalog = Catalog.load(path)
        assert catalog.example_ids() == []

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read"):
            Catalog.load(tmp_path / "missing.yaml")

    def test_load_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("examples: [unclosed\n", encoding="utf-8")
        with pytest.raises(CatalogError, match="Cannot parse"):
            Catalog.load(path)

    def test_load_non_utf8(self, tmp_path):
        path = tmp_path / "latin1.yaml"
        path.write_bytes(b"categories:\n  - id: caf\xe9\n")
        with pytest.raises(CatalogError, match="not valid UTF-8"):
            Catalog.load(path)

    def test_load_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(CatalogError, match="mapping"):
            Catalog.load(path)

    def test_for_config_uses_catalog_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("categories:\n  - id: solo\n", encoding="utf-8")
        catalog = Catalog.for_config(HubConfig(catalog_path=path))
        assert catalog.category_ids() == ["solo"]

    def test_for_config_defaults_to_bundled(self):
        catalog = Catalog.for_config(HubConfig())
        assert "fhe-counter" in catalog.example_ids()
