"""FHEVM example hub configuration.

Centralised, typed configuration for the scaffolding and documentation
tools.  Settings use a Pydantic v2 model so they are validated at
construction time and can be serialised to/from JSON or read from
environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_DOMAIN_KEYWORDS: list[str] = ["fhevm", "zama", "fhe", "privacy", "blockchain"]


class HubConfig(BaseModel):
    """Locations inside the example hub checkout and naming rules.

    All relative directory settings are resolved against ``hub_root``.
    Instances are typically created once by the CLI entry point and passed
    to the materializer and the doc emitter.
    """

    hub_root: Path = Field(default=Path("."), description="Root of the example hub checkout")
    template_dir: str = Field(default="fhevm-hardhat-template")
    contracts_dir: str = Field(default="contracts")
    tests_dir: str = Field(default="test")
    support_dir: str = Field(
        default="test/utils", description="Shared test helpers copied into category projects"
    )
    manifest_file: str = Field(default="package.json")
    namespace: str = Field(default="fhevm", min_length=1, description="Package name prefix")
    domain_keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_DOMAIN_KEYWORDS))
    docs_dir: Path = Field(default=Path("./docs"))
    catalog_path: Path | None = Field(
        default=None, description="Alternative catalog YAML; the bundled catalog when unset"
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def template_path(self) -> Path:
        """Base project template copied into every materialized project."""
        return self.hub_root / self.template_dir

    @property
    def contracts_path(self) -> Path:
        """Root that catalog contract paths are relative to."""
        return self.hub_root / self.contracts_dir

    @property
    def tests_path(self) -> Path:
        """Root that catalog test paths are relative to."""
        return self.hub_root / self.tests_dir

    @property
    def support_path(self) -> Path:
        return self.hub_root / self.support_dir

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "HubConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, **overrides: Any) -> "HubConfig":
        """Build a ``HubConfig`` from environment variables.

        Recognised variables (all optional):
            FHEVM_HUB_ROOT, FHEVM_HUB_TEMPLATE_DIR, FHEVM_HUB_CATALOG,
            FHEVM_HUB_DOCS_DIR, FHEVM_HUB_NAMESPACE.

        Keyword *overrides* win over the environment; ``None`` values are
        ignored so CLI flags can be passed through unconditionally.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FHEVM_HUB_ROOT"):
            kwargs["hub_root"] = Path(os.environ["FHEVM_HUB_ROOT"])
        if os.environ.get("FHEVM_HUB_TEMPLATE_DIR"):
            kwargs["template_dir"] = os.environ["FHEVM_HUB_TEMPLATE_DIR"]
        if os.environ.get("FHEVM_HUB_CATALOG"):
            kwargs["catalog_path"] = Path(os.environ["FHEVM_HUB_CATALOG"])
        if os.environ.get("FHEVM_HUB_DOCS_DIR"):
            kwargs["docs_dir"] = Path(os.environ["FHEVM_HUB_DOCS_DIR"])
        if os.environ.get("FHEVM_HUB_NAMESPACE"):
            kwargs["namespace"] = os.environ["FHEVM_HUB_NAMESPACE"]

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
