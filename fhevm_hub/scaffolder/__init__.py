"""FHEVM example hub scaffolder: builds standalone example projects.

This module copies the hub's base Hardhat template, overlays the contracts
and tests of one example or of a whole category, renders a README and
rewrites ``package.json`` so the result is independently buildable.

Quick usage::

    from fhevm_hub.catalog import Catalog, Identifier
    from fhevm_hub.config import HubConfig
    from fhevm_hub.scaffolder import MaterializationRequest, TemplateMaterializer

    materializer = TemplateMaterializer(HubConfig(hub_root=Path(".")), Catalog.default())
    result = materializer.materialize(
        MaterializationRequest(
            identifier=Identifier.example("fhe-counter"),
            destination=Path("./out/fhe-counter"),
        )
    )
    print(result.summary())
"""

from fhevm_hub.scaffolder.manifest import ManifestRewriter
from fhevm_hub.scaffolder.materializer import (
    ArtifactRecord,
    MaterializationRequest,
    MaterializationResult,
    TemplateMaterializer,
)
from fhevm_hub.scaffolder.templates import TemplateRenderer

__all__ = [
    "ArtifactRecord",
    "ManifestRewriter",
    "MaterializationRequest",
    "MaterializationResult",
    "TemplateMaterializer",
    "TemplateRenderer",
]
