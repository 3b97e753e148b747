"""Template materialization: turns a catalog entry into a standalone project.

Copies the hub's base Hardhat template into a destination directory,
overlays the contracts and tests of one example (or of every example in a
category), renders the README and rewrites the manifest so the result can
be installed and built on its own.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from rich.markup import escape

from fhevm_hub.catalog.models import (
    Artifact,
    ArtifactKind,
    CategoryEntry,
    ExampleEntry,
    Identifier,
    IdentifierKind,
)
from fhevm_hub.catalog.registry import Catalog
from fhevm_hub.config import HubConfig
from fhevm_hub.errors import ArtifactSourceMissing, SourceTemplateMissing
from fhevm_hub.reporter.content import RESOURCE_LINKS
from fhevm_hub.scaffolder.manifest import ManifestRewriter
from fhevm_hub.scaffolder.templates import TemplateRenderer
from fhevm_hub.utils import (
    console,
    copy_file,
    copy_tree,
    ensure_dir,
    print_warning,
    writing_to,
)


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------


class MaterializationRequest(BaseModel):
    """One materialization: what to build and where."""

    identifier: Identifier
    destination: Path


class ArtifactRecord(BaseModel):
    """Outcome of copying a single artifact."""

    kind: ArtifactKind
    source: str = Field(..., description="Hub-relative source path")
    destination: Path
    copied: bool


class MaterializationResult(BaseModel):
    """What a materialization produced."""

    identifier: Identifier
    destination: Path
    copied: list[ArtifactRecord] = Field(default_factory=list)
    skipped: list[ArtifactRecord] = Field(default_factory=list)
    readme_path: Path | None = None
    manifest_path: Path | None = None
    success: bool = True

    @property
    def complete(self) -> bool:
        """True when every referenced artifact existed."""
        return not self.skipped

    def summary(self) -> str:
        """One-line report, e.g. ``copied 3 of 4 artifacts; missing: test/Foo.ts``."""
        total = len(self.copied) + len(self.skipped)
        line = f"copied {len(self.copied)} of {total} artifacts"
        if self.skipped:
            line += "; missing: " + ", ".join(r.source for r in self.skipped)
        return line


# ---------------------------------------------------------------------------
# Materializer
# ---------------------------------------------------------------------------


class TemplateMaterializer:
    """Builds a standalone project for an example or a category.

    Steps, in order:
    1. Resolve the identifier (fails before anything is written).
    2. Check the base template exists (fails before the destination exists).
    3. Create the destination and copy the whole template into it.
    4. Overlay each contract/test artifact; missing sources are skipped.
    5. For categories, copy the shared test helpers directory.
    6. Render ``README.md``.
    7. Rewrite the manifest identity fields.

    Files already in the destination that the template does not provide
    are never removed.
    """

    def __init__(
        self,
        config: HubConfig,
        catalog: Catalog,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.catalog = catalog
        self.renderer = renderer or TemplateRenderer()
        self.manifest = ManifestRewriter(config)

    # -- Public API --------------------------------------------------------

    def materialize(self, request: MaterializationRequest) -> MaterializationResult:
        """Run the full pipeline for *request*."""
        identifier = request.identifier
        entry = self.catalog.resolve(identifier)

        template = self.config.template_path
        if not template.is_dir():
            raise SourceTemplateMissing(template)

        destination = Path(request.destination)
        console.print(
            f"Creating [bold]{escape(identifier.id)}[/bold] {identifier.kind.value} "
            f"project in {escape(str(destination))}",
            soft_wrap=True,
        )

        with writing_to(destination):
            ensure_dir(destination)
        console.print("  Copying base template...")
        with writing_to(destination):
            copy_tree(template, destination)

        records = [self._overlay(destination, artifact) for artifact in entry.artifacts()]
        if identifier.kind is IdentifierKind.CATEGORY:
            records.append(self._copy_support(destination))

        readme = self._render_readme(destination, entry)
        manifest = self.manifest.rewrite(destination, identifier, entry)

        return MaterializationResult(
            identifier=identifier,
            destination=destination,
            copied=[r for r in records if r.copied],
            skipped=[r for r in records if not r.copied],
            readme_path=readme,
            manifest_path=manifest,
        )

    def materialize_example(self, identifier: str, destination: str | Path) -> MaterializationResult:
        return self.materialize(
            MaterializationRequest(identifier=Identifier.example(identifier), destination=Path(destination))
        )

    def materialize_category(self, identifier: str, destination: str | Path) -> MaterializationResult:
        return self.materialize(
            MaterializationRequest(identifier=Identifier.category(identifier), destination=Path(destination))
        )

    # -- Artifact overlay --------------------------------------------------

    def source_path(self, artifact: Artifact) -> Path:
        """Absolute location of *artifact* inside the hub checkout."""
        if artifact.kind is ArtifactKind.CONTRACT:
            return self.config.contracts_path / artifact.source
        if artifact.kind is ArtifactKind.TEST:
            return self.config.tests_path / artifact.source
        return self.config.hub_root / artifact.source

    def _source_label(self, artifact: Artifact) -> str:
        if artifact.kind is ArtifactKind.CONTRACT:
            return f"{self.config.contracts_dir}/{artifact.source}"
        if artifact.kind is ArtifactKind.TEST:
            return f"{self.config.tests_dir}/{artifact.source}"
        return artifact.source

    def _overlay(self, destination: Path, artifact: Artifact) -> ArtifactRecord:
        """Copy one artifact into its kind's directory, or record a skip."""
        source = self.source_path(artifact)
        target = destination / artifact.kind.subdir / artifact.filename
        label = self._source_label(artifact)

        with writing_to(target):
            ensure_dir(target.parent)
            if source.is_file():
                copy_file(source, target)
                console.print(f"  - {escape(label)}", soft_wrap=True)
                return ArtifactRecord(kind=artifact.kind, source=label, destination=target, copied=True)

        print_warning(f"  Skipping {label}: {ArtifactSourceMissing(source)}")
        return ArtifactRecord(kind=artifact.kind, source=label, destination=target, copied=False)

    def _copy_support(self, destination: Path) -> ArtifactRecord:
        """Copy the shared test helpers directory as a whole."""
        artifact = Artifact(kind=ArtifactKind.SUPPORT, source=self.config.support_dir)
        source = self.config.support_path
        target = destination / ArtifactKind.SUPPORT.subdir

        if not source.is_dir():
            print_warning(f"  Skipping {artifact.source}: directory not found")
            return ArtifactRecord(kind=artifact.kind, source=artifact.source, destination=target, copied=False)

        with writing_to(target):
            copy_tree(source, target)
        console.print(f"  - {escape(artifact.source)}/", soft_wrap=True)
        return ArtifactRecord(kind=artifact.kind, source=artifact.source, destination=target, copied=True)

    # -- README --------------------------------------------------------------

    def _render_readme(self, destination: Path, entry: ExampleEntry | CategoryEntry) -> Path:
        if isinstance(entry, CategoryEntry):
            template_name = "README.category.md.j2"
        else:
            template_name = "README.example.md.j2"
        output = destination / "README.md"
        with writing_to(output):
            return self.renderer.render_to_file(template_name, output, self._readme_context(entry))

    def _readme_context(self, entry: ExampleEntry | CategoryEntry) -> dict[str, Any]:
        context: dict[str, Any] = {
            "entry": entry,
            "resources": RESOURCE_LINKS,
        }
        if isinstance(entry, CategoryEntry):
            context["examples"] = [
                {"id": example_id, "description": self.catalog.describe_example(example_id)}
                for example_id in entry.examples
            ]
            context["tree"] = _project_tree(f"{entry.id}-examples", entry)
        return context


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _project_tree(root_name: str, entry: CategoryEntry) -> str:
    """Text diagram of the generated category project."""
    lines = [f"{root_name}/", "├── contracts/"]
    contracts = [_basename(c) for c in entry.contracts]
    for i, name in enumerate(contracts):
        branch = "└──" if i == len(contracts) - 1 else "├──"
        lines.append(f"│   {branch} {name}")
    lines.append("├── test/")
    lines.extend(f"│   ├── {_basename(t)}" for t in entry.tests)
    lines.append("│   └── utils/")
    lines.append("├── deploy/")
    lines.append("└── README.md")
    return "\n".join(lines)


def _basename(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1]
