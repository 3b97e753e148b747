"""Documentation pages for hub examples and the ``SUMMARY.md`` index.

Produces one GitBook-compatible page per example (or category) that embeds
the literal contract and test sources, and keeps ``SUMMARY.md`` listing
every generated page exactly once.
"""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from fhevm_hub.catalog.models import (
    Artifact,
    ArtifactKind,
    CategoryEntry,
    ExampleEntry,
    Identifier,
)
from fhevm_hub.catalog.registry import Catalog
from fhevm_hub.config import HubConfig
from fhevm_hub.errors import ArtifactSourceMissing
from fhevm_hub.reporter.content import (
    COMMON_MISTAKES,
    CORRECT_USAGE,
    DEPLOY_COMMAND,
    RESOURCE_LINKS,
    TEST_COMMAND,
)
from fhevm_hub.reporter.markdown import (
    Block,
    CodeBlock,
    Heading,
    MarkdownDocument,
    Span,
    bullets,
    code,
    escape_text,
    link,
    link_target,
    paragraph,
    strong,
    text,
)
from fhevm_hub.utils import console, ensure_dir, print_warning, read_text_if_exists, writing_to

INDEX_FILENAME = "SUMMARY.md"

INDEX_SKELETON = """# Summary

## Introduction

* [Overview](README.md)

## Examples

"""

_LANGUAGES: dict[str, str] = {
    ".sol": "solidity",
    ".ts": "typescript",
    ".js": "javascript",
    ".json": "json",
}


class DocEmitter:
    """Generates documentation pages and maintains the index.

    Re-emitting a page overwrites it with identical content; the index only
    ever gains one line per page.
    """

    def __init__(self, config: HubConfig, catalog: Catalog) -> None:
        self.config = config
        self.catalog = catalog

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def emit_doc(
        self,
        identifier: Identifier | str,
        output_dir: str | Path | None = None,
    ) -> Path:
        """Write ``<output_dir>/<id>.md`` and register it in the index.

        Plain string identifiers name examples.  Missing artifact sources
        produce empty code blocks and a warning, never an error.

        Returns:
            Path to the written page.
        """
        if isinstance(identifier, str):
            identifier = Identifier.example(identifier)
        entry = self.catalog.resolve(identifier)
        out_dir = Path(output_dir) if output_dir is not None else self.config.docs_dir

        console.print(f"Generating documentation for [bold]{escape(entry.id)}[/bold]")
        if isinstance(entry, CategoryEntry):
            document = self.render_category(entry)
            title = entry.display_title
        else:
            document = self.render_example(entry)
            title = entry.title

        page = out_dir / f"{entry.id}.md"
        with writing_to(page):
            ensure_dir(out_dir)
            page.write_text(document.render(), encoding="utf-8", errors="surrogateescape", newline="")
        console.print(f"  [green]Documentation generated: {escape(str(page))}[/green]")

        self.update_index(out_dir, title, page.name)
        return page

    def emit_all(self, output_dir: str | Path | None = None) -> list[Path]:
        """Emit a page for every catalog example, in registration order."""
        console.print("Generating documentation for all examples...")
        pages = [self.emit_doc(entry.identifier, output_dir) for entry in self.catalog.examples()]
        console.print(f"[bold green]Generated {len(pages)} documentation page(s)[/bold green]")
        return pages

    # ------------------------------------------------------------------
    # Index maintenance
    # ------------------------------------------------------------------

    @staticmethod
    def index_entry(title: str, page_name: str) -> str:
        """The exact line that references *page_name* in the index."""
        return f"* [{escape_text(title)}]({link_target(page_name)})"

    def update_index(self, output_dir: str | Path, title: str, page_name: str) -> Path:
        """Append the page's entry line to ``SUMMARY.md`` unless present."""
        index = Path(output_dir) / INDEX_FILENAME
        existing = read_text_if_exists(index)
        content = existing if existing is not None else INDEX_SKELETON

        entry_line = self.index_entry(title, page_name)
        if entry_line not in content.splitlines():
            if content and not content.endswith("\n"):
                content += "\n"
            content += f"{entry_line}\n"

        if content != existing:
            with writing_to(index):
                index.write_text(content, encoding="utf-8", errors="surrogateescape", newline="")
            console.print(f"  Updated {INDEX_FILENAME}")
        return index

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_example(self, entry: ExampleEntry) -> MarkdownDocument:
        contract, test = entry.artifacts()
        doc = MarkdownDocument()
        doc.add(
            Heading(level=1, text=entry.title),
            paragraph(entry.page_description),
            Heading(level=2, text="Overview"),
            paragraph(f"This example demonstrates {entry.page_description.lower()}."),
            Heading(level=2, text="Key Concepts"),
            bullets(*(strong(concept) for concept in entry.concepts)),
            Heading(level=2, text="Contract Implementation"),
            self._source_block(contract),
            Heading(level=2, text="Test Suite"),
            paragraph("The test suite demonstrates both correct usage and common pitfalls:"),
            self._source_block(test),
        )
        doc.add(*self._usage_sections(), *self._pattern_sections(), *self._resource_sections())
        return doc

    def render_category(self, entry: CategoryEntry) -> MarkdownDocument:
        doc = MarkdownDocument()
        doc.add(
            Heading(level=1, text=entry.display_title),
            paragraph(entry.description),
            Heading(level=2, text="Overview"),
            paragraph(
                f"This category contains multiple FHEVM examples demonstrating "
                f"{entry.description.lower()}."
            ),
            Heading(level=2, text="Examples Included"),
            bullets(
                *(
                    [strong(example_id), text(f" - {self.catalog.describe_example(example_id)}")]
                    for example_id in entry.examples
                )
            ),
        )

        artifacts = entry.artifacts()
        for kind, heading in ((ArtifactKind.CONTRACT, "Contracts"), (ArtifactKind.TEST, "Tests")):
            doc.add(Heading(level=2, text=heading))
            for artifact in (a for a in artifacts if a.kind is kind):
                doc.add(Heading(level=3, text=artifact.filename), self._source_block(artifact))

        doc.add(*self._usage_sections(), *self._pattern_sections(), *self._resource_sections())
        return doc

    def _source_block(self, artifact: Artifact) -> CodeBlock:
        """Literal source of *artifact*, empty when the file is missing."""
        root = self.config.contracts_path if artifact.kind is ArtifactKind.CONTRACT else self.config.tests_path
        path = root / artifact.source
        source = read_text_if_exists(path)
        if source is None:
            print_warning(f"  {ArtifactSourceMissing(path)}")
            source = ""
        return CodeBlock(language=_language_for(artifact.filename), code=source)

    def _usage_sections(self) -> list[Block]:
        return [
            Heading(level=2, text="Usage"),
            Heading(level=3, text="Deploy the Contract"),
            CodeBlock(language="bash", code=DEPLOY_COMMAND),
            Heading(level=3, text="Run Tests"),
            CodeBlock(language="bash", code=TEST_COMMAND),
        ]

    def _pattern_sections(self) -> list[Block]:
        return [
            Heading(level=2, text="Important Patterns"),
            Heading(level=3, text="Correct Usage"),
            bullets(*(_checklist_item(item) for item in CORRECT_USAGE)),
            Heading(level=3, text="Common Mistakes"),
            bullets(*(_checklist_item(item) for item in COMMON_MISTAKES)),
        ]

    def _resource_sections(self) -> list[Block]:
        return [
            Heading(level=2, text="Resources"),
            bullets(*(link(r.title, r.url) for r in RESOURCE_LINKS)),
        ]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _language_for(filename: str) -> str:
    return _LANGUAGES.get(Path(filename).suffix.lower(), "")


def _checklist_item(item: tuple[str, str, str]) -> list[Span]:
    before, inline, after = item
    spans: list[Span] = []
    if before:
        spans.append(text(before))
    if inline:
        spans.append(code(inline))
    if after:
        spans.append(text(after))
    return spans
