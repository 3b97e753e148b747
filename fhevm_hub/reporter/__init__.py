"""Documentation generation for the FHEVM example hub.

Renders per-example (and per-category) Markdown pages through typed content
nodes and maintains the ``SUMMARY.md`` index.
"""

from fhevm_hub.reporter.docs import INDEX_FILENAME, DocEmitter
from fhevm_hub.reporter.markdown import MarkdownDocument, MarkdownFormatter

__all__ = [
    "DocEmitter",
    "INDEX_FILENAME",
    "MarkdownDocument",
    "MarkdownFormatter",
]
