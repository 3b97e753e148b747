"""Typed Markdown content nodes and the formatter that renders them.

Documents are assembled from nodes instead of string concatenation.  The
formatter is the only place that knows Markdown syntax: it escapes prose,
picks code-span delimiters and code fences that cannot collide with the
content, and joins blocks with blank lines.
"""

from __future__ import annotations

import re
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

_SPECIAL_CHARS = re.compile(r"([\\`*_\[\]<>#|])")
_BACKTICK_RUN = re.compile(r"`+")


# ---------------------------------------------------------------------------
# Inline spans
# ---------------------------------------------------------------------------

class Text(BaseModel):
    """Plain prose; special characters are escaped on output."""
    model_config = ConfigDict(frozen=True)
    value: str


class Code(BaseModel):
    """Inline code span."""
    model_config = ConfigDict(frozen=True)
    value: str


class Strong(BaseModel):
    """Bold prose."""
    model_config = ConfigDict(frozen=True)
    value: str


class Link(BaseModel):
    model_config = ConfigDict(frozen=True)
    title: str
    target: str


Span = Union[Text, Code, Strong, Link]


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)
    level: int = Field(..., ge=1, le=6)
    text: str


class Paragraph(BaseModel):
    model_config = ConfigDict(frozen=True)
    spans: list[Span] = Field(default_factory=list)


class BulletList(BaseModel):
    """Bulleted list; each item is a sequence of spans."""
    model_config = ConfigDict(frozen=True)
    items: list[list[Span]] = Field(default_factory=list)
    marker: str = Field(default="-", pattern=r"^[-*+]$")


class CodeBlock(BaseModel):
    """Fenced block whose content is emitted byte-for-byte."""
    model_config = ConfigDict(frozen=True)
    language: str = ""
    code: str = ""


Block = Union[Heading, Paragraph, BulletList, CodeBlock]


class MarkdownDocument(BaseModel):
    """An ordered sequence of blocks."""

    blocks: list[Block] = Field(default_factory=list)

    def add(self, *blocks: Block) -> "MarkdownDocument":
        self.blocks.extend(blocks)
        return self

    def render(self) -> str:
        return MarkdownFormatter().render(self)


# ---------------------------------------------------------------------------
# Convenience constructors
# ---------------------------------------------------------------------------

def text(value: str) -> Text:
    return Text(value=value)


def code(value: str) -> Code:
    return Code(value=value)


def strong(value: str) -> Strong:
    return Strong(value=value)


def link(title: str, target: str) -> Link:
    return Link(title=title, target=target)


def paragraph(*spans: Span | str) -> Paragraph:
    """Build a paragraph; bare strings become ``Text`` spans."""
    return Paragraph(spans=[text(s) if isinstance(s, str) else s for s in spans])


def bullets(*items: list[Span] | Span | str, marker: str = "-") -> BulletList:
    normalised: list[list[Span]] = []
    for item in items:
        if isinstance(item, list):
            normalised.append(item)
        elif isinstance(item, str):
            normalised.append([text(item)])
        else:
            normalised.append([item])
    return BulletList(items=normalised, marker=marker)


# ---------------------------------------------------------------------------
# Low-level escaping helpers (also registered as Jinja2 filters)
# ---------------------------------------------------------------------------

def escape_text(value: str) -> str:
    """Backslash-escape characters Markdown would interpret."""
    return _SPECIAL_CHARS.sub(r"\\\1", value)


def link_target(value: str) -> str:
    """Percent-encode characters that would end a link destination."""
    return value.replace(" ", "%20").replace("(", "%28").replace(")", "%29")


def _longest_backtick_run(value: str) -> int:
    return max((len(m.group(0)) for m in _BACKTICK_RUN.finditer(value)), default=0)


def code_span(value: str) -> str:
    """Wrap *value* in a code span delimiter longer than any run inside it."""
    ticks = "`" * (_longest_backtick_run(value) + 1)
    if value.startswith("`") or value.endswith("`"):
        return f"{ticks} {value} {ticks}"
    return f"{ticks}{value}{ticks}"


def fenced_block(content: str, language: str = "") -> str:
    """Fence *content* literally, with a fence it cannot contain.

    The content is never altered; a newline is only added before the closing
    fence when the content does not already end with one.
    """
    fence = "`" * max(3, _longest_backtick_run(content) + 1)
    if content and not content.endswith("\n"):
        content += "\n"
    return f"{fence}{language}\n{content}{fence}"


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------

class MarkdownFormatter:
    """Renders ``MarkdownDocument`` trees to Markdown text."""

    def render(self, document: MarkdownDocument) -> str:
        rendered = [self.render_block(block) for block in document.blocks]
        # Empty blocks are dropped.
        return "\n\n".join(r for r in rendered if r) + "\n"

    def render_block(self, block: Block) -> str:
        if isinstance(block, Heading):
            return f"{'#' * block.level} {escape_text(block.text)}"
        if isinstance(block, Paragraph):
            return self.render_spans(block.spans)
        if isinstance(block, BulletList):
            return "\n".join(
                f"{block.marker} {self.render_spans(item)}" for item in block.items
            )
        if isinstance(block, CodeBlock):
            return fenced_block(block.code, block.language)
        raise TypeError(f"Unsupported block: {type(block).__name__}")

    def render_spans(self, spans: list[Span]) -> str:
        return "".join(self.render_span(span) for span in spans)

    def render_span(self, span: Span) -> str:
        if isinstance(span, Text):
            return escape_text(span.value)
        if isinstance(span, Code):
            return code_span(span.value)
        if isinstance(span, Strong):
            return f"**{escape_text(span.value)}**"
        if isinstance(span, Link):
            return f"[{escape_text(span.title)}]({link_target(span.target)})"
        raise TypeError(f"Unsupported span: {type(span).__name__}")
