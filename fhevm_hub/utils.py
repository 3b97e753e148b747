"""Shared utility functions for the FHEVM example hub toolkit.

Provides Rich-based console reporting, JSON output and the file-system
helpers used by the materializer and the doc emitter.
"""

from __future__ import annotations

import json
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fhevm_hub.errors import DestinationWriteFailure

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The ``Path`` object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def copy_tree(source: str | Path, destination: str | Path) -> Path:
    """Recursively copy *source* into *destination*.

    Files already present at the same relative path are overwritten; files
    only present in *destination* are left alone.
    """
    shutil.copytree(Path(source), Path(destination), dirs_exist_ok=True)
    return Path(destination)


def copy_file(source: str | Path, destination: str | Path) -> Path:
    """Copy a single file, creating the destination's parent directory."""
    target = Path(destination)
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(Path(source), target)
    return target


@contextmanager
def writing_to(path: str | Path) -> Iterator[None]:
    """Translate file-system errors raised in the block into ``DestinationWriteFailure``."""
    try:
        yield
    except OSError as exc:
        raise DestinationWriteFailure(Path(path), exc) from exc


def read_text_if_exists(path: str | Path) -> str | None:
    """Return the file's text content, or ``None`` when it does not exist.

    Line endings are returned exactly as stored.  Bytes that are not valid
    UTF-8 are kept as surrogate escapes; write the text back with
    ``errors="surrogateescape"`` to reproduce them.
    """
    file_path = Path(path)
    if not file_path.is_file():
        return None
    with file_path.open(encoding="utf-8", errors="surrogateescape", newline="") as fh:
        return fh.read()


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def dump_json(data: dict[str, Any] | list[Any]) -> str:
    """Serialise *data* as two-space indented JSON with a trailing newline.

    Key order is preserved so identical input always yields identical bytes.
    """
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Save data as pretty-printed JSON, creating parent directories."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(dump_json(data), encoding="utf-8")
    return file_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]", soft_wrap=True)


def print_error(message: str) -> None:
    """Print a red error message on stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]", soft_wrap=True)


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, escape(str(value)))

    console.print(table)
    console.print()
