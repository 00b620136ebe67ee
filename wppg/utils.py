"""Shared utility functions for wppg.

Provides the file-system primitives used by the modules and the exporter,
name helpers, and the Rich-based console output used for progress and error
reporting.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def slugify(name: str) -> str:
    """Convert a project name to a directory-safe slug.

    * Replaces every run of characters outside ``[A-Za-z0-9-]`` with a hyphen.
    * Lowercases the result.
    * Strips leading/trailing hyphens and whitespace.

    Examples::

        slugify("WPPG WordPress Project") -> "wppg-wordpress-project"
        slugify("  My Blog (v2)  ") -> "my-blog-v2"
    """
    result = re.sub(r"[^A-Za-z0-9-]+", "-", name.strip())
    return result.lower().strip("-")


def snake_case(name: str) -> str:
    """Turn a slug into an identifier usable as a database name."""
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Raises:
        OSError: If the directory cannot be created.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def write_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories as needed.

    Raises:
        OSError: On permission or disk-space problems. Nothing is cleaned up.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return file_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STAGE_COLORS: dict[str, str] = {
    "collecting": "bright_cyan",
    "summarizing": "bright_magenta",
    "executing": "bright_green",
    "exporting": "bright_blue",
}


def print_stage_header(stage: str, title: str) -> None:
    """Print a full-width rule announcing a pipeline stage."""
    color = STAGE_COLORS.get(stage, "white")
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_summary(rows: Iterable[tuple[str, str] | str], title: str) -> None:
    """Print a two-column definition list.

    Plain string rows are section headings; every heading after the first
    row also starts a new table section.
    """
    table = Table(title=title, show_header=False, title_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for index, row in enumerate(rows):
        if isinstance(row, str):
            if index:
                table.add_section()
            table.add_row(f"[bold cyan]{escape(row)}[/bold cyan]", "")
            continue
        label, value = row
        table.add_row(escape(label), escape(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
