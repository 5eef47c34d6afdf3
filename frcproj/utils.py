"""Shared helpers for frcproj.

Rich-based console output, JSON loading, directory creation and the
executable-bit helper used on the generated wrapper script.
"""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from .errors import MissingSourcePath, PermissionDenied

console = Console()

# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json_list(path: str | Path) -> list[Any]:
    """Load a JSON file that contains a top-level array.

    A single top-level object is wrapped in a one-element list.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if isinstance(data, list):
        return data
    return [data]


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Raises:
        PermissionDenied: If the directory cannot be created.
    """
    dir_path = Path(path)
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
    except PermissionError as exc:
        raise PermissionDenied(
            f"Cannot create directory {dir_path}",
            operation="ensure_dir", destination=dir_path,
        ) from exc
    return dir_path


def make_executable(path: str | Path, out: Console | None = None) -> None:
    """Add owner, group and other execute bits to *path*.

    Existing permission bits are kept.  Windows has no execute bit, so there
    this only prints a warning.

    Raises:
        MissingSourcePath: If *path* does not exist.
        PermissionDenied: If the mode change is refused.
    """
    file_path = Path(path)
    if os.name == "nt":
        print_warning(f"Skipping chmod on {file_path}: not supported on this platform", out=out)
        return
    try:
        current = file_path.stat().st_mode
        file_path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except FileNotFoundError as exc:
        raise MissingSourcePath(
            f"Cannot make missing file executable: {file_path}",
            operation="make_executable", destination=file_path,
        ) from exc
    except PermissionError as exc:
        raise PermissionDenied(
            f"Cannot change mode of {file_path}",
            operation="make_executable", destination=file_path,
        ) from exc


def is_empty_dir(path: str | Path) -> bool:
    """Return ``True`` if *path* is a directory with no entries."""
    dir_path = Path(path)
    return dir_path.is_dir() and next(dir_path.iterdir(), None) is None


def expand_home(value: str) -> Path:
    """Expand a leading ``~`` and return a ``Path``."""
    return Path(value).expanduser()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(step: int, total: int, message: str, out: Console | None = None) -> None:
    """Print a dim progress line for one generation step."""
    (out or console).print(f"[dim]\\[{step}/{total}][/dim] {message}")


def print_summary_table(
    data: dict[str, str], title: str = "Summary", out: Console | None = None
) -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    (out or console).print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str, out: Console | None = None) -> None:
    """Print a yellow warning message."""
    (out or console).print(f"[bold yellow]{message}[/bold yellow]")
