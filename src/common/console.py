"""Terminal output for CLI results."""
from __future__ import annotations

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


def print_files_table(files: Iterable, out: Optional[Console] = None) -> None:
    """Print dependency files as a Path/SHA table."""
    table = Table(title="Dependency files")
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("SHA", no_wrap=True)
    for dep_file in files:
        table.add_row(escape(dep_file.path), dep_file.sha)
    (out or console).print(table)


def print_push_report(report, out: Optional[Console] = None) -> None:
    """Print how the API classified each pushed file, one row per status."""
    table = Table(title="Pushed dependency files")
    table.add_column("Status", style="bold")
    table.add_column("Files", overflow="fold")
    for status, paths in (
        ("Added", report.added),
        ("Updated", report.updated),
        ("Unchanged", report.unchanged),
        ("Unsupported", report.unsupported),
    ):
        table.add_row(status, escape(", ".join(paths)))
    (out or console).print(table)
