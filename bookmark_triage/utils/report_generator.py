"""
Import report rendering.

Summarizes a boundary split per folder and renders it for the terminal
with Rich. Output written to a pipe or file carries no color codes.
"""

from dataclasses import dataclass
from io import StringIO
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.data_models import BoundaryResult

RICH_COLORS: Dict[str, str] = {
    "header": "bold cyan",
    "success": "green",
    "warning": "yellow",
    "muted": "dim",
    "metric_value": "bold green",
}

ROOT_LABEL = "(root)"


@dataclass
class FolderCount:
    """Keeper and to-categorize counts for one folder path."""

    folder_path: str
    keepers: int = 0
    to_categorize: int = 0

    @property
    def total(self) -> int:
        return self.keepers + self.to_categorize


class ImportReport:
    """
    Per-folder breakdown of an import.

    Folders are listed in the order they first appear in the export.
    """

    def __init__(self, result: BoundaryResult, title: str = "Bookmark Import"):
        self.result = result
        self.title = title

    def folder_counts(self) -> List[FolderCount]:
        counts: Dict[str, FolderCount] = {}
        for bookmark in self.result.bookmarks:
            entry = counts.setdefault(bookmark.folder_path, FolderCount(bookmark.folder_path))
            if bookmark.is_keeper:
                entry.keepers += 1
            else:
                entry.to_categorize += 1
        return list(counts.values())

    def print(self, console: Optional[Console] = None) -> None:
        """Print the report to a console (stdout by default)."""
        console = console or Console()

        if self.result.boundary_found:
            subtitle = f"[{RICH_COLORS['success']}]boundary marker found[/]"
        else:
            subtitle = f"[{RICH_COLORS['warning']}]no boundary marker[/]"
        console.print(
            Panel(f"{escape(self.title)}\n{subtitle}", style=RICH_COLORS["header"], expand=False)
        )

        table = Table(show_header=True, header_style=RICH_COLORS["header"])
        table.add_column("Folder")
        table.add_column("Keepers", justify="right")
        table.add_column("To categorize", justify="right")

        for entry in self.folder_counts():
            table.add_row(
                escape(entry.folder_path) or ROOT_LABEL,
                str(entry.keepers),
                str(entry.to_categorize),
            )

        table.add_row(
            f"[{RICH_COLORS['muted']}]Total[/]",
            f"[{RICH_COLORS['metric_value']}]{self.result.keeper_count}[/]",
            f"[{RICH_COLORS['metric_value']}]{self.result.to_categorize_count}[/]",
        )
        console.print(table)

    def render(self, width: int = 80) -> str:
        """Render the report to a plain string without color codes."""
        output = StringIO()
        self.print(Console(file=output, width=width, no_color=True, force_terminal=False))
        return output.getvalue()
