"""Rich console output for the filetagger CLI.

This module provides the ConsoleView class, which renders file listings,
folder listings and match rankings as Rich tables.

Example:
    from filetagger.ui import ConsoleView

    view = ConsoleView()
    view.display_files(service.list_root_files(), title="Files in Root Folder")
    view.display_matches(tags, service.match_folders(tags))
"""

from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from filetagger.models import FileRecord, FolderRecord, MatchResult, OperationResult, displayable


def _text(value) -> str:
    """Markup-escaped, UTF-8 safe text for a name, path or message."""
    return escape(displayable(value))


class ConsoleView:
    """Rich-based renderer for CLI results.

    Args:
        console: Optional Rich Console instance for output. Pass a Console
            writing to a StringIO to capture output in tests.

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_files(self, files: List[FileRecord], title: str, root: Optional[Path] = None) -> None:
        """Display file records as a table of name and folder."""
        if root is not None:
            self.console.print(f"[dim]Root folder: {root}[/dim]")

        if not files:
            self.console.print("[yellow]No files found.[/yellow]")
            return

        table = Table(title=title)
        table.add_column("#", justify="right", style="cyan", no_wrap=True)
        table.add_column("File Name", style="white")
        table.add_column("Folder Path", style="dim")

        for idx, record in enumerate(files, start=1):
            table.add_row(
                str(idx),
                _text(self._truncate_name(record.file_name, max_length=60)),
                _text(record.folder_path),
            )

        self.console.print(table)

    def display_folders(self, folders: List[FolderRecord], root: Optional[Path] = None) -> None:
        """Display folder records as a table of name and path."""
        if root is not None:
            self.console.print(f"[dim]Root folder: {root}[/dim]")

        if not folders:
            self.console.print("[yellow]No folders found.[/yellow]")
            return

        table = Table(title="Folders and Subfolders")
        table.add_column("#", justify="right", style="cyan", no_wrap=True)
        table.add_column("Folder Name", style="white")
        table.add_column("Folder Path", style="dim")

        for idx, record in enumerate(folders, start=1):
            table.add_row(str(idx), _text(record.folder_name), _text(record.folder_path))

        self.console.print(table)

    def display_matches(self, tags: List[str], result: MatchResult) -> None:
        """Display ranked folders with the tags each one matched.

        Args:
            tags: Tags the folders were matched against.
            result: MatchResult from the matcher.
        """
        header_text = (
            f"Tags: {_text(', '.join(tags)) if tags else '(none)'}\n"
            f"Matching folders: {len(result.matches)}"
        )
        self.console.print(Panel(header_text, title="Folder Matches", border_style="blue"))

        if not result.success:
            self.console.print(f"[red]Error:[/red] {_text(result.message)}")
            return

        if not result.matches:
            self.console.print("[yellow]No matching folders found.[/yellow]")
            return

        table = Table()
        table.add_column("Rank", justify="right", style="cyan", no_wrap=True)
        table.add_column("Matches", justify="center")
        table.add_column("Tags", style="magenta")
        table.add_column("Folder Path", style="white")

        total_tags = len(tags)
        for idx, match in enumerate(result.matches, start=1):
            table.add_row(
                str(idx),
                self._format_count(match.match_count, total_tags),
                _text(", ".join(match.matched_tags)),
                _text(match.folder_path),
            )

        self.console.print(table)

    def display_suggestions(self, file_name: str, tags: List[str]) -> None:
        if tags:
            self.console.print(f"Suggested tags for [bold]{_text(file_name)}[/bold]: {_text(', '.join(tags))}")
        else:
            self.console.print(
                f"[yellow]No tags from {_text(file_name)} occur in any folder.[/yellow]"
            )

    def display_result(self, result: OperationResult) -> None:
        """Display the outcome of a rename or move."""
        if result.success:
            self.console.print(f"[green]{_text(result.message)}[/green]")
        else:
            self.console.print(f"[red]Error:[/red] {_text(result.message)}")

    def display_scan_warnings(self, errors: List[str]) -> None:
        if not errors:
            return
        self.console.print("[yellow]Scanner warnings:[/yellow]")
        for error in errors:
            self.console.print(f"  [dim]- {_text(error)}[/dim]")

    def _format_count(self, count: int, total: int) -> str:
        """Color a match count green when every tag matched."""
        if total and count >= total:
            return f"[green]{count}/{total}[/green]"
        return f"[yellow]{count}/{total}[/yellow]"

    def _truncate_name(self, name: str, max_length: int = 40) -> str:
        """Truncate long names with an ellipsis."""
        if len(name) <= max_length:
            return name
        return name[: max_length - 3] + "..."
