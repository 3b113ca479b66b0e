"""
filetagger - CLI Interface.

A command-line interface for tagging files in a root folder and filing them
into the best matching subfolder, either through the bundled web app or
directly from the terminal.

Usage Examples:
    # Start the web app on http://127.0.0.1:3000
    ROOT_FOLDER_TO_SCAN=/data/inbox filetagger serve

    # List files in the root folder, or every file below it
    filetagger files --root /data/inbox
    filetagger files --root /data/inbox --recursive

    # Rank folders for a set of tags
    filetagger match taxes 2023 --root /data/inbox

    # Derive tags from a file name
    filetagger suggest Receipt_Dentist_20230112.pdf --root /data/inbox

    # Rename or move a file in the root folder
    filetagger rename scan_0042.pdf Receipt_Dentist_20230112.pdf
    filetagger move Receipt_Dentist_20230112.pdf /data/inbox/Health/2023

    # Export all files to CSV
    filetagger export files_list.csv
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from filetagger import __version__
from filetagger.config import AppConfig, ConfigError, load_config
from filetagger.matching import parse_tags
from filetagger.operations import CSV_FILENAME, export_files_csv
from filetagger.orchestration import ActivityLog, TagService
from filetagger.ui import ConsoleView

# Initialize Typer app
app = typer.Typer(
    name="filetagger",
    help="filetagger - Tag files and file them into matching folders.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()

ROOT_OPTION_HELP = "Root folder to scan. Defaults to $ROOT_FOLDER_TO_SCAN."


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"filetagger v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich; DEBUG when verbose, INFO otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def resolve_config(root: Optional[Path], **overrides) -> AppConfig:
    """
    Load configuration, exiting with an error message if it is unusable.

    Args:
        root: Root folder from --root, or None to use the environment.
        **overrides: host, port or log_file values from the command line.

    Raises:
        typer.Exit: With status 1 if the configuration is invalid.
    """
    try:
        return load_config(root_folder=root, **overrides)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """filetagger - Tag files and file them into matching folders."""
    pass


@app.command()
def serve(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_OPTION_HELP),
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind. Defaults to $HOST or 127.0.0.1."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on. Defaults to $PORT or 3000."),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Append an activity log of renames, moves and matches to this file.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output."),
) -> None:
    """
    Run the web app.

    Serves the file listings, the CSV download and the rename, match and
    move endpoints for the configured root folder.
    """
    configure_logging(verbose)
    config = resolve_config(root, host=host, port=port, log_file=log_file)

    # Imported lazily so the other commands do not pull in Flask
    from filetagger.web import create_app

    activity_log: Optional[ActivityLog] = None
    if config.log_file:
        try:
            activity_log = ActivityLog(config.log_file, root=config.root_folder).open()
        except OSError as e:
            console.print(
                f"[yellow]Warning:[/yellow] Cannot write activity log: {e}. "
                "Continuing without logging."
            )
            activity_log = None

    try:
        flask_app = create_app(config, activity_log=activity_log)
        base_url = f"http://{config.host}:{config.port}"
        console.print(f"[green]Server running at {base_url}[/green]")
        console.print(f"Visit {base_url}/root to view files in the root folder.")
        console.print(f"Visit {base_url}/all to view all files (including subfolders).")
        console.print(f"Visit {base_url}/folders to view all folders.")
        console.print(f"Visit {base_url}/download to download a CSV of all files.")

        flask_app.run(host=config.host, port=config.port, threaded=False)

    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user.[/yellow]")

    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    finally:
        if activity_log:
            activity_log.close()


@app.command()
def files(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_OPTION_HELP),
    recursive: bool = typer.Option(
        False, "--recursive", "-R", help="Include files in subfolders."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output."),
) -> None:
    """List files in the root folder."""
    configure_logging(verbose)
    service = TagService(resolve_config(root))
    view = ConsoleView(console)
    scan_errors: List[str] = []

    if recursive:
        records = service.list_all_files(errors=scan_errors)
        title = "All Files (Including Subfolders)"
    else:
        records = service.list_root_files(errors=scan_errors)
        title = "Files in Root Folder"

    view.display_files(records, title=title, root=service.root)
    if verbose:
        view.display_scan_warnings(scan_errors)


@app.command()
def folders(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output."),
) -> None:
    """List every folder below the root folder."""
    configure_logging(verbose)
    service = TagService(resolve_config(root))
    view = ConsoleView(console)

    scan_errors: List[str] = []

    view.display_folders(service.list_folders(errors=scan_errors), root=service.root)
    if verbose:
        view.display_scan_warnings(scan_errors)


@app.command()
def match(
    tags: List[str] = typer.Argument(..., help="Tags to match. Commas also separate tags."),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output."),
) -> None:
    """
    Rank folders by how many tags occur in their paths.

    Folders containing none of the tags are left out. Folders with the same
    number of matching tags are listed in scan order.
    """
    configure_logging(verbose)
    service = TagService(resolve_config(root))
    view = ConsoleView(console)

    normalized = parse_tags(",".join(tags))
    scan_errors: List[str] = []
    result = service.match_folders(normalized, errors=scan_errors)
    view.display_matches(normalized, result)

    if verbose:
        view.display_scan_warnings(scan_errors)
    if not result.success:
        raise typer.Exit(1)


@app.command()
def suggest(
    file_name: str = typer.Argument(..., help="File name to derive tags from."),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_OPTION_HELP),
) -> None:
    """Suggest tags from a file name that occur in at least one folder path."""
    service = TagService(resolve_config(root))
    ConsoleView(console).display_suggestions(file_name, service.suggest_tags(file_name))


@app.command()
def rename(
    old_name: str = typer.Argument(..., help="Current name of a file in the root folder."),
    new_name: str = typer.Argument(..., help="New file name."),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_OPTION_HELP),
    log_file: Optional[Path] = typer.Option(None, "--log-file", "-l", help="Append to this activity log."),
) -> None:
    """Rename a file in the root folder."""
    config = resolve_config(root, log_file=log_file)
    _run_operation(config, lambda service: service.rename_file(old_name, new_name))


@app.command()
def move(
    file_name: str = typer.Argument(..., help="Name of a file in the root folder."),
    destination: str = typer.Argument(..., help="Folder to move the file into."),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_OPTION_HELP),
    log_file: Optional[Path] = typer.Option(None, "--log-file", "-l", help="Append to this activity log."),
) -> None:
    """Move a file from the root folder into a destination folder."""
    config = resolve_config(root, log_file=log_file)
    _run_operation(config, lambda service: service.move_file(file_name, destination))


@app.command()
def export(
    output: Path = typer.Argument(Path(CSV_FILENAME), help="CSV file to write."),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_OPTION_HELP),
) -> None:
    """Export every file below the root folder to CSV."""
    service = TagService(resolve_config(root))

    try:
        count = export_files_csv(service.list_all_files(), output)
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot write CSV: {e}")
        raise typer.Exit(1)

    console.print(f"[green]Wrote {count} file(s) to {output}[/green]")


def _run_operation(config: AppConfig, operation) -> None:
    """Run a rename or move with an optional activity log; exit 1 on failure."""
    activity_log: Optional[ActivityLog] = None
    if config.log_file:
        try:
            activity_log = ActivityLog(config.log_file, root=config.root_folder).open()
        except OSError as e:
            console.print(f"[red]Error:[/red] Cannot write activity log: {e}")
            raise typer.Exit(1)

    try:
        result = operation(TagService(config, activity_log=activity_log))
    finally:
        if activity_log:
            activity_log.close()

    ConsoleView(console).display_result(result)
    if not result.success:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
