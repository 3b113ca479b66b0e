"""End-to-end tests for the filetagger CLI.

This module tests the CLI interface using Typer's CliRunner against the
root_folder tree from conftest.
"""

import csv
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from filetagger import __version__
from filetagger.cli import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CliRunner instance for testing."""
    return CliRunner()


@pytest.fixture
def no_env_root(temp_dir: Path, monkeypatch) -> dict:
    """Environment with ROOT_FOLDER_TO_SCAN unset and no .env file in reach."""
    monkeypatch.chdir(temp_dir)
    return {"ROOT_FOLDER_TO_SCAN": None}


class TestVersionFlag:
    """Tests for --version flag."""

    def test_version_flag_short(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_flag_long(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestConfiguration:
    """Root folder resolution and configuration errors."""

    def test_missing_root_exits_with_error(self, cli_runner: CliRunner, no_env_root: dict) -> None:
        result = cli_runner.invoke(app, ["files"], env=no_env_root)

        assert result.exit_code == 1
        assert "ROOT_FOLDER_TO_SCAN is not set" in result.stdout

    def test_nonexistent_root(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        result = cli_runner.invoke(app, ["folders", "--root", str(temp_dir / "missing")])

        assert result.exit_code == 1
        assert "Root folder does not exist" in result.stdout

    def test_root_from_environment(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(app, ["files"], env={"ROOT_FOLDER_TO_SCAN": str(root_folder)})

        assert result.exit_code == 0
        assert "notes.txt" in result.stdout

    def test_serve_missing_root(self, cli_runner: CliRunner, no_env_root: dict) -> None:
        with patch("flask.Flask.run") as run:
            result = cli_runner.invoke(app, ["serve"], env=no_env_root)

        assert result.exit_code == 1
        run.assert_not_called()


class TestListingCommands:
    """files and folders commands."""

    def test_files_root_only(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(app, ["files", "--root", str(root_folder)])

        assert result.exit_code == 0
        assert "Files in Root Folder" in result.stdout
        assert "notes.txt" in result.stdout
        assert "return.pdf" not in result.stdout

    def test_files_recursive(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(app, ["files", "-R", "--root", str(root_folder)])

        assert result.exit_code == 0
        assert "return.pdf" in result.stdout

    def test_folders(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(app, ["folders", "--root", str(root_folder)])

        assert result.exit_code == 0
        assert "Archive" in result.stdout
        assert "Travel" in result.stdout


class TestMatchCommand:
    """match and suggest commands."""

    def test_match_ranks_folders(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(app, ["match", "taxes", "2023", "--root", str(root_folder)])

        assert result.exit_code == 0
        assert "Matching folders: 4" in result.stdout
        assert "2/2" in result.stdout

    def test_match_accepts_commas(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(app, ["match", "taxes,2023", "--root", str(root_folder)])

        assert "Tags: taxes, 2023" in result.stdout

    def test_match_blank_tags_fail(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(app, ["match", " , ", "--root", str(root_folder)])

        assert result.exit_code == 1
        assert "Tags are required." in result.stdout

    def test_match_without_results(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(app, ["match", "qqqzzz", "--root", str(root_folder)])

        assert result.exit_code == 0
        assert "No matching folders found." in result.stdout

    def test_suggest(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(
            app, ["suggest", "Invoice_ACME_20230415.pdf", "--root", str(root_folder)]
        )

        assert result.exit_code == 0
        assert "invoice, 2023" in result.stdout


class TestFileCommands:
    """rename, move and export commands."""

    def test_rename(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(
            app, ["rename", "notes.txt", "Trip_Notes.txt", "--root", str(root_folder)]
        )

        assert result.exit_code == 0
        assert (root_folder / "Trip_Notes.txt").exists()

    def test_rename_conflict(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(
            app, ["rename", "notes.txt", "Invoice_ACME_20230415.pdf", "--root", str(root_folder)]
        )

        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_move_with_activity_log(
        self, cli_runner: CliRunner, root_folder: Path, temp_dir: Path
    ) -> None:
        log_file = temp_dir / "activity.log"
        result = cli_runner.invoke(
            app,
            ["move", "notes.txt", "Travel", "--root", str(root_folder), "--log-file", str(log_file)],
        )

        assert result.exit_code == 0
        assert (root_folder / "Travel" / "notes.txt").exists()
        assert "OK MOVE notes.txt -> Travel" in log_file.read_text()

    def test_move_missing_destination(self, cli_runner: CliRunner, root_folder: Path) -> None:
        result = cli_runner.invoke(
            app, ["move", "notes.txt", "Nowhere", "--root", str(root_folder)]
        )

        assert result.exit_code == 1
        assert (root_folder / "notes.txt").exists()

    def test_move_unwritable_log(self, cli_runner: CliRunner, root_folder: Path, temp_dir: Path) -> None:
        result = cli_runner.invoke(
            app,
            [
                "move", "notes.txt", "Travel",
                "--root", str(root_folder),
                "--log-file", str(temp_dir / "missing" / "activity.log"),
            ],
        )

        assert result.exit_code == 1
        assert (root_folder / "notes.txt").exists()

    def test_export(self, cli_runner: CliRunner, root_folder: Path, temp_dir: Path) -> None:
        output = temp_dir / "files.csv"
        result = cli_runner.invoke(app, ["export", str(output), "--root", str(root_folder)])

        assert result.exit_code == 0
        assert "Wrote 4 file(s)" in result.stdout
        with open(output, newline="", encoding="utf-8") as handle:
            rows = list(csv.reader(handle))
        assert rows[0] == ["File Name", "Folder Path"]
        assert len(rows) == 5

    def test_export_unwritable(self, cli_runner: CliRunner, root_folder: Path, temp_dir: Path) -> None:
        result = cli_runner.invoke(
            app, ["export", str(temp_dir / "missing" / "files.csv"), "--root", str(root_folder)]
        )

        assert result.exit_code == 1
        assert "Cannot write CSV" in result.stdout

    def test_failed_export_keeps_previous_file(
        self, cli_runner: CliRunner, root_folder: Path, temp_dir: Path
    ) -> None:
        output = temp_dir / "files.csv"
        output.write_text("previous export")

        with patch("filetagger.operations.csv_export.os.replace", side_effect=OSError("disk full")):
            result = cli_runner.invoke(app, ["export", str(output), "--root", str(root_folder)])

        assert result.exit_code == 1
        assert "Cannot write CSV: disk full" in result.stdout
        assert output.read_text() == "previous export"
        assert sorted(p.name for p in temp_dir.iterdir()) == ["files.csv", "root"]


class TestUndecodableNames:
    """Commands keep working when a file name is not valid UTF-8."""

    def test_export(
        self, cli_runner: CliRunner, root_folder: Path, temp_dir: Path, undecodable_file: str
    ) -> None:
        output = temp_dir / "files.csv"
        result = cli_runner.invoke(app, ["export", str(output), "--root", str(root_folder)])

        assert result.exit_code == 0
        assert "Wrote 5 file(s)" in result.stdout
        with open(output, newline="", encoding="utf-8") as handle:
            rows = list(csv.reader(handle))
        assert ["scan_\ufffd.pdf", str(root_folder)] in rows

    def test_files_listing(
        self, cli_runner: CliRunner, root_folder: Path, undecodable_file: str
    ) -> None:
        result = cli_runner.invoke(app, ["files", "--root", str(root_folder)])

        assert result.exit_code == 0
        assert "scan_\ufffd.pdf" in result.stdout


class TestServeCommand:
    """serve command wiring (the server itself is not started)."""

    def test_serve_runs_flask(self, cli_runner: CliRunner, root_folder: Path) -> None:
        with patch("flask.Flask.run") as run:
            result = cli_runner.invoke(
                app, ["serve", "--root", str(root_folder), "--port", "8123"]
            )

        assert result.exit_code == 0
        assert "Server running at http://127.0.0.1:8123" in result.stdout
        run.assert_called_once_with(host="127.0.0.1", port=8123, threaded=False)

    def test_serve_with_activity_log(
        self, cli_runner: CliRunner, root_folder: Path, temp_dir: Path
    ) -> None:
        log_file = temp_dir / "activity.log"
        with patch("flask.Flask.run"):
            result = cli_runner.invoke(
                app, ["serve", "--root", str(root_folder), "--log-file", str(log_file)]
            )

        assert result.exit_code == 0
        assert "filetagger - Activity Log" in log_file.read_text()
