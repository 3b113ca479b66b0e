"""ActivityLog for recording rename, move and match requests.

This module provides the ActivityLog class that appends a plain-text audit
trail of the changes made through filetagger. Each session starts with a
separator-framed header followed by one timestamped line per request.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from filetagger.models import MatchResult, OperationResult

logger = logging.getLogger(__name__)


class ActivityLog:
    """Append-only audit log of filetagger requests.

    Usage:
        with ActivityLog(Path("activity.log"), root=Path("/data")) as log:
            log.log_rename("scan.pdf", "Invoice_ACME.pdf", result)
            log.log_match(["acme", "invoice"], match_result)

    Attributes:
        SEPARATOR: The 65-character separator line framing the session header.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Path, root: Optional[Path] = None) -> None:
        """Initialize the ActivityLog.

        Args:
            log_file_path: Path of the log file. Existing content is kept.
            root: Root folder shown in the session header.

        Raises:
            OSError: If the log file path is not writable.
        """
        self._log_file_path = Path(log_file_path)
        self._root = root
        self._file_handle: Optional[TextIO] = None

        # Validate path is writable
        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file path is writable.

        Raises:
            OSError: If the parent directory doesn't exist or is not writable.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")
        try:
            test_file = parent / f".filetagger_test_{id(self)}"
            test_file.touch()
            test_file.unlink()
        except PermissionError:
            raise OSError(f"Permission denied: cannot write to {parent}")

    def open(self) -> "ActivityLog":
        """Open the log file for appending and write the session header.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        if self._file_handle is None:
            try:
                self._file_handle = open(
                    self._log_file_path, "a", encoding="utf-8", errors="backslashreplace"
                )
            except OSError as e:
                raise OSError(f"Cannot open log file for writing: {e}")
            self._log_header()
        return self

    def close(self) -> None:
        """Close the log file if it is open."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                logger.warning(f"Error closing log file: {e}")
            finally:
                self._file_handle = None

    def __enter__(self) -> "ActivityLog":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def _log_header(self) -> None:
        self._write_line(self.SEPARATOR)
        self._write_line("filetagger - Activity Log")
        self._write_line(self.SEPARATOR)
        self._write_line(f"Session started: {self._format_timestamp(datetime.now())}")
        if self._root is not None:
            self._write_line(f"Root folder: {self._root}")
        self._write_line("")

    def log_rename(self, old_name: str, new_name: str, result: OperationResult) -> None:
        """Record a rename request and its outcome."""
        self._write_entry(f"RENAME {old_name} -> {new_name}", result.success, result.message)

    def log_move(self, file_name: str, destination: str, result: OperationResult) -> None:
        """Record a move request and its outcome."""
        self._write_entry(f"MOVE {file_name} -> {destination}", result.success, result.message)

    def log_match(self, tags: List[str], result: MatchResult) -> None:
        """Record a match request, including the best folder if any."""
        detail = result.message
        if result.success and result.matches:
            best = result.matches[0]
            detail = f"{detail} Best: {best.folder_path} ({best.match_count} tag(s))"
        self._write_entry(f"MATCH [{', '.join(tags)}]", result.success, detail)

    def _write_entry(self, action: str, success: bool, detail: str) -> None:
        status = "OK" if success else "FAILED"
        timestamp = self._format_timestamp(datetime.now())
        self._write_line(f"[{timestamp}] {status} {action}")
        if detail:
            self._write_line(detail, indent=2)

    def _format_timestamp(self, dt: datetime) -> str:
        """Format a datetime as 'YYYY-MM-DD HH:MM:SS'."""
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation.

        Args:
            text: The text to write.
            indent: Number of spaces to indent the line.
        """
        if self._file_handle is None:
            logger.warning(f"Attempted to write to closed activity log: {text}")
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
            self._file_handle.flush()
        except OSError as e:
            logger.warning(f"Error writing to activity log: {e}")
