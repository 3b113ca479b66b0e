"""Directory scanning utility for listing files and folders under a root.

This module provides the DirectoryScanner class used by every listing and
matching operation. Traversal is depth-first with an explicit stack, visiting
the entries of each directory in name order so repeated scans of an unchanged
tree always produce the same sequence.

Example:
    >>> from filetagger.scanning import DirectoryScanner
    >>> scanner = DirectoryScanner()
    >>> for folder in scanner.list_folders_recursive(Path("/data")):
    ...     print(folder.folder_path)
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Tuple

from filetagger.models import FileRecord, FolderRecord

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Lists files and folders beneath a root directory.

    Symlinked directories are never descended into and symlinked files are
    not reported, so only real entries of the tree are listed. Directories
    that cannot be read are logged, recorded in the error list and skipped
    together with their subtree.

    Attributes:
        _errors: List of error messages encountered during scanning.

    Example:
        >>> scanner = DirectoryScanner()
        >>> files = scanner.list_files_recursive(Path("/data"))
        >>> if scanner.get_errors():
        ...     print("Some folders could not be read")
    """

    def __init__(self) -> None:
        self._errors: List[str] = []

    def list_root_files(self, root: Path) -> List[FileRecord]:
        """List regular files directly inside the root folder.

        Args:
            root: Folder to scan.

        Returns:
            FileRecord for each regular file, in name order. Subfolders and
            symlinks are left out. An unreadable root yields an empty list.
        """
        entries = self._read_directory(root)
        return [
            FileRecord(file_name=entry.name, folder_path=root)
            for entry in entries
            if self._is_file(entry)
        ]

    def list_files_recursive(self, root: Path) -> List[FileRecord]:
        """List regular files in the root folder and all of its subfolders.

        Args:
            root: Folder to scan.

        Returns:
            FileRecord for every regular file found. Files of a folder are
            listed before the files of its subfolders.
        """
        result: List[FileRecord] = []
        for directory, entries in self._walk(root):
            for entry in entries:
                if self._is_file(entry):
                    result.append(FileRecord(file_name=entry.name, folder_path=directory))
        return result

    def list_folders_recursive(self, root: Path) -> List[FolderRecord]:
        """List every folder below the root folder, depth-first.

        The root itself is not included. A folder that cannot be read is
        still listed; only its contents are skipped.

        Args:
            root: Folder to scan.

        Returns:
            FolderRecord for every folder, in depth-first pre-order.
        """
        return [
            FolderRecord(folder_name=directory.name, folder_path=directory)
            for directory, _ in self._walk(root)
            if directory != root
        ]

    def _walk(self, root: Path) -> Iterator[Tuple[Path, List[os.DirEntry]]]:
        """Yield (directory, entries) pairs in depth-first pre-order.

        Uses an explicit worklist instead of recursion so deeply nested
        trees cannot exhaust the call stack.
        """
        stack: List[Path] = [root]

        while stack:
            directory = stack.pop()
            entries = self._read_directory(directory)
            yield directory, entries

            subdirectories = [
                directory / entry.name for entry in entries if self._is_dir(entry)
            ]
            # Reversed so the first subdirectory by name is visited next
            stack.extend(reversed(subdirectories))

    def _read_directory(self, directory: Path) -> List[os.DirEntry]:
        """Read a directory's entries sorted by name, or [] if unreadable."""
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except PermissionError:
            self._record_error(f"Permission denied reading folder: {directory}")
            return []
        except OSError as e:
            self._record_error(f"Error reading folder {directory}: {e}")
            return []

        logger.debug("Read %d entries from %s", len(entries), directory)
        return entries

    def _is_file(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_file(follow_symlinks=False)
        except OSError as e:
            self._record_error(f"Error accessing {entry.path}: {e}")
            return False

    def _is_dir(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=False)
        except OSError as e:
            self._record_error(f"Error accessing {entry.path}: {e}")
            return False

    def _record_error(self, message: str) -> None:
        logger.warning(message)
        self._errors.append(message)

    def get_errors(self) -> List[str]:
        """Get list of errors encountered during scanning operations.

        Returns:
            List of error message strings.

        Example:
            >>> scanner = DirectoryScanner()
            >>> scanner.list_root_files(Path("/nonexistent"))
            >>> scanner.get_errors()[0]
            'Error reading folder /nonexistent: ...'
        """
        return self._errors.copy()

    def clear_errors(self) -> None:
        """Clear the list of accumulated errors."""
        self._errors.clear()
