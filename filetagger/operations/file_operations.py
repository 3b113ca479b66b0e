"""
File operations module for filetagger.

This module contains the FileOperations class for renaming files inside the
root folder and moving them into a destination folder. Every check runs
before the filesystem is touched, so a rejected request leaves the tree
exactly as it was.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from filetagger.models import ErrorKind, OperationResult

# Configure module logger
logger = logging.getLogger(__name__)


class FileOperations:
    """
    Handles rename and move requests for files in the root folder.

    Results are returned as OperationResult values instead of raised
    exceptions; OSErrors from the underlying calls are converted into
    ErrorKind.FILESYSTEM results.
    """

    def rename_file(self, root: Path, old_name: str, new_name: str) -> OperationResult:
        """
        Rename a file that lives directly in the root folder.

        Parameters:
            root (Path): Root folder containing the file.
            old_name (str): Current file name.
            new_name (str): New file name; must not already exist in root.
                Surrounding whitespace is stripped from both names.

        Returns:
            OperationResult: On success, `path` is the renamed file. Fails with
            VALIDATION for blank or non-plain names, NOT_FOUND when the source
            is missing, CONFLICT when the new name is taken, and FILESYSTEM if
            the OS rejects the rename.
        """
        if not _is_present(old_name) or not _is_present(new_name):
            return OperationResult.fail(
                ErrorKind.VALIDATION, "Old and new file names are required."
            )

        old_name, new_name = old_name.strip(), new_name.strip()

        for name in (old_name, new_name):
            problem = _check_plain_name(name)
            if problem:
                return OperationResult.fail(ErrorKind.VALIDATION, problem)

        source = root / old_name
        destination = root / new_name

        if not source.is_file():
            return OperationResult.fail(
                ErrorKind.NOT_FOUND, f'File "{old_name}" does not exist.'
            )

        if _exists(destination):
            return OperationResult.fail(
                ErrorKind.CONFLICT, f'A file named "{new_name}" already exists.'
            )

        try:
            source.rename(destination)
        except OSError as e:
            error_msg = f'Error renaming "{old_name}" to "{new_name}": {e}'
            logger.error(error_msg)
            return OperationResult.fail(ErrorKind.FILESYSTEM, error_msg)

        logger.info(f"Renamed file: {source} -> {destination}")
        return OperationResult.ok(
            f'File renamed to "{new_name}" successfully.', destination
        )

    def move_file(self, root: Path, file_name: str, destination: str) -> OperationResult:
        """
        Move a file from the root folder into a destination folder.

        A relative destination is taken relative to root. The destination
        must be an existing folder inside root. Surrounding whitespace is
        stripped from the file name and the destination.

        Parameters:
            root (Path): Root folder containing the file.
            file_name (str): Name of the file in root.
            destination (str): Folder to move the file into.

        Returns:
            OperationResult: On success, `path` is the file's new location.
            Fails with VALIDATION for blank input, a non-plain file name or a
            destination outside root; NOT_FOUND when the file or destination
            folder is missing; CONFLICT when the destination already holds a
            file of that name; FILESYSTEM if the OS rejects the move.
        """
        if not _is_present(file_name) or not _is_present(destination):
            return OperationResult.fail(
                ErrorKind.VALIDATION, "File name and destination folder are required."
            )

        file_name, destination = file_name.strip(), destination.strip()

        problem = _check_plain_name(file_name)
        if problem:
            return OperationResult.fail(ErrorKind.VALIDATION, problem)

        source = root / file_name
        dest_dir = Path(destination)
        if not dest_dir.is_absolute():
            dest_dir = root / dest_dir

        if not _is_within(dest_dir, root):
            return OperationResult.fail(
                ErrorKind.VALIDATION,
                f'Destination "{destination}" is outside the root folder.',
            )

        if not source.is_file():
            return OperationResult.fail(
                ErrorKind.NOT_FOUND, f'File "{file_name}" does not exist.'
            )

        if not dest_dir.is_dir():
            return OperationResult.fail(
                ErrorKind.NOT_FOUND, f'Destination folder "{destination}" does not exist.'
            )

        target = dest_dir / file_name
        if _exists(target):
            return OperationResult.fail(
                ErrorKind.CONFLICT,
                f'A file named "{file_name}" already exists in "{destination}".',
            )

        try:
            shutil.move(str(source), str(target))
        except OSError as e:
            error_msg = f'Error moving "{file_name}" to "{destination}": {e}'
            logger.error(error_msg)
            return OperationResult.fail(ErrorKind.FILESYSTEM, error_msg)

        logger.info(f"Moved file: {source} -> {target}")
        return OperationResult.ok(
            f'File "{file_name}" moved to "{destination}" successfully.', target
        )


def _is_present(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _check_plain_name(name: str) -> Optional[str]:
    """Return an error message unless name is a bare file name."""
    separators = [os.sep] + ([os.altsep] if os.altsep else [])
    if name in (".", "..") or any(sep in name for sep in separators):
        return f'"{name}" is not a valid file name.'
    return None


def _exists(path: Path) -> bool:
    # Dangling symlinks still occupy the name
    return path.exists() or path.is_symlink()


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True
