"""TagService for coordinating scanning, matching and file operations.

This module provides the TagService class, the single entry point used by
both the web application and the CLI. It wires DirectoryScanner,
FolderMatcher, FileOperations and an optional ActivityLog around an explicit
AppConfig, so no component reads the root folder from global state.

Example:
    from filetagger.config import load_config
    from filetagger.orchestration import TagService

    service = TagService(load_config())
    result = service.match_folders(["acme", "invoice"])
    if result.success:
        service.move_file("scan_0042.pdf", result.folders[0])
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from filetagger.config import AppConfig
from filetagger.matching import FolderMatcher, normalize_tags, tags_from_filename
from filetagger.models import FileRecord, FolderRecord, MatchResult, OperationResult
from filetagger.operations import FileOperations, files_to_csv
from filetagger.orchestration.activity_log import ActivityLog
from filetagger.scanning import DirectoryScanner

logger = logging.getLogger(__name__)


class TagService:
    """Runs filetagger requests against the configured root folder.

    Every call re-scans the filesystem with a scanner of its own, so
    concurrent requests share no scan state. Callers that want the scan
    warnings pass a list as ``errors`` and the messages are appended to it.

    Attributes:
        config: The AppConfig the service was created with.
        activity_log: Optional ActivityLog receiving rename, move and match
            outcomes. The caller owns opening and closing it.
    """

    def __init__(
        self,
        config: AppConfig,
        activity_log: Optional[ActivityLog] = None,
        scanner_factory: Callable[[], DirectoryScanner] = DirectoryScanner,
    ) -> None:
        """Initialize the TagService.

        Args:
            config: Validated runtime configuration.
            activity_log: Optional open ActivityLog.
            scanner_factory: Builds the DirectoryScanner used by a single
                call.
        """
        self.config = config
        self.activity_log = activity_log

        self._scanner_factory = scanner_factory
        self._operations = FileOperations()

    @property
    def root(self) -> Path:
        return self.config.root_folder

    def list_root_files(self, errors: Optional[List[str]] = None) -> List[FileRecord]:
        """Files directly inside the root folder."""
        scanner = self._scanner_factory()
        records = scanner.list_root_files(self.root)
        _collect_errors(scanner, errors)
        return records

    def list_all_files(self, errors: Optional[List[str]] = None) -> List[FileRecord]:
        """Files in the root folder and every subfolder."""
        scanner = self._scanner_factory()
        records = scanner.list_files_recursive(self.root)
        _collect_errors(scanner, errors)
        return records

    def list_folders(self, errors: Optional[List[str]] = None) -> List[FolderRecord]:
        """Every folder below the root folder."""
        scanner = self._scanner_factory()
        records = scanner.list_folders_recursive(self.root)
        _collect_errors(scanner, errors)
        return records

    def match_folders(
        self, tags: Iterable[str], errors: Optional[List[str]] = None
    ) -> MatchResult:
        """Rank the folders under root by the given tags.

        Args:
            tags: Raw tags; normalized by the matcher.
            errors: Optional list receiving the scan warnings.

        Returns:
            MatchResult from FolderMatcher.match.
        """
        scanner = self._scanner_factory()
        tags = list(tags)
        result = FolderMatcher(scanner=scanner).match(self.root, tags)
        _collect_errors(scanner, errors)

        if self.activity_log is not None:
            self.activity_log.log_match(normalize_tags(tags), result)
        return result

    def suggest_tags(self, file_name: str) -> List[str]:
        """Derive tags from a file name, keeping those found in a folder path.

        Args:
            file_name: File name to derive tags from.

        Returns:
            Tags in file-name order that occur (case-insensitively) in at
            least one folder path under root.
        """
        candidates = tags_from_filename(file_name)
        if not candidates:
            return []

        folder_paths = [str(folder.folder_path).lower() for folder in self.list_folders()]
        suggested = [
            tag for tag in candidates if any(tag in path for path in folder_paths)
        ]
        logger.debug("Suggested tags for %s: %s", file_name, suggested)
        return suggested

    def rename_file(self, old_name: str, new_name: str) -> OperationResult:
        """Rename a file in the root folder."""
        result = self._operations.rename_file(self.root, old_name, new_name)
        if self.activity_log is not None:
            self.activity_log.log_rename(str(old_name), str(new_name), result)
        return result

    def move_file(self, file_name: str, destination: str) -> OperationResult:
        """Move a file from the root folder into a destination folder."""
        result = self._operations.move_file(self.root, file_name, destination)
        if self.activity_log is not None:
            self.activity_log.log_move(str(file_name), str(destination), result)
        return result

    def export_csv(self) -> str:
        """CSV document listing every file under root."""
        return files_to_csv(self.list_all_files())


def _collect_errors(scanner: DirectoryScanner, errors: Optional[List[str]]) -> None:
    if errors is not None:
        errors.extend(scanner.get_errors())
