"""Folder matching implementation for filetagger.

This module provides the FolderMatcher class which ranks the folders under a
root directory by how many of a file's tags appear in their paths.

Scoring rules:
    1. A tag matches a folder when it occurs as a case-insensitive substring
       anywhere in the folder's full path.
    2. The score of a folder is the number of distinct tags that match.
    3. Folders scoring zero are dropped.
    4. The rest are ranked by score, highest first. Equal scores keep the
       order in which the scanner visited the folders.

Example:
    >>> from filetagger.matching import FolderMatcher
    >>> matcher = FolderMatcher()
    >>> result = matcher.match(Path("/data"), ["taxes", "2023"])
    >>> result.folders
    ['/data/Taxes/2023', '/data/Invoices/2023', '/data/Taxes', '/data/Taxes/Archive']
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from filetagger.models import ErrorKind, FolderMatch, MatchResult
from filetagger.scanning import DirectoryScanner

from .tags import normalize_tags

logger = logging.getLogger(__name__)


class FolderMatcher:
    """Ranks folders by the number of tags contained in their paths.

    Attributes:
        scanner: DirectoryScanner used to enumerate the candidate folders.

    Example:
        >>> matcher = FolderMatcher()
        >>> result = matcher.match(root, ["acme", "invoice"])
        >>> if result.success:
        ...     best = result.folders[0]
    """

    def __init__(self, scanner: Optional[DirectoryScanner] = None) -> None:
        """Initialize the FolderMatcher.

        Args:
            scanner: Optional DirectoryScanner instance. If not provided,
                a new instance will be created.
        """
        self.scanner = scanner if scanner is not None else DirectoryScanner()

    def match(self, root: Path, tags: Iterable[str]) -> MatchResult:
        """Scan all folders under root and rank them against the tags.

        Args:
            root: Root folder whose subfolders are candidates.
            tags: Tags to look for. They are trimmed, lowercased and
                de-duplicated before scoring.

        Returns:
            MatchResult. On success its matches are ranked best first and may
            be empty when no folder contains any tag. If no usable tag was
            supplied the result fails with ErrorKind.VALIDATION and the
            filesystem is not touched.
        """
        normalized = normalize_tags(tags)
        if not normalized:
            return MatchResult(
                success=False,
                message="Tags are required.",
                error_kind=ErrorKind.VALIDATION,
            )

        folders = self.scanner.list_folders_recursive(root)
        matches = self.rank_folders((folder.folder_path for folder in folders), normalized)

        logger.debug(
            "Matched %d of %d folders for tags %s", len(matches), len(folders), normalized
        )
        return MatchResult(
            success=True,
            message=f"Found {len(matches)} matching folder(s).",
            matches=matches,
        )

    def rank_folders(self, folder_paths: Iterable[Path], tags: List[str]) -> List[FolderMatch]:
        """Score and rank folder paths against already-normalized tags.

        Args:
            folder_paths: Candidate folders in scan order.
            tags: Lowercase, distinct tags.

        Returns:
            FolderMatch for every folder with at least one matching tag,
            sorted by match_count descending. The sort is stable, so folders
            with equal counts stay in scan order.
        """
        matches: List[FolderMatch] = []
        for folder_path in folder_paths:
            match = self.score_folder(folder_path, tags)
            if match is not None:
                matches.append(match)

        matches.sort(key=lambda match: match.match_count, reverse=True)
        return matches

    @staticmethod
    def score_folder(folder_path: Path, tags: List[str]) -> Optional[FolderMatch]:
        """Count the tags occurring in a folder path.

        Returns:
            FolderMatch if at least one tag occurs in the path, None otherwise.
        """
        haystack = str(folder_path).lower()
        matched_tags = [tag for tag in tags if tag in haystack]
        if not matched_tags:
            return None
        return FolderMatch(
            folder_path=folder_path,
            match_count=len(matched_tags),
            matched_tags=matched_tags,
        )
