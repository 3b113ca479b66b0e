"""
Models package for filetagger.

This package provides convenient imports for all data models:
- ErrorKind: Enum for failure categories
- FileRecord: File found during a scan
- FolderRecord: Folder found during a scan
- FolderMatch: Folder scored against tags
- MatchResult: Outcome of a match request
- OperationResult: Outcome of a rename or move
- displayable: UTF-8 safe text of a scanned name or path
"""

from .error_kind import ErrorKind
from .data_models import (
    FileRecord,
    FolderRecord,
    FolderMatch,
    MatchResult,
    OperationResult,
    displayable,
)

__all__ = [
    "ErrorKind",
    "FileRecord",
    "FolderRecord",
    "FolderMatch",
    "MatchResult",
    "OperationResult",
    "displayable",
]
