"""filetagger - Tag-driven file filing.

A small web application and CLI that lists the files under a root folder,
ranks candidate destination folders for a file by matching tags against
folder paths, and renames or moves files into place.
"""

__version__ = "1.0.0"

from .models import (
    ErrorKind,
    FileRecord,
    FolderRecord,
    FolderMatch,
    MatchResult,
    OperationResult,
)

__all__ = [
    "__version__",
    "ErrorKind",
    "FileRecord",
    "FolderRecord",
    "FolderMatch",
    "MatchResult",
    "OperationResult",
]