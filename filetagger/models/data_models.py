"""
Core data models for filetagger.

This module contains the following dataclasses:
- FileRecord: A file found while scanning the root folder
- FolderRecord: A folder found while scanning the root folder
- FolderMatch: A folder scored against a set of tags
- MatchResult: Outcome of a folder match request
- OperationResult: Outcome of a rename or move operation

Records are produced per request and never persisted.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from .error_kind import ErrorKind


def displayable(value: Union[str, Path]) -> str:
    """Text of a name or path that can always be encoded as UTF-8.

    File names that are not valid UTF-8 reach Python with their stray bytes
    smuggled in as lone surrogates. Those become U+FFFD so the name can be
    rendered in HTML, CSV or a terminal.
    """
    text = str(value)
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        # Lone surrogates outside U+DC80..U+DCFF
        raw = text.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")


@dataclass
class FileRecord:
    """Represents a file found during a directory scan."""
    file_name: str                    # Base name of the file
    folder_path: Path                 # Folder containing the file

    @property
    def full_path(self) -> Path:
        return self.folder_path / self.file_name

    def to_dict(self) -> Dict[str, str]:
        return {"fileName": self.file_name, "folderPath": str(self.folder_path)}


@dataclass
class FolderRecord:
    """Represents a folder found during a directory scan."""
    folder_name: str                  # Base name of the folder
    folder_path: Path                 # Full path to the folder

    def to_dict(self) -> Dict[str, str]:
        return {"folderName": self.folder_name, "folderPath": str(self.folder_path)}


@dataclass
class FolderMatch:
    """Represents a folder whose path contains at least one tag."""
    folder_path: Path                 # Full path to the folder
    match_count: int                  # Distinct tags found in the path
    matched_tags: List[str] = field(default_factory=list)  # Tags found, in input order


@dataclass
class MatchResult:
    """Outcome of matching tags against the folders under the root."""
    success: bool
    message: str = ""
    error_kind: Optional[ErrorKind] = None
    matches: List[FolderMatch] = field(default_factory=list)  # Ranked, best first

    @property
    def folders(self) -> List[str]:
        """Ranked folder paths as strings, best match first."""
        return [str(match.folder_path) for match in self.matches]


@dataclass
class OperationResult:
    """Outcome of a rename or move operation."""
    success: bool
    message: str
    error_kind: Optional[ErrorKind] = None
    path: Optional[Path] = None       # Final location of the file on success

    @classmethod
    def ok(cls, message: str, path: Path) -> "OperationResult":
        return cls(success=True, message=message, path=path)

    @classmethod
    def fail(cls, error_kind: ErrorKind, message: str) -> "OperationResult":
        return cls(success=False, message=message, error_kind=error_kind)
