"""Folder matching package for filetagger.

This package contains the FolderMatcher implementation for ranking candidate
destination folders by tag, and the helpers that turn user input or file
names into tags.

Example:
    >>> from filetagger.matching import FolderMatcher, parse_tags
    >>> matcher = FolderMatcher()
    >>> result = matcher.match(Path("/data"), parse_tags("taxes, 2023"))
    >>> for folder in result.folders:
    ...     print(folder)
"""

from .folder_matcher import FolderMatcher
from .tags import normalize_tags, parse_tags, tags_from_filename

__all__ = [
    "FolderMatcher",
    "normalize_tags",
    "parse_tags",
    "tags_from_filename",
]
