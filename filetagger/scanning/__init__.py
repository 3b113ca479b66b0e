"""Directory scanning package for filetagger.

This package provides the DirectoryScanner class, which lists the files and
folders beneath the configured root folder either flat (root only) or
recursively.

Example:
    >>> from filetagger.scanning import DirectoryScanner
    >>> from pathlib import Path
    >>>
    >>> scanner = DirectoryScanner()
    >>> files = scanner.list_root_files(Path("/data/inbox"))
    >>> folders = scanner.list_folders_recursive(Path("/data/inbox"))
"""

from .directory_scanner import DirectoryScanner

__all__ = ["DirectoryScanner"]
