"""File operations package for filetagger.

This package provides the FileOperations class for renaming and moving files
in the root folder, and CSV export of file listings.

Example:
    >>> from filetagger.operations import FileOperations
    >>> ops = FileOperations()
    >>> result = ops.move_file(Path("/data"), "invoice.pdf", "/data/Invoices/2023")
    >>> print(result.message)
"""

from .csv_export import (
    CSV_COLUMNS,
    CSV_FILENAME,
    export_files_csv,
    files_to_csv,
    write_files_csv,
)
from .file_operations import FileOperations

__all__ = [
    "CSV_COLUMNS",
    "CSV_FILENAME",
    "FileOperations",
    "export_files_csv",
    "files_to_csv",
    "write_files_csv",
]
