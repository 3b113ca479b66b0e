"""
ErrorKind enum for classifying failed operations.

Every failed rename, move or match is tagged with one of four kinds:
1. Validation - Request was rejected before touching the filesystem
2. Not Found - Source file or destination folder does not exist
3. Conflict - Destination name is already taken
4. Filesystem - The OS refused the operation (permissions, I/O errors)
"""

from enum import Enum


class ErrorKind(Enum):
    """Encodes why an operation failed."""
    VALIDATION = "validation"          # Missing or malformed input
    NOT_FOUND = "not_found"            # Source or destination missing
    CONFLICT = "conflict"              # Destination already exists
    FILESYSTEM = "filesystem"          # OSError raised by the filesystem call
