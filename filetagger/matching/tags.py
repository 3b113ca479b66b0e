"""Tag parsing helpers.

Tags are short lowercase tokens. They come either from free text typed by a
user (comma or newline separated) or from the segments of a file name.

Example:
    >>> parse_tags("Taxes, 2023\\nreceipts")
    ['taxes', '2023', 'receipts']
    >>> tags_from_filename("Invoice_ACME_20230415.pdf")
    ['invoice', 'acme', '2023']
"""

import os
import re
from typing import Iterable, List

# Separators for free-text tag input
_TAG_INPUT_PATTERN = re.compile(r'[,\n]+')

# Separators between words of a file name
_FILENAME_SEGMENT_PATTERN = re.compile(r'[_\s]+')

# Compact dates such as 20230415
_COMPACT_DATE_PATTERN = re.compile(r'\d{8}')


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """Trim and lowercase tags, dropping blanks and repeated tags.

    Args:
        tags: Raw tag strings.

    Returns:
        Distinct non-empty tags in first-seen order.
    """
    seen = set()
    result: List[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            continue
        normalized = tag.strip().lower()
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def parse_tags(text: str) -> List[str]:
    """Split free-text input on commas and newlines into normalized tags."""
    return normalize_tags(_TAG_INPUT_PATTERN.split(text or ""))


def tags_from_filename(file_name: str) -> List[str]:
    """Derive candidate tags from the words of a file name.

    The extension is dropped and the remaining name is split on underscores
    and whitespace. A segment that looks like a YYYYMMDD date is reduced to
    its year.

    Args:
        file_name: Base name of the file, e.g. "Receipt_Dentist_20230112.pdf".

    Returns:
        Normalized tags, e.g. ['receipt', 'dentist', '2023'].
    """
    stem, _ = os.path.splitext(file_name or "")
    segments = []
    for segment in _FILENAME_SEGMENT_PATTERN.split(stem):
        if _COMPACT_DATE_PATTERN.fullmatch(segment):
            segment = segment[:4]
        segments.append(segment)
    return normalize_tags(segments)
