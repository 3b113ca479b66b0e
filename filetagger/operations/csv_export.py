"""CSV export of scanned file records."""

import csv
import io
import os
from pathlib import Path
from typing import Iterable, TextIO

from filetagger.models import FileRecord, displayable

CSV_COLUMNS = ("File Name", "Folder Path")
CSV_FILENAME = "files_list.csv"


def write_files_csv(records: Iterable[FileRecord], stream: TextIO) -> int:
    """Write file records as CSV with a header row.

    Names that are not valid UTF-8 are written with U+FFFD in place of
    the undecodable bytes.

    Args:
        records: File records to export.
        stream: Text stream opened with newline="".

    Returns:
        Number of data rows written.
    """
    writer = csv.writer(stream)
    writer.writerow(CSV_COLUMNS)
    count = 0
    for record in records:
        writer.writerow([displayable(record.file_name), displayable(record.folder_path)])
        count += 1
    return count


def files_to_csv(records: Iterable[FileRecord]) -> str:
    """Render file records as a CSV document string."""
    buffer = io.StringIO(newline="")
    write_files_csv(records, buffer)
    return buffer.getvalue()


def export_files_csv(records: Iterable[FileRecord], output: Path) -> int:
    """Write file records to a CSV file, replacing it only once complete.

    The rows go to a temporary file beside ``output`` which is renamed over
    it at the end, so a failed export never leaves a truncated file behind.

    Args:
        records: File records to export.
        output: Destination CSV path.

    Returns:
        Number of data rows written.

    Raises:
        OSError: If the file cannot be written or renamed into place.
    """
    output = Path(output)
    partial = output.with_name(f".{output.name}.partial")
    try:
        with open(partial, "w", newline="", encoding="utf-8") as handle:
            count = write_files_csv(records, handle)
        os.replace(partial, output)
    except OSError:
        partial.unlink(missing_ok=True)
        raise
    return count
