import csv
import io
import os
import logging

logger = logging.getLogger(__name__)


class CsvImportError(ValueError):
    """Raised when a CSV file cannot be imported at all."""


def read_csv_rows(path, required_columns):
    """
    Read a CSV export into (line number, row) pairs, rows keyed by header.

    The line number is where the record starts in the file (header = 1), so
    blank lines and multi-line quoted cells are counted. Short rows are
    accepted; their missing cells come back as None.
    """
    if not os.path.exists(path):
        raise CsvImportError(f"CSV file not found: {path}")

    with open(path, "rb") as f:
        content = f.read()

    # Decode CSV
    try:
        csv_text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise CsvImportError(f"{os.path.basename(path)} must be UTF-8 encoded")

    reader = csv.DictReader(io.StringIO(csv_text))
    headers = reader.fieldnames
    if not headers:
        raise CsvImportError(f"{os.path.basename(path)} is empty")

    missing = [c for c in required_columns if c not in headers]
    if missing:
        raise CsvImportError(f"Missing required column(s): {', '.join(missing)}")

    rows = []
    for row in reader:
        # line_num points at the last physical line of the record; step back
        # over newlines embedded in quoted cells to reach its first line.
        rows.append((reader.line_num - _embedded_newlines(row), row))

    logger.debug("Read %d rows from %s", len(rows), path)
    return rows


def _embedded_newlines(row):
    count = 0
    for value in row.values():
        cells = value if isinstance(value, list) else [value]
        count += sum(cell.count("\n") for cell in cells if cell)
    return count
