# ==============================================
# iar_uploader/processors/csv_processor.py
# ==============================================
import csv
import io
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from iar_uploader.core.exceptions import FileProcessingException
from iar_uploader.core.logging import get_logger

logger = get_logger(__name__)

BOM = "\ufeff"

# particulars is NVARCHAR(MAX): only the upload size guard bounds a cell.
# The limit must fit a C long, which is 32-bit on Windows.
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))

ParsedRow = Dict[str, str]


@dataclass
class ParsedCsv:
    """Header names plus one mapping per data row, both in file order."""

    headers: List[str] = field(default_factory=list)
    rows: List[ParsedRow] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.headers

    @property
    def has_rows(self) -> bool:
        return bool(self.rows)

    @property
    def total_rows(self) -> int:
        return len(self.rows)


def decode_csv_bytes(content: bytes, file_name: Optional[str] = None) -> str:
    """
    Decode uploaded bytes as UTF-8, dropping a leading byte-order mark.

    Raises:
        FileProcessingException: when the bytes are not valid UTF-8
    """
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileProcessingException(
            f"Encoding error: {e}. The CSV file must be UTF-8 encoded.",
            file_name=file_name,
        ) from e


def _is_blank(cells: List[str]) -> bool:
    return not any(cell.strip() for cell in cells)


def read_grid(text: str) -> List[List[str]]:
    """
    Split CSV text into rows of cells.

    Records end at `\\n`, `\\r\\n` or a bare `\\r`. Quoted fields may hold commas,
    line breaks and doubled quotes. Spaces after a delimiter are skipped, so
    `a, "b, c"` is two cells. Rows with only blank cells are dropped.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    # newline="" keeps line endings inside quoted fields untouched
    reader = csv.reader(
        io.StringIO(text, newline=""),
        delimiter=",",
        quotechar='"',
        doublequote=True,
        skipinitialspace=True,
    )
    return [row for row in reader if not _is_blank(row)]


def parse_csv(text: str) -> ParsedCsv:
    """
    Parse CSV text into headers and row mappings.

    The first retained row is the header. Header cells are trimmed and blank ones
    become `column_<n>` (1-based). Short rows are padded with empty strings, extra
    cells are ignored. A repeated header name keeps the value of its last column.
    Empty input returns an empty `ParsedCsv` instead of raising.
    """
    grid = read_grid(text)
    if not grid:
        return ParsedCsv()

    headers = [
        cell.strip() or f"column_{index}"
        for index, cell in enumerate(grid[0], start=1)
    ]

    rows: List[ParsedRow] = []
    for values in grid[1:]:
        row: ParsedRow = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        rows.append(row)

    logger.debug("Parsed CSV with %d columns and %d rows", len(headers), len(rows))
    return ParsedCsv(headers=headers, rows=rows)
