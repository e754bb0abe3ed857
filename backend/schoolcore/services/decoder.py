import csv
import io
import logging
import re
import time
import zipfile
from dataclasses import dataclass, field
from datetime import date, datetime

import openpyxl
import xlrd
from django.conf import settings
from django.core.files.storage import default_storage

from .errors import (
    EmptyFile,
    FileNotFound,
    FileTypeMismatch,
    NoDataRows,
    NoHeaders,
    ParseFailure,
    ParseTimeout,
    TooManyRows,
)

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = {"csv", "txt"}
SPREADSHEET_EXTENSIONS = {"xlsx", "xls"}
ALLOWED_EXTENSIONS = TEXT_EXTENSIONS | SPREADSHEET_EXTENSIONS

ZIP_SIGNATURE = b"PK\x03\x04"
OLE2_SIGNATURE = bytes.fromhex("D0CF11E0A1B11AE1")
CSV_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")

CORRUPTION_MIN_LENGTH = 32
CONTAINER_MARKERS = ("[Content_Types]", "PK\x03\x04", "xl/worksheets", "docProps/")
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

# Rows between deadline checks while scanning a file.
DEADLINE_CHECK_EVERY = 200

MISMATCH_MESSAGES = {
    "xlsx": (
        "This file looks like an Excel .xlsx workbook saved with a .{declared} name. "
        "Upload it with its .xlsx extension or re-save it as CSV."
    ),
    "xls": (
        "This file looks like a legacy Excel .xls workbook saved with a .{declared} name. "
        "Upload it with its .xls extension or re-save it as CSV."
    ),
    "zip": (
        "This file is a ZIP archive, not a .{declared} text file. "
        "Extract the spreadsheet or re-save it as CSV."
    ),
}


@dataclass
class DecodedRow:
    row_number: int
    cells: list

    def is_blank(self, positions=None):
        indexes = range(len(self.cells)) if positions is None else positions
        return all(_is_blank(self.cells[i]) for i in indexes if i < len(self.cells))


@dataclass
class DecodedTable:
    headers: list
    rows: list = field(default_factory=list)
    file_type: str = "csv"

    @property
    def width(self):
        return len(self.headers)


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def sniff_file_type(data):
    """Return the spreadsheet container the bytes really hold, if any."""
    if data.startswith(OLE2_SIGNATURE):
        return "xls"
    if not data.startswith(ZIP_SIGNATURE):
        return None
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            names = archive.namelist()
    except zipfile.BadZipFile:
        return "zip"
    if "[Content_Types].xml" in names and any(name.startswith("xl/") for name in names):
        return "xlsx"
    return "zip"


def resolve_file_type(data, declared_extension):
    declared = (declared_extension or "").lower().lstrip(".")
    if declared not in ALLOWED_EXTENSIONS:
        raise FileTypeMismatch(
            f"Unsupported file type '.{declared}'. Upload a .csv, .xlsx or .xls file."
        )
    sniffed = sniff_file_type(data)
    if declared in TEXT_EXTENSIONS:
        if sniffed:
            raise FileTypeMismatch(MISMATCH_MESSAGES[sniffed].format(declared=declared))
        return "csv"
    if sniffed in SPREADSHEET_EXTENSIONS:
        return sniffed
    return declared


def clean_cell(value):
    """Reduce a raw cell to ``str``, ``date``/``datetime`` or ``None``."""
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)
    text = str(value)
    if len(text) > CORRUPTION_MIN_LENGTH and (
        CONTROL_CHARS.search(text) or any(marker in text for marker in CONTAINER_MARKERS)
    ):
        return None
    text = text.strip()
    return text or None


def decode_text(data):
    for encoding in CSV_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ParseFailure("The file is not readable text in any supported encoding.")


def _iter_csv(data):
    text = decode_text(data)
    try:
        yield from csv.reader(io.StringIO(text, newline=""))
    except csv.Error as exc:
        raise ParseFailure(f"Malformed CSV: {exc}") from exc


def _iter_xlsx(data):
    try:
        workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as exc:
        raise ParseFailure(f"Could not open the Excel workbook: {exc}") from exc
    try:
        worksheet = workbook.worksheets[0] if workbook.worksheets else None
        if worksheet is None:
            return
        for row in worksheet.iter_rows(values_only=True):
            yield list(row)
    finally:
        workbook.close()


def _iter_xls(data):
    try:
        book = xlrd.open_workbook(file_contents=data)
    except Exception as exc:
        raise ParseFailure(f"Could not open the Excel workbook: {exc}") from exc
    if book.nsheets == 0:
        return
    sheet = book.sheet_by_index(0)
    for index in range(sheet.nrows):
        values = []
        for cell in sheet.row(index):
            if cell.ctype == xlrd.XL_CELL_DATE:
                try:
                    values.append(xlrd.xldate_as_datetime(cell.value, book.datemode))
                except (ValueError, OverflowError, xlrd.xldate.XLDateError):
                    values.append(cell.value)
            elif cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
                values.append(None)
            elif cell.ctype == xlrd.XL_CELL_BOOLEAN:
                values.append(bool(cell.value))
            else:
                values.append(cell.value)
        yield values


READERS = {
    "csv": _iter_csv,
    "xlsx": _iter_xlsx,
    "xls": _iter_xls,
}


def _align(cells, width):
    if len(cells) < width:
        cells = cells + [None] * (width - len(cells))
    return cells[:width]


def _extent(cells):
    """Index just past the last non-blank cell."""
    for index in range(len(cells) - 1, -1, -1):
        if not _is_blank(cells[index]):
            return index + 1
    return 0


def decode_bytes(data, declared_extension, deadline=None, max_rows=None):
    """
    Read CSV or Excel bytes into a header row plus position-aligned data rows.

    Row numbers match the spreadsheet: the header is row 1 and the first data
    row is row 2. Blank rows are dropped but keep their number. The table is
    as wide as the furthest non-blank cell in any row, so values under a
    blank or missing header are kept as unmapped columns.
    """
    if not data or not data.strip():
        raise EmptyFile()
    file_type = resolve_file_type(data, declared_extension)
    if max_rows is None:
        max_rows = settings.IMPORT_MAX_ROWS

    records = READERS[file_type](data)
    header_cells = next(records, None)
    if header_cells is None:
        raise NoHeaders()
    header_cells = [clean_cell(value) for value in header_cells]
    if not _extent(header_cells):
        raise NoHeaders()

    kept = []
    width = _extent(header_cells)
    for row_number, cells in enumerate(records, start=2):
        if deadline is not None and row_number % DEADLINE_CHECK_EVERY == 0 and time.monotonic() > deadline:
            raise ParseTimeout()
        cells = [clean_cell(value) for value in cells]
        extent = _extent(cells)
        if not extent:
            continue
        if len(kept) >= max_rows:
            raise TooManyRows(f"The file has more than {max_rows} data rows. Split it into smaller files.")
        width = max(width, extent)
        kept.append(DecodedRow(row_number=row_number, cells=cells))

    headers = [None if _is_blank(value) else str(value) for value in _align(header_cells, width)]
    table = DecodedTable(headers=headers, file_type=file_type)
    for row in kept:
        row.cells = _align(row.cells, width)
        table.rows.append(row)

    if not table.rows:
        raise NoDataRows()
    logger.debug("Decoded %s file with %s columns and %s rows", file_type, table.width, len(table.rows))
    return table


def decode_file(path, declared_extension, deadline=None, max_rows=None, storage=None):
    storage = storage or default_storage
    if not path or not storage.exists(path):
        raise FileNotFound()
    with storage.open(path, "rb") as handle:
        data = handle.read()
    return decode_bytes(data, declared_extension, deadline=deadline, max_rows=max_rows)


def filter_rows(table, column_map):
    """Keep rows where at least one mapped column carries a value."""
    positions = [index for index, target in enumerate(column_map) if target]
    if not positions:
        return []
    return [row for row in table.rows if not row.is_blank(positions)]
