"""Reading, writing and reshaping tables of string cells."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Mapping, Sequence

import openpyxl

from tablecheck.core.exceptions import (
    ColumnNotFoundException,
    ConfigurationException,
    MalformedInputException,
)
from tablecheck.utils.config import settings
from tablecheck.utils.logger import setup_logger

logger = setup_logger(__name__)


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


def _has_content(row: Sequence[str]) -> bool:
    return any(cell != "" for cell in row)


def read_delimited(text: str, delimiter: str | None = None) -> list[list[str]]:
    """Parse delimited text into rows, dropping lines whose cells are all empty."""

    reader = csv.reader(io.StringIO(text), delimiter=delimiter or settings.CSV_DELIMITER)
    return [row for row in reader if _has_content(row)]


def to_delimited(table: Sequence[Sequence[Any]], delimiter: str | None = None) -> str:
    """Serialise rows to delimited text; ``None`` cells become empty."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter or settings.CSV_DELIMITER, lineterminator="\n")
    for row in table:
        writer.writerow([_cell_text(value) for value in row])
    return buffer.getvalue().rstrip("\n")


def read_table(path: Path | str, sheet_name: str | None = None) -> list[list[str]]:
    """Read a CSV or XLSX file into rows of strings, header first.

    Rows whose cells are all empty are dropped for both formats.
    """

    path = Path(path)
    if path.suffix.lower() == ".csv":
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            rows = [row for row in csv.reader(handle, delimiter=settings.CSV_DELIMITER) if _has_content(row)]
    elif path.suffix.lower() == ".xlsx":
        workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
        try:
            sheet = workbook[sheet_name] if sheet_name else workbook.worksheets[0]
            rows = [
                cells
                for cells in ([_cell_text(value) for value in row] for row in sheet.iter_rows(values_only=True))
                if _has_content(cells)
            ]
        finally:
            workbook.close()
    else:
        raise MalformedInputException(f"Unsupported table file type: '{path.suffix}'")

    if not rows:
        raise MalformedInputException(f"Input file '{path.name}' is empty")

    logger.info(f"Read {len(rows) - 1} data rows from {path.name}")
    return rows


def write_xlsx(table: Sequence[Sequence[Any]], path: Path | str, sheet_name: str | None = None) -> Path:
    """Write rows to a worksheet, replacing a same-named sheet and keeping the others."""

    path = Path(path)
    if path.exists():
        workbook = openpyxl.load_workbook(path)
        sheet_name = sheet_name or workbook.worksheets[0].title
        if sheet_name in workbook.sheetnames:
            del workbook[sheet_name]
        sheet = workbook.create_sheet(sheet_name)
    else:
        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.title = sheet_name or "Sheet1"

    try:
        for row in table:
            sheet.append([_cell_text(value) for value in row])
        workbook.save(path)
    finally:
        workbook.close()

    logger.info(f"Wrote {len(table)} rows to {path.name}:{sheet.title}")
    return path


def rename_columns(
    table: list[list[str]], names: Sequence[str] | Mapping[str, str]
) -> list[list[str]]:
    """Replace header names positionally or via an old-to-new mapping.

    The header row is replaced in place and the table is returned.
    """

    if not table:
        raise MalformedInputException("Cannot rename columns of a table without a header")
    header = list(table[0])

    if isinstance(names, Mapping):
        for old, new in names.items():
            if old not in header:
                raise ColumnNotFoundException(f"Column '{old}' not found in header", column=old)
            header[header.index(old)] = new
    else:
        if len(names) != len(header):
            raise ConfigurationException(
                f"Expected {len(header)} column names, got {len(names)}"
            )
        header = list(names)

    table[0] = header
    return table


__all__ = ["read_delimited", "to_delimited", "read_table", "write_xlsx", "rename_columns"]
