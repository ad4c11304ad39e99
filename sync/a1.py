# sync/a1.py

import re
from dataclasses import dataclass


_CELL_RE = re.compile(r"^([A-Za-z]*)(\d*)$")


@dataclass(frozen=True)
class A1Range:
    """
    A parsed A1 range. Columns are 0-based, rows are 1-based.
    Open-ended bounds (e.g. "A:W" or "A2:W") are None.
    """
    sheet: str
    start_col: int
    start_row: int
    end_col: int | None = None
    end_row: int | None = None


def column_letter(index: int) -> str:
    """
    0 -> "A", 25 -> "Z", 26 -> "AA".
    """
    if index < 0:
        raise ValueError("Column index must be >= 0")
    letters = []
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters.append(chr(65 + remainder))
    return "".join(reversed(letters))


def column_index(letters: str) -> int:
    if not letters or not letters.isalpha():
        raise ValueError(f"Invalid column reference: {letters!r}")
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - 64)
    return index - 1


def quote_sheet(title: str) -> str:
    safe = (title or "").strip()
    if not safe:
        raise ValueError("Sheet title must not be empty")
    if len(safe) >= 2 and safe[0] == safe[-1] == "'":
        safe = safe[1:-1].replace("''", "'")
    return "'" + safe.replace("'", "''") + "'"


def format_range(sheet, start_col, start_row=None, end_col=None, end_row=None) -> str:
    start = column_letter(start_col) + (str(start_row) if start_row else "")
    end = ""
    if end_col is not None:
        end = column_letter(end_col) + (str(end_row) if end_row else "")
    return f"{quote_sheet(sheet)}!{start}:{end}" if end else f"{quote_sheet(sheet)}!{start}"


def _split_cell(ref: str):
    match = _CELL_RE.match(ref.strip())
    if not match or not (match.group(1) or match.group(2)):
        raise ValueError(f"Invalid cell reference: {ref!r}")
    letters, digits = match.groups()
    col = column_index(letters) if letters else None
    row = int(digits) if digits else None
    if row is not None and row < 1:
        raise ValueError(f"Invalid row in cell reference: {ref!r}")
    return col, row


def parse_range(range_a1: str) -> A1Range:
    """
    Parse "'Sheet'!A2:W", "Canada!A:N" or "US!B3" into an A1Range.
    """
    if "!" not in range_a1:
        raise ValueError(f"Range must include a sheet name: {range_a1!r}")

    sheet, cells = range_a1.rsplit("!", 1)
    sheet = sheet.strip()
    if len(sheet) >= 2 and sheet[0] == sheet[-1] == "'":
        sheet = sheet[1:-1].replace("''", "'")
    if not sheet:
        raise ValueError(f"Range must include a sheet name: {range_a1!r}")

    if ":" in cells:
        start_ref, end_ref = cells.split(":", 1)
        start_col, start_row = _split_cell(start_ref)
        end_col, end_row = _split_cell(end_ref)
    else:
        start_col, start_row = _split_cell(cells)
        end_col, end_row = start_col, start_row

    return A1Range(
        sheet=sheet,
        start_col=start_col if start_col is not None else 0,
        start_row=start_row or 1,
        end_col=end_col,
        end_row=end_row,
    )
