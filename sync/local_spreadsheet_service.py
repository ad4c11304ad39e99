# sync/local_spreadsheet_service.py

import csv
import logging
from pathlib import Path

from sync.a1 import parse_range
from sync.errors import StoreUnavailable


logger = logging.getLogger(__name__)


def _trim(rows):
    """
    Drop trailing empty cells and rows, the way the Sheets API reports them.
    """
    trimmed = []
    for row in rows:
        row = list(row)
        while row and row[-1] == "":
            row.pop()
        trimmed.append(row)
    while trimmed and not trimmed[-1]:
        trimmed.pop()
    return trimmed


class LocalSpreadsheetStore:
    """
    Grid store over a directory of CSV files, one per sheet.
    Same fetch / persist contract as GoogleSheetsAdapter.
    """

    def __init__(self, directory):
        self.directory = Path(directory)

    def sheet_path(self, sheet: str) -> Path:
        return self.directory / f"{sheet}.csv"

    def read_sheet(self, sheet: str) -> list[list[str]]:
        path = self.sheet_path(sheet)
        if not path.exists():
            return []
        try:
            with open(path, "r", newline="", encoding="utf-8") as f:
                return [list(row) for row in csv.reader(f)]
        except OSError as exc:
            raise StoreUnavailable(str(exc)) from exc

    def write_sheet(self, sheet: str, rows):
        path = self.sheet_path(sheet)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", newline="", encoding="utf-8") as f:
                csv.writer(f).writerows(_trim(rows))
        except OSError as exc:
            raise StoreUnavailable(str(exc)) from exc

    def fetch(self, range_a1: str) -> list[list]:
        rng = parse_range(range_a1)
        rows = self.read_sheet(rng.sheet)

        last_row = len(rows) if rng.end_row is None else min(rng.end_row, len(rows))
        selected = []
        for row in rows[rng.start_row - 1:last_row]:
            end = len(row) if rng.end_col is None else rng.end_col + 1
            selected.append(row[rng.start_col:end])

        return _trim(selected)

    def persist(self, range_a1: str, values):
        logger.info("Updating local sheet data with range: %s", range_a1)
        rng = parse_range(range_a1)
        rows = self.read_sheet(rng.sheet)

        for offset, new_values in enumerate(values):
            row_number = rng.start_row + offset
            if rng.end_row is not None and row_number > rng.end_row:
                raise StoreUnavailable(f"{len(values)} rows do not fit in range {range_a1}")

            while len(rows) < row_number:
                rows.append([])
            row = rows[row_number - 1]

            for col_offset, value in enumerate(new_values):
                col = rng.start_col + col_offset
                if rng.end_col is not None and col > rng.end_col:
                    raise StoreUnavailable(f"{len(new_values)} columns do not fit in range {range_a1}")
                while len(row) <= col:
                    row.append("")
                row[col] = "" if value is None else str(value)

        self.write_sheet(rng.sheet, rows)
