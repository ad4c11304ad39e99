# reconcile/grid.py

"""
Grid helpers.

A grid is a list of rows, a row a list of scalar cells (str / int / float)
or None. Rows coming back from Sheets are ragged: trailing empty cells and
trailing empty rows are simply absent.
"""

EMPTY = ""


def is_empty(value) -> bool:
    return not value


def empty_row(width: int) -> list:
    return [EMPTY] * width


def pad_row(row, width: int) -> list:
    """
    Return a copy of `row` padded with empty cells up to `width`.
    Cells beyond `width` are kept as-is.
    """
    padded = list(row or [])
    if len(padded) < width:
        padded.extend([EMPTY] * (width - len(padded)))
    return [EMPTY if cell is None else cell for cell in padded]


def normalize_grid(grid, width: int) -> list[list]:
    """
    Owned, rectangular copy of `grid` (every row at least `width` wide).
    """
    return [pad_row(row, width) for row in (grid or [])]


def column_slice(grid, start: int, end: int) -> list[list]:
    return [list(row[start:end]) for row in grid]
