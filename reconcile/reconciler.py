# reconcile/reconciler.py

"""
Row reconciliation.

Applies a batch of fulfillment records to an in-memory snapshot of a region.
For each record the target row is either filled (empty slot), overwritten
(same orderItemID) or split: a new row is inserted right below it, inherits
the identity columns of the target row and receives the fulfillment data.

Records are applied from the highest target row down, so an insertion never
moves a row that a later record still has to address.
"""

import logging
from dataclasses import dataclass

from reconcile.grid import column_slice, empty_row, is_empty, normalize_grid, pad_row
from reconcile.layout import RegionLayout
from reconcile.records import FulfillmentRecord


logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    grid: list
    filled: int = 0
    inserted: int = 0
    overwritten: int = 0
    grown: int = 0

    def summary(self) -> dict:
        return {
            "filled": self.filled,
            "inserted": self.inserted,
            "overwritten": self.overwritten,
            "grown": self.grown,
            "rows": len(self.grid),
        }


def _tiebreak_key(record):
    values = record.fulfillment_values()
    rest = tuple(str(values[attr]) for attr in sorted(values) if attr != "order_item_id")
    return (record.order_item_id,) + rest


def application_order(records):
    """
    Highest target row first. Equal rows are ordered by orderItemID, then by
    the remaining fulfillment values as text, so the last record applied to a
    row does not depend on how the batch was ordered.
    """
    by_item = sorted(records, key=_tiebreak_key)
    return sorted(by_item, key=lambda r: r.target_row, reverse=True)


def slot_is_empty(row, layout: RegionLayout) -> bool:
    return all(is_empty(row[col]) for col in layout.fulfillment_columns.values())


def write_fulfillment(row, record: FulfillmentRecord, layout: RegionLayout):
    for attr, value in record.fulfillment_values().items():
        row[layout.fulfillment_columns[attr]] = value


def _same_item(cell, order_item_id: str) -> bool:
    if is_empty(cell):
        return False
    return str(cell) == order_item_id


def reconcile(grid, records, layout: RegionLayout) -> ReconcileResult:
    """
    Apply `records` to a copy of `grid` and return the result.

    `grid` is the full region starting at sheet row 1, so record.target_row
    addresses grid[target_row - 1].
    """
    result = ReconcileResult(grid=normalize_grid(grid, layout.width))
    rows = result.grid

    for record in application_order(records):
        index = record.target_row - 1

        while index >= len(rows):
            rows.append(empty_row(layout.width))
            result.grown += 1

        row = rows[index]

        if slot_is_empty(row, layout):
            logger.debug("row %s: empty slot, writing %s", record.target_row, record.order_item_id)
            write_fulfillment(row, record, layout)
            result.filled += 1

        elif not _same_item(row[layout.order_item_column], record.order_item_id):
            logger.debug(
                "row %s: holds %r, inserting row for %s",
                record.target_row,
                row[layout.order_item_column],
                record.order_item_id,
            )
            new_row = empty_row(layout.width)
            for col in layout.identity_columns:
                new_row[col] = row[col]
            write_fulfillment(new_row, record, layout)
            rows.insert(index + 1, new_row)
            result.inserted += 1

        else:
            logger.debug("row %s: same orderItemID %s, overwriting", record.target_row, record.order_item_id)
            write_fulfillment(row, record, layout)
            result.overwritten += 1

    return result


def slice_columns(grid, layout: RegionLayout) -> list[tuple[str, list]]:
    """
    Split `grid` into one (range, values) pair per output group.
    Columns outside every group are never written back.
    """
    rows = [pad_row(row, layout.width) for row in grid]
    return [
        (layout.group_range(start, end), column_slice(rows, start, end))
        for start, end in layout.output_groups
    ]
