# sync/sync_service.py

import logging

from reconcile.layout import RegionLayout
from reconcile.reconciler import reconcile, slice_columns


logger = logging.getLogger(__name__)


def read_region_rows(store, layout: RegionLayout) -> list[list]:
    """
    Data rows of a region (header excluded). Empty list when the sheet has none.
    """
    return store.fetch(layout.data_range())


def apply_fulfillment_updates(store, layout: RegionLayout, records) -> dict:
    """
    One fetch -> reconcile -> persist cycle for a region.

    - store: grid store with fetch(range) / persist(range, values)
    - layout: the region's column layout
    - records: list of FulfillmentRecord

    Output groups are written one after another; the first failing write
    propagates and earlier writes are not rolled back.
    """
    grid = store.fetch(layout.full_range())
    result = reconcile(grid, records, layout)

    writes = 0
    for range_a1, values in slice_columns(result.grid, layout):
        store.persist(range_a1, values)
        writes += 1

    summary = result.summary()
    summary["total"] = len(records)
    summary["writes"] = writes

    logger.info("%s: reconciled %s", layout.sheet, summary)
    return summary
