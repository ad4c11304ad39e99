import pytest

from reconcile.layout import CANADA
from reconcile.records import FulfillmentRecord


HEADER = [f"h{i}" for i in range(CANADA.width)]


def make_record(target_row, order_item_id, **overrides):
    values = {
        "quantity_purchased": 1,
        "date_sold": "2024-01-01",
        "sale_price": "10.00",
        "fees": "1.50",
        "order_id": f"O-{order_item_id}",
    }
    values.update(overrides)
    return FulfillmentRecord(target_row=target_row, order_item_id=order_item_id, **values)


def order_line(sku, *, width=CANADA.width):
    """A row with identity data and an empty fulfillment slot."""
    row = [""] * width
    row[0] = f"A-{sku}"
    row[1] = sku
    row[4] = f"E-{sku}"
    row[8] = f"I-{sku}"
    return row


def fulfilled_line(sku, record, layout=CANADA):
    row = order_line(sku, width=layout.width)
    for attr, value in record.fulfillment_values().items():
        row[layout.fulfillment_columns[attr]] = value
    return row


class FakeGridStore:
    """In-memory store that records every call."""

    def __init__(self, grids=None, fail_on=None):
        self.grids = dict(grids or {})
        self.fetches = []
        self.persisted = []
        self.fail_on = fail_on

    def fetch(self, range_a1):
        from sync.errors import StoreUnavailable

        self.fetches.append(range_a1)
        if self.fail_on == "fetch":
            raise StoreUnavailable("quota exceeded")
        return [list(row) for row in self.grids.get(range_a1, [])]

    def persist(self, range_a1, values):
        from sync.errors import StoreUnavailable

        if self.fail_on == range_a1:
            raise StoreUnavailable(f"write to {range_a1} failed")
        self.persisted.append((range_a1, [list(row) for row in values]))


@pytest.fixture
def fake_store():
    return FakeGridStore()
