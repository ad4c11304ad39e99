# reconcile/records.py

from dataclasses import dataclass


class MalformedRecord(ValueError):
    """Raised when an incoming fulfillment payload cannot be reconciled."""


# wire name -> attribute
WIRE_FIELDS = {
    "quantityPurchased": "quantity_purchased",
    "dateSold": "date_sold",
    "salePrice": "sale_price",
    "fees": "fees",
    "orderID": "order_id",
    "orderItemID": "order_item_id",
}

ROW_KEYS = ("rowIndex", "targetRow")


@dataclass(frozen=True)
class FulfillmentRecord:
    target_row: int
    order_item_id: str
    quantity_purchased: object = ""
    date_sold: object = ""
    sale_price: object = ""
    fees: object = ""
    order_id: str = ""

    def fulfillment_values(self) -> dict:
        return {attr: getattr(self, attr) for attr in WIRE_FIELDS.values()}

    @classmethod
    def from_payload(cls, item, *, position=None):
        where = f"data[{position}]" if position is not None else "record"

        if not isinstance(item, dict):
            raise MalformedRecord(f"{where}: expected an object")

        key = next((k for k in ROW_KEYS if k in item), None)
        if key is None:
            raise MalformedRecord(f"{where}: rowIndex is required")
        target_row = _parse_row(item[key], where)

        order_item_id = item.get("orderItemID")
        if order_item_id is None or str(order_item_id).strip() == "":
            raise MalformedRecord(f"{where}: orderItemID is required")

        values = {}
        for wire, attr in WIRE_FIELDS.items():
            value = item.get(wire)
            values[attr] = "" if value is None else value

        values["order_item_id"] = str(order_item_id)
        values["order_id"] = str(values["order_id"])

        return cls(target_row=target_row, **values)


def _parse_row(value, where):
    if isinstance(value, bool):
        raise MalformedRecord(f"{where}: rowIndex must be an integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value.strip())
    if not isinstance(value, int):
        raise MalformedRecord(f"{where}: rowIndex must be an integer")
    if value < 1:
        raise MalformedRecord(f"{where}: rowIndex must be >= 1")
    return value


def parse_records(payload) -> list[FulfillmentRecord]:
    """
    Parse a request body of the form {"data": [ {...}, ... ]}.
    Every item is validated before anything is returned.
    """
    if not isinstance(payload, dict) or "data" not in payload:
        raise MalformedRecord("request body must be an object with a 'data' list")

    data = payload["data"]
    if not isinstance(data, list):
        raise MalformedRecord("'data' must be a list")

    return [
        FulfillmentRecord.from_payload(item, position=i)
        for i, item in enumerate(data)
    ]
