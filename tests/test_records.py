import pytest

from reconcile.records import FulfillmentRecord, MalformedRecord, parse_records


def _item(**overrides):
    item = {
        "rowIndex": 4,
        "quantityPurchased": 2,
        "dateSold": "2024-03-01",
        "salePrice": 19.99,
        "fees": 2.1,
        "orderID": 111,
        "orderItemID": 222,
    }
    item.update(overrides)
    return item


def test_parse_records_maps_wire_names():
    (record,) = parse_records({"data": [_item()]})

    assert record == FulfillmentRecord(
        target_row=4,
        quantity_purchased=2,
        date_sold="2024-03-01",
        sale_price=19.99,
        fees=2.1,
        order_id="111",
        order_item_id="222",
    )


def test_target_row_alias_and_numeric_strings():
    item = _item()
    del item["rowIndex"]
    item["targetRow"] = "7"
    assert parse_records({"data": [item]})[0].target_row == 7


def test_optional_fields_default_to_empty():
    (record,) = parse_records({"data": [{"rowIndex": 2, "orderItemID": "X"}]})
    assert record.quantity_purchased == ""
    assert record.order_id == ""


def test_empty_batch_is_allowed():
    assert parse_records({"data": []}) == []


@pytest.mark.parametrize(
    "payload, message",
    [
        (None, "'data' list"),
        ([], "'data' list"),
        ({"rows": []}, "'data' list"),
        ({"data": {"rowIndex": 1}}, "must be a list"),
        ({"data": ["x"]}, r"data\[0\]: expected an object"),
    ],
)
def test_malformed_bodies(payload, message):
    with pytest.raises(MalformedRecord, match=message):
        parse_records(payload)


@pytest.mark.parametrize("row", [0, -1, 1.5, "abc", "³", True, None])
def test_invalid_row_index(row):
    with pytest.raises(MalformedRecord, match="rowIndex"):
        parse_records({"data": [_item(), _item(rowIndex=row)]})


def test_missing_row_index_names_position():
    item = _item()
    del item["rowIndex"]
    with pytest.raises(MalformedRecord, match=r"data\[1\]: rowIndex is required"):
        parse_records({"data": [_item(), item]})


@pytest.mark.parametrize("value", [None, "", "   "])
def test_order_item_id_required(value):
    with pytest.raises(MalformedRecord, match="orderItemID"):
        parse_records({"data": [_item(orderItemID=value)]})


def test_fulfillment_values_cover_slot():
    record = parse_records({"data": [_item()]})[0]
    assert set(record.fulfillment_values()) == {
        "quantity_purchased",
        "date_sold",
        "sale_price",
        "fees",
        "order_id",
        "order_item_id",
    }
