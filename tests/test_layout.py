import pytest

from reconcile.layout import CANADA, REGION_LAYOUTS, US, LayoutError, RegionLayout


def _layout(**overrides):
    options = dict(
        slug="t",
        sheet="Test",
        width=CANADA.width,
        fulfillment_columns=dict(CANADA.fulfillment_columns),
        identity_columns=(1,),
        output_groups=CANADA.output_groups,
    )
    options.update(overrides)
    return RegionLayout(**options)


def test_registered_regions():
    assert set(REGION_LAYOUTS) == {"ca", "us"}
    assert REGION_LAYOUTS["ca"] is CANADA
    assert REGION_LAYOUTS["us"] is US


def test_identity_columns_per_region():
    assert CANADA.identity_columns == (1, 4, 8)
    assert US.identity_columns == (1, 4)


def test_region_ranges():
    assert CANADA.full_range() == "'Canada'!A:W"
    assert CANADA.data_range() == "'Canada'!A2:W"
    assert US.full_range() == "'US'!A:W"
    assert US.group_range(15, 18) == "'US'!P:R"


def test_fulfillment_column_outside_output_groups_is_rejected():
    columns = dict(CANADA.fulfillment_columns, fees=19)
    with pytest.raises(LayoutError, match="never persisted"):
        _layout(fulfillment_columns=columns)


def test_column_beyond_width_is_rejected():
    with pytest.raises(LayoutError, match="outside width"):
        _layout(identity_columns=(30,))


def test_identity_may_not_overlap_slot():
    with pytest.raises(LayoutError, match="overlap"):
        _layout(identity_columns=(1, 22))


@pytest.mark.parametrize("groups", [((0, 14), (10, 23)), ((15, 18), (0, 14)), ((0, 24),), ((5, 5),)])
def test_bad_output_groups_are_rejected(groups):
    with pytest.raises(LayoutError):
        _layout(output_groups=groups)


def test_missing_fulfillment_field_is_rejected():
    columns = dict(CANADA.fulfillment_columns)
    del columns["order_item_id"]
    with pytest.raises(LayoutError, match="missing"):
        _layout(fulfillment_columns=columns)
