# reconcile/layout.py

from dataclasses import dataclass, field

from sync.a1 import column_letter, format_range


FULFILLMENT_FIELDS = (
    "quantity_purchased",
    "date_sold",
    "sale_price",
    "fees",
    "order_id",
    "order_item_id",
)


class LayoutError(ValueError):
    pass


@dataclass(frozen=True)
class RegionLayout:
    """
    Column layout of one region's sheet.

    - fulfillment_columns: field name -> 0-based column of the fulfillment slot
    - identity_columns: columns copied from the row above into an inserted row
    - output_groups: half-open (start, end) column spans persisted separately
    """
    slug: str
    sheet: str
    width: int
    fulfillment_columns: dict = field(default_factory=dict)
    identity_columns: tuple = ()
    output_groups: tuple = ()
    header_rows: int = 1

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.width < 1:
            raise LayoutError(f"{self.slug}: width must be >= 1")

        missing = [f for f in FULFILLMENT_FIELDS if f not in self.fulfillment_columns]
        if missing:
            raise LayoutError(f"{self.slug}: missing fulfillment columns {missing}")

        for col in list(self.fulfillment_columns.values()) + list(self.identity_columns):
            if not 0 <= col < self.width:
                raise LayoutError(f"{self.slug}: column {col} outside width {self.width}")

        overlap = set(self.identity_columns) & set(self.fulfillment_columns.values())
        if overlap:
            raise LayoutError(f"{self.slug}: identity columns overlap fulfillment slot {sorted(overlap)}")

        previous_end = 0
        for start, end in self.output_groups:
            if not (previous_end <= start < end <= self.width):
                raise LayoutError(f"{self.slug}: bad output group ({start}, {end})")
            previous_end = end

        for name, col in self.fulfillment_columns.items():
            if not any(start <= col < end for start, end in self.output_groups):
                raise LayoutError(f"{self.slug}: {name} column {column_letter(col)} is never persisted")

    @property
    def order_item_column(self) -> int:
        return self.fulfillment_columns["order_item_id"]

    @property
    def last_column(self) -> int:
        return self.width - 1

    def full_range(self) -> str:
        return format_range(self.sheet, 0, None, self.last_column)

    def data_range(self) -> str:
        return format_range(self.sheet, 0, self.header_rows + 1, self.last_column)

    def group_range(self, start: int, end: int) -> str:
        return format_range(self.sheet, start, None, end - 1)


# -------------------------------------------------
# Regions
# -------------------------------------------------

# M, N, P, Q, V, W
_FULFILLMENT_COLUMNS = {
    "quantity_purchased": 12,
    "date_sold": 13,
    "sale_price": 15,
    "fees": 16,
    "order_id": 21,
    "order_item_id": 22,
}

# A:N, P:R, V:W
_OUTPUT_GROUPS = ((0, 14), (15, 18), (21, 23))

CANADA = RegionLayout(
    slug="ca",
    sheet="Canada",
    width=23,
    fulfillment_columns=dict(_FULFILLMENT_COLUMNS),
    identity_columns=(1, 4, 8),  # B, E, I
    output_groups=_OUTPUT_GROUPS,
)

# Column I is not copied into inserted US rows.
US = RegionLayout(
    slug="us",
    sheet="US",
    width=23,
    fulfillment_columns=dict(_FULFILLMENT_COLUMNS),
    identity_columns=(1, 4),  # B, E
    output_groups=_OUTPUT_GROUPS,
)

REGION_LAYOUTS = {layout.slug: layout for layout in (CANADA, US)}
