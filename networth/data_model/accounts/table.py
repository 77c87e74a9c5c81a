from __future__ import annotations

from .constants import (
    ASSET_TYPES,
    DEFAULT_ASSET_GROWTH,
    DEFAULT_ASSET_TYPE,
    DEFAULT_SPEND_PRIORITY,
    SPEND_PRIORITY_OPTIONS,
)
from .defaults import default_asset_rows
from ..base import ColumnDefinition, TableModel


class AssetTableModel(TableModel):
    """Schema + defaults for asset rows."""

    def __init__(self) -> None:
        columns = [
            ColumnDefinition(
                "type",
                "Type",
                kind="select",
                default=DEFAULT_ASSET_TYPE,
                options=ASSET_TYPES,
            ),
            ColumnDefinition("name", "Name"),
            ColumnDefinition(
                "currentAmount",
                "Current Amount (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=500.0,
                format="%.2f",
            ),
            ColumnDefinition(
                "annualGrowth",
                "Annual Growth (%)",
                kind="number",
                default=DEFAULT_ASSET_GROWTH,
                step=0.25,
                help="May be negative for depreciating property",
            ),
            ColumnDefinition(
                "spendPriority",
                "Spend Priority",
                kind="select",
                default=DEFAULT_SPEND_PRIORITY,
                options=SPEND_PRIORITY_OPTIONS,
                help="10 is drawn down first when cash is short",
            ),
            ColumnDefinition("isForSavings", "Receives Savings", kind="bool", default=True),
        ]

        super().__init__("assets", columns, default_asset_rows())
