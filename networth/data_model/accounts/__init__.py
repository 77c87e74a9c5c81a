from .constants import ASSET_TYPES, SPEND_PRIORITY_OPTIONS
from .defaults import default_asset_rows
from .items import Asset
from .table import AssetTableModel

__all__ = [
    "ASSET_TYPES",
    "SPEND_PRIORITY_OPTIONS",
    "Asset",
    "AssetTableModel",
    "default_asset_rows",
]
