ASSET_TYPES = [
    "Cash & Equivalents",
    "Stocks & Equities",
    "Movable Property (Car)",
    "Immovable Property (House)",
]

SPEND_PRIORITY_OPTIONS = [str(p) for p in range(1, 11)]

DEFAULT_ASSET_TYPE = ASSET_TYPES[0]
DEFAULT_ASSET_GROWTH = 3.0
DEFAULT_SPEND_PRIORITY = 5
