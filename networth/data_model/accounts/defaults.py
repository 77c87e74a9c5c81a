from __future__ import annotations

from typing import List

from .constants import DEFAULT_ASSET_GROWTH, DEFAULT_ASSET_TYPE, DEFAULT_SPEND_PRIORITY


def default_asset_rows() -> List[dict[str, float | str | bool]]:
    return [
        {
            "type": DEFAULT_ASSET_TYPE,
            "name": "",
            "currentAmount": 0.0,
            "annualGrowth": DEFAULT_ASSET_GROWTH,
            "spendPriority": DEFAULT_SPEND_PRIORITY,
            "isForSavings": True,
        },
    ]
