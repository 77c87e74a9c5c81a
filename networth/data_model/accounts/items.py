from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..base import as_bool, as_float, as_int, as_str, generate_id
from .constants import DEFAULT_ASSET_GROWTH, DEFAULT_ASSET_TYPE, DEFAULT_SPEND_PRIORITY


@dataclass(frozen=True)
class Asset:
    id: str
    name: str
    current_amount: float
    type: str = DEFAULT_ASSET_TYPE
    annual_growth: float = DEFAULT_ASSET_GROWTH
    spend_priority: int = DEFAULT_SPEND_PRIORITY
    is_for_savings: bool = True

    def grow(self, balance: float) -> float:
        return balance * (1 + self.annual_growth / 100)

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "Asset":
        return cls(
            id=as_str(row, "id") or generate_id(),
            name=as_str(row, "name", "Name"),
            current_amount=as_float(row, "currentAmount", "current_amount"),
            type=as_str(row, "type", default=DEFAULT_ASSET_TYPE),
            annual_growth=as_float(row, "annualGrowth", "annual_growth", default=DEFAULT_ASSET_GROWTH),
            spend_priority=as_int(row, "spendPriority", "spend_priority", default=DEFAULT_SPEND_PRIORITY),
            is_for_savings=as_bool(row, "isForSavings", "is_for_savings", default=True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "currentAmount": self.current_amount,
            "annualGrowth": self.annual_growth,
            "spendPriority": self.spend_priority,
            "isForSavings": self.is_for_savings,
        }

