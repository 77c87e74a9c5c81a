from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .base import as_int, as_str, generate_id


@dataclass(frozen=True)
class SavingsDistribution:
    """Percentage split of surplus cash across assets for a window of years.

    Percentages are expected to sum to 100 but nothing here enforces it.
    """

    id: str
    start_year: int
    end_year: int
    distribution: Dict[str, float] = field(default_factory=dict)

    def covers(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    def total_percentage(self) -> float:
        return sum(self.distribution.values())

    def without_asset(self, asset_id: str) -> "SavingsDistribution":
        remaining = {key: pct for key, pct in self.distribution.items() if key != asset_id}
        return SavingsDistribution(self.id, self.start_year, self.end_year, remaining)

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "SavingsDistribution":
        raw = row.get("distribution") or {}
        return cls(
            id=as_str(row, "id") or generate_id(),
            start_year=as_int(row, "startYear", "start_year"),
            end_year=as_int(row, "endYear", "end_year"),
            distribution={str(key): float(value or 0.0) for key, value in raw.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "startYear": self.start_year,
            "endYear": self.end_year,
            "distribution": dict(self.distribution),
        }
