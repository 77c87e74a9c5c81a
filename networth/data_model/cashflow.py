from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping

from .base import ColumnDefinition, TableModel, as_float, as_int, as_str, generate_id


def _stream_columns(default_amount: float) -> List[ColumnDefinition]:
    return [
        ColumnDefinition("name", "Name"),
        ColumnDefinition("startYear", "Start Year", kind="year", default=""),
        ColumnDefinition("endYear", "End Year", kind="year", default=""),
        ColumnDefinition(
            "annualAmount",
            "Annual Amount (USD)",
            kind="number",
            default=default_amount,
            min_value=0.0,
            step=1000.0,
            format="%.2f",
        ),
        ColumnDefinition(
            "annualGrowth",
            "Annual Growth (%)",
            kind="number",
            default=0.0,
            step=0.5,
            help="Compounded once per year",
        ),
    ]


class IncomeTableModel(TableModel):
    def __init__(self) -> None:
        super().__init__("incomeStreams", _stream_columns(0.0))


class ExpenseTableModel(TableModel):
    def __init__(self) -> None:
        super().__init__("expenseStreams", _stream_columns(0.0))


@dataclass(frozen=True)
class CashflowStream:
    id: str
    name: str
    start_year: int
    end_year: int
    annual_amount: float
    annual_growth: float = 0.0

    def is_active(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    def growth_factor(self) -> float:
        return 1 + self.annual_growth / 100

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "CashflowStream":
        return cls(
            id=as_str(row, "id") or generate_id(),
            name=as_str(row, "name", "Name"),
            start_year=as_int(row, "startYear", "start_year"),
            end_year=as_int(row, "endYear", "end_year"),
            annual_amount=as_float(row, "annualAmount", "annual_amount"),
            annual_growth=as_float(row, "annualGrowth", "annual_growth"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "startYear": self.start_year,
            "endYear": self.end_year,
            "annualAmount": self.annual_amount,
            "annualGrowth": self.annual_growth,
        }


class IncomeStream(CashflowStream):
    pass


class ExpenseStream(CashflowStream):
    pass

