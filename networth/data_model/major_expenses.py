from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .base import ColumnDefinition, TableModel, as_bool, as_float, as_int, as_str, generate_id


class MajorExpenseTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Name"),
            ColumnDefinition(
                "totalAmount",
                "Total Amount (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=1000.0,
                format="%.2f",
            ),
            ColumnDefinition("isInInstallments", "Financed", kind="bool", default=False),
            ColumnDefinition(
                "annualInterest",
                "Annual Interest (%)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=0.25,
            ),
            ColumnDefinition("installmentStartYear", "Start Year", kind="year", default=""),
            ColumnDefinition(
                "installmentEndYear",
                "End Year",
                kind="year",
                default="",
                help="Ignored for one-time expenses",
            ),
        ]
        super().__init__("majorExpenses", columns)


@dataclass(frozen=True)
class MajorExpense:
    """A large purchase paid either at once or as a fixed yearly installment.

    ``annual_installment_amount`` is precomputed by whoever builds the plan;
    the projection engine never recomputes it.
    """

    id: str
    name: str
    total_amount: float
    installment_start_year: int
    installment_end_year: int = 0
    is_in_installments: bool = False
    annual_installment_amount: float = 0.0
    annual_interest: float = 0.0

    def installment_active(self, year: int) -> bool:
        return self.is_in_installments and self.installment_start_year <= year <= self.installment_end_year

    def fires_once_in(self, year: int) -> bool:
        return not self.is_in_installments and year == self.installment_start_year

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "MajorExpense":
        start = as_int(row, "installmentStartYear", "installment_start_year")
        return cls(
            id=as_str(row, "id") or generate_id(),
            name=as_str(row, "name", "Name"),
            total_amount=as_float(row, "totalAmount", "total_amount"),
            installment_start_year=start,
            installment_end_year=as_int(row, "installmentEndYear", "installment_end_year", default=start),
            is_in_installments=as_bool(row, "isInInstallments", "is_in_installments"),
            annual_installment_amount=as_float(row, "annualInstallmentAmount", "annual_installment_amount"),
            annual_interest=as_float(row, "annualInterest", "annual_interest"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "totalAmount": self.total_amount,
            "isInInstallments": self.is_in_installments,
            "annualInstallmentAmount": self.annual_installment_amount,
            "installmentStartYear": self.installment_start_year,
            "installmentEndYear": self.installment_end_year,
            "annualInterest": self.annual_interest,
        }

