# data_model/plan.py
from __future__ import annotations

import datetime
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Tuple

from .accounts import Asset
from .base import as_int
from .cashflow import ExpenseStream, IncomeStream
from .major_expenses import MajorExpense
from .savings import SavingsDistribution


def current_year() -> int:
    return datetime.date.today().year


def birth_year_for_age(age: int) -> int:
    return current_year() - age


@dataclass(frozen=True)
class Portfolio:
    start_year: int
    end_year: int
    user_age: int = 30
    birth_year: int = 0
    income_streams: Tuple[IncomeStream, ...] = field(default_factory=tuple)
    expense_streams: Tuple[ExpenseStream, ...] = field(default_factory=tuple)
    major_expenses: Tuple[MajorExpense, ...] = field(default_factory=tuple)
    assets: Tuple[Asset, ...] = field(default_factory=tuple)
    savings_distributions: Tuple[SavingsDistribution, ...] = field(default_factory=tuple)

    @property
    def effective_end_year(self) -> int:
        return max(self.start_year, self.end_year)

    def years(self) -> list[int]:
        return list(range(self.start_year, self.effective_end_year + 1))

    def asset_ids(self) -> list[str]:
        return [asset.id for asset in self.assets]

    def with_changes(self, **changes: Any) -> "Portfolio":
        for key in ("income_streams", "expense_streams", "major_expenses", "assets", "savings_distributions"):
            if key in changes:
                changes[key] = tuple(changes[key])
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Portfolio":
        start_year = as_int(payload, "startYear", "start_year", default=current_year())
        user_age = as_int(payload, "userAge", "user_age", default=30)
        return cls(
            start_year=start_year,
            end_year=as_int(payload, "endYear", "end_year", default=start_year),
            user_age=user_age,
            birth_year=as_int(payload, "birthYear", "birth_year", default=birth_year_for_age(user_age)),
            income_streams=tuple(IncomeStream.from_dict(row) for row in payload.get("incomeStreams") or []),
            expense_streams=tuple(ExpenseStream.from_dict(row) for row in payload.get("expenseStreams") or []),
            major_expenses=tuple(MajorExpense.from_dict(row) for row in payload.get("majorExpenses") or []),
            assets=tuple(Asset.from_dict(row) for row in payload.get("assets") or []),
            savings_distributions=tuple(
                SavingsDistribution.from_dict(row) for row in payload.get("savingsDistributions") or []
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "startYear": self.start_year,
            "endYear": self.end_year,
            "userAge": self.user_age,
            "birthYear": self.birth_year,
            "incomeStreams": [item.to_dict() for item in self.income_streams],
            "expenseStreams": [item.to_dict() for item in self.expense_streams],
            "majorExpenses": [item.to_dict() for item in self.major_expenses],
            "assets": [item.to_dict() for item in self.assets],
            "savingsDistributions": [item.to_dict() for item in self.savings_distributions],
        }
