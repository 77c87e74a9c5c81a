from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

import pandas as pd

DEFAULT_SERIES = "default"
INSTALLMENT_PREFIX = "installment-"


class SeriesKind(str, Enum):
    STREAM = "stream"
    INSTALLMENT = "installment"
    DEFAULT = "default"


@dataclass(frozen=True)
class SeriesKey:
    """Identifies one expense series: a plain stream, a financed major expense, or the placeholder."""

    kind: SeriesKind
    id: str = DEFAULT_SERIES

    @classmethod
    def stream(cls, stream_id: str) -> "SeriesKey":
        return cls(SeriesKind.STREAM, stream_id)

    @classmethod
    def installment(cls, expense_id: str) -> "SeriesKey":
        return cls(SeriesKind.INSTALLMENT, expense_id)

    @classmethod
    def default(cls) -> "SeriesKey":
        return cls(SeriesKind.DEFAULT)

    @property
    def label(self) -> str:
        if self.kind is SeriesKind.INSTALLMENT:
            return f"{INSTALLMENT_PREFIX}{self.id}"
        if self.kind is SeriesKind.DEFAULT:
            return DEFAULT_SERIES
        return self.id


@dataclass(frozen=True)
class OneTimeExpense:
    year: int
    amount: float


@dataclass
class CalculationResult:
    years: List[int]
    incomes: Dict[str, List[float]]
    expenses: Dict[SeriesKey, List[float]]
    major_expenses: Dict[str, OneTimeExpense]
    assets: Dict[str, List[float]]
    net_worth: List[float]
    savings: List[float]
    degraded: bool = False
    error: str | None = None

    def expenses_by_label(self) -> Dict[str, List[float]]:
        return {key.label: values for key, values in self.expenses.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "years": list(self.years),
            "incomes": {key: list(values) for key, values in self.incomes.items()},
            "expenses": {key: list(values) for key, values in self.expenses_by_label().items()},
            "majorExpenses": {
                key: {"year": item.year, "amount": item.amount} for key, item in self.major_expenses.items()
            },
            "assets": {key: list(values) for key, values in self.assets.items()},
            "netWorth": list(self.net_worth),
            "savings": list(self.savings),
            "degraded": self.degraded,
            "error": self.error,
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per year with the same column labels as the CSV export."""
        columns: Dict[str, List[float]] = {}
        for key, values in self.incomes.items():
            columns[f"Income: {key}"] = values
        for key, values in self.expenses_by_label().items():
            columns[f"Expense: {key}"] = values
        for key, values in self.assets.items():
            columns[f"Asset: {key}"] = values
        columns["Net Worth"] = self.net_worth
        columns["Savings"] = self.savings
        return pd.DataFrame(columns, index=pd.Index(self.years, name="Year"))
