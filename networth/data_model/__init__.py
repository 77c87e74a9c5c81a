from .accounts import (
    ASSET_TYPES,
    SPEND_PRIORITY_OPTIONS,
    Asset,
    AssetTableModel,
)
from .base import generate_id
from .cashflow import (
    CashflowStream,
    ExpenseStream,
    ExpenseTableModel,
    IncomeStream,
    IncomeTableModel,
)
from .major_expenses import MajorExpense, MajorExpenseTableModel
from .plan import Portfolio, birth_year_for_age, current_year
from .result import CalculationResult, OneTimeExpense, SeriesKey, SeriesKind
from .savings import SavingsDistribution

__all__ = [
    "ASSET_TYPES",
    "SPEND_PRIORITY_OPTIONS",
    "Asset",
    "AssetTableModel",
    "CalculationResult",
    "CashflowStream",
    "ExpenseStream",
    "ExpenseTableModel",
    "IncomeStream",
    "IncomeTableModel",
    "MajorExpense",
    "MajorExpenseTableModel",
    "OneTimeExpense",
    "Portfolio",
    "SavingsDistribution",
    "SeriesKey",
    "SeriesKind",
    "birth_year_for_age",
    "current_year",
    "generate_id",
]
