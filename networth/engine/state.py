# engine/state.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..config import Settings, load_settings
from ..data_model import (
    Asset,
    CalculationResult,
    ExpenseStream,
    IncomeStream,
    MajorExpense,
    Portfolio,
    SavingsDistribution,
    birth_year_for_age,
    current_year,
    generate_id,
)
from .amortization import annual_installment
from .export import export_to_csv
from .projection import project_portfolio

logger = logging.getLogger(__name__)


def default_portfolio(settings: Settings | None = None) -> Portfolio:
    settings = settings or load_settings()
    start = current_year()
    return Portfolio(
        start_year=start,
        end_year=start + settings.horizon_years,
        user_age=settings.default_age,
        birth_year=birth_year_for_age(settings.default_age),
    )


def normalize_major_expense(expense: MajorExpense) -> MajorExpense:
    """Keeps a major expense's derived fields in line with its loan terms."""
    if expense.is_in_installments:
        if expense.total_amount <= 0:
            return expense
        amount = annual_installment(
            expense.total_amount,
            expense.annual_interest,
            expense.installment_start_year,
            expense.installment_end_year,
        )
        return replace(expense, annual_installment_amount=amount)
    return replace(
        expense,
        installment_end_year=expense.installment_start_year,
        annual_installment_amount=expense.total_amount,
    )


def _with_id(item):
    return item if item.id else replace(item, id=generate_id())


class PortfolioState:
    """Holds the current plan and re-projects it after every change."""

    def __init__(self, portfolio: Optional[Portfolio] = None, settings: Settings | None = None):
        self.settings = settings or load_settings()
        self.portfolio = portfolio or default_portfolio(self.settings)
        self.result: CalculationResult = self._project()

    def _project(self) -> CalculationResult:
        return project_portfolio(self.portfolio, strict=self.settings.strict_projection)

    def _commit(self, portfolio: Portfolio, action: str) -> CalculationResult:
        self.portfolio = portfolio
        self.result = self._project()
        logger.info("%s -> %d-%d", action, portfolio.start_year, portfolio.effective_end_year)
        return self.result

    def set_portfolio(self, portfolio: Portfolio) -> CalculationResult:
        return self._commit(portfolio, "replace portfolio")

    def set_user_age(self, age: int) -> CalculationResult:
        updated = self.portfolio.with_changes(user_age=age, birth_year=birth_year_for_age(age))
        return self._commit(updated, "set user age")

    def set_start_year(self, year: int) -> CalculationResult:
        return self._commit(self.portfolio.with_changes(start_year=year), "set start year")

    def set_end_year(self, year: int) -> CalculationResult:
        return self._commit(self.portfolio.with_changes(end_year=year), "set end year")

    def _add(self, field: str, item) -> CalculationResult:
        items = getattr(self.portfolio, field) + (_with_id(item),)
        return self._commit(self.portfolio.with_changes(**{field: items}), f"add {field}")

    def _update(self, field: str, item) -> CalculationResult:
        current = getattr(self.portfolio, field)
        if not any(existing.id == item.id for existing in current):
            raise KeyError(item.id)
        items = [item if existing.id == item.id else existing for existing in current]
        return self._commit(self.portfolio.with_changes(**{field: items}), f"update {field}")

    def _remove(self, field: str, item_id: str, **extra) -> CalculationResult:
        items = [existing for existing in getattr(self.portfolio, field) if existing.id != item_id]
        return self._commit(self.portfolio.with_changes(**{field: items}, **extra), f"remove {field}")

    def add_income_stream(self, stream: IncomeStream) -> CalculationResult:
        return self._add("income_streams", stream)

    def update_income_stream(self, stream: IncomeStream) -> CalculationResult:
        return self._update("income_streams", stream)

    def remove_income_stream(self, stream_id: str) -> CalculationResult:
        return self._remove("income_streams", stream_id)

    def add_expense_stream(self, stream: ExpenseStream) -> CalculationResult:
        return self._add("expense_streams", stream)

    def update_expense_stream(self, stream: ExpenseStream) -> CalculationResult:
        return self._update("expense_streams", stream)

    def remove_expense_stream(self, stream_id: str) -> CalculationResult:
        return self._remove("expense_streams", stream_id)

    def add_major_expense(self, expense: MajorExpense) -> CalculationResult:
        return self._add("major_expenses", normalize_major_expense(expense))

    def update_major_expense(self, expense: MajorExpense) -> CalculationResult:
        return self._update("major_expenses", normalize_major_expense(expense))

    def remove_major_expense(self, expense_id: str) -> CalculationResult:
        return self._remove("major_expenses", expense_id)

    def add_asset(self, asset: Asset) -> CalculationResult:
        return self._add("assets", asset)

    def update_asset(self, asset: Asset) -> CalculationResult:
        return self._update("assets", asset)

    def remove_asset(self, asset_id: str) -> CalculationResult:
        # drop the asset from every savings rule as well
        distributions = [dist.without_asset(asset_id) for dist in self.portfolio.savings_distributions]
        return self._remove("assets", asset_id, savings_distributions=distributions)

    def add_savings_distribution(self, distribution: SavingsDistribution) -> CalculationResult:
        return self._add("savings_distributions", distribution)

    def update_savings_distribution(self, distribution: SavingsDistribution) -> CalculationResult:
        return self._update("savings_distributions", distribution)

    def remove_savings_distribution(self, distribution_id: str) -> CalculationResult:
        return self._remove("savings_distributions", distribution_id)

    def export_csv(self) -> str:
        return export_to_csv(self.result)
