"""Year-by-year net worth projection.

The projection is a fold: every year is computed by ``step_year`` from the
previous year's committed ``YearSnapshot``. ``project_portfolio`` runs the
fold over the whole horizon and lays the snapshots out as parallel series.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import load_settings
from ..data_model import (
    Asset,
    CalculationResult,
    CashflowStream,
    MajorExpense,
    OneTimeExpense,
    Portfolio,
    SavingsDistribution,
    SeriesKey,
)
from ..data_model.result import DEFAULT_SERIES

logger = logging.getLogger(__name__)


class ProjectionError(RuntimeError):
    """Raised instead of a zeroed result when strict projection is enabled."""


class SurplusPolicy(str, Enum):
    DISTRIBUTION = "distribution"
    SAVINGS_ASSETS = "savings_assets"
    FIRST_ASSET = "first_asset"
    NONE = "none"


@dataclass(frozen=True)
class YearSnapshot:
    index: int
    year: int
    incomes: Dict[str, float]
    expenses: Dict[SeriesKey, float]
    one_time: Dict[str, OneTimeExpense]
    assets: Dict[str, float]
    savings: float
    net_worth: float
    shortfall: float = 0.0


def _stream_value(stream: CashflowStream, year: int, index: int, previous: float) -> float:
    if not stream.is_active(year):
        return 0.0
    # first active year inside the horizon starts from the declared amount
    if index == 0 or not stream.is_active(year - 1):
        return stream.annual_amount
    return previous * stream.growth_factor()


def _stream_values(
    streams: Iterable[CashflowStream],
    year: int,
    index: int,
    previous: Optional[Dict],
    key=lambda stream: stream.id,
) -> Dict:
    values = {}
    for stream in streams:
        series_key = key(stream)
        prior = previous[series_key] if previous is not None else 0.0
        values[series_key] = _stream_value(stream, year, index, prior)
    return values


def _financed_in_horizon(portfolio: Portfolio) -> List[MajorExpense]:
    return [
        expense
        for expense in portfolio.major_expenses
        if expense.is_in_installments
        and expense.installment_start_year <= portfolio.effective_end_year
        and expense.installment_end_year >= portfolio.start_year
    ]


def expense_series_keys(portfolio: Portfolio) -> List[SeriesKey]:
    """Expense series in result order: streams, then installments by first active year."""
    keys = [SeriesKey.stream(stream.id) for stream in portfolio.expense_streams] or [SeriesKey.default()]
    financed = [
        (max(expense.installment_start_year, portfolio.start_year), position, expense.id)
        for position, expense in enumerate(_financed_in_horizon(portfolio))
    ]
    keys.extend(SeriesKey.installment(expense_id) for _, _, expense_id in sorted(financed))
    return keys


def choose_surplus_policy(
    portfolio: Portfolio, year: int
) -> Tuple[SurplusPolicy, Optional[SavingsDistribution]]:
    """Decides who receives a surplus in ``year``.

    The first rule covering the year wins when rules overlap. An uncovered
    year or an empty rule falls back to an even split over savings assets,
    then to the first asset in plan order.
    """
    rule = next((dist for dist in portfolio.savings_distributions if dist.covers(year)), None)
    if rule is not None and rule.distribution:
        return SurplusPolicy.DISTRIBUTION, rule
    if any(asset.is_for_savings for asset in portfolio.assets):
        return SurplusPolicy.SAVINGS_ASSETS, None
    if portfolio.assets:
        return SurplusPolicy.FIRST_ASSET, None
    return SurplusPolicy.NONE, None


def allocate_surplus(
    portfolio: Portfolio, year: int, balances: Dict[str, float], surplus: float
) -> Dict[str, float]:
    policy, rule = choose_surplus_policy(portfolio, year)
    updated = dict(balances)

    if policy is SurplusPolicy.DISTRIBUTION:
        known = set(portfolio.asset_ids())
        for asset_id, percentage in rule.distribution.items():
            if asset_id in known:
                updated[asset_id] += surplus * (percentage / 100)
    elif policy is SurplusPolicy.SAVINGS_ASSETS:
        savers = [asset for asset in portfolio.assets if asset.is_for_savings]
        share = surplus / len(savers)
        for asset in savers:
            updated[asset.id] += share
    elif policy is SurplusPolicy.FIRST_ASSET:
        updated[portfolio.assets[0].id] += surplus

    return updated


def burn_deficit(
    assets: Iterable[Asset], balances: Dict[str, float], deficit: float
) -> Tuple[Dict[str, float], float]:
    """Draws ``deficit`` from assets, highest spend priority first.

    Returns the new balances and whatever could not be covered. Balances are
    never pushed below zero.
    """
    updated = dict(balances)
    remaining = deficit
    for asset in sorted(assets, key=lambda item: item.spend_priority, reverse=True):
        if remaining <= 0:
            break
        available = updated[asset.id]
        if available <= 0:
            continue
        taken = min(available, remaining)
        updated[asset.id] = available - taken
        remaining -= taken
    return updated, max(remaining, 0.0)


def step_year(
    portfolio: Portfolio, year: int, index: int, previous: Optional[YearSnapshot] = None
) -> YearSnapshot:
    """Computes one projection year from the previous committed year."""
    if index > 0 and previous is None:
        raise ValueError(f"year index {index} needs the previous snapshot")

    incomes = _stream_values(
        portfolio.income_streams, year, index, previous.incomes if previous else None
    ) or {DEFAULT_SERIES: 0.0}
    expenses = _stream_values(
        portfolio.expense_streams,
        year,
        index,
        previous.expenses if previous else None,
        key=lambda stream: SeriesKey.stream(stream.id),
    ) or {SeriesKey.default(): 0.0}

    for expense in _financed_in_horizon(portfolio):
        amount = expense.annual_installment_amount if expense.installment_active(year) else 0.0
        expenses[SeriesKey.installment(expense.id)] = amount

    one_time = {
        expense.id: OneTimeExpense(year=year, amount=expense.total_amount)
        for expense in portfolio.major_expenses
        if expense.fires_once_in(year)
    }

    savings = sum(incomes.values()) - sum(expenses.values())

    shortfall = 0.0
    if index == 0:
        balances = {asset.id: asset.current_amount for asset in portfolio.assets}
    else:
        balances = {asset.id: asset.grow(previous.assets[asset.id]) for asset in portfolio.assets}
        if savings > 0:
            balances = allocate_surplus(portfolio, year, balances, savings)
        elif savings < 0:
            balances, shortfall = burn_deficit(portfolio.assets, balances, -savings)
    if not balances:
        balances = {DEFAULT_SERIES: 0.0}

    return YearSnapshot(
        index=index,
        year=year,
        incomes=incomes,
        expenses=expenses,
        one_time=one_time,
        assets=balances,
        savings=savings,
        net_worth=sum(balances.values()),
        shortfall=shortfall,
    )


def _empty_series(keys: Iterable, length: int) -> Dict:
    return {key: [0.0] * length for key in keys}


def _fallback_expense_keys(portfolio: Portfolio) -> List[SeriesKey]:
    keys = [SeriesKey.stream(stream.id) for stream in portfolio.expense_streams] or [SeriesKey.default()]
    keys.extend(SeriesKey.installment(expense.id) for expense in portfolio.major_expenses if expense.is_in_installments)
    return keys


def _one_time_expenses(portfolio: Portfolio, years: List[int]) -> Dict[str, OneTimeExpense]:
    return {
        expense.id: OneTimeExpense(year=expense.installment_start_year, amount=expense.total_amount)
        for expense in portfolio.major_expenses
        if not expense.is_in_installments and expense.installment_start_year in years
    }


def project_portfolio(portfolio: Portfolio, strict: bool | None = None) -> CalculationResult:
    """Projects ``portfolio`` over its whole horizon.

    Any failure while laying out the series or running the yearly loop yields
    a result of the right shape with zeroed net worth and savings and
    ``degraded`` set, unless ``strict`` (or ``NETWORTH_STRICT_PROJECTION``)
    asks for a ``ProjectionError`` instead.
    """
    if strict is None:
        strict = load_settings().strict_projection

    years = portfolio.years()
    n_years = len(years)
    income_keys = [stream.id for stream in portfolio.income_streams] or [DEFAULT_SERIES]
    asset_keys = portfolio.asset_ids() or [DEFAULT_SERIES]

    logger.debug(
        "Projecting %d-%d: %d incomes, %d expenses, %d major expenses, %d assets",
        years[0],
        years[-1],
        len(portfolio.income_streams),
        len(portfolio.expense_streams),
        len(portfolio.major_expenses),
        len(portfolio.assets),
    )

    try:
        expense_keys = expense_series_keys(portfolio)
        snapshots: List[YearSnapshot] = []
        previous: Optional[YearSnapshot] = None
        for index, year in enumerate(years):
            previous = step_year(portfolio, year, index, previous)
            if previous.shortfall:
                logger.debug("%d: %.2f of the deficit could not be covered by assets", year, previous.shortfall)
            snapshots.append(previous)

        one_time: Dict[str, OneTimeExpense] = {}
        for snapshot in snapshots:
            one_time.update(snapshot.one_time)

        return CalculationResult(
            years=years,
            incomes={key: [snap.incomes[key] for snap in snapshots] for key in income_keys},
            expenses={key: [snap.expenses[key] for snap in snapshots] for key in expense_keys},
            major_expenses=one_time,
            assets={key: [snap.assets[key] for snap in snapshots] for key in asset_keys},
            net_worth=[snap.net_worth for snap in snapshots],
            savings=[snap.savings for snap in snapshots],
        )
    except Exception as exc:
        if strict:
            raise ProjectionError(f"projection {years[0]}-{years[-1]} failed: {exc}") from exc
        logger.warning("Projection %d-%d failed, returning zeroed net worth and savings: %s", years[0], years[-1], exc)
        assets = _empty_series(asset_keys, n_years)
        for asset in portfolio.assets:
            assets[asset.id][0] = asset.current_amount
        return CalculationResult(
            years=years,
            incomes=_empty_series(income_keys, n_years),
            expenses=_empty_series(_fallback_expense_keys(portfolio), n_years),
            major_expenses=_one_time_expenses(portfolio, years),
            assets=assets,
            net_worth=[0.0] * n_years,
            savings=[0.0] * n_years,
            degraded=True,
            error=str(exc),
        )
