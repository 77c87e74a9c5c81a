"""Plan checks used by the editor and the API. The projection never calls these."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence

from ..data_model import Asset, Portfolio, SavingsDistribution

PERCENT_TOLERANCE = 0.01


def validate_savings_distributions(
    start_year: int, end_year: int, distributions: Sequence[SavingsDistribution]
) -> bool:
    """True when the rules cover ``[start_year, end_year]`` back to back with no gaps."""
    if not distributions:
        return False

    ordered = sorted(distributions, key=lambda dist: dist.start_year)
    if ordered[0].start_year > start_year:
        return False
    if ordered[-1].end_year < end_year:
        return False
    for current, following in zip(ordered, ordered[1:]):
        if current.end_year + 1 != following.start_year:
            return False
    return True


def validate_distribution_percentages(distribution: Mapping[str, float]) -> bool:
    return abs(sum(distribution.values()) - 100) < PERCENT_TOLERANCE


def has_overlap(distributions: Iterable[SavingsDistribution], candidate: SavingsDistribution) -> bool:
    return any(
        dist.id != candidate.id
        and dist.start_year <= candidate.end_year
        and dist.end_year >= candidate.start_year
        for dist in distributions
    )


def even_distribution(assets: Iterable[Asset]) -> Dict[str, int]:
    """Whole-percent split over savings assets; the first one absorbs the remainder."""
    savers = [asset for asset in assets if asset.is_for_savings]
    if not savers:
        return {}
    share = 100 // len(savers)
    remainder = 100 - share * len(savers)
    return {asset.id: share + (remainder if position == 0 else 0) for position, asset in enumerate(savers)}


def plan_warnings(portfolio: Portfolio) -> List[str]:
    warnings: List[str] = []
    start, end = portfolio.start_year, portfolio.effective_end_year

    if portfolio.end_year < portfolio.start_year:
        warnings.append(
            f"End year {portfolio.end_year} is before start year {portfolio.start_year}; projecting {start} only."
        )

    known = set(portfolio.asset_ids())
    for dist in portfolio.savings_distributions:
        if dist.distribution and not validate_distribution_percentages(dist.distribution):
            warnings.append(
                f"Savings distribution {dist.start_year}-{dist.end_year} sums to {dist.total_percentage():g}%, not 100%."
            )
        stale = sorted(set(dist.distribution) - known)
        if stale:
            warnings.append(
                f"Savings distribution {dist.start_year}-{dist.end_year} references unknown assets: {', '.join(stale)}."
            )
    if portfolio.savings_distributions and not validate_savings_distributions(
        start, end, portfolio.savings_distributions
    ):
        warnings.append("Savings distributions leave gaps or do not cover the whole projection.")

    for expense in portfolio.major_expenses:
        if not expense.is_in_installments:
            if not start <= expense.installment_start_year <= end:
                warnings.append(f"Major expense '{expense.name}' falls outside {start}-{end}.")
            continue
        if expense.installment_start_year < start or expense.installment_end_year > end:
            warnings.append(
                f"Installments for '{expense.name}' ({expense.installment_start_year}-"
                f"{expense.installment_end_year}) extend beyond {start}-{end}; only the overlap is projected."
            )

    return warnings
