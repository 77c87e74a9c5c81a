from __future__ import annotations

import io

import pandas as pd

from ..data_model import CalculationResult

EXPORT_FILENAME = "financial-projection.csv"


def _money(value: float) -> str:
    return f"{value:.2f}"


def export_to_csv(result: CalculationResult) -> str:
    """Renders ``result`` as comma-separated text, one row per year.

    Fields are written verbatim: nothing is quoted or escaped and the last row
    has no trailing newline.
    """
    expenses = result.expenses_by_label()
    headers = (
        ["Year"]
        + [f"Income: {key}" for key in result.incomes]
        + [f"Expense: {key}" for key in expenses]
        + [f"Asset: {key}" for key in result.assets]
        + ["Net Worth", "Savings"]
    )

    rows = []
    for i, year in enumerate(result.years):
        row = [str(year)]
        row += [_money(values[i]) for values in result.incomes.values()]
        row += [_money(values[i]) for values in expenses.values()]
        row += [_money(values[i]) for values in result.assets.values()]
        row += [_money(result.net_worth[i]), _money(result.savings[i])]
        rows.append(row)

    return "\n".join([",".join(headers)] + [",".join(row) for row in rows])


def read_csv_export(text: str) -> pd.DataFrame:
    """Parses an export back into a frame indexed by ``Year``."""
    if not text.strip():
        return pd.DataFrame()
    return pd.read_csv(io.StringIO(text), index_col="Year")
