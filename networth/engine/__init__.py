from .amortization import annual_installment
from .export import export_to_csv, read_csv_export
from .projection import (
    ProjectionError,
    SurplusPolicy,
    YearSnapshot,
    choose_surplus_policy,
    project_portfolio,
    step_year,
)
from .state import PortfolioState

__all__ = [
    "PortfolioState",
    "ProjectionError",
    "SurplusPolicy",
    "YearSnapshot",
    "annual_installment",
    "choose_surplus_policy",
    "export_to_csv",
    "project_portfolio",
    "read_csv_export",
    "step_year",
]
