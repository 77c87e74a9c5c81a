import pytest

from networth.data_model import (
    Asset,
    ExpenseStream,
    IncomeStream,
    MajorExpense,
    OneTimeExpense,
    Portfolio,
    SeriesKey,
)
from networth.engine.projection import ProjectionError, project_portfolio, step_year


def _portfolio(start=2024, end=2028, **collections):
    return Portfolio(start_year=start, end_year=end).with_changes(**collections)


@pytest.mark.parametrize(
    "start, end, expected",
    [(2024, 2030, 7), (2024, 2024, 1), (2024, 2020, 1)],
)
def test_horizon_length_clamps_reversed_window(start, end, expected):
    result = project_portfolio(_portfolio(start, end))

    assert len(result.years) == expected
    assert result.years[0] == start
    for series in (result.net_worth, result.savings):
        assert len(series) == expected


def test_income_compounds_annually():
    salary = IncomeStream("salary", "Salary", 2024, 2030, 1000.0, 10.0)

    result = project_portfolio(_portfolio(2024, 2030, income_streams=[salary]))

    for k, value in enumerate(result.incomes["salary"]):
        assert value == pytest.approx(1000 * 1.1**k)


def test_stream_outside_window_is_zero_and_restarts_from_declared_amount():
    late = IncomeStream("late", "Side job", 2026, 2027, 1000.0, 10.0)

    result = project_portfolio(_portfolio(2024, 2028, income_streams=[late]))

    assert result.incomes["late"][:2] == [0.0, 0.0]
    assert result.incomes["late"][2] == 1000.0
    assert result.incomes["late"][3] == pytest.approx(1100.0)
    assert result.incomes["late"][4] == 0.0


def test_expense_streams_follow_the_same_rule():
    rent = ExpenseStream("rent", "Rent", 2024, 2026, 12000.0, 5.0)

    result = project_portfolio(_portfolio(2024, 2027, expense_streams=[rent]))

    assert result.expenses[SeriesKey.stream("rent")] == pytest.approx([12000.0, 12600.0, 13230.0, 0.0])
    assert result.savings == pytest.approx([-12000.0, -12600.0, -13230.0, 0.0])


def test_assets_grow_from_opening_balance():
    fund = Asset("fund", "Index fund", 1000.0, annual_growth=5.0)

    result = project_portfolio(_portfolio(2024, 2026, assets=[fund]))

    assert result.assets["fund"] == pytest.approx([1000.0, 1050.0, 1102.5])
    assert result.net_worth == pytest.approx([1000.0, 1050.0, 1102.5])


def test_first_year_savings_do_not_touch_opening_balances():
    salary = IncomeStream("salary", "Salary", 2024, 2025, 5000.0)
    cash = Asset("cash", "Cash", 100.0, annual_growth=0.0)

    result = project_portfolio(_portfolio(2024, 2025, income_streams=[salary], assets=[cash]))

    assert result.assets["cash"] == [100.0, 5100.0]


def test_net_worth_is_sum_of_asset_balances():
    portfolio = _portfolio(
        2024,
        2034,
        income_streams=[IncomeStream("salary", "Salary", 2024, 2030, 50000.0, 3.0)],
        expense_streams=[ExpenseStream("living", "Living", 2024, 2034, 40000.0, 4.0)],
        assets=[
            Asset("cash", "Cash", 10000.0, annual_growth=1.0, spend_priority=9),
            Asset("stocks", "Stocks", 20000.0, annual_growth=7.0, spend_priority=2),
            Asset("car", "Car", 15000.0, annual_growth=-10.0, spend_priority=1, is_for_savings=False),
        ],
    )

    result = project_portfolio(portfolio)

    for i in range(len(result.years)):
        assert result.net_worth[i] == sum(series[i] for series in result.assets.values())


def test_one_time_major_expense_is_recorded_but_not_deducted():
    salary = IncomeStream("salary", "Salary", 2024, 2033, 60000.0)
    car = MajorExpense("car", "Car", 50000.0, installment_start_year=2027, installment_end_year=2027)

    result = project_portfolio(_portfolio(2024, 2033, income_streams=[salary], major_expenses=[car]))

    assert result.major_expenses == {"car": OneTimeExpense(year=2027, amount=50000.0)}
    assert result.savings == [60000.0] * 10
    assert SeriesKey.installment("car") not in result.expenses


def test_installment_major_expense_reduces_savings_in_its_window():
    salary = IncomeStream("salary", "Salary", 2024, 2033, 60000.0)
    car = MajorExpense(
        "car",
        "Car",
        50000.0,
        installment_start_year=2027,
        installment_end_year=2031,
        is_in_installments=True,
        annual_installment_amount=11000.0,
    )

    result = project_portfolio(_portfolio(2024, 2033, income_streams=[salary], major_expenses=[car]))

    assert result.major_expenses == {}
    assert result.expenses[SeriesKey.installment("car")] == [0.0] * 3 + [11000.0] * 5 + [0.0] * 2
    assert result.savings == [60000.0] * 3 + [49000.0] * 5 + [60000.0] * 2


def test_installment_window_starting_before_horizon_uses_plan_years():
    loan = MajorExpense(
        "loan",
        "Old loan",
        9000.0,
        installment_start_year=2022,
        installment_end_year=2026,
        is_in_installments=True,
        annual_installment_amount=1800.0,
    )

    result = project_portfolio(_portfolio(2024, 2028, major_expenses=[loan]))

    assert result.expenses[SeriesKey.installment("loan")] == [1800.0, 1800.0, 1800.0, 0.0, 0.0]
    assert not result.degraded


def test_installment_outside_horizon_has_no_series():
    later = MajorExpense(
        "later",
        "Later",
        1000.0,
        installment_start_year=2040,
        installment_end_year=2042,
        is_in_installments=True,
        annual_installment_amount=400.0,
    )

    result = project_portfolio(_portfolio(2024, 2028, major_expenses=[later]))

    assert list(result.expenses) == [SeriesKey.default()]


def test_installment_series_follow_streams_in_activation_order():
    def financed(expense_id, start):
        return MajorExpense(
            expense_id,
            expense_id,
            1000.0,
            installment_start_year=start,
            installment_end_year=start + 1,
            is_in_installments=True,
            annual_installment_amount=500.0,
        )

    portfolio = _portfolio(
        2024,
        2030,
        expense_streams=[ExpenseStream("rent", "Rent", 2024, 2030, 100.0)],
        major_expenses=[financed("boat", 2028), financed("car", 2025)],
    )

    result = project_portfolio(portfolio)

    assert list(result.expenses) == [
        SeriesKey.stream("rent"),
        SeriesKey.installment("car"),
        SeriesKey.installment("boat"),
    ]


def test_empty_plan_gets_default_series():
    result = project_portfolio(_portfolio(2024, 2026))

    assert list(result.incomes) == ["default"]
    assert list(result.expenses) == [SeriesKey.default()]
    assert list(result.assets) == ["default"]
    assert result.net_worth == [0.0, 0.0, 0.0]
    assert not result.degraded


def _broken_portfolio():
    broken = IncomeStream("bad", "Bad", 2024, 2026, None)
    cash = Asset("cash", "Cash", 500.0)
    return _portfolio(2024, 2026, income_streams=[broken], assets=[cash])


def test_failure_degrades_to_zeroed_result():
    result = project_portfolio(_broken_portfolio(), strict=False)

    assert result.degraded
    assert result.error
    assert result.years == [2024, 2025, 2026]
    assert result.net_worth == [0.0, 0.0, 0.0]
    assert result.savings == [0.0, 0.0, 0.0]
    assert result.incomes == {"bad": [0.0, 0.0, 0.0]}
    assert result.assets == {"cash": [500.0, 0.0, 0.0]}


def _malformed_loan_portfolio():
    loan = MajorExpense(
        "loan",
        "Loan",
        1000.0,
        installment_start_year=None,
        installment_end_year=2026,
        is_in_installments=True,
        annual_installment_amount=500.0,
    )
    tv = MajorExpense("tv", "TV", 1500.0, installment_start_year=2025, installment_end_year=2025)
    return _portfolio(2024, 2026, major_expenses=[loan, tv])


def test_malformed_major_expense_degrades_instead_of_raising():
    result = project_portfolio(_malformed_loan_portfolio(), strict=False)

    assert result.degraded
    assert result.net_worth == [0.0, 0.0, 0.0]
    assert result.savings == [0.0, 0.0, 0.0]
    assert result.expenses == {
        SeriesKey.default(): [0.0, 0.0, 0.0],
        SeriesKey.installment("loan"): [0.0, 0.0, 0.0],
    }

    with pytest.raises(ProjectionError):
        project_portfolio(_malformed_loan_portfolio(), strict=True)


def test_degraded_result_keeps_one_time_expenses():
    result = project_portfolio(_malformed_loan_portfolio(), strict=False)

    assert result.major_expenses == {"tv": OneTimeExpense(year=2025, amount=1500.0)}


def test_strict_mode_raises(monkeypatch):
    with pytest.raises(ProjectionError):
        project_portfolio(_broken_portfolio(), strict=True)

    monkeypatch.setenv("NETWORTH_STRICT_PROJECTION", "1")
    with pytest.raises(ProjectionError):
        project_portfolio(_broken_portfolio())


def test_step_year_can_run_on_its_own():
    salary = IncomeStream("salary", "Salary", 2024, 2030, 1000.0)
    cash = Asset("cash", "Cash", 200.0, annual_growth=0.0)
    portfolio = _portfolio(2024, 2030, income_streams=[salary], assets=[cash])

    first = step_year(portfolio, 2024, 0)
    second = step_year(portfolio, 2025, 1, first)

    assert first.assets == {"cash": 200.0}
    assert second.assets == {"cash": 1200.0}
    assert second.net_worth == 1200.0
    with pytest.raises(ValueError):
        step_year(portfolio, 2025, 1)


def test_projection_is_repeatable():
    portfolio = _portfolio(
        2024,
        2040,
        income_streams=[IncomeStream("salary", "Salary", 2024, 2035, 40000.0, 2.0)],
        expense_streams=[ExpenseStream("living", "Living", 2024, 2040, 30000.0, 3.0)],
        assets=[Asset("cash", "Cash", 5000.0)],
    )

    assert project_portfolio(portfolio).to_dict() == project_portfolio(portfolio).to_dict()
