import pytest

from networth.data_model import Asset, ExpenseStream, IncomeStream, MajorExpense, Portfolio
from networth.engine.export import export_to_csv, read_csv_export
from networth.engine.projection import project_portfolio


def _result():
    portfolio = Portfolio(2024, 2027).with_changes(
        income_streams=[IncomeStream("salary", "Salary", 2024, 2027, 52000.0, 2.5)],
        expense_streams=[ExpenseStream("rent", "Rent", 2024, 2027, 18000.0, 3.0)],
        major_expenses=[
            MajorExpense(
                "car",
                "Car",
                20000.0,
                installment_start_year=2025,
                installment_end_year=2026,
                is_in_installments=True,
                annual_installment_amount=10333.333,
            )
        ],
        assets=[Asset("cash", "Cash", 1000.0, annual_growth=1.5)],
    )
    return project_portfolio(portfolio)


def test_header_lists_every_series():
    header = export_to_csv(_result()).split("\n")[0]

    assert header == "Year,Income: salary,Expense: rent,Expense: installment-car,Asset: cash,Net Worth,Savings"


def test_rows_use_two_decimals_and_no_trailing_newline():
    text = export_to_csv(_result())
    lines = text.split("\n")

    assert not text.endswith("\n")
    assert len(lines) == 5
    assert lines[1] == "2024,52000.00,18000.00,0.00,1000.00,1000.00,34000.00"
    assert lines[2].startswith("2025,53300.00,18540.00,10333.33,")


def test_empty_plan_exports_default_columns():
    result = project_portfolio(Portfolio(2024, 2024))

    assert export_to_csv(result) == (
        "Year,Income: default,Expense: default,Asset: default,Net Worth,Savings\n"
        "2024,0.00,0.00,0.00,0.00,0.00"
    )


def test_csv_round_trip_recovers_values():
    result = _result()

    parsed = read_csv_export(export_to_csv(result))
    expected = result.to_frame()

    assert parsed.index.tolist() == result.years
    assert list(parsed.columns) == list(expected.columns)
    for column in expected.columns:
        assert parsed[column].tolist() == pytest.approx(expected[column].tolist(), abs=0.01)


def test_blank_text_reads_as_empty_frame():
    assert read_csv_export("").empty
