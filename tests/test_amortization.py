import math

import pytest

from networth.engine.amortization import annual_installment


def test_zero_interest_is_straight_line():
    assert annual_installment(10000, 0, 2024, 2028) == 2000


@pytest.mark.parametrize("rate", [0, 3.5, 12])
def test_single_year_window_repays_principal(rate):
    principal = 25000
    expected = principal if rate == 0 else principal * (1 + rate / 100)
    assert annual_installment(principal, rate, 2030, 2030) == pytest.approx(expected)


@pytest.mark.parametrize("principal, rate, years", [(10000, 5, 5), (350000, 6.5, 30), (1200, 0.1, 2)])
def test_installment_satisfies_annuity_identity(principal, rate, years):
    r = rate / 100
    payment = annual_installment(principal, rate, 2024, 2024 + years - 1)

    present_value = payment * ((1 + r) ** years - 1) / (r * (1 + r) ** years)

    assert present_value == pytest.approx(principal)


@pytest.mark.parametrize("rate", [0, 5])
def test_empty_window_returns_non_finite_instead_of_raising(rate):
    assert math.isinf(annual_installment(1000, rate, 2030, 2029))


def test_empty_window_with_nothing_to_repay_is_nan():
    assert math.isnan(annual_installment(0, 0, 2030, 2029))
