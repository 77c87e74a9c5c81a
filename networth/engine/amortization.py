import math


def annual_installment(principal: float, annual_interest: float, start_year: int, end_year: int) -> float:
    """Level yearly payment that repays ``principal`` over ``[start_year, end_year]``.

    ``annual_interest`` is a percentage. Inputs are not validated and nothing
    is raised: a reversed window or a negative rate yields whatever the formula
    produces, and a zero divisor yields ``inf`` (or ``nan`` for a zero numerator).
    """
    years = end_year - start_year + 1
    rate = annual_interest / 100

    if rate == 0:
        numerator, divisor = principal, years
    else:
        growth = (1 + rate) ** years
        numerator, divisor = principal * rate * growth, growth - 1

    if divisor == 0:
        return math.copysign(math.inf, numerator) if numerator else math.nan
    return numerator / divisor
