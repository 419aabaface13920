from __future__ import annotations

ZERO_RATE_EPSILON = 1e-9


def annual_payment(principal: float, annual_rate: float, term_years: int) -> float:
    """Annual debt service on a fixed-rate loan amortized monthly.

    A non-positive principal or rate means there is no loan, so the payment is
    zero. Rates below ``ZERO_RATE_EPSILON`` are repaid straight-line.
    """
    if principal <= 0 or annual_rate <= 0:
        return 0.0
    if term_years <= 0:
        raise ValueError("term_years must be positive")
    if annual_rate < ZERO_RATE_EPSILON:
        return principal / term_years
    monthly_rate = annual_rate / 12
    payments = term_years * 12
    growth = (1 + monthly_rate) ** payments
    monthly_payment = principal * monthly_rate * growth / (growth - 1)
    return monthly_payment * 12


def first_year_interest(principal: float, annual_rate: float, term_years: int) -> float:
    if principal <= 0 or annual_rate < ZERO_RATE_EPSILON:
        return 0.0
    monthly_rate = annual_rate / 12
    monthly_payment = annual_payment(principal, annual_rate, term_years) / 12
    balance = principal
    interest = 0.0
    for _ in range(min(12, term_years * 12)):
        month_interest = balance * monthly_rate
        interest += month_interest
        balance -= monthly_payment - month_interest
    return interest
