from __future__ import annotations

import pytest

from deal_calculator.services.amortization import annual_payment, first_year_interest


def test_annual_payment_matches_monthly_annuity():
    assert annual_payment(100_000, 0.10, 10) == pytest.approx(15_858.09, abs=0.01)


def test_absent_loan_has_no_payment():
    assert annual_payment(0, 0.10, 10) == 0
    assert annual_payment(-5_000, 0.10, 10) == 0
    assert annual_payment(100_000, 0, 10) == 0


def test_near_zero_rate_is_straight_line():
    assert annual_payment(100_000, 1e-10, 10) == pytest.approx(10_000)


def test_non_positive_term_is_rejected():
    with pytest.raises(ValueError):
        annual_payment(100_000, 0.10, 0)


def test_payment_grows_with_rate_and_shrinks_with_term():
    assert annual_payment(100_000, 0.12, 10) > annual_payment(100_000, 0.10, 10)
    assert annual_payment(100_000, 0.10, 15) < annual_payment(100_000, 0.10, 10)


def test_first_year_interest_below_simple_interest():
    interest = first_year_interest(100_000, 0.10, 10)
    assert 9_500 < interest < 10_000
    assert first_year_interest(0, 0.10, 10) == 0
