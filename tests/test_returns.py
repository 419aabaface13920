from __future__ import annotations

import pytest

from deal_calculator.models.assumptions import Assumptions, StressShocks
from deal_calculator.models.metrics import Band, MetricName
from deal_calculator.sample_data import build_default_funding_sources
from deal_calculator.services.allocation import allocate_funding
from deal_calculator.services.banding import banded, unbounded_metric
from deal_calculator.services.cash_flow import project_cash_flows, summarize_cash_flow
from deal_calculator.services.deal_structure import build_deal_structure
from deal_calculator.services.financing import resolve_financing
from deal_calculator.services.ownership import compute_ownership, compute_wacc, personal_cost_of_capital
from deal_calculator.services.returns import (
    compute_return_metrics,
    coverage_metric,
    growth_funding_capacity,
    irr,
    moic,
    npv,
    payback_period,
    risk_score,
    stress_test,
    wealth_velocity,
)


def test_irr_single_period():
    result = irr(1_000, [1_100])

    assert result.converged
    assert result.rate == pytest.approx(0.10, abs=1e-4)


def test_irr_zeroes_npv():
    flows = [500.0] * 5
    result = irr(1_000, flows)

    assert result.converged
    assert result.rate == pytest.approx(0.4104, abs=1e-3)
    assert abs(npv(result.rate, 1_000, flows)) < 1.0


def test_irr_without_a_root_reports_non_convergence():
    result = irr(1_000, [-100.0] * 5)

    assert not result.converged
    assert result.rate is None


def test_irr_with_flat_npv_reports_non_convergence():
    result = irr(1_000, [0.0] * 5)

    assert not result.converged
    assert result.rate is None


def test_moic_includes_exit_value():
    assert moic(1_000, [100, 100], 500, 4.0) == pytest.approx(2.2)
    assert moic(0, [100], 500, 4.0) == 0


def test_payback_interpolates_within_year():
    result = payback_period(1_000, [400, 400, 400])

    assert result.years == pytest.approx(2.5)
    assert not result.beyond_horizon


def test_payback_beyond_horizon_is_a_sentinel():
    result = payback_period(1_000, [100] * 5)

    assert result.years is None
    assert result.beyond_horizon
    assert result.horizon_years == 5


def test_payback_with_nothing_invested_is_immediate():
    assert payback_period(0, [100] * 5).years == 0


def test_risk_score_rewards_coverage_returns_and_seller_note():
    strong = risk_score(unbounded_metric(MetricName.DSCR, "x"), 25, 0.20)
    weak = risk_score(banded(MetricName.DSCR, 1.0, "x"), 5, 0.0)

    assert strong == 10
    assert weak == 2


def test_risk_score_middle_band():
    score = risk_score(banded(MetricName.DSCR, 1.3, "x"), 16, 0.10)

    assert score == 7


def test_stress_test_applies_each_shock():
    result = stress_test(20.0, StressShocks())

    assert result.revenue_stress_roi == pytest.approx(16.0)
    assert result.margin_stress_roi == pytest.approx(19.4)
    assert result.rate_stress_roi == pytest.approx(19.6)
    assert result.worst_case_roi == pytest.approx(16.0)


def test_growth_capacity_is_bounded_by_debt_room_and_cash():
    assert growth_funding_capacity(500_000, 1_000_000, 100_000, 2.0) == pytest.approx(200_000)
    assert growth_funding_capacity(500_000, 1_400_000, 100_000, 5.0) == pytest.approx(100_000)


def test_wealth_velocity_annualizes_moic():
    assert wealth_velocity(2.0, 1) == pytest.approx(100.0)
    assert wealth_velocity(1.0, 5) == pytest.approx(0.0)
    assert wealth_velocity(-0.5, 5) == pytest.approx(-100.0)


def test_coverage_is_unbounded_only_with_positive_earnings():
    covered = coverage_metric(MetricName.DSCR, 625_000, 0)
    undefined = coverage_metric(MetricName.DSCR, 0, 0)
    losing = coverage_metric(MetricName.INTEREST_COVERAGE, -50_000, 0)

    assert covered.unbounded
    assert covered.band is Band.EXCELLENT
    assert not undefined.unbounded
    assert undefined.value == 0
    assert undefined.band is Band.CRITICAL
    assert losing.band is Band.CRITICAL


def test_undefined_coverage_earns_no_risk_score_bonus():
    assert risk_score(coverage_metric(MetricName.DSCR, 0, 0), 25, 0.20) == 6


def _target_pipeline(assumptions):
    sources = build_default_funding_sources()
    deal = build_deal_structure(2_500_000, assumptions)
    allocation = allocate_funding(deal.down_payment_needed, sources)
    financing = resolve_financing(deal, allocation, assumptions, sources)
    ownership = compute_ownership(allocation, assumptions)
    cash_flow = summarize_cash_flow(deal, financing, ownership, assumptions)
    projections = project_cash_flows(deal, financing, ownership, assumptions)
    wacc = compute_wacc(allocation, sources, assumptions.tax_rate)
    personal_cost = personal_cost_of_capital(allocation, sources)
    return deal, allocation, financing, ownership, cash_flow, projections, wacc, personal_cost, assumptions


def test_capital_utilization_defaults_to_enabled_cash_capacity():
    metrics = compute_return_metrics(*_target_pipeline(Assumptions()))

    assert metrics[MetricName.CAPITAL_UTILIZATION].value == pytest.approx(100.0)
    assert metrics[MetricName.CAPITAL_UTILIZATION].band is Band.CRITICAL


def test_capital_utilization_honours_available_cash_override():
    metrics = compute_return_metrics(*_target_pipeline(Assumptions(available_cash=996_546)))

    assert metrics[MetricName.CAPITAL_UTILIZATION].value == pytest.approx(50.0)
