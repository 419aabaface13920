from __future__ import annotations

import pytest

from deal_calculator.models.assumptions import Assumptions
from deal_calculator.sample_data import build_default_funding_sources
from deal_calculator.services.allocation import allocate_funding
from deal_calculator.services.cash_flow import project_cash_flows, summarize_cash_flow, tech_charge
from deal_calculator.services.deal_structure import build_deal_structure
from deal_calculator.services.financing import resolve_financing
from deal_calculator.services.ownership import compute_ownership


def _pipeline(assumptions=None):
    assumptions = assumptions or Assumptions()
    sources = build_default_funding_sources()
    deal = build_deal_structure(2_500_000, assumptions)
    allocation = allocate_funding(deal.down_payment_needed, sources)
    financing = resolve_financing(deal, allocation, assumptions, sources)
    ownership = compute_ownership(allocation, assumptions)
    return deal, financing, ownership, assumptions


def test_tech_charge_runs_three_years():
    assumptions = Assumptions(tech_investment=90_000)

    assert tech_charge(assumptions, 1) == pytest.approx(30_000)
    assert tech_charge(assumptions, 3) == pytest.approx(30_000)
    assert tech_charge(assumptions, 4) == 0


def test_summary_chains_business_to_personal_cash():
    deal, financing, ownership, assumptions = _pipeline()
    summary = summarize_cash_flow(deal, financing, ownership, assumptions)

    expected_fcf = 625_000 - financing.business_debt_service.total - 100_000 - 100_000 / 3
    assert summary.business_free_cash_flow == pytest.approx(expected_fcf)
    assert summary.owner_distribution == pytest.approx(expected_fcf * ownership.your_ownership)
    assert summary.personal_net_cash_flow == pytest.approx(
        summary.owner_distribution - financing.personal_debt_service.total
    )


def test_projection_compounds_revenue_and_accumulates():
    deal, financing, ownership, assumptions = _pipeline()
    projections = project_cash_flows(deal, financing, ownership, assumptions)

    assert len(projections) == assumptions.projection_years
    assert projections[0].revenue == pytest.approx(2_500_000)
    assert projections[1].revenue == pytest.approx(2_700_000)
    assert projections[2].revenue == pytest.approx(2_500_000 * 1.08**2)
    assert projections[-1].cumulative_cash_flow == pytest.approx(sum(p.cash_flow for p in projections))
    assert all(p.business_debt_service == projections[0].business_debt_service for p in projections)


def test_tech_charge_drop_lifts_year_four_cash_flow():
    deal, financing, ownership, assumptions = _pipeline(Assumptions(revenue_growth_rate=0))
    projections = project_cash_flows(deal, financing, ownership, assumptions)

    assert projections[3].cash_flow - projections[2].cash_flow == pytest.approx(100_000 / 3)
