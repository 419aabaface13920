from __future__ import annotations

from typing import List

from ..models.assumptions import Assumptions
from ..models.cash_flow import CashFlowSummary, ProjectionYear
from ..models.deal import DealStructure
from ..models.financing import FinancingResolution
from ..models.ownership import Ownership

TECH_AMORTIZATION_YEARS = 3


def tech_charge(assumptions: Assumptions, year: int = 1) -> float:
    """Straight-line tech investment charge; zero once the amortization window closes."""
    if year > TECH_AMORTIZATION_YEARS:
        return 0.0
    return assumptions.tech_investment / TECH_AMORTIZATION_YEARS


def business_free_cash_flow(ebitda: float, business_debt_service: float, assumptions: Assumptions, year: int = 1) -> float:
    return ebitda - business_debt_service - assumptions.management_salary - tech_charge(assumptions, year)


def summarize_cash_flow(
    deal: DealStructure,
    financing: FinancingResolution,
    ownership: Ownership,
    assumptions: Assumptions,
) -> CashFlowSummary:
    business_ds = financing.business_debt_service.total
    personal_ds = financing.personal_debt_service.total
    fcf = business_free_cash_flow(deal.ebitda, business_ds, assumptions)
    distribution = fcf * ownership.your_ownership
    return CashFlowSummary(
        ebitda=deal.ebitda,
        business_debt_service=business_ds,
        management_salary=assumptions.management_salary,
        tech_charge=tech_charge(assumptions),
        business_free_cash_flow=fcf,
        owner_distribution=distribution,
        personal_debt_service=personal_ds,
        personal_net_cash_flow=distribution - personal_ds,
    )


def project_cash_flows(
    deal: DealStructure,
    financing: FinancingResolution,
    ownership: Ownership,
    assumptions: Assumptions,
) -> List[ProjectionYear]:
    """Year-by-year projection with compounding revenue and debt service fixed at origination."""
    business_ds = financing.business_debt_service.total
    personal_ds = financing.personal_debt_service.total
    growth = 1 + assumptions.revenue_growth_rate
    projections: List[ProjectionYear] = []
    cumulative = 0.0
    for year in range(1, assumptions.projection_years + 1):
        revenue = deal.target_revenue * growth ** (year - 1)
        ebitda = revenue * assumptions.net_profit_margin
        cash_flow = business_free_cash_flow(ebitda, business_ds, assumptions, year)
        cumulative += cash_flow
        distribution = cash_flow * ownership.your_ownership
        projections.append(
            ProjectionYear(
                year=year,
                revenue=revenue,
                ebitda=ebitda,
                business_debt_service=business_ds,
                tech_charge=tech_charge(assumptions, year),
                cash_flow=cash_flow,
                cumulative_cash_flow=cumulative,
                owner_distribution=distribution,
                personal_net_cash_flow=distribution - personal_ds,
            )
        )
    return projections
