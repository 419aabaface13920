from __future__ import annotations

import logging
from typing import List, Sequence, Union

from ..models.assumptions import Assumptions
from ..models.funding import FundingSources
from ..models.results import ScenarioDefinition, ScenarioResult, TraceStep
from .allocation import allocate_funding
from .cash_flow import project_cash_flows, summarize_cash_flow
from .deal_structure import build_deal_structure
from .financing import resolve_financing
from .ownership import compute_ownership, compute_wacc, personal_cost_of_capital, preferred_return_split
from .returns import compute_return_metrics
from .validation import validate_scenario

logger = logging.getLogger(__name__)

ScenarioLike = Union[ScenarioDefinition, float, int]


def as_scenario(scenario: ScenarioLike) -> ScenarioDefinition:
    if isinstance(scenario, ScenarioDefinition):
        return scenario
    revenue = float(scenario)
    return ScenarioDefinition(name=f"${revenue:,.0f}", target_revenue=revenue)


class ScenarioCalculator:
    """Runs every acquisition scenario through the full pipeline.

    deal structure -> allocation -> financing -> ownership/WACC -> cash flow
    -> projections -> return metrics -> validation. Scenarios are independent
    and each run builds a fresh result tree; inputs are never modified.
    """

    def __init__(self, include_trace: bool = False) -> None:
        self.include_trace = include_trace

    def run(
        self,
        assumptions: Assumptions,
        funding_sources: FundingSources,
        scenarios: Sequence[ScenarioLike],
    ) -> List[ScenarioResult]:
        return [self.run_scenario(assumptions, funding_sources, as_scenario(item)) for item in scenarios]

    def run_scenario(
        self,
        assumptions: Assumptions,
        funding_sources: FundingSources,
        scenario: ScenarioDefinition,
    ) -> ScenarioResult:
        trace: List[TraceStep] = []

        def record(stage: str, formula: str, result: float, **inputs: float) -> None:
            if self.include_trace:
                trace.append(TraceStep(stage=stage, formula=formula, inputs=inputs, result=result))

        logger.debug("Running scenario %s (revenue %.2f)", scenario.name, scenario.target_revenue)

        deal = build_deal_structure(scenario.target_revenue, assumptions)
        record(
            "deal_structure",
            "purchase_price = revenue * margin * multiple",
            deal.purchase_price,
            revenue=scenario.target_revenue,
            margin=assumptions.net_profit_margin,
            multiple=assumptions.valuation_multiple,
        )
        record(
            "deal_structure",
            "down_payment_needed = sba_down_payment + working_capital + fees",
            deal.down_payment_needed,
            sba_down_payment=deal.sba_down_payment,
            working_capital=deal.working_capital,
            fees=deal.fees.total,
        )

        allocation = allocate_funding(deal.down_payment_needed, funding_sources)
        record(
            "allocation",
            "total_allocated + shortfall = amount_needed",
            allocation.total_allocated,
            amount_needed=allocation.amount_needed,
            shortfall=allocation.shortfall,
        )
        record(
            "allocation",
            "allocated by source in priority order",
            allocation.total_allocated,
            **{kind.profile.label: amount for kind, amount in allocation.allocation.items() if amount > 0},
        )
        if allocation.has_shortfall:
            logger.warning("Scenario %s is short %.2f of funding", scenario.name, allocation.shortfall)

        financing = resolve_financing(deal, allocation, assumptions, funding_sources)
        record(
            "financing",
            "business_debt_service = sba_payment + seller_payment",
            financing.business_debt_service.total,
            sba_principal=financing.sba_principal,
            seller_principal=financing.seller_principal,
        )
        record(
            "financing",
            "personal_debt_service = sum(personal loan payments)",
            financing.personal_debt_service.total,
            personal_principal=financing.personal_principal,
        )
        record(
            "financing",
            "total_debt_service = business_debt_service + personal_debt_service",
            financing.total_debt_service,
            total_debt=financing.total_debt,
        )

        ownership = compute_ownership(allocation, assumptions)
        wacc = compute_wacc(allocation, funding_sources, assumptions.tax_rate)
        personal_cost = personal_cost_of_capital(allocation, funding_sources)
        record(
            "ownership",
            "your_ownership = owner_risk_adjusted / (owner_risk_adjusted + investor)",
            ownership.your_ownership,
            owner_risk_adjusted=ownership.breakdown.owner_risk_adjusted,
            investor=ownership.breakdown.investor_contribution,
        )
        record("ownership", "wacc = sum(amount * after_tax_rate) / sum(amount)", wacc, tax_rate=assumptions.tax_rate)

        cash_flow = summarize_cash_flow(deal, financing, ownership, assumptions)
        record(
            "cash_flow",
            "fcf = ebitda - business_debt_service - management_salary - tech_charge",
            cash_flow.business_free_cash_flow,
            ebitda=cash_flow.ebitda,
            business_debt_service=cash_flow.business_debt_service,
            management_salary=cash_flow.management_salary,
            tech_charge=cash_flow.tech_charge,
        )
        record(
            "cash_flow",
            "personal_net = fcf * your_ownership - personal_debt_service",
            cash_flow.personal_net_cash_flow,
            owner_distribution=cash_flow.owner_distribution,
            personal_debt_service=cash_flow.personal_debt_service,
        )

        projections = project_cash_flows(deal, financing, ownership, assumptions)
        metrics = compute_return_metrics(
            deal,
            allocation,
            financing,
            ownership,
            cash_flow,
            projections,
            wacc,
            personal_cost,
            assumptions,
        )
        record(
            "returns",
            "irr: npv(rate, personal_cash_invested, cash_flows) = 0",
            metrics.irr.rate,
            personal_cash_invested=allocation.personal_cash_invested,
            iterations=float(metrics.irr.iterations),
        )
        record("returns", "moic = (sum(cash_flows) + exit_ebitda * exit_multiple) / invested", metrics.moic)
        if not metrics.irr.converged:
            logger.warning("IRR did not converge for scenario %s", scenario.name)

        warnings = validate_scenario(deal, allocation, ownership, wacc, metrics.irr)
        for warning in warnings:
            logger.debug("Scenario %s: %s", scenario.name, warning.message)

        return ScenarioResult(
            scenario=scenario,
            deal=deal,
            allocation=allocation,
            financing=financing,
            ownership=ownership,
            wacc=wacc,
            personal_cost_of_capital=personal_cost,
            distribution_split=preferred_return_split(cash_flow.business_free_cash_flow, ownership, allocation),
            cash_flow=cash_flow,
            projections=projections,
            metrics=metrics,
            warnings=warnings,
            trace=trace,
        )
