from __future__ import annotations

import logging
import math
from typing import Dict, Optional, Sequence, Tuple

from ..models.assumptions import Assumptions, StressShocks
from ..models.cash_flow import CashFlowSummary, ProjectionYear
from ..models.deal import DealStructure
from ..models.financing import AllocationResult, FinancingResolution
from ..models.metrics import (
    ExitValueRange,
    IRRResult,
    Metric,
    MetricName,
    PaybackPeriod,
    ReturnMetrics,
    StressTestResult,
)
from ..models.ownership import Ownership
from .banding import banded, unbounded_metric

logger = logging.getLogger(__name__)

IRR_INITIAL_GUESS = 0.10
IRR_TOLERANCE = 0.0001
IRR_MAX_ITERATIONS = 100

MAX_SUSTAINABLE_DEBT_TO_EBITDA = 3.0


def safe_ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    """``numerator / denominator * scale``, or 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator * scale


def npv(rate: float, investment: float, cash_flows: Sequence[float]) -> float:
    """Net present value with the investment at t=0 and cash flow ``t`` received at the end of year t+1."""
    return -investment + sum(cf / (1 + rate) ** (t + 1) for t, cf in enumerate(cash_flows))


def irr(investment: float, cash_flows: Sequence[float]) -> IRRResult:
    """Newton-Raphson IRR.

    Returns ``IRRResult(rate=None, converged=False)`` when the iteration does
    not settle within ``IRR_MAX_ITERATIONS`` steps, hits a flat derivative or
    leaves the domain (rate <= -100%). Callers must branch on ``converged``;
    a missing rate is not a 0% return.
    """
    guess = IRR_INITIAL_GUESS
    for iteration in range(1, IRR_MAX_ITERATIONS + 1):
        value = -investment
        derivative = 0.0
        try:
            for t, cf in enumerate(cash_flows):
                discount = (1 + guess) ** (t + 1)
                value += cf / discount
                derivative -= (t + 1) * cf / (discount * (1 + guess))
        except OverflowError:
            break
        if derivative == 0:
            break
        next_guess = guess - value / derivative
        if not math.isfinite(next_guess) or next_guess <= -1:
            break
        if abs(next_guess - guess) < IRR_TOLERANCE:
            return IRRResult(rate=next_guess, converged=True, iterations=iteration)
        guess = next_guess
    logger.debug("IRR gave up after %d iterations for investment %.2f", iteration, investment)
    return IRRResult(rate=None, converged=False, iterations=iteration)


def moic(investment: float, cash_flows: Sequence[float], exit_ebitda: float, exit_multiple: float) -> float:
    if investment <= 0:
        return 0.0
    return (sum(cash_flows) + exit_ebitda * exit_multiple) / investment


def payback_period(investment: float, cash_flows: Sequence[float]) -> PaybackPeriod:
    horizon = len(cash_flows)
    if investment <= 0:
        return PaybackPeriod(years=0.0, horizon_years=horizon)
    cumulative = 0.0
    for index, cf in enumerate(cash_flows):
        previous = cumulative
        cumulative += cf
        if cumulative >= investment and cf > 0:
            # Counted from zero: recovery halfway through year one is 0.5 years, not 1.5.
            return PaybackPeriod(years=index + (investment - previous) / cf, horizon_years=horizon)
    return PaybackPeriod(years=None, beyond_horizon=True, horizon_years=horizon)


def risk_score(dscr: Metric, cash_on_cash_pct: float, seller_financing_pct: float) -> int:
    score = 5
    dscr_value = math.inf if dscr.unbounded else (dscr.value or 0.0)
    if dscr_value >= 1.5:
        score += 2
    elif dscr_value >= 1.25:
        score += 1
    else:
        score -= 2

    if cash_on_cash_pct >= 20:
        score += 2
    elif cash_on_cash_pct >= 15:
        score += 1
    elif cash_on_cash_pct < 10:
        score -= 1

    if seller_financing_pct >= 0.20:
        score += 1
    return max(1, min(10, score))


def business_capital_invested(deal: DealStructure) -> float:
    return deal.purchase_price + deal.working_capital + deal.fees.due_diligence + deal.fees.professional_fees


def economic_value_added(ebitda: float, tax_rate: float, capital_invested: float, wacc: float) -> float:
    return ebitda * (1 - tax_rate) - capital_invested * wacc


def exit_value_range(exit_ebitda: float, your_ownership: float, multiples: Tuple[float, float, float]) -> ExitValueRange:
    conservative, expected, optimistic = multiples
    return ExitValueRange(
        conservative=exit_ebitda * conservative * your_ownership,
        expected=exit_ebitda * expected * your_ownership,
        optimistic=exit_ebitda * optimistic * your_ownership,
    )


def stress_test(base_roi: float, shocks: StressShocks) -> StressTestResult:
    return StressTestResult(
        revenue_stress_roi=base_roi * (1 + shocks.revenue),
        margin_stress_roi=base_roi * (1 + shocks.margin),
        rate_stress_roi=base_roi * (1 - shocks.rate),
    )


def growth_funding_capacity(ebitda: float, current_total_debt: float, year3_cash_flow: float, leverage_multiplier: float) -> float:
    debt_capacity = MAX_SUSTAINABLE_DEBT_TO_EBITDA * ebitda - current_total_debt
    return min(debt_capacity, year3_cash_flow * leverage_multiplier)


def wealth_velocity(moic_value: float, years: int) -> float:
    return (max(moic_value, 0.0) ** (1 / years) - 1) * 100


def coverage_metric(name: MetricName, numerator: float, denominator: float) -> Metric:
    """Coverage ratio; unbounded only when there is positive earnings and nothing to cover."""
    if denominator <= 0:
        if numerator > 0:
            return unbounded_metric(name, "x")
        return banded(name, 0.0, "x")
    return banded(name, numerator / denominator, "x")


def compute_return_metrics(
    deal: DealStructure,
    allocation: AllocationResult,
    financing: FinancingResolution,
    ownership: Ownership,
    cash_flow: CashFlowSummary,
    projections: Sequence[ProjectionYear],
    wacc: float,
    personal_cost: float,
    assumptions: Assumptions,
    available_cash: Optional[float] = None,
) -> ReturnMetrics:
    invested = allocation.personal_cash_invested
    hold = projections[: assumptions.hold_years]
    hold_cash_flows = [year.cash_flow for year in hold]
    exit_ebitda = hold[-1].ebitda
    if available_cash is None:
        available_cash = assumptions.available_cash
    if available_cash is None:
        available_cash = allocation.available_cash

    dscr = coverage_metric(MetricName.DSCR, deal.ebitda, financing.business_debt_service.total)
    interest_coverage = coverage_metric(MetricName.INTEREST_COVERAGE, deal.ebitda, financing.first_year_business_interest)
    if deal.ebitda > 0:
        debt_to_ebitda = banded(MetricName.DEBT_TO_EBITDA, financing.business_debt / deal.ebitda, "x")
    elif financing.business_debt > 0:
        debt_to_ebitda = unbounded_metric(MetricName.DEBT_TO_EBITDA, "x")
    else:
        debt_to_ebitda = banded(MetricName.DEBT_TO_EBITDA, 0.0, "x")

    personal_roi = safe_ratio(cash_flow.personal_net_cash_flow, invested, 100)
    cash_on_cash = personal_roi
    score = risk_score(dscr, cash_on_cash, assumptions.seller_financing_pct)
    capital = business_capital_invested(deal)
    leverage = safe_ratio(deal.total_investment, invested)
    moic_value = moic(invested, hold_cash_flows, exit_ebitda, assumptions.effective_exit_multiple)
    stress = stress_test(personal_roi, assumptions.stress)
    year3_cash_flow = projections[2].cash_flow

    ratios: Dict[MetricName, Metric] = {
        MetricName.DSCR: dscr,
        MetricName.CASH_ON_CASH: banded(MetricName.CASH_ON_CASH, cash_on_cash, "%"),
        MetricName.CAPITAL_UTILIZATION: banded(
            MetricName.CAPITAL_UTILIZATION, safe_ratio(allocation.total_allocated, available_cash, 100), "%"
        ),
        MetricName.LEVERAGE_MULTIPLIER: banded(MetricName.LEVERAGE_MULTIPLIER, leverage, "x"),
        MetricName.PRICE_TO_REVENUE: banded(
            MetricName.PRICE_TO_REVENUE, safe_ratio(deal.purchase_price, deal.target_revenue), "x"
        ),
        MetricName.EBITDA_MARGIN: banded(MetricName.EBITDA_MARGIN, safe_ratio(deal.ebitda, deal.target_revenue, 100), "%"),
        MetricName.CASH_CONVERSION: banded(
            MetricName.CASH_CONVERSION, safe_ratio(cash_flow.business_free_cash_flow, deal.ebitda, 100), "%"
        ),
        MetricName.REVENUE_EFFICIENCY: banded(MetricName.REVENUE_EFFICIENCY, safe_ratio(deal.target_revenue, invested), "x"),
        MetricName.RISK_ADJUSTED_RETURN: banded(
            MetricName.RISK_ADJUSTED_RETURN, (personal_roi - assumptions.risk_free_rate * 100) / score, "ratio"
        ),
        MetricName.INCOME_REPLACEMENT: banded(
            MetricName.INCOME_REPLACEMENT,
            safe_ratio(cash_flow.personal_net_cash_flow, assumptions.current_salary, 100),
            "%",
        ),
        MetricName.WEALTH_VELOCITY: banded(
            MetricName.WEALTH_VELOCITY, wealth_velocity(moic_value, assumptions.hold_years), "%"
        ),
        MetricName.INTEREST_COVERAGE: interest_coverage,
        MetricName.DEBT_TO_EBITDA: debt_to_ebitda,
        MetricName.BUSINESS_ROA: banded(
            MetricName.BUSINESS_ROA, safe_ratio(cash_flow.business_free_cash_flow, capital, 100), "%"
        ),
        MetricName.STRESS_TEST: banded(MetricName.STRESS_TEST, stress.worst_case_roi, "%"),
        MetricName.GROWTH_CAPACITY: banded(
            MetricName.GROWTH_CAPACITY,
            growth_funding_capacity(deal.ebitda, financing.total_debt, year3_cash_flow, leverage),
            "$",
        ),
        MetricName.PERSONAL_ROI: banded(MetricName.PERSONAL_ROI, personal_roi, "%"),
        MetricName.DEAL_ROI: banded(
            MetricName.DEAL_ROI, safe_ratio(cash_flow.business_free_cash_flow, deal.purchase_price, 100), "%"
        ),
        MetricName.WACC: banded(MetricName.WACC, wacc * 100, "%"),
        MetricName.PERSONAL_COST_OF_CAPITAL: banded(MetricName.PERSONAL_COST_OF_CAPITAL, personal_cost * 100, "%"),
        MetricName.EVA: banded(MetricName.EVA, economic_value_added(deal.ebitda, assumptions.tax_rate, capital, wacc), "$"),
        MetricName.RISK_SCORE: banded(MetricName.RISK_SCORE, float(score), "score"),
    }

    return ReturnMetrics(
        irr=irr(invested, hold_cash_flows),
        moic=moic_value,
        payback=payback_period(invested, hold_cash_flows),
        exit_value_range=exit_value_range(exit_ebitda, ownership.your_ownership, assumptions.exit_range_multiples),
        stress_test=stress,
        risk_score=score,
        eva=ratios[MetricName.EVA].value,
        business_capital_invested=capital,
        ratios=ratios,
    )
