from __future__ import annotations

from typing import Dict

from ..models.assumptions import Assumptions
from ..models.financing import AllocationResult
from ..models.funding import FundingKind, FundingSources, InstrumentType
from ..models.ownership import Ownership, OwnershipBreakdown, PreferredReturnSplit

# Outside investors always keep a stake once they have put money in.
OWNERSHIP_CAP = 0.95

INVESTOR_PREFERRED_RATE = 0.08
OWNER_PREFERRED_RATE = 0.06


def compute_ownership(allocation: AllocationResult, assumptions: Assumptions) -> Ownership:
    """Risk-weighted equity split between the owner and the outside investor.

    Each owner-side dollar is weighted by its source's risk multiplier
    (guaranteed personal debt counts for less than cash, debt secured on the
    owner's home for more) and the owner's sweat equity is added on top.
    """
    risk_weighted: Dict[FundingKind, float] = {
        kind: amount * kind.profile.risk_weight
        for kind, amount in allocation.allocation.items()
        if kind.profile.owner_side
    }
    investor = allocation.amount(FundingKind.OUTSIDE_EQUITY)
    breakdown = OwnershipBreakdown(
        risk_weighted=risk_weighted,
        sweat_equity=assumptions.sweat_equity_value,
        investor_contribution=investor,
    )
    owner = breakdown.owner_risk_adjusted
    total = owner + investor

    if investor <= 0 or total <= 0:
        your_ownership = 1.0
    else:
        your_ownership = min(OWNERSHIP_CAP, max(0.0, owner / total))

    return Ownership(
        your_ownership=your_ownership,
        investor_ownership=1.0 - your_ownership,
        breakdown=breakdown,
    )


def after_tax_cost(kind: FundingKind, rate: float, tax_rate: float) -> float:
    profile = kind.profile
    if profile.instrument is InstrumentType.DEBT and profile.tax_deductible:
        return rate * (1 - tax_rate)
    return rate


def compute_wacc(allocation: AllocationResult, funding_sources: FundingSources, tax_rate: float) -> float:
    """Allocation-weighted after-tax cost of the capital raised, as a decimal."""
    total = 0.0
    weighted = 0.0
    for kind, amount in allocation.allocation.items():
        if amount <= 0:
            continue
        total += amount
        weighted += amount * after_tax_cost(kind, funding_sources[kind].rate, tax_rate)
    return weighted / total if total > 0 else 0.0


def personal_cost_of_capital(allocation: AllocationResult, funding_sources: FundingSources) -> float:
    total = 0.0
    weighted = 0.0
    for kind, amount in allocation.allocation.items():
        if amount <= 0 or not kind.profile.owner_side:
            continue
        total += amount
        weighted += amount * funding_sources[kind].rate
    return weighted / total if total > 0 else 0.0


def preferred_return_split(
    business_cash_flow: float,
    ownership: Ownership,
    allocation: AllocationResult,
) -> PreferredReturnSplit:
    """Distribute business cash flow: preferred returns first, the rest pro rata to ownership.

    When the cash flow cannot cover both preferred returns they are paid
    proportionally and nothing is left over for the residual split.
    """
    investor_pref = allocation.amount(FundingKind.OUTSIDE_EQUITY) * INVESTOR_PREFERRED_RATE
    owner_pref = allocation.amount(FundingKind.OWNER_CASH) * OWNER_PREFERRED_RATE
    distributable = max(0.0, business_cash_flow)
    total_pref = investor_pref + owner_pref
    if total_pref > distributable and total_pref > 0:
        scale = distributable / total_pref
        investor_pref *= scale
        owner_pref *= scale
    residual = distributable - investor_pref - owner_pref
    return PreferredReturnSplit(
        investor_preferred=investor_pref,
        owner_preferred=owner_pref,
        investor_residual=residual * ownership.investor_ownership,
        owner_residual=residual * ownership.your_ownership,
    )
