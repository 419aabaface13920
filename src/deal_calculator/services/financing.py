from __future__ import annotations

from typing import Dict

from ..models.assumptions import Assumptions
from ..models.deal import DealStructure
from ..models.financing import AllocationResult, BusinessDebtService, FinancingResolution, PersonalDebtService
from ..models.funding import FundingKind, FundingSources
from .amortization import annual_payment, first_year_interest


def resolve_financing(
    deal: DealStructure,
    allocation: AllocationResult,
    assumptions: Assumptions,
    funding_sources: FundingSources,
) -> FinancingResolution:
    """Split the purchase price into SBA and seller principal and price the debt service.

    The allocated cash covers the SBA down payment first, which lowers the
    SBA principal. Any SBA or seller-note draw made to fund the cash
    requirement is extra borrowing of record, amortized at that source's own
    rate and term. A shortfall does not stop the computation; it is carried
    on the result for the caller to flag.
    """
    down_payment_covered = max(0.0, min(deal.sba_down_payment, allocation.total_allocated))
    purchase_sba_principal = max(0.0, deal.sba_loan_amount - down_payment_covered)

    sba_source = funding_sources[FundingKind.SBA_LOAN]
    seller_source = funding_sources[FundingKind.SELLER_NOTE]
    sba_draw = allocation.amount(FundingKind.SBA_LOAN)
    seller_draw = allocation.amount(FundingKind.SELLER_NOTE)
    seller_amount = max(0.0, deal.seller_financing_amount)

    sba_payment = annual_payment(
        purchase_sba_principal, assumptions.sba_interest_rate, assumptions.sba_term_years
    ) + annual_payment(sba_draw, sba_source.rate, sba_source.term_years)
    seller_payment = annual_payment(
        seller_amount, assumptions.seller_interest_rate, assumptions.seller_term_years
    ) + annual_payment(seller_draw, seller_source.rate, seller_source.term_years)

    interest = (
        first_year_interest(purchase_sba_principal, assumptions.sba_interest_rate, assumptions.sba_term_years)
        + first_year_interest(sba_draw, sba_source.rate, sba_source.term_years)
        + first_year_interest(seller_amount, assumptions.seller_interest_rate, assumptions.seller_term_years)
        + first_year_interest(seller_draw, seller_source.rate, seller_source.term_years)
    )

    personal_payments: Dict[FundingKind, float] = {}
    personal_principal = 0.0
    for kind, amount in allocation.allocation.items():
        if not kind.profile.personal_debt:
            continue
        source = funding_sources[kind]
        personal_payments[kind] = annual_payment(amount, source.rate, source.term_years)
        personal_principal += amount

    return FinancingResolution(
        sba_principal=purchase_sba_principal + sba_draw,
        seller_principal=seller_amount + seller_draw,
        down_payment_covered=down_payment_covered,
        personal_principal=personal_principal,
        business_debt_service=BusinessDebtService(
            sba_annual_payment=sba_payment,
            seller_annual_payment=seller_payment,
        ),
        personal_debt_service=PersonalDebtService(payments=personal_payments),
        first_year_business_interest=interest,
        shortfall=allocation.shortfall,
    )
