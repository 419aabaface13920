from __future__ import annotations

from ..models.assumptions import Assumptions
from ..models.deal import DealStructure, FeeBreakdown

# Regulatory floor on the buyer's equity injection into an SBA 7(a) acquisition.
SBA_MIN_DOWN_PAYMENT_PCT = 0.10

DUE_DILIGENCE_RATE = 0.015
PROFESSIONAL_FEES_RATE = 0.008
CONTINGENCY_RATE = 0.002
DEAL_FEE_RATE = DUE_DILIGENCE_RATE + PROFESSIONAL_FEES_RATE + CONTINGENCY_RATE


def effective_down_payment_pct(assumptions: Assumptions) -> float:
    return max(assumptions.sba_down_payment_pct, SBA_MIN_DOWN_PAYMENT_PCT)


def build_fees(purchase_price: float) -> FeeBreakdown:
    return FeeBreakdown(
        due_diligence=purchase_price * DUE_DILIGENCE_RATE,
        professional_fees=purchase_price * PROFESSIONAL_FEES_RATE,
        contingency=purchase_price * CONTINGENCY_RATE,
    )


def build_deal_structure(target_revenue: float, assumptions: Assumptions) -> DealStructure:
    """Price the acquisition and size the cash the buyer must bring to close.

    Degenerate inputs (zero or negative revenue, margin or multiple) flow
    through as degenerate figures; flagging them is the validation pass's job.
    """
    ebitda = target_revenue * assumptions.net_profit_margin
    purchase_price = ebitda * assumptions.valuation_multiple
    seller_financing_amount = purchase_price * assumptions.seller_financing_pct
    sba_loan_amount = purchase_price - seller_financing_amount
    down_payment_pct = effective_down_payment_pct(assumptions)
    sba_down_payment = sba_loan_amount * down_payment_pct
    working_capital = target_revenue * assumptions.working_capital_pct
    fees = build_fees(purchase_price)

    return DealStructure(
        target_revenue=target_revenue,
        ebitda=ebitda,
        purchase_price=purchase_price,
        seller_financing_amount=seller_financing_amount,
        sba_loan_amount=sba_loan_amount,
        sba_down_payment_pct=down_payment_pct,
        sba_down_payment=sba_down_payment,
        working_capital=working_capital,
        fees=fees,
        down_payment_needed=sba_down_payment + working_capital + fees.total,
    )
