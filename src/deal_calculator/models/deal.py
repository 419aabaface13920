from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FeeBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    due_diligence: float
    professional_fees: float
    contingency: float

    @property
    def total(self) -> float:
        return self.due_diligence + self.professional_fees + self.contingency


class DealStructure(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_revenue: float
    ebitda: float
    purchase_price: float
    seller_financing_amount: float
    sba_loan_amount: float
    sba_down_payment_pct: float
    sba_down_payment: float
    working_capital: float
    fees: FeeBreakdown
    down_payment_needed: float

    @property
    def total_investment(self) -> float:
        """Total uses of funds: purchase price, working capital and transaction fees."""
        return self.purchase_price + self.working_capital + self.fees.total
