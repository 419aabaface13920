from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict

from .funding import FundingKind


class AllocationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount_needed: float
    allocation: Dict[FundingKind, float]
    total_allocated: float
    shortfall: float
    available_cash: float = 0.0

    def amount(self, kind: FundingKind) -> float:
        return self.allocation.get(kind, 0.0)

    @property
    def personal_cash_invested(self) -> float:
        """Capital the owner personally put in (owner cash plus personal borrowing)."""
        return sum(amount for kind, amount in self.allocation.items() if kind.profile.owner_side)

    @property
    def has_shortfall(self) -> bool:
        return self.shortfall > 0


class BusinessDebtService(BaseModel):
    model_config = ConfigDict(frozen=True)

    sba_annual_payment: float
    seller_annual_payment: float

    @property
    def total(self) -> float:
        return self.sba_annual_payment + self.seller_annual_payment


class PersonalDebtService(BaseModel):
    model_config = ConfigDict(frozen=True)

    payments: Dict[FundingKind, float]

    @property
    def total(self) -> float:
        return sum(self.payments.values())


class FinancingResolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    sba_principal: float
    seller_principal: float
    down_payment_covered: float
    personal_principal: float
    business_debt_service: BusinessDebtService
    personal_debt_service: PersonalDebtService
    first_year_business_interest: float
    shortfall: float

    @property
    def business_debt(self) -> float:
        return self.sba_principal + self.seller_principal

    @property
    def total_debt(self) -> float:
        return self.business_debt + self.personal_principal

    @property
    def total_debt_service(self) -> float:
        return self.business_debt_service.total + self.personal_debt_service.total
