from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, conint, confloat, model_validator


class InstrumentType(str, Enum):
    DEBT = "debt"
    EQUITY = "equity"


@dataclass(frozen=True)
class FundingProfile:
    label: str
    instrument: InstrumentType
    owner_side: bool
    personal_debt: bool
    tax_deductible: bool
    risk_weight: float


class FundingKind(str, Enum):
    PERSONAL_LOAN = "personal_loan"
    OWNER_CASH = "owner_cash"
    OUTSIDE_EQUITY = "outside_equity"
    SELLER_NOTE = "seller_note"
    HOME_EQUITY = "home_equity"
    SBA_LOAN = "sba_loan"

    @property
    def profile(self) -> FundingProfile:
        return FUNDING_PROFILES[self]


FUNDING_PROFILES: Dict[FundingKind, FundingProfile] = {
    FundingKind.PERSONAL_LOAN: FundingProfile(
        label="Personal loan (guaranteed)",
        instrument=InstrumentType.DEBT,
        owner_side=True,
        personal_debt=True,
        tax_deductible=True,
        risk_weight=0.8,
    ),
    FundingKind.OWNER_CASH: FundingProfile(
        label="Owner cash",
        instrument=InstrumentType.EQUITY,
        owner_side=True,
        personal_debt=False,
        tax_deductible=False,
        risk_weight=1.0,
    ),
    FundingKind.OUTSIDE_EQUITY: FundingProfile(
        label="Outside investor equity",
        instrument=InstrumentType.EQUITY,
        owner_side=False,
        personal_debt=False,
        tax_deductible=False,
        risk_weight=1.0,
    ),
    FundingKind.SELLER_NOTE: FundingProfile(
        label="Seller note",
        instrument=InstrumentType.DEBT,
        owner_side=False,
        personal_debt=False,
        tax_deductible=True,
        risk_weight=0.0,
    ),
    # Collateralised by the owner's home; interest is not a business deduction.
    FundingKind.HOME_EQUITY: FundingProfile(
        label="Home equity loan",
        instrument=InstrumentType.DEBT,
        owner_side=True,
        personal_debt=True,
        tax_deductible=False,
        risk_weight=1.2,
    ),
    FundingKind.SBA_LOAN: FundingProfile(
        label="SBA 7(a) loan",
        instrument=InstrumentType.DEBT,
        owner_side=False,
        personal_debt=False,
        tax_deductible=True,
        risk_weight=0.0,
    ),
}

# Cheapest after-tax cost first; SBA is the capacity-unlimited backstop and must stay last.
ALLOCATION_PRIORITY = (
    FundingKind.PERSONAL_LOAN,
    FundingKind.OWNER_CASH,
    FundingKind.OUTSIDE_EQUITY,
    FundingKind.SELLER_NOTE,
    FundingKind.HOME_EQUITY,
    FundingKind.SBA_LOAN,
)


class FundingSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: confloat(ge=0) = Field(0.0, description="Available capacity in dollars")
    rate: confloat(ge=0) = Field(0.0, description="Annual cost as decimal (interest, expected return or opportunity cost)")
    term_years: conint(ge=1) = 10
    enabled: bool = True

    def capacity(self) -> float:
        return self.amount if self.enabled else 0.0


class FundingSources(BaseModel):
    model_config = ConfigDict(frozen=True)

    sources: Dict[FundingKind, FundingSource]

    @model_validator(mode="after")
    def _require_every_kind(self) -> "FundingSources":
        missing = [kind.value for kind in FundingKind if kind not in self.sources]
        if missing:
            raise ValueError(f"funding sources missing: {', '.join(missing)}")
        return self

    def __getitem__(self, kind: FundingKind) -> FundingSource:
        return self.sources[kind]

    def replace(self, kind: FundingKind, **changes) -> "FundingSources":
        """Return a new set with one source edited; the original is left untouched."""
        updated = dict(self.sources)
        updated[kind] = self.sources[kind].model_copy(update=changes)
        return FundingSources(sources=updated)

    def available_cash(self) -> float:
        """Enabled capacity of the cash-like sources (everything except SBA and the seller note)."""
        return sum(
            source.capacity()
            for kind, source in self.sources.items()
            if kind not in (FundingKind.SBA_LOAN, FundingKind.SELLER_NOTE)
        )
