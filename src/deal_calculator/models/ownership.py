from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict

from .funding import FundingKind


class OwnershipBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk_weighted: Dict[FundingKind, float]
    sweat_equity: float
    investor_contribution: float

    @property
    def owner_risk_adjusted(self) -> float:
        return sum(self.risk_weighted.values()) + self.sweat_equity


class Ownership(BaseModel):
    model_config = ConfigDict(frozen=True)

    your_ownership: float
    investor_ownership: float
    breakdown: OwnershipBreakdown


class PreferredReturnSplit(BaseModel):
    model_config = ConfigDict(frozen=True)

    investor_preferred: float
    owner_preferred: float
    investor_residual: float
    owner_residual: float

    @property
    def investor_total(self) -> float:
        return self.investor_preferred + self.investor_residual

    @property
    def owner_total(self) -> float:
        return self.owner_preferred + self.owner_residual
