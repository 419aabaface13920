from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, confloat

from .cash_flow import CashFlowSummary, ProjectionYear
from .deal import DealStructure
from .financing import AllocationResult, FinancingResolution
from .metrics import ReturnMetrics
from .ownership import Ownership, PreferredReturnSplit


class ScenarioDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    target_revenue: confloat(allow_inf_nan=False)


class WarningCode(str, Enum):
    INVALID_REVENUE = "invalid_revenue"
    INVALID_EBITDA = "invalid_ebitda"
    INVALID_PURCHASE_PRICE = "invalid_purchase_price"
    WACC_TOO_HIGH = "wacc_too_high"
    DOWN_PAYMENT_LOW = "down_payment_low"
    FUNDING_SHORTFALL = "funding_shortfall"
    IRR_NOT_CONVERGED = "irr_not_converged"
    INVESTOR_STAKE_SMALL = "investor_stake_small"
    OWNER_STAKE_LOW = "owner_stake_low"


class ValidationWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: WarningCode
    message: str


class TraceStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: str
    formula: str
    inputs: Dict[str, float] = Field(default_factory=dict)
    result: Optional[float] = None


class ScenarioResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    scenario: ScenarioDefinition
    deal: DealStructure
    allocation: AllocationResult
    financing: FinancingResolution
    ownership: Ownership
    wacc: float
    personal_cost_of_capital: float
    distribution_split: PreferredReturnSplit
    cash_flow: CashFlowSummary
    projections: List[ProjectionYear]
    metrics: ReturnMetrics
    warnings: List[ValidationWarning] = Field(default_factory=list)
    trace: List[TraceStep] = Field(default_factory=list)
