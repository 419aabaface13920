from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CashFlowSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    ebitda: float
    business_debt_service: float
    management_salary: float
    tech_charge: float
    business_free_cash_flow: float
    owner_distribution: float
    personal_debt_service: float
    personal_net_cash_flow: float


class ProjectionYear(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    revenue: float
    ebitda: float
    business_debt_service: float
    tech_charge: float
    cash_flow: float
    cumulative_cash_flow: float
    owner_distribution: float
    personal_net_cash_flow: float
