from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, conint, confloat, model_validator


class StressShocks(BaseModel):
    model_config = ConfigDict(frozen=True)

    revenue: float = Field(-0.20, description="Revenue shock as decimal change")
    margin: float = Field(-0.03, description="Margin shock as decimal (-0.03 = -300bp)")
    rate: float = Field(0.02, description="Interest-rate shock as decimal (0.02 = +200bp)")


class Assumptions(BaseModel):
    """User-adjustable deal assumptions.

    Every rate and percentage is a decimal fraction (0.12 for 12%). The field
    defaults are the single canonical default table for the engine.
    """

    model_config = ConfigDict(frozen=True)

    net_profit_margin: float = Field(0.25, description="EBITDA as a share of revenue")
    valuation_multiple: confloat(gt=0) = Field(4.2, description="Purchase price as a multiple of EBITDA")
    seller_financing_pct: confloat(ge=0, le=1) = 0.20
    revenue_growth_rate: float = 0.08
    working_capital_pct: confloat(ge=0) = 0.12
    sba_down_payment_pct: confloat(ge=0, le=1) = 0.12

    management_salary: confloat(ge=0) = 100_000.0
    tech_investment: confloat(ge=0) = Field(100_000.0, description="Charged straight-line over the first three years")
    current_salary: confloat(ge=0) = Field(100_000.0, description="Employment income the deal has to replace")

    sba_interest_rate: confloat(ge=0) = 0.115
    sba_term_years: conint(ge=1) = 10
    seller_interest_rate: confloat(ge=0) = 0.08
    seller_term_years: conint(ge=1) = 5

    tax_rate: confloat(ge=0, lt=1) = 0.25
    sweat_equity_value: confloat(ge=0) = 150_000.0
    risk_free_rate: float = 0.045

    exit_multiple: Optional[confloat(gt=0)] = Field(None, description="Defaults to the entry valuation multiple")
    exit_range_multiples: Tuple[float, float, float] = (3.0, 3.59, 4.5)
    stress: StressShocks = Field(default_factory=StressShocks)

    projection_years: conint(ge=5) = 6
    hold_years: conint(ge=1) = 5
    available_cash: Optional[confloat(ge=0)] = Field(
        None, description="Overrides the enabled capacity of the cash-like funding sources"
    )

    @model_validator(mode="after")
    def _hold_within_projection(self) -> "Assumptions":
        if self.hold_years > self.projection_years:
            raise ValueError("hold_years cannot exceed projection_years")
        return self

    @property
    def effective_exit_multiple(self) -> float:
        return self.exit_multiple if self.exit_multiple is not None else self.valuation_multiple
