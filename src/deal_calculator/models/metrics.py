from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class Band(str, Enum):
    CRITICAL = "critical"
    BELOW_TARGET = "below-target"
    GOOD = "good"
    EXCELLENT = "excellent"


class MetricName(str, Enum):
    DSCR = "dscr"
    CASH_ON_CASH = "cash_on_cash"
    CAPITAL_UTILIZATION = "capital_utilization"
    LEVERAGE_MULTIPLIER = "leverage_multiplier"
    PRICE_TO_REVENUE = "price_to_revenue"
    EBITDA_MARGIN = "ebitda_margin"
    CASH_CONVERSION = "cash_conversion"
    REVENUE_EFFICIENCY = "revenue_efficiency"
    RISK_ADJUSTED_RETURN = "risk_adjusted_return"
    INCOME_REPLACEMENT = "income_replacement"
    WEALTH_VELOCITY = "wealth_velocity"
    INTEREST_COVERAGE = "interest_coverage"
    DEBT_TO_EBITDA = "debt_to_ebitda"
    BUSINESS_ROA = "business_roa"
    STRESS_TEST = "stress_test"
    GROWTH_CAPACITY = "growth_capacity"
    PERSONAL_ROI = "personal_roi"
    DEAL_ROI = "deal_roi"
    WACC = "wacc"
    PERSONAL_COST_OF_CAPITAL = "personal_cost_of_capital"
    EVA = "eva"
    RISK_SCORE = "risk_score"


class Metric(BaseModel):
    """A reported figure with its health band.

    ``unbounded`` marks a ratio whose denominator is zero where infinity is
    the meaningful answer (coverage with no debt); ``value`` is then ``None``.
    """

    model_config = ConfigDict(frozen=True)

    name: MetricName
    value: Optional[float]
    unit: str
    band: Optional[Band] = None
    unbounded: bool = False


class IRRResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: Optional[float]
    converged: bool
    iterations: int


class PaybackPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    years: Optional[float]
    beyond_horizon: bool = False
    horizon_years: int


class ExitValueRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    conservative: float
    expected: float
    optimistic: float


class StressTestResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    revenue_stress_roi: float
    margin_stress_roi: float
    rate_stress_roi: float

    @property
    def worst_case_roi(self) -> float:
        return min(self.revenue_stress_roi, self.margin_stress_roi, self.rate_stress_roi)


class ReturnMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    irr: IRRResult
    moic: float
    payback: PaybackPeriod
    exit_value_range: ExitValueRange
    stress_test: StressTestResult
    risk_score: int
    eva: float
    business_capital_invested: float
    ratios: Dict[MetricName, Metric]

    def __getitem__(self, name: MetricName) -> Metric:
        return self.ratios[name]
