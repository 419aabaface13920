from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ..models.metrics import Band, Metric, MetricName


@dataclass(frozen=True)
class BandThresholds:
    """Cut-offs between the four bands, listed worst to best.

    For regular metrics a value below ``critical`` is critical, below
    ``below_target`` is below target, below ``good`` is good and anything
    else is excellent. Inverted metrics (lower is better) use the same
    cut-offs with the comparisons flipped.
    """

    critical: float
    below_target: float
    good: float
    inverted: bool = False

    def classify(self, value: float) -> Band:
        if self.inverted:
            if value > self.critical:
                return Band.CRITICAL
            if value > self.below_target:
                return Band.BELOW_TARGET
            if value > self.good:
                return Band.GOOD
            return Band.EXCELLENT
        if value < self.critical:
            return Band.CRITICAL
        if value < self.below_target:
            return Band.BELOW_TARGET
        if value < self.good:
            return Band.GOOD
        return Band.EXCELLENT


BAND_THRESHOLDS: Dict[MetricName, BandThresholds] = {
    MetricName.DSCR: BandThresholds(1.25, 1.5, 2.0),
    MetricName.CASH_ON_CASH: BandThresholds(8, 12, 20),
    MetricName.CAPITAL_UTILIZATION: BandThresholds(95, 85, 65, inverted=True),
    MetricName.LEVERAGE_MULTIPLIER: BandThresholds(3, 5, 8),
    MetricName.PRICE_TO_REVENUE: BandThresholds(1.2, 1.0, 0.8, inverted=True),
    MetricName.EBITDA_MARGIN: BandThresholds(15, 18, 22),
    MetricName.CASH_CONVERSION: BandThresholds(15, 20, 30),
    MetricName.REVENUE_EFFICIENCY: BandThresholds(3, 4, 6),
    MetricName.RISK_ADJUSTED_RETURN: BandThresholds(0.5, 1.0, 1.5),
    MetricName.INCOME_REPLACEMENT: BandThresholds(40, 80, 120),
    MetricName.WEALTH_VELOCITY: BandThresholds(20, 40, 80),
    MetricName.INTEREST_COVERAGE: BandThresholds(1.5, 2.5, 3.0),
    MetricName.DEBT_TO_EBITDA: BandThresholds(4.0, 3.0, 2.0, inverted=True),
    MetricName.BUSINESS_ROA: BandThresholds(3, 6, 10),
    MetricName.STRESS_TEST: BandThresholds(5, 7, 10),
    MetricName.GROWTH_CAPACITY: BandThresholds(50_000, 100_000, 200_000),
}


def classify(name: MetricName, value: float, unbounded: bool = False) -> Optional[Band]:
    thresholds = BAND_THRESHOLDS.get(name)
    if thresholds is None:
        return None
    if unbounded:
        return Band.CRITICAL if thresholds.inverted else Band.EXCELLENT
    return thresholds.classify(value)


def banded(name: MetricName, value: float, unit: str) -> Metric:
    return Metric(name=name, value=value, unit=unit, band=classify(name, value))


def unbounded_metric(name: MetricName, unit: str) -> Metric:
    return Metric(name=name, value=None, unit=unit, band=classify(name, 0.0, unbounded=True), unbounded=True)
