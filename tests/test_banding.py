from __future__ import annotations

from deal_calculator.models.metrics import Band, MetricName
from deal_calculator.services.banding import BAND_THRESHOLDS, classify, unbounded_metric

BAND_ORDER = [Band.CRITICAL, Band.BELOW_TARGET, Band.GOOD, Band.EXCELLENT]


def _rank(name: MetricName, value: float) -> int:
    return BAND_ORDER.index(classify(name, value))


def test_bands_are_monotonic_in_the_good_direction():
    for name, thresholds in BAND_THRESHOLDS.items():
        points = sorted({thresholds.critical, thresholds.below_target, thresholds.good})
        low, high = points[0], points[-1]
        span = high - low
        values = [low - span, *points, high + span]
        ranks = [_rank(name, value) for value in values]
        if thresholds.inverted:
            ranks.reverse()
        assert ranks == sorted(ranks), name


def test_dscr_boundaries():
    assert classify(MetricName.DSCR, 1.2) is Band.CRITICAL
    assert classify(MetricName.DSCR, 1.25) is Band.BELOW_TARGET
    assert classify(MetricName.DSCR, 1.7) is Band.GOOD
    assert classify(MetricName.DSCR, 2.0) is Band.EXCELLENT


def test_inverted_metrics():
    assert classify(MetricName.PRICE_TO_REVENUE, 1.3) is Band.CRITICAL
    assert classify(MetricName.PRICE_TO_REVENUE, 0.7) is Band.EXCELLENT
    assert classify(MetricName.CAPITAL_UTILIZATION, 100) is Band.CRITICAL
    assert classify(MetricName.CAPITAL_UTILIZATION, 50) is Band.EXCELLENT
    assert classify(MetricName.DEBT_TO_EBITDA, 1.5) is Band.EXCELLENT


def test_unbounded_metrics():
    coverage = unbounded_metric(MetricName.DSCR, "x")
    leverage = unbounded_metric(MetricName.DEBT_TO_EBITDA, "x")

    assert coverage.value is None
    assert coverage.unbounded
    assert coverage.band is Band.EXCELLENT
    assert leverage.band is Band.CRITICAL


def test_unbanded_metric_has_no_band():
    assert classify(MetricName.EVA, 1_000_000) is None
