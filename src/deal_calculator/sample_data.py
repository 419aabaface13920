from __future__ import annotations

from typing import List

from .models.assumptions import Assumptions
from .models.funding import FundingKind, FundingSource, FundingSources
from .models.results import ScenarioDefinition


def build_default_funding_sources() -> FundingSources:
    return FundingSources(
        sources={
            FundingKind.PERSONAL_LOAN: FundingSource(amount=300_000, rate=0.028, term_years=10),
            FundingKind.OWNER_CASH: FundingSource(amount=50_000, rate=0.08),
            FundingKind.OUTSIDE_EQUITY: FundingSource(amount=50_000, rate=0.15),
            FundingKind.SELLER_NOTE: FundingSource(amount=0, rate=0.08, term_years=5, enabled=False),
            FundingKind.HOME_EQUITY: FundingSource(amount=98_273, rate=0.08, term_years=15),
            FundingKind.SBA_LOAN: FundingSource(amount=0, rate=0.115, term_years=10, enabled=False),
        }
    )


def build_default_assumptions() -> Assumptions:
    return Assumptions()


def build_default_scenarios() -> List[ScenarioDefinition]:
    return [
        ScenarioDefinition(name="Small", target_revenue=2_000_000),
        ScenarioDefinition(name="Target", target_revenue=2_500_000),
        ScenarioDefinition(name="Large", target_revenue=3_000_000),
        ScenarioDefinition(name="Custom", target_revenue=3_500_000),
    ]
