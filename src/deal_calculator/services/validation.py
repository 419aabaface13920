from __future__ import annotations

from typing import List

from ..models.deal import DealStructure
from ..models.financing import AllocationResult
from ..models.funding import FundingKind
from ..models.metrics import IRRResult
from ..models.ownership import Ownership
from ..models.results import ValidationWarning, WarningCode

MAX_REASONABLE_WACC = 0.50
MIN_DOWN_PAYMENT_SHARE = 0.15
MIN_INVESTOR_STAKE = 0.05
MATERIAL_INVESTOR_CONTRIBUTION = 50_000.0
MIN_OWNER_STAKE = 0.60


def validate_scenario(
    deal: DealStructure,
    allocation: AllocationResult,
    ownership: Ownership,
    wacc: float,
    irr: IRRResult,
) -> List[ValidationWarning]:
    """Collect the data-quality and deal-shape warnings for one computed scenario.

    Nothing here raises: degenerate inputs have already flowed through the
    calculation and are reported so the caller can decide what to show.
    """
    warnings: List[ValidationWarning] = []

    def warn(code: WarningCode, message: str) -> None:
        warnings.append(ValidationWarning(code=code, message=message))

    if deal.target_revenue <= 0:
        warn(WarningCode.INVALID_REVENUE, "Target revenue must be positive")
    if deal.ebitda <= 0:
        warn(WarningCode.INVALID_EBITDA, "EBITDA must be positive; check the profit margin")
    if deal.purchase_price <= 0:
        warn(WarningCode.INVALID_PURCHASE_PRICE, "Purchase price must be positive; check the valuation multiple")
    if wacc > MAX_REASONABLE_WACC:
        warn(WarningCode.WACC_TOO_HIGH, f"WACC of {wacc:.1%} is unrealistically high")
    if deal.purchase_price > 0 and deal.down_payment_needed < deal.purchase_price * MIN_DOWN_PAYMENT_SHARE:
        warn(
            WarningCode.DOWN_PAYMENT_LOW,
            f"Cash at close of {deal.down_payment_needed:,.0f} is below {MIN_DOWN_PAYMENT_SHARE:.0%} of the purchase price",
        )
    if allocation.has_shortfall:
        warn(WarningCode.FUNDING_SHORTFALL, f"Funding sources leave {allocation.shortfall:,.0f} uncovered")
    if not irr.converged:
        warn(WarningCode.IRR_NOT_CONVERGED, "IRR could not be determined for this cash flow series")

    outside = allocation.amount(FundingKind.OUTSIDE_EQUITY)
    owner_cash = allocation.amount(FundingKind.OWNER_CASH)
    if ownership.investor_ownership < MIN_INVESTOR_STAKE and outside > MATERIAL_INVESTOR_CONTRIBUTION:
        warn(
            WarningCode.INVESTOR_STAKE_SMALL,
            f"Investor receives {ownership.investor_ownership:.1%} for {outside:,.0f} of equity",
        )
    if ownership.your_ownership < MIN_OWNER_STAKE and owner_cash > outside:
        warn(
            WarningCode.OWNER_STAKE_LOW,
            f"Owner keeps {ownership.your_ownership:.1%} despite contributing more cash than the investor",
        )
    return warnings
