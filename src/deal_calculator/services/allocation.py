from __future__ import annotations

import logging
from typing import Dict

from ..models.financing import AllocationResult
from ..models.funding import ALLOCATION_PRIORITY, FundingKind, FundingSources

logger = logging.getLogger(__name__)


def allocate_funding(amount_needed: float, funding_sources: FundingSources) -> AllocationResult:
    """Fill the cash requirement from the funding sources in ``ALLOCATION_PRIORITY`` order.

    This is a greedy cost-minimising policy, not an optimal packing: each
    enabled source contributes up to its capacity before the next one is
    touched. An enabled SBA source absorbs whatever remains with no ceiling;
    anything still unfunded is reported as ``shortfall``.
    """
    allocation: Dict[FundingKind, float] = {kind: 0.0 for kind in ALLOCATION_PRIORITY}
    available_cash = funding_sources.available_cash()
    if amount_needed <= 0:
        return AllocationResult(
            amount_needed=amount_needed,
            allocation=allocation,
            total_allocated=0.0,
            shortfall=0.0,
            available_cash=available_cash,
        )

    backstop = ALLOCATION_PRIORITY[-1]
    remaining = amount_needed
    for kind in ALLOCATION_PRIORITY:
        if remaining <= 0:
            break
        source = funding_sources[kind]
        if not source.enabled:
            continue
        used = remaining if kind is backstop else min(remaining, source.amount)
        allocation[kind] = used
        remaining -= used

    # Taken from the running remainder so an absorbing backstop leaves exactly zero.
    shortfall = max(0.0, remaining)
    total_allocated = amount_needed - shortfall
    if shortfall > 0:
        logger.debug("Allocation short by %.2f of %.2f needed", shortfall, amount_needed)
    return AllocationResult(
        amount_needed=amount_needed,
        allocation=allocation,
        total_allocated=total_allocated,
        shortfall=shortfall,
        available_cash=available_cash,
    )
