"""Pro-rata token allocation.

Each investor receives tokens in proportion to their contribution:

    token_amount = contribution / token_price
    percentage   = contribution / total_raised * 100

The calculator is a pure function of its inputs. It does not validate the
token price or the amounts: callers reject bad input before getting here
(see ``fundraising_domain.service``). Degenerate inputs follow IEEE-754
rather than raising, so a zero token price yields ``inf`` token amounts and
a round that raised nothing yields ``nan`` percentages.
"""

import logging
import operator
from datetime import datetime, timezone
from functools import reduce
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from .errors import DomainValidationError, ErrorCodes
from .schemas import (
    AllocationReport,
    Contribution,
    ContributionInput,
    TokenAllocation,
    VestingConfig,
)

logger = logging.getLogger(__name__)


def running_sum(values: Iterable[float]) -> float:
    """Add floats strictly left to right from 0.0, without compensation.

    Example:
        running_sum([0.1] * 10) → 0.9999999999999999
    """
    return reduce(operator.add, values, 0.0)


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE-754 semantics: x/0 is ±inf and 0/0 is nan."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def calculate_token_allocations(
    contributions: Sequence[ContributionInput],
    token_price: float,
    vesting_config: Optional[VestingConfig] = None,
) -> List[TokenAllocation]:
    """Convert contribution totals into token allocations.

    Args:
        contributions: One aggregated contribution per investor
        token_price: USD price of one token (not validated)
        vesting_config: Round vesting terms attached to every allocation

    Returns:
        One allocation per contribution, in input order

    Example:
        Contributions of $100k, $200k and $150k at $0.50/token:
            token amounts → 200,000 / 400,000 / 300,000
            percentages   → 22.22 / 44.44 / 33.33
    """
    total_raised = running_sum(c.amount for c in contributions)

    return [
        TokenAllocation(
            investor_id=contribution.investor_id,
            investor_name=contribution.investor_name,
            investor_email=contribution.investor_email,
            wallet_address=contribution.wallet_address,
            contribution_amount=contribution.amount,
            token_amount=ieee_divide(contribution.amount, token_price),
            percentage=ieee_divide(contribution.amount, total_raised) * 100,
            vesting_schedule=vesting_config,
        )
        for contribution in contributions
    ]


def build_allocation_report(
    round_id: str,
    round_name: str,
    contributions: Sequence[ContributionInput],
    token_price: float,
    vesting_config: Optional[VestingConfig] = None,
    generated_at: Optional[datetime] = None,
) -> AllocationReport:
    """Run the calculator and wrap the result in an exportable report.

    Totals are summed over the allocations themselves, so ``total_raised``
    is always the denominator the percentages were computed against.

    Args:
        round_id: Round identifier (passed through)
        round_name: Round display name (passed through)
        contributions: One aggregated contribution per investor
        token_price: USD price of one token
        vesting_config: Optional round vesting terms
        generated_at: Report timestamp (default: current UTC time)

    Returns:
        AllocationReport with allocations in input order
    """
    allocations = calculate_token_allocations(contributions, token_price, vesting_config)

    report = AllocationReport(
        round_id=round_id,
        round_name=round_name,
        total_raised=running_sum(a.contribution_amount for a in allocations),
        total_tokens=running_sum(a.token_amount for a in allocations),
        token_price=token_price,
        allocations=allocations,
        generated_at=generated_at or datetime.now(timezone.utc),
    )

    logger.debug(
        "Built allocation report for round %s: %d investors, %s tokens",
        round_id,
        report.investor_count,
        report.total_tokens,
    )
    return report


def aggregate_contributions(contributions: Iterable[Contribution]) -> List[ContributionInput]:
    """Group contributions into one calculator input per investor.

    Amounts of repeat contributions are summed. Investors appear in the
    order of their first contribution, and name/email/wallet come from the
    embedded investor record of that first contribution.

    Args:
        contributions: Contributions with ``investor`` details populated

    Returns:
        One ContributionInput per distinct investor

    Raises:
        DomainValidationError: If a contribution lacks investor details
    """
    by_investor: Dict[str, ContributionInput] = {}

    for contribution in contributions:
        investor = contribution.investor
        if investor is None:
            raise DomainValidationError(
                f"Contribution {contribution.id} is missing investor details",
                code=ErrorCodes.MISSING_REQUIRED_FIELD,
            )

        existing = by_investor.get(contribution.investor_id)
        if existing is not None:
            existing.amount += contribution.amount
            continue

        by_investor[contribution.investor_id] = ContributionInput(
            investor_id=investor.id,
            investor_name=investor.name,
            investor_email=investor.email,
            wallet_address=investor.wallet_address,
            amount=contribution.amount,
        )

    return list(by_investor.values())
