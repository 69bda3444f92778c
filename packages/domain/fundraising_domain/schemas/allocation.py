"""Token allocation models.

An allocation run takes one aggregated contribution per investor, a token
price and an optional round-level vesting configuration, and produces one
``TokenAllocation`` per contribution. The ``AllocationReport`` bundles those
allocations with round metadata for export.

Flow:
    ContributionInput[] + token price (+ VestingConfig)
        → TokenAllocation[] → AllocationReport → CSV / JSON / XLSX

Allocations and reports are frozen: they are derived data and are rebuilt
from scratch on every run rather than edited.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import Field

from .base import (
    DomainModel,
    FrozenDomainModel,
    InvestorId,
    MoneyAmount,
    Percentage,
    RoundId,
    TokenAmount,
    TokenPrice,
)


# =============================================================================
# Vesting Configuration
# =============================================================================

class VestingConfig(FrozenDomainModel):
    """Round-level vesting parameters attached to every allocation.

    Vesting is configuration, not computation: the same object is attached
    to each allocation in a report and exported as-is.

    Example:
        12 month cliff, 24 month linear vesting, 10% unlocked at TGE:
            VestingConfig(cliff=12, duration=24, tge=10)
    """

    cliff: int = Field(
        description="Cliff in months before any tokens vest"
    )

    duration: int = Field(
        description="Total vesting duration in months"
    )

    tge: float = Field(
        description="Percentage (0-100) unlocked at the token generation event"
    )


# =============================================================================
# Contribution Input
# =============================================================================

class ContributionInput(DomainModel):
    """One investor's aggregated contribution to a round.

    The caller groups multiple contributions from the same investor before
    calling the calculator; duplicates are not merged here. ``amount`` is
    expected to be positive but is not validated.
    """

    investor_id: InvestorId = Field(
        description="Investor identifier, unique within one allocation run"
    )

    investor_name: str = Field(
        description="Investor display name"
    )

    investor_email: str = Field(
        description="Investor email address"
    )

    wallet_address: Optional[str] = Field(
        default=None,
        description="Wallet receiving the tokens. None = not yet provided"
    )

    amount: MoneyAmount = Field(
        description="Total confirmed contribution in USD"
    )


# =============================================================================
# Token Allocation
# =============================================================================

class TokenAllocation(FrozenDomainModel):
    """Tokens owed to one investor for one round.

    Derived values:
        token_amount = contribution_amount / token_price
        percentage = contribution_amount / total_raised * 100

    Example:
        $100,000 contributed at $0.50/token out of $450,000 raised:
            token_amount = 200,000
            percentage = 22.22
    """

    investor_id: InvestorId
    investor_name: str
    investor_email: str
    wallet_address: Optional[str] = None

    contribution_amount: MoneyAmount = Field(
        description="Copy of the input contribution amount"
    )

    token_amount: TokenAmount = Field(
        description="Tokens allocated (contribution / token price)"
    )

    percentage: Percentage = Field(
        description="Share of the round's total raised, 0-100"
    )

    vesting_schedule: Optional[VestingConfig] = Field(
        default=None,
        description="Round vesting configuration, identical for every allocation in a report"
    )


# =============================================================================
# Allocation Report
# =============================================================================

class AllocationReport(FrozenDomainModel):
    """Complete allocation result for one round, ready for export.

    Invariants:
        - total_raised == sum(a.contribution_amount for a in allocations)
        - total_tokens == sum(a.token_amount for a in allocations)
        - allocations keep the order of the input contributions
    """

    round_id: RoundId
    round_name: str

    total_raised: MoneyAmount = Field(
        description="Sum of all contribution amounts in the report"
    )

    total_tokens: TokenAmount = Field(
        description="Sum of all allocated tokens"
    )

    token_price: TokenPrice = Field(
        description="Token price used for this computation"
    )

    allocations: List[TokenAllocation] = Field(
        default_factory=list,
        description="One allocation per investor, in input order"
    )

    generated_at: datetime = Field(
        description="When the report was generated"
    )

    @property
    def investor_count(self) -> int:
        """Number of investors receiving an allocation."""
        return len(self.allocations)

    @property
    def vesting_schedule(self) -> Optional[VestingConfig]:
        """Round vesting configuration, if one was attached."""
        for allocation in self.allocations:
            if allocation.vesting_schedule is not None:
                return allocation.vesting_schedule
        return None
