"""Rounds, investors, contributions and invitations.

These are the in-memory shapes of the platform's entities. Storage lives
outside this package; the models here only carry data and enforce the
status transitions a caller may perform:

    Round:         DRAFT → ACTIVE → CLOSED / COMPLETED
    Contribution:  PENDING → CONFIRMED (or FAILED)
    Invitation:    SENT → VIEWED → ACCEPTED / DECLINED
"""

import operator
from datetime import datetime
from functools import reduce
from typing import List, Optional
from pydantic import Field, model_validator

from ..dates import is_date_in_past, utcnow
from ..errors import DomainValidationError, ErrorCodes, InvalidStateError
from .base import (
    CompanyId,
    ContributionStatus,
    DomainModel,
    FINISHED_ROUND_STATUSES,
    InvestorId,
    InvestorStatus,
    InvitationStatus,
    MoneyAmount,
    NonNegativeMoney,
    RoundId,
    RoundStatus,
    TokenSymbol,
)


# =============================================================================
# Investor
# =============================================================================

class Investor(DomainModel):
    """A person or fund invited to contribute to rounds."""

    id: InvestorId
    email: str
    name: str

    wallet_address: Optional[str] = Field(
        default=None,
        description="Wallet that receives allocated tokens. None = not provided yet"
    )

    status: InvestorStatus = Field(
        default="INVITED",
        description="INVITED until the investor accepts an invitation"
    )


# =============================================================================
# Contribution
# =============================================================================

class Contribution(DomainModel):
    """A single contribution by one investor to one round.

    An investor may contribute several times to the same round; the
    allocation service sums confirmed contributions per investor.
    """

    id: str
    round_id: RoundId
    investor_id: InvestorId

    amount: MoneyAmount = Field(
        description="Contribution amount in USD"
    )

    token: TokenSymbol = Field(
        description="Stablecoin used for the contribution"
    )

    status: ContributionStatus = Field(
        default="PENDING",
        description="Only CONFIRMED contributions count toward allocations"
    )

    transaction_hash: Optional[str] = None
    wallet_address: Optional[str] = None
    contributed_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None

    investor: Optional[Investor] = Field(
        default=None,
        description="Investor details, needed when building allocation reports"
    )

    @property
    def is_confirmed(self) -> bool:
        return self.status == "CONFIRMED"

    def confirm(self, now: Optional[datetime] = None) -> None:
        """Mark this contribution as confirmed.

        Args:
            now: Confirmation timestamp (default: current UTC time)

        Raises:
            InvalidStateError: If the contribution is already confirmed
        """
        if self.is_confirmed:
            raise InvalidStateError("Contribution already confirmed")
        self.status = "CONFIRMED"
        self.confirmed_at = now or utcnow()


# =============================================================================
# Round
# =============================================================================

class Round(DomainModel):
    """A time-boxed fundraising campaign.

    Example:
        Round(
            id="round-1",
            name="Seed Round",
            company_id="company-1",
            target=500_000,
            min_contribution=10_000,
            max_contribution=100_000,
            status="ACTIVE",
            accepted_tokens=["USDC", "USDT"],
            start_date=datetime(2024, 1, 1),
            end_date=datetime(2024, 3, 1),
        )
    """

    id: RoundId
    name: str
    company_id: CompanyId
    description: Optional[str] = None

    target: NonNegativeMoney = Field(
        description="Fundraising target in USD"
    )

    raised: NonNegativeMoney = Field(
        default=0.0,
        description="Sum of confirmed contributions in USD"
    )

    min_contribution: NonNegativeMoney = Field(
        description="Smallest single contribution accepted"
    )

    max_contribution: NonNegativeMoney = Field(
        description="Largest total contribution one investor may make"
    )

    status: RoundStatus = "DRAFT"

    accepted_tokens: List[TokenSymbol] = Field(
        default_factory=list,
        description="Stablecoins accepted for contributions"
    )

    start_date: datetime
    end_date: datetime

    contributions: List[Contribution] = Field(
        default_factory=list,
        description="Contributions made to this round (any status)"
    )

    @model_validator(mode='after')
    def validate_contribution_bounds(self):
        """Reject rounds whose minimum contribution exceeds the maximum."""
        if self.min_contribution > self.max_contribution:
            raise ValueError("min_contribution cannot exceed max_contribution")
        return self

    @property
    def is_finished(self) -> bool:
        return self.status in FINISHED_ROUND_STATUSES

    @property
    def confirmed_contributions(self) -> List[Contribution]:
        """Contributions that count toward raised amounts and allocations."""
        return [c for c in self.contributions if c.is_confirmed]

    @property
    def participants(self) -> int:
        """Number of distinct investors with a confirmed contribution."""
        return len({c.investor_id for c in self.confirmed_contributions})

    def close(self) -> None:
        """Stop accepting contributions.

        Raises:
            InvalidStateError: If the round is already CLOSED or COMPLETED
        """
        if self.is_finished:
            raise InvalidStateError("Round is already closed")
        self.status = "CLOSED"

    def total_confirmed_for(self, investor_id: str) -> float:
        """Sum of an investor's confirmed contributions to this round."""
        return reduce(
            operator.add,
            (c.amount for c in self.confirmed_contributions if c.investor_id == investor_id),
            0.0,
        )


# =============================================================================
# Invitation
# =============================================================================

class Invitation(DomainModel):
    """An invitation for one investor to join one round.

    The token is single-use and expires a fixed number of days after
    creation (see ``fundraising_domain.invitations``).
    """

    id: str
    round_id: RoundId
    investor_id: InvestorId

    status: InvitationStatus = "SENT"

    token: str = Field(
        description="Secret token embedded in the invitation link"
    )

    expires_at: datetime
    sent_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    used_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """True once ``now`` is past ``expires_at``."""
        return is_date_in_past(self.expires_at, now)

    def accept(self, now: Optional[datetime] = None) -> None:
        """Accept the invitation.

        Args:
            now: Acceptance timestamp (default: current UTC time)

        Raises:
            DomainValidationError: If the invitation expired or was already accepted
        """
        now = now or utcnow()
        if self.is_expired(now):
            raise DomainValidationError("Invitation has expired", code=ErrorCodes.INVALID_INPUT)
        if self.status == "ACCEPTED":
            raise DomainValidationError(
                "Invitation has already been accepted", code=ErrorCodes.INVALID_INPUT
            )
        self.status = "ACCEPTED"
        self.responded_at = now
        self.used_at = now
