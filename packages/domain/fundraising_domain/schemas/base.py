"""Base classes and type system for fundraising domain models.

This module provides the foundational types and base classes used throughout
the fundraising schema system.

Amounts are plain floats rather than Decimals: allocation math follows
IEEE-754 semantics end to end (a zero token price yields infinity, an empty
round yields NaN percentages) and the export documents carry full
floating-point precision.
"""

from typing import Annotated, Literal
from pydantic import BaseModel, Field, ConfigDict

# =============================================================================
# Base Model
# =============================================================================

class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for all Pydantic models in the domain layer:
    - Validation on assignment for runtime safety
    - Literal/enum value serialization
    """

    model_config = ConfigDict(
        frozen=False,  # Entities change status over their lifecycle
        validate_assignment=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )


class FrozenDomainModel(DomainModel):
    """Base class for derived, read-only records (allocations, reports)."""

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Type Aliases - Numeric
# =============================================================================

MoneyAmount = Annotated[
    float,
    Field(description="Currency amount in USD (sign not enforced)")
]

NonNegativeMoney = Annotated[
    float,
    Field(ge=0, description="Currency amount in USD (non-negative)")
]

TokenAmount = Annotated[
    float,
    Field(description="Number of tokens (may be infinite for a zero token price)")
]

TokenPrice = Annotated[
    float,
    Field(description="Price of one token in USD")
]

Percentage = Annotated[
    float,
    Field(description="Percentage on a 0-100 scale (NaN when the round raised nothing)")
]


# =============================================================================
# ID Conventions
# =============================================================================

RoundId = Annotated[
    str,
    Field(min_length=1, description="Opaque identifier of a fundraising round")
]

InvestorId = Annotated[
    str,
    Field(min_length=1, description="Opaque identifier of an investor")
]

CompanyId = Annotated[
    str,
    Field(min_length=1, description="Opaque identifier of the company running rounds")
]

TokenSymbol = Annotated[
    str,
    Field(min_length=1, description="Stablecoin accepted for contributions (e.g., 'USDC')")
]


# =============================================================================
# Statuses
# =============================================================================

RoundStatus = Literal["DRAFT", "ACTIVE", "CLOSED", "COMPLETED"]
InvestorStatus = Literal["INVITED", "ACTIVE", "INACTIVE"]
ContributionStatus = Literal["PENDING", "CONFIRMED", "FAILED"]
InvitationStatus = Literal["SENT", "VIEWED", "ACCEPTED", "DECLINED"]

# Round statuses that no longer accept contributions
FINISHED_ROUND_STATUSES = ("CLOSED", "COMPLETED")

# Tokens the platform accepts as contribution currency
SUPPORTED_TOKENS = ("USDC", "USDT")
