"""Fundraising domain schemas.

This package contains all Pydantic models for the fundraising domain layer:
- Base types and conventions
- Token allocation inputs, results and reports
- Rounds, investors, contributions and invitations
- Audit log entries
- Dashboard export data

Usage:
    from fundraising_domain.schemas import (
        ContributionInput, VestingConfig, TokenAllocation, AllocationReport,
        Round, Contribution, Investor, Invitation
    )
"""

# Base types
from .base import (
    DomainModel,
    FrozenDomainModel,
    MoneyAmount,
    NonNegativeMoney,
    TokenAmount,
    TokenPrice,
    Percentage,
    RoundId,
    InvestorId,
    CompanyId,
    TokenSymbol,
    RoundStatus,
    InvestorStatus,
    ContributionStatus,
    InvitationStatus,
    SUPPORTED_TOKENS,
)

# Token allocation
from .allocation import (
    VestingConfig,
    ContributionInput,
    TokenAllocation,
    AllocationReport,
)

# Fundraising entities
from .rounds import (
    Investor,
    Contribution,
    Round,
    Invitation,
)

# Audit
from .audit import (
    AuditLogEntry,
    AuditAction,
    UserType,
)

# Dashboard
from .dashboard import (
    RecentActivity,
    DashboardStats,
    DashboardExportData,
)

__all__ = [
    # Base types
    "DomainModel",
    "FrozenDomainModel",
    "MoneyAmount",
    "NonNegativeMoney",
    "TokenAmount",
    "TokenPrice",
    "Percentage",
    "RoundId",
    "InvestorId",
    "CompanyId",
    "TokenSymbol",
    "RoundStatus",
    "InvestorStatus",
    "ContributionStatus",
    "InvitationStatus",
    "SUPPORTED_TOKENS",
    # Token allocation
    "VestingConfig",
    "ContributionInput",
    "TokenAllocation",
    "AllocationReport",
    # Fundraising entities
    "Investor",
    "Contribution",
    "Round",
    "Invitation",
    # Audit
    "AuditLogEntry",
    "AuditAction",
    "UserType",
    # Dashboard
    "RecentActivity",
    "DashboardStats",
    "DashboardExportData",
]
