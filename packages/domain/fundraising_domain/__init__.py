"""Fundraising Domain Engine - Core domain models and business logic.

This package provides the foundational layer for token fundraising rounds:
- Rounds, investors, contributions and invitations
- Pro-rata token allocation with optional vesting terms
- Validation, formatting and audit helpers
- Computation blocks producing pandas DataFrames

The domain layer is designed to be:
- Framework-agnostic (no web or persistence dependencies)
- Testable (pure Python with Pydantic validation)
- Deterministic (every clock-dependent helper accepts an explicit ``now``)
"""

from .schemas import *  # noqa: F403, F401
from .token_allocation import (  # noqa: F401
    aggregate_contributions,
    build_allocation_report,
    calculate_token_allocations,
)

__version__ = "0.1.0"
