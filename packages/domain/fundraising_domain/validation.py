"""Form-level validation rules for rounds and contributions.

Each rule returns a ``ValidationResult`` rather than raising, so a caller can
collect several messages before responding. Use ``ValidationResult.raise_if_invalid``
to turn a failure into a ``DomainValidationError``.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .config import Settings, settings
from .dates import DateLike, _now, to_datetime
from .errors import DomainValidationError
from .formatters import format_number

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
WALLET_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation rule."""

    is_valid: bool
    error: Optional[str] = None

    def raise_if_invalid(self) -> None:
        if not self.is_valid:
            raise DomainValidationError(self.error or "Validation failed")


VALID = ValidationResult(is_valid=True)


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error=message)


def _usd(amount: float) -> str:
    return f"${format_number(amount)}"


def validate_contribution(
    amount: float,
    min_contribution: float,
    max_contribution: float,
) -> ValidationResult:
    """Check an amount against a round's contribution limits."""
    if amount < min_contribution:
        return _invalid(f"Contribution must be at least {_usd(min_contribution)}")
    if amount > max_contribution:
        return _invalid(f"Contribution cannot exceed {_usd(max_contribution)}")
    return VALID


def validate_target(target: float, config: Optional[Settings] = None) -> ValidationResult:
    """Check a fundraising target against the configured bounds."""
    config = config or settings
    if target < config.MIN_TARGET:
        return _invalid(f"Target must be at least {_usd(config.MIN_TARGET)}")
    if target > config.MAX_TARGET:
        return _invalid(f"Target cannot exceed {_usd(config.MAX_TARGET)}")
    return VALID


def validate_contribution_limits(
    min_contribution: float,
    max_contribution: float,
    config: Optional[Settings] = None,
) -> ValidationResult:
    """Check a round's min/max contribution pair."""
    config = config or settings
    if min_contribution >= max_contribution:
        return _invalid("Minimum contribution must be less than maximum contribution")
    if min_contribution < config.MIN_CONTRIBUTION:
        return _invalid(
            f"Minimum contribution must be at least {_usd(config.MIN_CONTRIBUTION)}"
        )
    return VALID


def validate_date_range(
    start_date: DateLike,
    end_date: DateLike,
    now: Optional[DateLike] = None,
) -> ValidationResult:
    """Check that a round ends after it starts and has not ended yet."""
    start = to_datetime(start_date)
    end = to_datetime(end_date)

    if start >= end:
        return _invalid("End date must be after start date")
    if end < _now(now):
        return _invalid("End date must be in the future")
    return VALID


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_wallet_address(address: str) -> bool:
    """Basic Ethereum address check: ``0x`` followed by 40 hex digits."""
    return bool(WALLET_ADDRESS_PATTERN.match(address))
