"""Round operations: allocation runs, contribution rules and status changes.

These functions sit in front of the pure calculator. They validate caller
input, raise ``FundraisingError`` subclasses for rule violations and emit an
audit entry for every state change.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .audit import log_contribution_confirmed, log_round_closed, log_token_allocation
from .dates import DateLike, _now
from .errors import DomainValidationError, ErrorCodes, InvalidStateError
from .formatters import format_number
from .schemas import AllocationReport, AuditLogEntry, Contribution, Round, VestingConfig
from .token_allocation import aggregate_contributions, build_allocation_report

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


@dataclass
class AllocationResult:
    """Allocation report plus the audit entry recording the run."""

    report: AllocationReport
    audit_entry: AuditLogEntry


# =============================================================================
# Vesting input
# =============================================================================

def _lenient_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if match:
            return int(match.group(1))
    return 0


def _lenient_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value) if not math.isnan(value) else 0.0
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if match:
            return float(match.group(1))
    return 0.0


def parse_vesting_config(raw: Optional[Mapping[str, Any]]) -> Optional[VestingConfig]:
    """Coerce request-style vesting input into a ``VestingConfig``.

    Accepts numbers or numeric strings. Cliff and duration are truncated to
    whole months; anything unparseable becomes 0. A leading "Infinity" is
    read as an infinite TGE percentage. ``None`` means no vesting.

    Example:
        parse_vesting_config({"cliff": "12", "duration": 24.9, "tge": "10.5%"})
        → VestingConfig(cliff=12, duration=24, tge=10.5)
    """
    if raw is None:
        return None
    return VestingConfig(
        cliff=_lenient_int(raw.get("cliff")),
        duration=_lenient_int(raw.get("duration")),
        tge=_lenient_float(raw.get("tge")),
    )


# =============================================================================
# Allocation
# =============================================================================

def generate_allocation_report(
    round: Round,
    token_price: Optional[float],
    vesting_config: Optional[VestingConfig] = None,
    actor_id: Optional[str] = None,
    now: Optional[DateLike] = None,
) -> AllocationResult:
    """Compute token allocations for a round's confirmed contributions.

    Args:
        round: Round with contributions (and embedded investors) loaded
        token_price: USD price per token, must be positive
        vesting_config: Optional vesting terms attached to every allocation
        actor_id: Company user running the allocation (default: round's company)
        now: Report timestamp (default: current UTC time)

    Returns:
        AllocationResult with the report and its TOKEN_ALLOCATION audit entry

    Raises:
        DomainValidationError: If the token price is missing or not positive,
            or the round has no confirmed contributions
    """
    if token_price is None or not token_price > 0:
        raise DomainValidationError("Valid token price is required")

    confirmed = round.confirmed_contributions
    if not confirmed:
        raise DomainValidationError("No confirmed contributions in this round")

    generated_at = _now(now)
    report = build_allocation_report(
        round_id=round.id,
        round_name=round.name,
        contributions=aggregate_contributions(confirmed),
        token_price=token_price,
        vesting_config=vesting_config,
        generated_at=generated_at,
    )

    audit_entry = log_token_allocation(
        round.id,
        actor_id or round.company_id,
        metadata={
            "tokenPrice": token_price,
            "totalTokens": report.total_tokens,
            "investorCount": report.investor_count,
            "roundName": round.name,
        },
        now=generated_at,
    )

    logger.info(
        "Generated allocation for round %s at $%s/token: %d investors, %s tokens",
        round.id,
        token_price,
        report.investor_count,
        report.total_tokens,
    )
    return AllocationResult(report=report, audit_entry=audit_entry)


# =============================================================================
# Contributions
# =============================================================================

def check_contribution_allowed(
    round: Round,
    amount: float,
    token: str,
    existing_total: float = 0.0,
) -> None:
    """Check a new contribution against the round's rules.

    Args:
        round: Round receiving the contribution
        amount: Contribution amount in USD
        token: Stablecoin symbol
        existing_total: Investor's confirmed contributions to this round so far

    Raises:
        InvalidStateError: If the round is not ACTIVE
        DomainValidationError: If the amount breaks a limit or the token is not accepted
    """
    if round.status != "ACTIVE":
        raise InvalidStateError(
            "This round is not currently accepting contributions", status_code=400
        )

    if amount < round.min_contribution:
        raise DomainValidationError(
            f"Contribution must be at least ${format_number(round.min_contribution)}",
            code=ErrorCodes.INVALID_INPUT,
        )

    if existing_total + amount > round.max_contribution:
        raise DomainValidationError(
            f"Total contribution cannot exceed ${format_number(round.max_contribution)}. "
            f"You have already contributed ${format_number(existing_total)}.",
            code=ErrorCodes.INVALID_INPUT,
        )

    if token not in round.accepted_tokens:
        raise DomainValidationError(
            f"This round does not accept {token}. "
            f"Accepted tokens: {', '.join(round.accepted_tokens)}",
            code=ErrorCodes.INVALID_INPUT,
        )


def confirm_contribution(
    round: Round,
    contribution: Contribution,
    actor_id: Optional[str] = None,
    now: Optional[DateLike] = None,
) -> AuditLogEntry:
    """Confirm a pending contribution and add it to the round's raised total.

    Raises:
        InvalidStateError: If the contribution is already confirmed
    """
    confirmed_at = _now(now)
    contribution.confirm(confirmed_at)
    round.raised += contribution.amount

    logger.info(
        "Confirmed contribution %s of $%s to round %s",
        contribution.id,
        contribution.amount,
        round.id,
    )
    return log_contribution_confirmed(
        contribution.id,
        actor_id or round.company_id,
        {"status": contribution.status, "confirmedAt": confirmed_at.isoformat()},
        now=confirmed_at,
    )


def close_round(
    round: Round,
    actor_id: Optional[str] = None,
    now: Optional[DateLike] = None,
) -> AuditLogEntry:
    """Close an open round.

    Raises:
        InvalidStateError: If the round is already CLOSED or COMPLETED
    """
    round.close()
    logger.info("Closed round %s", round.id)
    return log_round_closed(round.id, actor_id or round.company_id, now=now)
