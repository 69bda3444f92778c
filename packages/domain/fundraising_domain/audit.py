"""Audit log builders.

Every critical operation produces an ``AuditLogEntry``. Entries are logged
and returned; storing them is the caller's job.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .dates import DateLike, _now
from .schemas import AuditLogEntry
from .schemas.audit import AuditAction, EntityType, UserType

logger = logging.getLogger(__name__)


def get_changes(old_data: Mapping[str, Any], new_data: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Diff two records, keyed by the fields present in ``new_data``.

    Example:
        get_changes({"name": "Seed", "target": 500000}, {"target": 750000})
        → {"target": {"from": 500000, "to": 750000}}
    """
    changes: Dict[str, Dict[str, Any]] = {}
    for key, value in new_data.items():
        old_value = old_data.get(key)
        if value != old_value:
            changes[key] = {"from": old_value, "to": value}
    return changes


def create_audit_log(
    entity_type: EntityType,
    entity_id: str,
    action: AuditAction,
    user_id: str,
    user_type: UserType,
    changes: Optional[Dict[str, Any]] = None,
    metadata: Optional[Dict[str, Any]] = None,
    now: Optional[DateLike] = None,
) -> AuditLogEntry:
    """Build an audit entry and log it at INFO."""
    entry = AuditLogEntry(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        user_id=user_id,
        user_type=user_type,
        changes=changes or {},
        metadata=metadata or {},
        timestamp=_now(now),
    )
    logger.info(
        "audit %s %s/%s by %s %s",
        entry.action,
        entry.entity_type,
        entry.entity_id,
        entry.user_type,
        entry.user_id,
    )
    return entry


# =============================================================================
# Common scenarios
# =============================================================================

def log_round_created(round_id: str, company_id: str, round_data: Dict[str, Any], now=None) -> AuditLogEntry:
    return create_audit_log(
        "Round", round_id, "CREATE", company_id, "company",
        changes={"created": round_data}, now=now,
    )


def log_round_updated(
    round_id: str,
    company_id: str,
    old_data: Mapping[str, Any],
    new_data: Mapping[str, Any],
    now=None,
) -> AuditLogEntry:
    return create_audit_log(
        "Round", round_id, "UPDATE", company_id, "company",
        changes=get_changes(old_data, new_data), now=now,
    )


def log_round_closed(round_id: str, company_id: str, now=None) -> AuditLogEntry:
    return create_audit_log("Round", round_id, "CLOSE_ROUND", company_id, "company", now=now)


def log_contribution_created(
    contribution_id: str,
    investor_id: str,
    contribution_data: Dict[str, Any],
    now=None,
) -> AuditLogEntry:
    return create_audit_log(
        "Contribution", contribution_id, "CONTRIBUTE", investor_id, "investor",
        changes={"created": contribution_data}, now=now,
    )


def log_contribution_confirmed(
    contribution_id: str,
    company_id: str,
    contribution_data: Dict[str, Any],
    now=None,
) -> AuditLogEntry:
    return create_audit_log(
        "Contribution", contribution_id, "CONFIRM_CONTRIBUTION", company_id, "company",
        changes=contribution_data, now=now,
    )


def log_invitation_sent(
    invitation_id: str,
    company_id: str,
    invitation_data: Dict[str, Any],
    now=None,
) -> AuditLogEntry:
    return create_audit_log(
        "Invitation", invitation_id, "INVITE", company_id, "company",
        changes={"created": invitation_data}, now=now,
    )


def log_investor_created(
    investor_id: str,
    company_id: str,
    investor_data: Dict[str, Any],
    now=None,
) -> AuditLogEntry:
    return create_audit_log(
        "Investor", investor_id, "CREATE", company_id, "company",
        changes={"created": investor_data}, now=now,
    )


def log_investor_updated(
    investor_id: str,
    company_id: str,
    old_data: Mapping[str, Any],
    new_data: Mapping[str, Any],
    now=None,
) -> AuditLogEntry:
    return create_audit_log(
        "Investor", investor_id, "UPDATE", company_id, "company",
        changes=get_changes(old_data, new_data), now=now,
    )


def log_token_allocation(
    round_id: str,
    company_id: str,
    metadata: Dict[str, Any],
    now=None,
) -> AuditLogEntry:
    """Record an allocation run (token price, totals, investor count)."""
    return create_audit_log(
        "Round", round_id, "TOKEN_ALLOCATION", company_id, "company",
        metadata=metadata, now=now,
    )
