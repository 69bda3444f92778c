"""Audit log entries.

Every state-changing operation (round created, contribution confirmed,
allocation generated, ...) produces an ``AuditLogEntry``. Entries are
returned to the caller for storage; see ``fundraising_domain.audit`` for the
builders.
"""

from datetime import datetime
from typing import Any, Dict, Literal
from pydantic import Field

from .base import DomainModel


AuditAction = Literal[
    "CREATE",
    "UPDATE",
    "CLOSE_ROUND",
    "CONTRIBUTE",
    "CONFIRM_CONTRIBUTION",
    "INVITE",
    "TOKEN_ALLOCATION",
]

UserType = Literal["company", "investor"]

EntityType = Literal["Round", "Contribution", "Invitation", "Investor"]


class AuditLogEntry(DomainModel):
    """Record of who did what to which entity.

    ``changes`` holds either ``{"created": <snapshot>}`` for creations or
    ``{field: {"from": old, "to": new}}`` for updates. ``metadata`` carries
    operation context (e.g. token price and investor count for allocations).
    """

    entity_type: EntityType
    entity_id: str
    action: AuditAction
    user_id: str
    user_type: UserType

    changes: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    timestamp: datetime = Field(
        description="When the operation happened"
    )
