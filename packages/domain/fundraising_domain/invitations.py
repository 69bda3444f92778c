"""Invitation tokens, expiry and links."""

import secrets
import uuid
from datetime import datetime, timedelta
from typing import Optional

from .config import settings
from .dates import DateLike, _now, is_date_in_past
from .schemas import Invitation


def generate_invitation_token() -> str:
    """64 hex characters from 32 cryptographically secure random bytes."""
    return secrets.token_hex(32)


def get_invitation_expiry(now: Optional[DateLike] = None, days: Optional[int] = None) -> datetime:
    """Expiry timestamp ``days`` after ``now`` (default: configured expiry days)."""
    if days is None:
        days = settings.INVITATION_EXPIRY_DAYS
    return _now(now) + timedelta(days=days)


def is_invitation_expired(expires_at: DateLike, now: Optional[DateLike] = None) -> bool:
    return is_date_in_past(expires_at, now)


def generate_invitation_link(token: str, base_url: Optional[str] = None) -> str:
    """Build the accept link, e.g. ``https://app.example/invite/accept?token=abc``."""
    url = base_url or settings.APP_URL
    return f"{url}/invite/accept?token={token}"


def create_invitation(
    round_id: str,
    investor_id: str,
    now: Optional[DateLike] = None,
    expiry_days: Optional[int] = None,
) -> Invitation:
    """Create a SENT invitation with a fresh token and expiry."""
    sent_at = _now(now)
    return Invitation(
        id=str(uuid.uuid4()),
        round_id=round_id,
        investor_id=investor_id,
        token=generate_invitation_token(),
        expires_at=get_invitation_expiry(sent_at, expiry_days),
        sent_at=sent_at,
    )
