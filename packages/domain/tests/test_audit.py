"""Tests for audit log builders."""

import logging
from datetime import datetime, timezone

from fundraising_domain.audit import (
    create_audit_log,
    get_changes,
    log_contribution_confirmed,
    log_contribution_created,
    log_investor_created,
    log_investor_updated,
    log_invitation_sent,
    log_round_closed,
    log_round_created,
    log_round_updated,
    log_token_allocation,
)

NOW = datetime(2024, 1, 15, tzinfo=timezone.utc)


# =============================================================================
# get_changes
# =============================================================================

def test_get_changes_reports_only_differences():
    old = {"name": "Seed", "target": 500_000, "status": "DRAFT"}
    new = {"name": "Seed", "target": 750_000}

    assert get_changes(old, new) == {"target": {"from": 500_000, "to": 750_000}}


def test_get_changes_new_key():
    assert get_changes({}, {"description": "Pre-seed"}) == {
        "description": {"from": None, "to": "Pre-seed"}
    }


def test_get_changes_no_differences():
    assert get_changes({"a": 1}, {"a": 1}) == {}


# =============================================================================
# create_audit_log
# =============================================================================

def test_create_audit_log_defaults():
    entry = create_audit_log("Round", "round-1", "CREATE", "company-1", "company", now=NOW)

    assert entry.entity_type == "Round"
    assert entry.action == "CREATE"
    assert entry.changes == {}
    assert entry.metadata == {}
    assert entry.timestamp == NOW


def test_create_audit_log_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="fundraising_domain.audit"):
        create_audit_log("Round", "round-1", "CLOSE_ROUND", "company-1", "company", now=NOW)

    assert "CLOSE_ROUND Round/round-1" in caplog.text


# =============================================================================
# Helpers
# =============================================================================

class TestHelpers:

    def test_round_created(self):
        entry = log_round_created("round-1", "company-1", {"name": "Seed"}, now=NOW)
        assert (entry.entity_type, entry.action, entry.user_type) == ("Round", "CREATE", "company")
        assert entry.changes == {"created": {"name": "Seed"}}

    def test_round_updated(self):
        entry = log_round_updated("round-1", "company-1", {"target": 1}, {"target": 2}, now=NOW)
        assert entry.action == "UPDATE"
        assert entry.changes == {"target": {"from": 1, "to": 2}}

    def test_round_closed(self):
        entry = log_round_closed("round-1", "company-1", now=NOW)
        assert entry.action == "CLOSE_ROUND"
        assert entry.changes == {}

    def test_contribution_created_by_investor(self):
        entry = log_contribution_created("c1", "investor-1", {"amount": 100}, now=NOW)
        assert (entry.entity_type, entry.action) == ("Contribution", "CONTRIBUTE")
        assert (entry.user_id, entry.user_type) == ("investor-1", "investor")

    def test_contribution_confirmed(self):
        entry = log_contribution_confirmed("c1", "company-1", {"status": "CONFIRMED"}, now=NOW)
        assert entry.action == "CONFIRM_CONTRIBUTION"
        assert entry.changes == {"status": "CONFIRMED"}

    def test_invitation_sent(self):
        entry = log_invitation_sent("inv-1", "company-1", {"investorId": "i"}, now=NOW)
        assert (entry.entity_type, entry.action) == ("Invitation", "INVITE")

    def test_investor_created_and_updated(self):
        created = log_investor_created("i", "company-1", {"email": "i@x.io"}, now=NOW)
        updated = log_investor_updated("i", "company-1", {"name": "A"}, {"name": "B"}, now=NOW)
        assert created.entity_type == updated.entity_type == "Investor"
        assert updated.changes == {"name": {"from": "A", "to": "B"}}

    def test_token_allocation(self):
        entry = log_token_allocation("round-1", "company-1", {"tokenPrice": 0.5}, now=NOW)
        assert entry.action == "TOKEN_ALLOCATION"
        assert entry.metadata == {"tokenPrice": 0.5}
