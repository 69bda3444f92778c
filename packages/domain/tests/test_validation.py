"""Tests for form-level validation rules."""

from datetime import datetime, timedelta, timezone

import pytest

from fundraising_domain.config import Settings
from fundraising_domain.errors import DomainValidationError
from fundraising_domain.validation import (
    ValidationResult,
    validate_contribution,
    validate_contribution_limits,
    validate_date_range,
    validate_email,
    validate_target,
    validate_wallet_address,
)

NOW = datetime(2024, 1, 15, tzinfo=timezone.utc)


class TestValidateContribution:

    def test_within_limits(self):
        assert validate_contribution(5_000, 1_000, 10_000) == ValidationResult(is_valid=True)

    def test_below_minimum(self):
        result = validate_contribution(500, 1_000, 10_000)
        assert not result.is_valid
        assert result.error == "Contribution must be at least $1,000"

    def test_above_maximum(self):
        result = validate_contribution(15_000, 1_000, 10_000)
        assert result.error == "Contribution cannot exceed $10,000"

    def test_bounds_inclusive(self):
        assert validate_contribution(1_000, 1_000, 10_000).is_valid
        assert validate_contribution(10_000, 1_000, 10_000).is_valid


class TestValidateTarget:

    def test_valid(self):
        assert validate_target(500_000).is_valid

    def test_too_small(self):
        assert validate_target(5_000).error == "Target must be at least $10,000"

    def test_too_large(self):
        assert validate_target(2_000_000_000).error == "Target cannot exceed $1,000,000,000"

    def test_custom_bounds(self):
        config = Settings(MIN_TARGET=1_000_000)
        assert validate_target(500_000, config).error == "Target must be at least $1,000,000"


class TestValidateContributionLimits:

    def test_valid(self):
        assert validate_contribution_limits(1_000, 50_000).is_valid

    @pytest.mark.parametrize("minimum,maximum", [(50_000, 50_000), (60_000, 50_000)])
    def test_min_not_below_max(self, minimum, maximum):
        result = validate_contribution_limits(minimum, maximum)
        assert result.error == "Minimum contribution must be less than maximum contribution"

    def test_min_below_floor(self):
        result = validate_contribution_limits(500, 50_000)
        assert result.error == "Minimum contribution must be at least $1,000"


class TestValidateDateRange:

    def test_valid(self):
        assert validate_date_range(NOW, NOW + timedelta(days=30), now=NOW).is_valid

    def test_end_before_start(self):
        result = validate_date_range(NOW + timedelta(days=5), NOW + timedelta(days=1), now=NOW)
        assert result.error == "End date must be after start date"

    def test_end_in_past(self):
        result = validate_date_range(NOW - timedelta(days=30), NOW - timedelta(days=1), now=NOW)
        assert result.error == "End date must be in the future"

    def test_iso_strings(self):
        assert validate_date_range("2024-02-01", "2024-03-01", now=NOW).is_valid


def test_validate_email():
    assert validate_email("alice@example.com")
    assert not validate_email("alice@example")
    assert not validate_email("alice example@example.com")
    assert not validate_email("")


def test_validate_wallet_address():
    assert validate_wallet_address("0x" + "a1B2" * 10)
    assert not validate_wallet_address("0x" + "a" * 39)
    assert not validate_wallet_address("a" * 42)
    assert not validate_wallet_address("0x" + "g" * 40)


def test_raise_if_invalid():
    validate_contribution(5_000, 1_000, 10_000).raise_if_invalid()

    with pytest.raises(DomainValidationError, match="at least \\$1,000") as exc_info:
        validate_contribution(1, 1_000, 10_000).raise_if_invalid()
    assert exc_info.value.status_code == 400
