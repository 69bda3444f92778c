"""Allocation exports for the Magna vesting platform.

Two documents describe the same AllocationReport:

- CSV: one always-quoted row per investor with fixed decimal places and the
  round's vesting terms, for the platform's bulk import screen.
- JSON: nested metadata + allocations document for API integration.

Both are pure functions of the report, so exporting the same report twice
yields identical bytes.
"""

import json
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from fundraising_domain.config import DisplayFormat
from fundraising_domain.formatters import format_js_number, format_locale_date, to_fixed
from fundraising_domain.schemas import AllocationReport, TokenAllocation

EXPORT_VERSION = "1.0"
PLATFORM_NAME = "Magna Fundraising Platform"

MAGNA_CSV_HEADERS = [
    "Investor Name",
    "Email",
    "Wallet Address",
    "Contribution (USD)",
    "Token Amount",
    "Percentage",
    "Cliff (months)",
    "Vesting Duration (months)",
    "TGE Unlock %",
    "Notes",
]


# =============================================================================
# CSV
# =============================================================================

def _vesting_cell(value: Optional[float]) -> str:
    # Missing, zero and NaN terms all render as 0
    if not value or math.isnan(value):
        return "0"
    return format_js_number(value)


def _csv_row(allocation: TokenAllocation, notes: str) -> List[str]:
    vesting = allocation.vesting_schedule
    return [
        allocation.investor_name,
        allocation.investor_email,
        allocation.wallet_address or "",
        to_fixed(allocation.contribution_amount, 2),
        to_fixed(allocation.token_amount, 6),
        to_fixed(allocation.percentage, 4),
        _vesting_cell(vesting.cliff if vesting else None),
        _vesting_cell(vesting.duration if vesting else None),
        _vesting_cell(vesting.tge if vesting else None),
        notes,
    ]


def export_to_magna_csv(report: AllocationReport, fmt: Optional[DisplayFormat] = None) -> str:
    """Render the report as the platform's import CSV.

    Every field is wrapped in double quotes. Embedded quotes are passed
    through unescaped, matching what the platform's importer accepts.

    Args:
        report: Allocation report to export
        fmt: Display format for the date in the Notes column (default: configured locale)

    Returns:
        Header row plus one row per allocation, joined with ``\\n``

    Example:
        "Investor Name","Email","Wallet Address",...
        "Alice","alice@example.com","0xabc...","100000.00","200000.000000","22.2222","12","24","10","Seed - Generated 1/15/2024"
    """
    notes = f"{report.round_name} - Generated {format_locale_date(report.generated_at, fmt)}"

    rows = [MAGNA_CSV_HEADERS]
    rows.extend(_csv_row(allocation, notes) for allocation in report.allocations)

    return "\n".join(",".join(f'"{cell}"' for cell in row) for row in rows)


# =============================================================================
# JSON
# =============================================================================

def _json_number(value: float) -> Any:
    """Native JSON number: integral values as ints, non-finite as null."""
    if not math.isfinite(value):
        return None
    if float(value).is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def _iso_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with milliseconds and Z suffix (2024-01-15T00:00:00.000Z)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _allocation_document(allocation: TokenAllocation) -> Dict[str, Any]:
    vesting = allocation.vesting_schedule
    return {
        "investor": {
            "id": allocation.investor_id,
            "name": allocation.investor_name,
            "email": allocation.investor_email,
            "walletAddress": allocation.wallet_address or None,
        },
        "contribution": {
            "amount": _json_number(allocation.contribution_amount),
            "currency": "USD",
        },
        "tokens": {
            "amount": _json_number(allocation.token_amount),
            "percentage": _json_number(allocation.percentage),
        },
        "vesting": {
            "cliff": _json_number(vesting.cliff),
            "duration": _json_number(vesting.duration),
            "tge": _json_number(vesting.tge),
        } if vesting else None,
    }


def build_export_document(report: AllocationReport) -> Dict[str, Any]:
    """The JSON export as a plain dict, keys in document order."""
    return {
        "metadata": {
            "roundId": report.round_id,
            "roundName": report.round_name,
            "totalRaised": _json_number(report.total_raised),
            "totalTokens": _json_number(report.total_tokens),
            "tokenPrice": _json_number(report.token_price),
            "generatedAt": _iso_timestamp(report.generated_at),
            "exportVersion": EXPORT_VERSION,
            "platform": PLATFORM_NAME,
        },
        "allocations": [_allocation_document(a) for a in report.allocations],
    }


def export_to_json(report: AllocationReport) -> str:
    """Render the report as the platform's JSON document (2-space indent).

    Absent wallets and vesting terms are explicit ``null``. Non-finite numbers
    (from a zero token price or an empty round) also serialize as ``null``.
    """
    return json.dumps(build_export_document(report), indent=2, ensure_ascii=False)


# =============================================================================
# File names
# =============================================================================

def allocation_export_filename(round_name: str, today: date, extension: str) -> str:
    """e.g. ``Seed-Round-token-allocation-2024-01-15.csv``."""
    slug = re.sub(r"\s+", "-", round_name)
    return f"{slug}-token-allocation-{today.isoformat()}.{extension}"
