"""Company dashboard CSV export.

The export has four titled sections separated by blank lines:

    DASHBOARD SUMMARY
    Metric,Value
    ...

    ACTIVE ROUNDS
    ...

    ALL ROUNDS SUMMARY
    ...

    RECENT ACTIVITY
    ...
"""

from datetime import date
from typing import List, Optional

from fundraising_domain.config import DisplayFormat
from fundraising_domain.formatters import calculate_percentage, format_currency, format_date
from fundraising_domain.schemas import DashboardExportData, Round

from .csv_utils import to_csv

SUMMARY_HEADERS = ["Metric", "Value"]

ACTIVE_ROUNDS_HEADERS = [
    "Round Name",
    "Status",
    "Raised",
    "Target",
    "Progress",
    "Participants",
    "Start Date",
    "End Date",
    "Min Contribution",
    "Max Contribution",
    "Accepted Tokens",
]

ALL_ROUNDS_HEADERS = ACTIVE_ROUNDS_HEADERS[:8]

ACTIVITY_HEADERS = ["Investor", "Round", "Amount", "Time"]


def _round_row(round: Round, fmt: Optional[DisplayFormat]) -> List[str]:
    return [
        round.name,
        round.status,
        format_currency(round.raised, fmt=fmt),
        format_currency(round.target, fmt=fmt),
        f"{calculate_percentage(round.raised, round.target)}%",
        str(round.participants),
        format_date(round.start_date, fmt=fmt),
        format_date(round.end_date, fmt=fmt),
    ]


def export_dashboard_to_csv(data: DashboardExportData, fmt: Optional[DisplayFormat] = None) -> str:
    """Render dashboard stats, rounds and recent activity as one CSV document.

    Args:
        data: Output of ``prepare_dashboard_export_data``
        fmt: Display format for currency and dates (default: configured locale)
    """
    stats = data.stats
    content = "DASHBOARD SUMMARY\n"
    content += to_csv(
        [
            ["Total Raised", format_currency(stats.total_raised, fmt=fmt)],
            ["Total Rounds", str(stats.total_rounds_count)],
            ["Active Rounds", str(stats.active_rounds_count)],
            ["Completed Rounds", str(stats.completed_rounds_count)],
            ["Total Investors", str(stats.total_investors)],
        ],
        SUMMARY_HEADERS,
    )
    content += "\n\n"

    content += "ACTIVE ROUNDS\n"
    active_rounds = [r for r in data.rounds if r.status == "ACTIVE"]
    if active_rounds:
        content += to_csv(
            [
                _round_row(r, fmt) + [
                    format_currency(r.min_contribution, fmt=fmt),
                    format_currency(r.max_contribution, fmt=fmt),
                    "; ".join(r.accepted_tokens),
                ]
                for r in active_rounds
            ],
            ACTIVE_ROUNDS_HEADERS,
        )
    else:
        content += "No active rounds\n"
    content += "\n\n"

    content += "ALL ROUNDS SUMMARY\n"
    if data.rounds:
        content += to_csv([_round_row(r, fmt) for r in data.rounds], ALL_ROUNDS_HEADERS)
    else:
        content += "No rounds\n"
    content += "\n\n"

    content += "RECENT ACTIVITY\n"
    if data.recent_activity:
        content += to_csv(
            [
                [a.investor, a.round, format_currency(a.amount, fmt=fmt), a.time]
                for a in data.recent_activity
            ],
            ACTIVITY_HEADERS,
        )
    else:
        content += "No recent activity\n"

    return content


def dashboard_export_filename(today: date) -> str:
    return f"dashboard-export-{today.isoformat()}.csv"
