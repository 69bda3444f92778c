"""Company dashboard aggregation."""

from typing import Sequence

from .schemas import DashboardExportData, DashboardStats, RecentActivity, Round
from .schemas.base import FINISHED_ROUND_STATUSES
from .token_allocation import running_sum


def prepare_dashboard_export_data(
    rounds: Sequence[Round],
    recent_activity: Sequence[RecentActivity],
) -> DashboardExportData:
    """Bundle rounds and recent activity with headline stats.

    Completed rounds are those CLOSED or COMPLETED. ``total_investors`` counts
    distinct investor names in the recent-activity feed.
    """
    stats = DashboardStats(
        total_raised=running_sum(r.raised for r in rounds),
        active_rounds_count=sum(1 for r in rounds if r.status == "ACTIVE"),
        total_investors=len({a.investor for a in recent_activity}),
        total_rounds_count=len(rounds),
        completed_rounds_count=sum(1 for r in rounds if r.status in FINISHED_ROUND_STATUSES),
    )
    return DashboardExportData(
        rounds=list(rounds),
        recent_activity=list(recent_activity),
        stats=stats,
    )
