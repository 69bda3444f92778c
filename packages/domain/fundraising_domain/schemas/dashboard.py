"""Company dashboard export models."""

from typing import List
from pydantic import Field

from .base import DomainModel, MoneyAmount
from .rounds import Round


class RecentActivity(DomainModel):
    """One line of the dashboard's recent-activity feed."""

    investor: str = Field(description="Investor display name")
    round: str = Field(description="Round display name")
    amount: MoneyAmount
    time: str = Field(description="Pre-rendered relative time (e.g. '2 hours ago')")


class DashboardStats(DomainModel):
    """Headline numbers shown at the top of the dashboard."""

    total_raised: MoneyAmount
    active_rounds_count: int
    total_investors: int
    total_rounds_count: int
    completed_rounds_count: int


class DashboardExportData(DomainModel):
    """Everything the dashboard CSV export needs."""

    rounds: List[Round] = Field(default_factory=list)
    recent_activity: List[RecentActivity] = Field(default_factory=list)
    stats: DashboardStats
