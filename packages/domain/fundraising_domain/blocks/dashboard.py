"""Company dashboard computation block.

Output:
- dashboard_export_data: DashboardExportData (rounds, activity, headline stats)
- rounds_frame: One row per round with progress and participation
"""

from typing import List

import pandas as pd

from .base import Block, BlockContext
from ..dashboard import prepare_dashboard_export_data
from ..formatters import calculate_percentage

ROUNDS_FRAME_COLUMNS = [
    "round_id",
    "name",
    "status",
    "raised",
    "target",
    "progress_pct",
    "participants",
    "start_date",
    "end_date",
    "min_contribution",
    "max_contribution",
    "accepted_tokens",
]


class DashboardBlock(Block):
    """Aggregates rounds and recent activity for the company dashboard.

    Inputs (from context):
        - rounds: List[Round]
        - recent_activity: List[RecentActivity]

    Outputs (to context):
        - dashboard_export_data: DashboardExportData
        - rounds_frame: DataFrame in input order; progress_pct is a whole
          percentage of target, accepted_tokens is "; "-joined
    """

    def __init__(self, rounds_key: str = "rounds", activity_key: str = "recent_activity"):
        self.rounds_key = rounds_key
        self.activity_key = activity_key

    def inputs(self) -> List[str]:
        return [self.rounds_key, self.activity_key]

    def outputs(self) -> List[str]:
        return ["dashboard_export_data", "rounds_frame"]

    def execute(self, context: BlockContext) -> None:
        rounds = context.get(self.rounds_key)
        recent_activity = context.get(self.activity_key)

        context.set(
            "dashboard_export_data",
            prepare_dashboard_export_data(rounds, recent_activity),
        )

        rows = [
            {
                "round_id": r.id,
                "name": r.name,
                "status": r.status,
                "raised": r.raised,
                "target": r.target,
                "progress_pct": calculate_percentage(r.raised, r.target),
                "participants": r.participants,
                "start_date": r.start_date,
                "end_date": r.end_date,
                "min_contribution": r.min_contribution,
                "max_contribution": r.max_contribution,
                "accepted_tokens": "; ".join(r.accepted_tokens),
            }
            for r in rounds
        ]
        context.set("rounds_frame", pd.DataFrame(rows, columns=ROUNDS_FRAME_COLUMNS))
