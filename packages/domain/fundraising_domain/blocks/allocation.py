"""Token allocation computation block.

Converts an AllocationReport into DataFrames for spreadsheet rendering or
analysis.

Output DataFrames:
- allocation_by_investor: One row per allocation, in report order
- allocation_summary: Round-level totals (single row)
"""

from typing import List

import pandas as pd

from .base import Block, BlockContext
from ..schemas import AllocationReport

BY_INVESTOR_COLUMNS = [
    "investor_id",
    "investor_name",
    "investor_email",
    "wallet_address",
    "contribution_amount",
    "token_amount",
    "percentage",
    "cliff_months",
    "vesting_months",
    "tge_pct",
]


class AllocationBlock(Block):
    """Converts an AllocationReport to allocation DataFrames.

    Inputs (from context):
        - allocation_report: AllocationReport to convert

    Outputs (to context):
        - allocation_by_investor: DataFrame with columns:
            * investor_id, investor_name, investor_email
            * wallet_address: Empty string when not provided
            * contribution_amount: USD contributed
            * token_amount: Tokens allocated
            * percentage: Share of total raised (0-100)
            * cliff_months, vesting_months, tge_pct: Vesting terms (0 without vesting)

        - allocation_summary: DataFrame with single row:
            * round_id, round_name
            * total_raised, total_tokens, token_price
            * investor_count: Number of allocations
            * wallets_provided: Allocations with a wallet address
            * wallet_coverage_pct: wallets_provided / investor_count * 100 (0 when empty)

    Rows keep report order; nothing is sorted.
    """

    def __init__(self, report_key: str = "allocation_report"):
        """Initialize AllocationBlock.

        Args:
            report_key: Context key for the AllocationReport input (default: "allocation_report")
        """
        self.report_key = report_key

    def inputs(self) -> List[str]:
        return [self.report_key]

    def outputs(self) -> List[str]:
        return [
            "allocation_by_investor",
            "allocation_summary",
        ]

    def execute(self, context: BlockContext) -> None:
        report: AllocationReport = context.get(self.report_key)

        by_investor_df = self._compute_by_investor(report)
        context.set("allocation_by_investor", by_investor_df)

        context.set("allocation_summary", self._compute_summary(report, by_investor_df))

    def _compute_by_investor(self, report: AllocationReport) -> pd.DataFrame:
        rows = []
        for allocation in report.allocations:
            vesting = allocation.vesting_schedule
            rows.append({
                "investor_id": allocation.investor_id,
                "investor_name": allocation.investor_name,
                "investor_email": allocation.investor_email,
                "wallet_address": allocation.wallet_address or "",
                "contribution_amount": allocation.contribution_amount,
                "token_amount": allocation.token_amount,
                "percentage": allocation.percentage,
                "cliff_months": vesting.cliff if vesting else 0,
                "vesting_months": vesting.duration if vesting else 0,
                "tge_pct": vesting.tge if vesting else 0.0,
            })

        return pd.DataFrame(rows, columns=BY_INVESTOR_COLUMNS)

    def _compute_summary(self, report: AllocationReport, by_investor_df: pd.DataFrame) -> pd.DataFrame:
        investor_count = len(by_investor_df)
        wallets_provided = int((by_investor_df["wallet_address"] != "").sum()) if investor_count else 0

        return pd.DataFrame([{
            "round_id": report.round_id,
            "round_name": report.round_name,
            "total_raised": report.total_raised,
            "total_tokens": report.total_tokens,
            "token_price": report.token_price,
            "investor_count": investor_count,
            "wallets_provided": wallets_provided,
            "wallet_coverage_pct": wallets_provided / investor_count * 100 if investor_count else 0.0,
        }])
