"""Computation blocks for token allocation and dashboard analysis.

This package contains the computation layer that transforms domain schemas into
DataFrames suitable for spreadsheet rendering or other consumption.

Architecture:
    Schemas (data models) → Blocks (computation) → DataFrames (output)

Available blocks:
- AllocationBlock: Converts AllocationReport to per-investor and summary DataFrames
- DashboardBlock: Aggregates rounds and recent activity for the dashboard export

Usage:
    from fundraising_domain.blocks import AllocationBlock, BlockContext, BlockExecutor

    context = BlockContext()
    context.set("allocation_report", report)
    BlockExecutor([AllocationBlock()]).execute(context)

    by_investor_df = context.get("allocation_by_investor")
"""

from .base import Block, BlockExecutor, BlockContext, CircularDependencyError
from .allocation import AllocationBlock
from .dashboard import DashboardBlock

__all__ = [
    "Block",
    "BlockExecutor",
    "BlockContext",
    "CircularDependencyError",
    "AllocationBlock",
    "DashboardBlock",
]
