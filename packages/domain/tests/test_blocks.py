"""Tests for blocks architecture.

Tests cover:
- BlockContext lookups
- Topological ordering and dependency errors
- BlockExecutor input/output checks
- AllocationBlock and DashboardBlock DataFrames
"""

from datetime import datetime, timezone

import pytest

from fundraising_domain.blocks import (
    AllocationBlock,
    Block,
    BlockContext,
    BlockExecutor,
    DashboardBlock,
)
from fundraising_domain.blocks.base import CircularDependencyError, topological_sort
from fundraising_domain.schemas import (
    Contribution,
    ContributionInput,
    RecentActivity,
    Round,
    VestingConfig,
)
from fundraising_domain.token_allocation import build_allocation_report

GENERATED_AT = datetime(2024, 1, 15, tzinfo=timezone.utc)


# =============================================================================
# BlockContext Tests
# =============================================================================

def test_block_context_round_trip():
    """Values set on the context can be read back and listed."""
    context = BlockContext()
    assert not context.has("allocation_report")

    context.set("allocation_report", "report")
    context.set("rounds", [])

    assert context.get("allocation_report") == "report"
    assert context.has("rounds")
    assert set(context.keys()) == {"allocation_report", "rounds"}


def test_block_context_missing_key_lists_available():
    context = BlockContext()
    context.set("rounds", [])
    with pytest.raises(KeyError, match=r"Key 'recent_activity' not found.*rounds"):
        context.get("recent_activity")


# =============================================================================
# Ordering Tests
# =============================================================================

class StubBlock(Block):
    """Writes '<name>:done' to each declared output."""

    def __init__(self, name, inputs, outputs):
        self.name = name
        self._inputs = inputs
        self._outputs = outputs

    def inputs(self):
        return self._inputs

    def outputs(self):
        return self._outputs

    def execute(self, context):
        for key in self._outputs:
            context.set(key, f"{self.name}:done")

    def __repr__(self):
        return f"StubBlock({self.name})"


def test_topological_sort_orders_producers_first():
    report = StubBlock("report", ["contributions"], ["allocation_report"])
    frames = StubBlock("frames", ["allocation_report"], ["allocation_by_investor"])
    workbook = StubBlock("workbook", ["allocation_by_investor"], ["workbook"])

    assert topological_sort([workbook, frames, report]) == [report, frames, workbook]


def test_topological_sort_independent_consumers():
    report = StubBlock("report", [], ["allocation_report"])
    csv_block = StubBlock("csv", ["allocation_report"], ["csv"])
    json_block = StubBlock("json", ["allocation_report"], ["json"])

    ordered = topological_sort([json_block, csv_block, report])

    assert ordered[0] is report
    assert set(ordered[1:]) == {csv_block, json_block}


def test_topological_sort_cycle():
    a = StubBlock("a", ["y"], ["x"])
    b = StubBlock("b", ["x"], ["y"])
    with pytest.raises(CircularDependencyError, match="Circular dependency detected"):
        topological_sort([a, b])


def test_topological_sort_duplicate_producer():
    with pytest.raises(ValueError, match="Multiple blocks produce 'allocation_summary'"):
        topological_sort([
            StubBlock("a", [], ["allocation_summary"]),
            StubBlock("b", [], ["allocation_summary"]),
        ])


# =============================================================================
# BlockExecutor Tests
# =============================================================================

def test_block_executor_runs_chain():
    context = BlockContext()
    BlockExecutor([
        StubBlock("second", ["first_out"], ["second_out"]),
        StubBlock("first", [], ["first_out"]),
    ]).execute(context)

    assert context.get("first_out") == "first:done"
    assert context.get("second_out") == "second:done"


def test_block_executor_missing_input():
    with pytest.raises(KeyError, match="requires input 'allocation_report'"):
        BlockExecutor([AllocationBlock()]).execute(BlockContext())


def test_block_executor_missing_output():

    class SilentBlock(Block):
        def inputs(self):
            return []

        def outputs(self):
            return ["allocation_summary"]

        def execute(self, context):
            pass

    with pytest.raises(ValueError, match="declared output 'allocation_summary' but didn't write"):
        BlockExecutor([SilentBlock()]).execute(BlockContext())


# =============================================================================
# AllocationBlock Tests
# =============================================================================

def build_report(vesting=None):
    contributions = [
        ContributionInput(investor_id="b", investor_name="Bob", investor_email="bob@example.com",
                          amount=200_000),
        ContributionInput(investor_id="a", investor_name="Alice", investor_email="alice@example.com",
                          wallet_address="0xabc", amount=100_000),
    ]
    return build_allocation_report("round-1", "Seed", contributions, 0.5, vesting, GENERATED_AT)


def run_allocation_block(report):
    context = BlockContext()
    context.set("allocation_report", report)
    BlockExecutor([AllocationBlock()]).execute(context)
    return context.get("allocation_by_investor"), context.get("allocation_summary")


def test_allocation_block_by_investor():
    """One row per allocation, report order, blank wallet for missing addresses."""
    by_investor, _ = run_allocation_block(build_report())

    assert list(by_investor["investor_id"]) == ["b", "a"]
    assert list(by_investor["token_amount"]) == [400_000, 200_000]
    assert list(by_investor["wallet_address"]) == ["", "0xabc"]
    assert by_investor["percentage"].sum() == pytest.approx(100)
    assert list(by_investor["cliff_months"]) == [0, 0]


def test_allocation_block_vesting_columns():
    by_investor, _ = run_allocation_block(build_report(VestingConfig(cliff=12, duration=36, tge=15)))

    assert list(by_investor["cliff_months"]) == [12, 12]
    assert list(by_investor["vesting_months"]) == [36, 36]
    assert list(by_investor["tge_pct"]) == [15.0, 15.0]


def test_allocation_block_summary():
    _, summary = run_allocation_block(build_report())

    assert len(summary) == 1
    row = summary.iloc[0]
    assert row["total_raised"] == 300_000
    assert row["total_tokens"] == 600_000
    assert row["token_price"] == 0.5
    assert row["investor_count"] == 2
    assert row["wallets_provided"] == 1
    assert row["wallet_coverage_pct"] == 50.0


def test_allocation_block_empty_report():
    report = build_allocation_report("round-1", "Empty", [], 0.5, generated_at=GENERATED_AT)

    by_investor, summary = run_allocation_block(report)

    assert by_investor.empty
    assert "token_amount" in by_investor.columns
    assert summary.iloc[0]["investor_count"] == 0
    assert summary.iloc[0]["wallet_coverage_pct"] == 0.0


def test_allocation_block_custom_key():
    block = AllocationBlock(report_key="seed_report")
    assert block.inputs() == ["seed_report"]

    context = BlockContext()
    context.set("seed_report", build_report())
    block.execute(context)
    assert context.has("allocation_summary")


# =============================================================================
# DashboardBlock Tests
# =============================================================================

def make_round(round_id, status, raised, target=100_000, contributions=()):
    return Round(
        id=round_id,
        name=f"Round {round_id}",
        company_id="company-1",
        target=target,
        raised=raised,
        min_contribution=1_000,
        max_contribution=50_000,
        status=status,
        accepted_tokens=["USDC", "USDT"],
        start_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        end_date=datetime(2024, 6, 30, tzinfo=timezone.utc),
        contributions=list(contributions),
    )


def test_dashboard_block():
    contributions = [
        Contribution(id="c1", round_id="r1", investor_id="x", amount=10_000, token="USDC", status="CONFIRMED"),
        Contribution(id="c2", round_id="r1", investor_id="y", amount=15_000, token="USDT", status="CONFIRMED"),
    ]
    rounds = [
        make_round("r1", "ACTIVE", 25_000, contributions=contributions),
        make_round("r2", "COMPLETED", 100_000),
        make_round("r3", "DRAFT", 0),
    ]
    activity = [
        RecentActivity(investor="Alice", round="Round r1", amount=10_000, time="1 hour ago"),
        RecentActivity(investor="Alice", round="Round r1", amount=5_000, time="2 hours ago"),
        RecentActivity(investor="Bob", round="Round r1", amount=15_000, time="1 day ago"),
    ]

    context = BlockContext()
    context.set("rounds", rounds)
    context.set("recent_activity", activity)
    BlockExecutor([DashboardBlock()]).execute(context)

    stats = context.get("dashboard_export_data").stats
    assert stats.total_raised == 125_000
    assert stats.active_rounds_count == 1
    assert stats.completed_rounds_count == 1
    assert stats.total_rounds_count == 3
    assert stats.total_investors == 2

    frame = context.get("rounds_frame")
    assert list(frame["round_id"]) == ["r1", "r2", "r3"]
    assert list(frame["progress_pct"]) == [25, 100, 0]
    assert list(frame["participants"]) == [2, 0, 0]
    assert frame.iloc[0]["accepted_tokens"] == "USDC; USDT"


def test_dashboard_block_no_rounds():
    context = BlockContext()
    context.set("rounds", [])
    context.set("recent_activity", [])
    DashboardBlock().execute(context)

    assert context.get("rounds_frame").empty
    assert context.get("dashboard_export_data").stats.total_rounds_count == 0
