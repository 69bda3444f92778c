"""Tests for the company dashboard CSV export."""

from datetime import date, datetime, timezone
import pathlib
import sys

REPO_ROOT = pathlib.Path(__file__).resolve().parents[3]
sys.path.insert(0, str(REPO_ROOT / "packages" / "export" / "src"))
sys.path.insert(0, str(REPO_ROOT / "packages" / "domain"))

from fundraising_domain.dashboard import prepare_dashboard_export_data
from fundraising_domain.schemas import Contribution, RecentActivity, Round
from fundraising_export.dashboard_csv import dashboard_export_filename, export_dashboard_to_csv


# =============================================================================
# Test Data Builders
# =============================================================================

def make_round(round_id, name, status, raised, target, investor_ids=(), contribution_status="CONFIRMED"):
    return Round(
        id=round_id,
        name=name,
        company_id="company-1",
        target=target,
        raised=raised,
        min_contribution=1_000,
        max_contribution=100_000,
        status=status,
        accepted_tokens=["USDC", "USDT"],
        start_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        end_date=datetime(2024, 3, 1, tzinfo=timezone.utc),
        contributions=[
            Contribution(
                id=f"{round_id}-{i}",
                round_id=round_id,
                investor_id=investor_id,
                amount=1_000,
                token="USDC",
                status=contribution_status,
            )
            for i, investor_id in enumerate(investor_ids)
        ],
    )


def sample_rounds():
    return [
        make_round("r1", "Seed Round", "ACTIVE", 250_000, 500_000, ["a", "b", "a"]),
        make_round("r2", "Pre-Seed, Friends", "CLOSED", 100_000, 100_000, ["c"]),
        make_round("r3", "Series A", "DRAFT", 0, 2_000_000),
    ]


def sample_activity():
    return [
        RecentActivity(investor="Alice", round="Seed Round", amount=50_000, time="2 hours ago"),
        RecentActivity(investor="Bob", round="Seed Round", amount=25_000, time="1 day ago"),
        RecentActivity(investor="Alice", round="Seed Round", amount=10_000, time="3 days ago"),
    ]


# =============================================================================
# Aggregation
# =============================================================================

def test_prepare_dashboard_export_data_stats():
    stats = prepare_dashboard_export_data(sample_rounds(), sample_activity()).stats

    assert stats.total_raised == 350_000
    assert stats.total_rounds_count == 3
    assert stats.active_rounds_count == 1
    assert stats.completed_rounds_count == 1
    assert stats.total_investors == 2


# =============================================================================
# CSV
# =============================================================================

class TestExportDashboardToCsv:

    def test_sections_in_order(self):
        csv = export_dashboard_to_csv(prepare_dashboard_export_data(sample_rounds(), sample_activity()))

        positions = [
            csv.index(title)
            for title in ("DASHBOARD SUMMARY", "ACTIVE ROUNDS", "ALL ROUNDS SUMMARY", "RECENT ACTIVITY")
        ]
        assert positions == sorted(positions)
        assert csv.startswith("DASHBOARD SUMMARY\nMetric,Value\n")

    def test_summary_section(self):
        csv = export_dashboard_to_csv(prepare_dashboard_export_data(sample_rounds(), sample_activity()))
        summary = csv.split("\n\n")[0]

        assert summary == (
            "DASHBOARD SUMMARY\n"
            "Metric,Value\n"
            'Total Raised,"$350,000"\n'
            "Total Rounds,3\n"
            "Active Rounds,1\n"
            "Completed Rounds,1\n"
            "Total Investors,2"
        )

    def test_active_rounds_section(self):
        csv = export_dashboard_to_csv(prepare_dashboard_export_data(sample_rounds(), []))
        active = csv.split("\n\n")[1].split("\n")

        assert active[0] == "ACTIVE ROUNDS"
        assert active[1].startswith("Round Name,Status,Raised,Target,Progress,Participants")
        assert active[2] == (
            'Seed Round,ACTIVE,"$250,000","$500,000",50%,2,"Jan 1, 2024","Mar 1, 2024",'
            '"$1,000","$100,000",USDC; USDT'
        )

    def test_all_rounds_section_escapes_names(self):
        csv = export_dashboard_to_csv(prepare_dashboard_export_data(sample_rounds(), []))
        all_rounds = csv.split("\n\n")[2].split("\n")

        assert all_rounds[0] == "ALL ROUNDS SUMMARY"
        assert len(all_rounds) == 5
        assert all_rounds[3].startswith('"Pre-Seed, Friends",CLOSED,"$100,000","$100,000",100%,1,')
        assert all_rounds[4].startswith('Series A,DRAFT,$0,"$2,000,000",0%,0,')

    def test_recent_activity_section(self):
        csv = export_dashboard_to_csv(prepare_dashboard_export_data(sample_rounds(), sample_activity()))
        activity = csv.split("\n\n")[3]

        assert activity == (
            "RECENT ACTIVITY\n"
            "Investor,Round,Amount,Time\n"
            'Alice,Seed Round,"$50,000",2 hours ago\n'
            'Bob,Seed Round,"$25,000",1 day ago\n'
            'Alice,Seed Round,"$10,000",3 days ago'
        )

    def test_empty_dashboard_placeholders(self):
        csv = export_dashboard_to_csv(prepare_dashboard_export_data([], []))

        assert "ACTIVE ROUNDS\nNo active rounds\n" in csv
        assert "ALL ROUNDS SUMMARY\nNo rounds\n" in csv
        assert csv.endswith("RECENT ACTIVITY\nNo recent activity\n")
        assert 'Total Raised,$0\n' in csv


def test_participants_count_confirmed_contributions_only():
    rounds = [
        make_round("r1", "Seed Round", "ACTIVE", 0, 500_000, ["a"], contribution_status="PENDING"),
    ]
    csv = export_dashboard_to_csv(prepare_dashboard_export_data(rounds, []))

    assert 'Seed Round,ACTIVE,$0,"$500,000",0%,0,' in csv


def test_dashboard_export_filename():
    assert dashboard_export_filename(date(2024, 1, 15)) == "dashboard-export-2024-01-15.csv"
