"""CLI entrypoint for allocation and dashboard exports."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from fundraising_domain.blocks import BlockContext, BlockExecutor, DashboardBlock
from fundraising_domain.config import settings
from fundraising_domain.errors import ErrorCodes, FundraisingError
from fundraising_domain.schemas import RecentActivity, Round
from fundraising_domain.service import generate_allocation_report, parse_vesting_config

from .allocation_sheet_renderer import AllocationSheetRenderer
from .dashboard_csv import dashboard_export_filename, export_dashboard_to_csv
from .magna import allocation_export_filename, export_to_json, export_to_magna_csv

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fundraising-export",
        description="Token allocation and dashboard exports",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    allocate = subparsers.add_parser("allocate", help="Export a round's token allocation")
    allocate.add_argument("round_file", help="Round JSON with contributions and embedded investors")
    allocate.add_argument("--token-price", type=float, required=True, help="USD price per token")
    allocate.add_argument("--cliff", default=None, help="Vesting cliff in months")
    allocate.add_argument("--duration", default=None, help="Vesting duration in months")
    allocate.add_argument("--tge", default=None, help="Percentage unlocked at TGE")
    allocate.add_argument("--format", choices=("csv", "json", "xlsx"), default="csv")
    allocate.add_argument(
        "--output",
        default=None,
        help="Output file or directory (csv/json default to stdout, xlsx to a dated file name)",
    )
    allocate.add_argument("--actor-id", default=None, help="Company user recorded in the audit entry")

    dashboard = subparsers.add_parser("dashboard", help="Export the company dashboard CSV")
    dashboard.add_argument("rounds_file", help="JSON array of rounds")
    dashboard.add_argument("--activity", default=None, help="JSON array of recent activity items")
    dashboard.add_argument("--output", default=None, help="Output file or directory (default: stdout)")

    return parser


def _write_text(content: str, output: Optional[str]) -> None:
    if output is None:
        sys.stdout.write(content + "\n")
        return
    Path(output).write_text(content, encoding="utf-8")
    logger.info("Wrote %s", output)


def run_allocate(args: argparse.Namespace) -> None:
    round = Round.model_validate_json(Path(args.round_file).read_text(encoding="utf-8"))

    vesting_config = None
    if any(value is not None for value in (args.cliff, args.duration, args.tge)):
        vesting_config = parse_vesting_config(
            {"cliff": args.cliff, "duration": args.duration, "tge": args.tge}
        )

    result = generate_allocation_report(
        round,
        args.token_price,
        vesting_config=vesting_config,
        actor_id=args.actor_id,
    )
    report = result.report

    output = args.output
    if output is not None and Path(output).is_dir():
        output = str(Path(output) / allocation_export_filename(round.name, date.today(), args.format))

    if args.format == "xlsx":
        output = output or allocation_export_filename(round.name, date.today(), "xlsx")
        AllocationSheetRenderer([report]).render(output)
        logger.info("Wrote %s", output)
    elif args.format == "json":
        _write_text(export_to_json(report), output)
    else:
        _write_text(export_to_magna_csv(report), output)


def run_dashboard(args: argparse.Namespace) -> None:
    rounds = TypeAdapter(List[Round]).validate_json(
        Path(args.rounds_file).read_text(encoding="utf-8")
    )
    activity: List[RecentActivity] = []
    if args.activity:
        activity = TypeAdapter(List[RecentActivity]).validate_json(
            Path(args.activity).read_text(encoding="utf-8")
        )

    context = BlockContext()
    context.set("rounds", rounds)
    context.set("recent_activity", activity)
    BlockExecutor([DashboardBlock()]).execute(context)

    data = context.get("dashboard_export_data")
    logger.info(
        "Dashboard: %d rounds, %d active",
        data.stats.total_rounds_count,
        data.stats.active_rounds_count,
    )
    output = args.output
    if output is not None and Path(output).is_dir():
        output = str(Path(output) / dashboard_export_filename(date.today()))
    _write_text(export_dashboard_to_csv(data), output)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    args = build_parser().parse_args(argv)
    try:
        if args.command == "allocate":
            run_allocate(args)
        else:
            run_dashboard(args)
    except FundraisingError as e:
        logger.error("%s (%s)", e.message, ErrorCodes(e.code).value)
        return 1
    except ValidationError as e:
        logger.error("Invalid input file: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
