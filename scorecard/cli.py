"""
Scorecard CLI - score snapshots and check weight edits from the command line.

Usage:
    # Score every objective in a snapshot
    scorecard report plan.yaml

    # Score one objective, machine-readable
    scorecard report plan.yaml --objective obj-1 --json

    # Check a weight edit before saving it (exit code 2 when it must be refused)
    scorecard validate-weight plan.yaml --goal goal-1 --indicator ind-2 --weight 50

    # Classify a score
    scorecard classify 87
"""

import argparse
import json
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .config import get_log_level
from .report import build_report
from .scorers import ProgressClassifier
from .snapshot import SnapshotError, load_snapshot
from .utils.logger import ScorecardLogger
from .utils.scoring_audit import ScoringAuditLog
from .validators import ContributionWeightValidator

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_BLOCKED = 2


def _print_report(report: dict) -> None:
    console = Console(width=120)
    for objective in report["objectives"]:
        table = Table(title=f"{objective['id']} - {objective['name'] or ''}")
        table.add_column("ID", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Band")
        table.add_column("Mode / Weight")
        table.add_column("Entries", justify="right")

        table.add_row(objective["id"], f"{objective['score']}%", objective["band"], "", "")
        for goal in objective["goals"]:
            table.add_row(f"  {goal['id']}", f"{goal['score']}%", goal["band"], goal["mode"], "")
            for indicator in goal["indicators"]:
                weight = indicator["contribution_weight"]
                completeness = indicator["completeness"]
                table.add_row(
                    f"    {indicator['id']}",
                    f"{indicator['score']}%",
                    indicator["band"],
                    f"{weight:g}%" if weight is not None else "-",
                    f"{completeness['completed']}/{completeness['expected']}",
                )
        console.print(table)


def cmd_report(args: argparse.Namespace, logger: ScorecardLogger) -> int:
    """Score a snapshot and print the objective/goal/indicator tree."""
    try:
        snapshot = load_snapshot(args.snapshot)
    except SnapshotError as e:
        logger.error("Could not load snapshot", exception=e, path=args.snapshot)
        return EXIT_ERROR

    if args.objective and snapshot.find_objective(args.objective) is None:
        logger.error(f"Objective not found: {args.objective}")
        return EXIT_ERROR

    audit_log = ScoringAuditLog()
    with logger.time_operation("report", snapshot=args.snapshot):
        report = build_report(snapshot, objective_id=args.objective, audit_log=audit_log)

    summary = audit_log.get_summary()
    logger.debug("Scoring audit", entries=summary["total_entries"], warnings=summary["warnings_count"])

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        _print_report(report)
    return EXIT_OK


def cmd_validate_weight(args: argparse.Namespace, logger: ScorecardLogger) -> int:
    """Check a proposed contribution weight against its goal's siblings."""
    try:
        snapshot = load_snapshot(args.snapshot)
    except SnapshotError as e:
        logger.error("Could not load snapshot", exception=e, path=args.snapshot)
        return EXIT_ERROR

    if snapshot.find_goal(args.goal) is None:
        logger.error(f"Goal not found: {args.goal}")
        return EXIT_ERROR

    result = ContributionWeightValidator().validate(args.goal, snapshot.indicators, args.indicator, args.weight)
    logger.log_weight_validation(args.goal, result.total, result.should_block, result.message)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.message)
    return EXIT_BLOCKED if result.should_block else EXIT_OK


def cmd_classify(args: argparse.Namespace, logger: ScorecardLogger) -> int:
    """Print the band and colour for a score."""
    profile = ProgressClassifier().profile(args.score)
    print(f"{profile.band.value} ({profile.color})")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scorecard",
        description="Score strategic plan indicators, goals and objectives",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    subparsers = parser.add_subparsers(dest="command", required=True)

    report_parser = subparsers.add_parser("report", help="Score a snapshot file")
    report_parser.add_argument("snapshot", help="Snapshot file (.json, .yaml, .yml)")
    report_parser.add_argument("--objective", help="Only score this objective")
    report_parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    report_parser.set_defaults(func=cmd_report)

    weight_parser = subparsers.add_parser("validate-weight", help="Check a contribution weight edit")
    weight_parser.add_argument("snapshot", help="Snapshot file (.json, .yaml, .yml)")
    weight_parser.add_argument("--goal", required=True, help="Goal the indicator belongs to")
    weight_parser.add_argument("--indicator", help="Indicator being edited (omit for a new indicator)")
    weight_parser.add_argument("--weight", type=float, required=True, help="Proposed weight (0-100)")
    weight_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    weight_parser.set_defaults(func=cmd_validate_weight)

    classify_parser = subparsers.add_parser("classify", help="Classify a score into a band")
    classify_parser.add_argument("score", type=float, help="Score percentage")
    classify_parser.set_defaults(func=cmd_classify)

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logger = ScorecardLogger(log_level=args.log_level or get_log_level())
    exit_code = args.func(args, logger)

    summary = logger.get_error_summary()
    if summary["total_errors"] or summary["total_warnings"]:
        logger.debug("Run finished", errors=summary["total_errors"], warnings=summary["total_warnings"])
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
