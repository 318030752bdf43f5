#!/usr/bin/env python3
"""Position qualification reports from the latest training snapshot.

Commands:
    employee  - Qualification status for every position for one employee
    position  - Employees qualified for a position (county, avfrd or both)
    eligible  - Employees meeting county requirements but not AVFRD's
    gaps      - AVFRD trainings an employee still needs for a position
    impact    - Newly qualified counts per position if everyone took a training
    stats     - Compliance statistics by division
    describe  - Show a position's requirement trees

Usage:
    uv run qualification-report employee 1042
    uv run qualification-report position 7 --authority both --format csv
    uv run qualification-report impact 55 --format json
"""

import argparse
import csv
import json
import logging
import sys
from pathlib import Path

from avfrd.core.config import get_org_config, get_snapshot_path
from avfrd.qualifications.impact import simulate_training_impact
from avfrd.qualifications.population import (
    Authority,
    get_eligible_not_released,
    get_qualified_employees,
)
from avfrd.qualifications.requirements import describe_requirement, requirement_to_dict
from avfrd.qualifications.service import (
    find_position,
    get_all_qualifications,
    get_training_gaps,
)
from avfrd.qualifications.snapshot import TrainingSnapshot
from avfrd.qualifications.statistics import calculate_training_statistics
from avfrd.utils.config import get_settings

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

EMPLOYEE_COLUMNS = ["id", "name", "division", "department", "email"]


def print_rows(rows: list[dict], columns: list[str], output_format: str = "table") -> None:
    """Print rows as a table, CSV or JSON.

    Args:
        rows: Row dicts keyed by column name
        columns: Columns to show, in display order
        output_format: Output format (table, csv, json)
    """
    filtered = [{col: row.get(col) for col in columns} for row in rows]

    if output_format == "json":
        print(json.dumps(filtered, indent=2, default=str))
        return
    if output_format == "csv":
        writer = csv.DictWriter(sys.stdout, fieldnames=columns)
        writer.writeheader()
        writer.writerows(filtered)
        return

    widths = {col: len(col) for col in columns}
    for row in filtered:
        for col in columns:
            val = str(row.get(col) if row.get(col) is not None else "")
            widths[col] = max(widths[col], min(len(val), 40))  # Cap at 40 chars

    header = " | ".join(col.ljust(widths[col]) for col in columns)
    print(header)
    print("-" * len(header))
    for row in filtered:
        print(
            " | ".join(
                str(row.get(col) if row.get(col) is not None else "")[:40].ljust(widths[col])
                for col in columns
            )
        )


def _employee_rows(employees) -> list[dict]:
    return [
        {
            "id": e.id,
            "name": e.display_name,
            "division": e.division,
            "department": e.department,
            "email": e.email,
        }
        for e in employees
    ]


def _titles(trainings) -> str:
    return "; ".join(t.title for t in trainings)


def load_snapshot(path: Path | None) -> TrainingSnapshot:
    """Load the snapshot and warn when it is older than the configured age."""
    snapshot = TrainingSnapshot.from_file(path or get_snapshot_path())
    max_age = get_settings().snapshot_max_age_hours
    if snapshot.fetched_at is None:
        logger.warning("Snapshot has no fetch time; run the sync jobs for current data")
    elif snapshot.is_stale(max_age):
        logger.warning(
            f"Snapshot fetched at {snapshot.fetched_at.isoformat()} is older than "
            f"{max_age:g} hours; run the sync jobs for current data"
        )
    return snapshot


def cmd_employee(args, snapshot: TrainingSnapshot) -> int:
    """Show qualification status for every position for one employee."""
    results = get_all_qualifications(
        args.employee_id,
        snapshot.get_positions(),
        snapshot.get_catalog(),
        snapshot.get_completions(),
    )
    if not results:
        logger.error("No positions configured")
        return 1

    org = get_org_config()
    rows = [
        {
            "position": r.position_title,
            org.county_label: "yes" if r.is_qualified_county else "no",
            org.avfrd_label: "yes" if r.is_qualified_avfrd else "no",
            f"missing {org.county_label}": _titles(r.missing_county_trainings),
            f"missing {org.avfrd_label}": _titles(r.missing_avfrd_trainings),
        }
        for r in results
    ]
    print_rows(rows, list(rows[0]), args.format)
    return 0


def cmd_position(args, snapshot: TrainingSnapshot) -> int:
    """List employees qualified for a position."""
    positions = snapshot.get_positions()
    if find_position(args.position_id, positions) is None:
        logger.error(f"Position not found: {args.position_id}")
        return 1

    employees = get_qualified_employees(
        args.position_id,
        snapshot.get_employees(),
        positions,
        snapshot.get_catalog(),
        snapshot.get_completions(),
        authority=args.authority,
    )
    logger.info(f"{len(employees)} employees qualified ({args.authority})")
    print_rows(_employee_rows(employees), EMPLOYEE_COLUMNS, args.format)
    return 0


def cmd_eligible(args, snapshot: TrainingSnapshot) -> int:
    """List employees eligible under county rules but not released by AVFRD."""
    positions = snapshot.get_positions()
    if find_position(args.position_id, positions) is None:
        logger.error(f"Position not found: {args.position_id}")
        return 1

    employees = get_eligible_not_released(
        args.position_id,
        snapshot.get_employees(),
        positions,
        snapshot.get_catalog(),
        snapshot.get_completions(),
    )
    logger.info(f"{len(employees)} employees eligible but not released")
    print_rows(_employee_rows(employees), EMPLOYEE_COLUMNS, args.format)
    return 0


def cmd_gaps(args, snapshot: TrainingSnapshot) -> int:
    """List AVFRD trainings an employee is missing for a position."""
    positions = snapshot.get_positions()
    if find_position(args.position_id, positions) is None:
        logger.error(f"Position not found: {args.position_id}")
        return 1

    gaps = get_training_gaps(
        args.employee_id,
        args.position_id,
        positions,
        snapshot.get_catalog(),
        snapshot.get_completions(),
    )
    rows = [{"id": t.id, "title": t.title, "category": t.category} for t in gaps]
    print_rows(rows, ["id", "title", "category"], args.format)
    return 0


def cmd_impact(args, snapshot: TrainingSnapshot) -> int:
    """Simulate everyone completing a training."""
    catalog = snapshot.get_catalog()
    training = catalog.get(args.training_id)
    if training is None:
        logger.warning(f"Training {args.training_id} is not in the catalog")

    positions = snapshot.get_positions()
    impact = simulate_training_impact(
        args.training_id,
        snapshot.get_employees(),
        positions,
        catalog,
        snapshot.get_completions(),
        authority=args.authority,
    )
    logger.info(
        f"{training.title if training else args.training_id}: "
        f"{sum(impact.values())} total newly qualified"
    )
    rows = [
        {
            "position": p.title,
            "department": p.department,
            "new qualifications": impact.get(p.id, 0),
        }
        for p in positions
    ]
    print_rows(rows, ["position", "department", "new qualifications"], args.format)
    return 0


def cmd_stats(args, snapshot: TrainingSnapshot) -> int:
    """Show compliance statistics."""
    stats = calculate_training_statistics(
        snapshot.get_employees(),
        snapshot.get_trainings(),
        snapshot.get_completions(),
    )
    logger.info(
        f"Trainings: {stats.total_trainings}, completed: {stats.completed_trainings}, "
        f"expired: {stats.expired_trainings}, due: {stats.upcoming_trainings}, "
        f"rate: {stats.completion_rate:.1f}%"
    )
    rows = [
        {
            "division": s.division,
            "completed": s.completed_count,
            "required": s.total_required,
            "compliance %": s.compliance_rate,
        }
        for s in stats.division_stats
    ]
    print_rows(rows, ["division", "completed", "required", "compliance %"], args.format)
    return 0


def cmd_describe(args, snapshot: TrainingSnapshot) -> int:
    """Print a position's requirement trees.

    JSON output gives the trees in their stored shape; other formats print
    an indented outline.
    """
    position = find_position(args.position_id, snapshot.get_positions())
    if position is None:
        logger.error(f"Position not found: {args.position_id}")
        return 1

    if args.format == "json":
        data = {
            "id": position.id,
            "title": position.title,
            "county_requirements": requirement_to_dict(position.county_requirements),
            "avfrd_requirements": requirement_to_dict(position.avfrd_requirements),
        }
        print(json.dumps(data, indent=2))
        return 0

    org = get_org_config()
    catalog = snapshot.get_catalog()
    print(position.title)
    print(f"\n{org.county_label} requirements:")
    print(describe_requirement(position.county_requirements, catalog))
    print(f"\n{org.avfrd_label} requirements:")
    print(describe_requirement(position.avfrd_requirements, catalog))
    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Position qualification reports from the training snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="Snapshot JSON file (default: AVFRD_SNAPSHOT_PATH or data/snapshot.json)",
    )
    parser.add_argument(
        "--format",
        choices=["table", "csv", "json"],
        default="table",
        help="Output format (default: table)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    authorities = [a.value for a in Authority]

    employee_parser = subparsers.add_parser("employee", help="Qualifications for one employee")
    employee_parser.add_argument("employee_id", help="Employee ID (BambooHR)")
    employee_parser.set_defaults(func=cmd_employee)

    position_parser = subparsers.add_parser("position", help="Employees qualified for a position")
    position_parser.add_argument("position_id", help="Position ID")
    position_parser.add_argument(
        "--authority",
        choices=authorities,
        default=Authority.AVFRD.value,
        help="Requirements to check (default: avfrd)",
    )
    position_parser.set_defaults(func=cmd_position)

    eligible_parser = subparsers.add_parser(
        "eligible", help="Eligible by county standards but not released by AVFRD"
    )
    eligible_parser.add_argument("position_id", help="Position ID")
    eligible_parser.set_defaults(func=cmd_eligible)

    gaps_parser = subparsers.add_parser("gaps", help="Missing AVFRD trainings for a position")
    gaps_parser.add_argument("employee_id", help="Employee ID (BambooHR)")
    gaps_parser.add_argument("position_id", help="Position ID")
    gaps_parser.set_defaults(func=cmd_gaps)

    impact_parser = subparsers.add_parser(
        "impact", help="Newly qualified counts if everyone completed a training"
    )
    impact_parser.add_argument("training_id", help="Training ID")
    impact_parser.add_argument(
        "--authority",
        choices=authorities,
        default=Authority.AVFRD.value,
        help="Requirements to simulate (default: avfrd)",
    )
    impact_parser.set_defaults(func=cmd_impact)

    stats_parser = subparsers.add_parser("stats", help="Compliance statistics by division")
    stats_parser.set_defaults(func=cmd_stats)

    describe_parser = subparsers.add_parser("describe", help="Show a position's requirements")
    describe_parser.add_argument("position_id", help="Position ID")
    describe_parser.set_defaults(func=cmd_describe)

    args = parser.parse_args()

    logging.getLogger().setLevel(logging.DEBUG if args.verbose else get_settings().log_level_number)

    if not args.command:
        parser.print_help()
        return 1

    try:
        snapshot = load_snapshot(args.snapshot)
        return args.func(args, snapshot)
    except Exception as e:
        logger.error(f"Failed to run {args.command}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
