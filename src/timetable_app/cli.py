"""
Command-line interface for the timetable substitution planner.

Usage examples:
    python -m timetable_app.cli --day Monday --absent Bindu
    python -m timetable_app.cli --day Friday --absent Prakash --absent Leena --csv subs.csv
    python -m timetable_app.cli --day Monday --free 3
    python -m timetable_app.cli --day Monday --free 1 --print-timetable timetable.csv

Exit codes:
    0  plan produced with every period covered, or free-teacher query answered
    1  bad arguments, unreadable timetable/rules file, or rejected request
    2  plan produced but at least one period has no substitute
"""

from __future__ import annotations

import argparse
import logging
import sys

from timetable_app.export import (export_plan_csv, export_plan_json, export_timetable_csv,
                                  plan_rows)
from timetable_app.io_json import ConfigError
from timetable_app.substitution.api import generate, query_free_teachers
from timetable_app.substitution.context import PlannerContext
from timetable_app.substitution.precheck import PlanningError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Timetable substitution planner — command-line mode",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  timetable-subs --day Monday --absent Bindu\n"
            "  timetable-subs --day Monday --absent Bindu --out plan.json\n"
            "  timetable-subs --day Tuesday --free 5\n"
        ),
    )
    parser.add_argument("--day", required=True, help="day to plan, e.g. Monday")
    parser.add_argument("--absent", action="append", default=[], metavar="NAME",
                        help="absent teacher (repeat for several)")
    parser.add_argument("--free", type=int, default=None, metavar="PERIOD",
                        help="list teachers free in this period (1-based) instead of planning")
    parser.add_argument("--timetable", default=None, metavar="FILE",
                        help="timetable text file (default: bundled school timetable)")
    parser.add_argument("--rules", default=None, metavar="FILE",
                        help="rules JSON file (default: bundled rules)")
    parser.add_argument("--out", default=None, metavar="FILE",
                        help="write the plan as JSON to this path (optional)")
    parser.add_argument("--csv", default=None, metavar="FILE",
                        help="write the plan as CSV to this path (optional)")
    parser.add_argument("--print-timetable", default=None, metavar="FILE",
                        help="also write the full base timetable as CSV to this path")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log every assignment decision")
    return parser


def _print_free(ctx: PlannerContext, day: str, period: int, absent: list) -> int:
    try:
        free = query_free_teachers(ctx, day, period - 1, absent)
    except PlanningError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    header = ctx.timetable.periods[period - 1]
    print(f"Free teachers on {day}, {header.name} ({header.time}):")
    if not free:
        print("  No teachers are free for this slot.")
    for t in free:
        print(f"  {t:<14} {ctx.index.workload_for(t, day)} period(s) today")
    return 0


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # ── 1. load timetable + rules ─────────────────────────────────────────────
    try:
        ctx = PlannerContext.load(args.timetable, args.rules)
    except FileNotFoundError as e:
        print(f"[ERROR] File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (ConfigError, ValueError) as e:
        print(f"[ERROR] Could not load timetable or rules: {e}", file=sys.stderr)
        sys.exit(1)

    if args.print_timetable:
        export_timetable_csv(ctx.timetable, args.print_timetable)
        print(f"Full timetable written to: {args.print_timetable}")

    # ── 2. free-teacher query mode ────────────────────────────────────────────
    if args.free is not None:
        sys.exit(_print_free(ctx, args.day, args.free, args.absent))

    # ── 3. plan ───────────────────────────────────────────────────────────────
    result = generate(ctx, args.day, args.absent)
    for w in result.warnings:
        print(f"[WARNING] {w}", file=sys.stderr if not result.ok else sys.stdout)
    if not result.ok:
        sys.exit(1)

    # ── 4. print plan ─────────────────────────────────────────────────────────
    print(f"\nSubstitution plan: {result.day}  (absent: {', '.join(result.plan.absent_teachers)})")
    print(f"Status    : {result.status}")
    rows = plan_rows(result, ctx.timetable.periods)
    print(f"\nVacancies ({len(rows)}):")
    for period, class_name, subject, original, substitute in rows:
        print(f"  [{period}]  {class_name:<18} {subject:<20} {original:<12} -> {substitute}")

    # ── 5. write output files (optional) ──────────────────────────────────────
    if args.out:
        export_plan_json(result, args.out)
        print(f"\nPlan written to: {args.out}")
    if args.csv:
        export_plan_csv(result, args.csv, ctx.timetable.periods)
        print(f"CSV written to: {args.csv}")

    sys.exit(0 if result.status == "OK" else 2)


if __name__ == "__main__":
    main()
