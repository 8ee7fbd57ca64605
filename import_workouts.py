"""
Strong CSV Importer
Parses a Strong app CSV export and prints what would be imported

Usage:
    python import_workouts.py strong.csv [FORMULA]

FORMULA is one of BRZYCKI, EPLEY, LOMBARDI, MAYHEW, OCONNER, WATHAN
(defaults to ONE_REP_MAX_FORMULA from .env, then EPLEY).
"""

import os
import sys
from typing import List, Optional

import config
from analytics import (
    OneRepMaxFormula,
    WorkoutImportError,
    compute_all_prs,
    compute_overall_stats,
    compute_streak,
    ingest_with_report,
    merge_workouts,
)
from analytics.dates import effective_timestamp, format_date, format_duration

PREVIEW_WORKOUTS = 5
TOP_RECORDS = 10


def read_csv_file(filename: str) -> str:
    """Read an export, falling back to latin-1 for files that are not UTF-8"""
    try:
        with open(filename, 'r', encoding='utf-8-sig') as f:
            return f.read()
    except UnicodeDecodeError:
        with open(filename, 'r', encoding='latin-1') as f:
            return f.read()


def print_preview(workouts) -> None:
    print("\n" + "=" * 50)
    print(f"PREVIEW (latest {min(PREVIEW_WORKOUTS, len(workouts))} workouts):")
    print("=" * 50)

    for workout in workouts[:PREVIEW_WORKOUTS]:
        print(f"\n📅 {format_date(effective_timestamp(workout))} - {workout.name}"
              f" ({format_duration(workout.duration_seconds)})")
        for exercise in workout.exercises:
            sets_str = ', '.join(f"{s.weight:g}x{s.reps:g}" for s in exercise.sets)
            print(f"  ✓ {exercise.name} ({exercise.muscle_group})")
            print(f"      Sets: {sets_str}")

    if len(workouts) > PREVIEW_WORKOUTS:
        print(f"\n... and {len(workouts) - PREVIEW_WORKOUTS} more workouts")


def print_records(workouts) -> None:
    prs = compute_all_prs(workouts)
    strongest = sorted(prs.items(), key=lambda item: item[1].max_e1rm.value, reverse=True)
    strongest = [(name, records) for name, records in strongest if records.max_e1rm.value > 0]
    if not strongest:
        return

    print(f"\n🏆 Top {min(TOP_RECORDS, len(strongest))} lifts by estimated 1RM:")
    for name, records in strongest[:TOP_RECORDS]:
        record = records.max_e1rm
        print(f"   {name}: {record.value:.1f} lbs "
              f"({record.weight:g} x {record.reps:g} on {format_date(record.date)})")


def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv

    print("\n🏋️ Strong CSV Importer")
    print("=" * 50)

    if not argv:
        print("\nUsage: python import_workouts.py <strong.csv> [FORMULA]")
        print("\nExport your history from the Strong app (Settings > Export Data), then run this script.")
        sys.exit(1)

    filename = argv[0]
    formula = OneRepMaxFormula.resolve(argv[1]) if len(argv) > 1 else config.ONE_REP_MAX_FORMULA

    try:
        content = read_csv_file(filename)
    except FileNotFoundError:
        print(f"❌ File not found: {filename}")
        sys.exit(1)

    print(f"\nParsing {filename} ({formula.display_name} 1RM)...")
    try:
        parsed, report = ingest_with_report(content, os.path.basename(filename), formula)
    except WorkoutImportError as e:
        print(f"❌ {e}")
        sys.exit(1)

    if not parsed:
        print("❌ No workouts found")
        sys.exit(1)

    result = merge_workouts([], parsed)
    workouts = result.workouts

    print(f"✓ Found {len(workouts)} workouts in {report.rows_read} rows")
    if result.skipped_count:
        print(f"✓ Skipped {result.skipped_count} duplicate workouts")
    if report.rows_skipped:
        print(f"⚠️  Skipped {report.malformed_rows} malformed rows and "
              f"{report.invalid_date_rows} rows with unreadable dates")

    earliest = format_date(effective_timestamp(workouts[-1]))
    latest = format_date(effective_timestamp(workouts[0]))
    print(f"✓ Date range: {earliest} to {latest}")

    print_preview(workouts)
    print_records(workouts)

    stats = compute_overall_stats(workouts)
    streak = compute_streak(workouts)

    print("\n" + "=" * 50)
    print("📊 IMPORT SUMMARY")
    print("=" * 50)
    print(f"✓ Workouts:          {stats['total_workouts']}")
    print(f"✓ Exercises logged:  {stats['total_exercises']}")
    print(f"✓ Sets logged:       {stats['total_sets']}")
    print(f"✓ Total volume:      {stats['total_volume']:,} lbs")
    print(f"✓ Longest streak:    {streak.longest} days")

    print("\n✅ Parse complete!")
    print("\nUpload the same file to the analytics service to explore it:")
    print(f"  - POST http://localhost:{config.PORT}/imports/csv")

    return result


if __name__ == "__main__":
    main()
