"""
Test Data Generator for Strong Workout Analytics
Writes a realistic Strong app CSV export with sample training history

Run with: python seed_test_data.py [output.csv] [weeks]
"""

import csv
import io
import random
import sys
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from analytics import compute_all_prs, compute_overall_stats, ingest
from analytics.csv_import import REQUIRED_COLUMNS, REST_TIMER

DEFAULT_OUTPUT = 'sample_strong_export.csv'

# Push/Pull/Legs split: weekday -> (workout name, exercises)
SCHEDULE = {
    0: ('Push Day', [
        'Bench Press (Barbell)',
        'Overhead Press (Barbell)',
        'Lateral Raise (Dumbbell)',
        'Triceps Pushdown (Cable - Straight Bar)',
    ]),
    1: ('Pull Day', [
        'Deadlift (Barbell)',
        'Bent Over Row (Barbell)',
        'Lat Pulldown (Cable)',
        'Bicep Curl (Dumbbell)',
    ]),
    3: ('Leg Day', [
        'Squat (Barbell)',
        'Romanian Deadlift (Barbell)',
        'Leg Extension (Machine)',
        'Standing Calf Raise (Machine)',
    ]),
}
SCHEDULE[4] = SCHEDULE[0]
SCHEDULE[5] = SCHEDULE[1]

# Starting working weights (will progressively increase)
STARTING_WEIGHTS = {
    'Bench Press (Barbell)': 135,
    'Overhead Press (Barbell)': 95,
    'Lateral Raise (Dumbbell)': 20,
    'Triceps Pushdown (Cable - Straight Bar)': 50,
    'Deadlift (Barbell)': 225,
    'Bent Over Row (Barbell)': 135,
    'Lat Pulldown (Cable)': 120,
    'Bicep Curl (Dumbbell)': 30,
    'Squat (Barbell)': 185,
    'Romanian Deadlift (Barbell)': 155,
    'Leg Extension (Machine)': 90,
    'Standing Calf Raise (Machine)': 140,
}

COMPOUNDS = {
    'Bench Press (Barbell)',
    'Overhead Press (Barbell)',
    'Deadlift (Barbell)',
    'Bent Over Row (Barbell)',
    'Squat (Barbell)',
    'Romanian Deadlift (Barbell)',
}


def _round_to_plate(weight: float) -> float:
    """Nearest 2.5 lbs, the smallest jump most gyms allow"""
    return round(weight / 2.5) * 2.5


def _format_duration(minutes: int) -> str:
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m" if hours else f"{minutes}m"


def generate_rows(num_weeks: int = 12, seed: Optional[int] = None,
                  end_date: Optional[datetime] = None) -> List[Dict[str, str]]:
    """
    Generate Strong export rows over a period of weeks.

    Simulates a Push/Pull/Legs split with progressive overload. The same
    seed and end date always produce the same rows.
    """
    rng = random.Random(seed)
    end_date = end_date or datetime.now()
    current_weights = dict(STARTING_WEIGHTS)

    rows = []
    current_date = (end_date - timedelta(weeks=num_weeks)).replace(hour=0, minute=0, second=0, microsecond=0)

    while current_date <= end_date:
        day_of_week = current_date.weekday()
        scheduled = SCHEDULE.get(day_of_week)

        # Random chance to skip a workout (life happens)
        if scheduled and rng.random() >= 0.1:
            workout_name, exercises = scheduled
            started = current_date.replace(hour=17, minute=rng.randint(0, 59), second=rng.randint(0, 59))
            if started > end_date:
                break

            date_key = started.strftime('%Y-%m-%d %H:%M:%S')
            duration = _format_duration(rng.randint(45, 80))
            workout_notes = 'Felt strong' if rng.random() < 0.2 else ''

            for exercise in exercises:
                base_weight = current_weights[exercise]
                num_sets = rng.randint(3, 4) if exercise in COMPOUNDS else rng.randint(2, 3)

                for set_num in range(1, num_sets + 1):
                    if set_num == 1:
                        weight = base_weight * 0.7
                        reps = rng.randint(10, 12)
                    elif set_num == num_sets:
                        weight = base_weight * rng.uniform(1.0, 1.1)
                        reps = rng.randint(4, 6)
                    else:
                        weight = base_weight * rng.uniform(0.9, 1.0)
                        reps = rng.randint(6, 10)

                    rows.append({
                        'Date': date_key,
                        'Workout Name': workout_name,
                        'Duration': duration,
                        'Exercise Name': exercise,
                        'Set Order': str(set_num),
                        'Weight': f"{_round_to_plate(weight):g}",
                        'Reps': str(reps),
                        'Distance': '0',
                        'Seconds': '0',
                        'Notes': '',
                        'Workout Notes': workout_notes,
                        'RPE': '',
                    })

                rows.append({
                    'Date': date_key,
                    'Workout Name': workout_name,
                    'Duration': duration,
                    'Exercise Name': exercise,
                    'Set Order': REST_TIMER,
                    'Weight': '0',
                    'Reps': '0',
                    'Distance': '0',
                    'Seconds': str(rng.choice([90, 120, 180])),
                    'Notes': '',
                    'Workout Notes': workout_notes,
                    'RPE': '',
                })

        # Progressive overload: increase weights slightly each week
        if day_of_week == 6:
            for exercise in current_weights:
                current_weights[exercise] = round(current_weights[exercise] * rng.uniform(1.01, 1.025), 1)

        current_date += timedelta(days=1)

    return rows


def generate_strong_csv(num_weeks: int = 12, seed: Optional[int] = None,
                        end_date: Optional[datetime] = None) -> str:
    """Sample history as the text of a Strong CSV export"""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=REQUIRED_COLUMNS, lineterminator='\n')
    writer.writeheader()
    writer.writerows(generate_rows(num_weeks, seed, end_date))
    return buffer.getvalue()


def print_summary(csv_text: str) -> None:
    """Print summary of generated data"""
    workouts = ingest(csv_text, DEFAULT_OUTPUT)
    stats = compute_overall_stats(workouts)
    prs = compute_all_prs(workouts)

    print("\n" + "="*50)
    print("📊 TEST DATA SUMMARY")
    print("="*50)
    print(f"✓ Workouts created:      {stats['total_workouts']}")
    print(f"✓ Sets logged:           {stats['total_sets']}")
    print(f"✓ Exercises with PRs:    {len(prs)}")
    print("\n🏆 Top 5 Most Trained Exercises:")
    for name, count in list(stats['exercise_frequency'].items())[:5]:
        print(f"   • {name}: {count} workouts (max: {prs[name].max_weight.value:g} lbs)")
    print("="*50)


def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv
    output = argv[0] if argv else DEFAULT_OUTPUT
    num_weeks = int(argv[1]) if len(argv) > 1 else 12

    print("\n🏋️ Strong Workout Analytics - Test Data Generator")
    print("="*50)

    print(f"\nGenerating {num_weeks} weeks of workout data...")
    csv_text = generate_strong_csv(num_weeks=num_weeks)

    with open(output, 'w', encoding='utf-8', newline='') as f:
        f.write(csv_text)
    print(f"✓ Wrote {output}")

    print_summary(csv_text)

    print("\n✅ Test data generated successfully!")
    print("\nYou can now test:")
    print(f"  • python import_workouts.py {output}")
    print("  • http://localhost:8000/docs (Swagger UI)")
    print("  • POST http://localhost:8000/imports/csv")
    print("  • http://localhost:8000/predictions/gains")
    print("  • http://localhost:8000/recommendations/next-workout")

    return output


if __name__ == "__main__":
    main()
