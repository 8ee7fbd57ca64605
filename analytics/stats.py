"""
Overall Statistics
Totals, averages and distributions across the whole workout collection,
plus a compact training summary for downstream suggestion tools.
"""

import pandas as pd
from typing import Dict, Iterable, List, Mapping

from .csv_import import sort_newest_first
from .dates import effective_timestamp, format_date
from .models import Workout
from .muscle_groups import NON_STRENGTH_GROUPS, is_machine_exercise
from .personal_records import PersonalRecordSet

OCCURRENCE_COLUMNS = [
    'workout_id',
    'exercise_name',
    'muscle_group',
    'set_count',
    'reps',
    'volume',
]


def exercise_occurrences(workouts: Iterable[Workout]) -> pd.DataFrame:
    """One row per exercise per workout, with its set, rep and volume totals"""
    rows = [
        {
            'workout_id': workout.id,
            'exercise_name': exercise.name,
            'muscle_group': exercise.muscle_group,
            'set_count': len(exercise.sets),
            'reps': sum(s.reps for s in exercise.sets),
            'volume': exercise.total_volume,
        }
        for workout in workouts
        for exercise in workout.exercises
    ]
    return pd.DataFrame(rows, columns=OCCURRENCE_COLUMNS)


def _empty_stats() -> Dict:
    return {
        'total_workouts': 0,
        'total_exercises': 0,
        'total_sets': 0,
        'total_reps': 0,
        'total_volume': 0,
        'total_duration': 0,
        'avg_workout_duration': 0,
        'avg_exercises_per_workout': 0,
        'avg_sets_per_exercise': 0,
        'avg_volume_per_workout': 0,
        'muscle_group_distribution': [],
        'exercise_frequency': {},
    }


def _counts_descending(series: pd.Series) -> pd.Series:
    # stable sort keeps first-seen order among equal counts
    counts = series.groupby(series, sort=False).size()
    return counts.sort_values(ascending=False, kind='mergesort')


def compute_overall_stats(workouts: Iterable[Workout]) -> Dict:
    """
    Aggregate statistics for a workout collection.

    Volume figures are rounded to whole units. Muscle group percentages
    are whole numbers of exercise occurrences and may not sum to 100.
    """
    workouts = list(workouts)
    if not workouts:
        return _empty_stats()

    df = exercise_occurrences(workouts)

    total_workouts = len(workouts)
    total_exercises = len(df)
    total_sets = int(df['set_count'].sum())
    total_reps = float(df['reps'].sum())
    total_volume = float(df['volume'].sum())
    total_duration = sum(w.duration_seconds or 0 for w in workouts)

    exercise_frequency = {
        name: int(count)
        for name, count in _counts_descending(df['exercise_name']).items()
    }

    muscle_counts = _counts_descending(df['muscle_group'])
    muscle_total = int(muscle_counts.sum())
    muscle_group_distribution = [
        {
            'name': group,
            'count': int(count),
            'percentage': round(int(count) / muscle_total * 100) if muscle_total else 0,
        }
        for group, count in muscle_counts.items()
    ]

    return {
        'total_workouts': total_workouts,
        'total_exercises': total_exercises,
        'total_sets': total_sets,
        'total_reps': int(total_reps) if total_reps.is_integer() else total_reps,
        'total_volume': round(total_volume),
        'total_duration': total_duration,
        'avg_workout_duration': total_duration / total_workouts,
        'avg_exercises_per_workout': total_exercises / total_workouts,
        'avg_sets_per_exercise': total_sets / total_exercises if total_exercises else 0,
        'avg_volume_per_workout': round(total_volume / total_workouts),
        'muscle_group_distribution': muscle_group_distribution,
        'exercise_frequency': exercise_frequency,
    }


def monthly_workout_counts(workouts: Iterable[Workout]) -> Dict[str, int]:
    """Workouts per calendar month, keyed YYYY-MM in ascending order"""
    months = pd.Series(
        [format_date(effective_timestamp(w), 'YYYY-MM') for w in workouts],
        dtype=object,
    )
    if months.empty:
        return {}
    return {month: int(count) for month, count in months.value_counts().sort_index().items()}


def _describe_sets(exercise) -> str:
    return ', '.join(f"{s.reps:g} reps @ {s.weight:.1f} lbs" for s in exercise.sets)


def build_training_summary(workouts: Iterable[Workout],
                           prs: Mapping[str, PersonalRecordSet],
                           recent_count: int = 3,
                           top_records: int = 5,
                           muscle_window: int = 5) -> Dict:
    """
    Plain-data summary of recent training.

    Used by suggestion tools that need context about the lifter; the
    summary is data only and carries no prompt text.

    Returns:
        recent_workouts: The latest workouts with a per-exercise set line
        top_records: Strongest lifts by e1RM record
        recent_muscle_groups: Strength groups hit in the latest workouts
        machines: Machine exercises seen anywhere in the history
    """
    ordered = sort_newest_first(workouts)

    recent_workouts = [
        {
            'name': workout.name,
            'date': format_date(effective_timestamp(workout)),
            'exercises': [
                {'name': exercise.name, 'sets': _describe_sets(exercise)}
                for exercise in workout.exercises
            ],
        }
        for workout in ordered[:recent_count]
    ]

    strongest = sorted(prs.items(), key=lambda item: item[1].max_e1rm.value, reverse=True)
    records = [
        {
            'exercise': name,
            'max_e1rm': round(record.max_e1rm.value, 1),
            'description': f"{name}: Max e1RM {record.max_e1rm.value:.1f} lbs",
        }
        for name, record in strongest[:top_records]
    ]

    muscle_groups: List[str] = []
    for workout in ordered[:muscle_window]:
        for exercise in workout.exercises:
            group = exercise.muscle_group
            if group not in NON_STRENGTH_GROUPS and group not in muscle_groups:
                muscle_groups.append(group)

    machines: List[str] = []
    for workout in ordered:
        for exercise in workout.exercises:
            if is_machine_exercise(exercise.name) and exercise.name not in machines:
                machines.append(exercise.name)

    return {
        'recent_workouts': recent_workouts,
        'top_records': records,
        'recent_muscle_groups': muscle_groups,
        'machines': machines,
    }
