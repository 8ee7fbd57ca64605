"""
Workout Analytics Package

Contains the core training analysis logic:
- Strong CSV import and merge
- Estimated 1RM and volume
- Personal records, fatigue and streaks
- GainsProjector: Multi-week e1RM projection
- TrainingRecommender: Suggests the next workout
"""

from .csv_import import (
    ImportReport,
    MergeResult,
    ingest,
    ingest_with_report,
    merge_workouts,
    parse_strong_csv,
    parse_strong_csv_with_report,
)
from .exceptions import MissingColumnsError, NoValidWorkoutDataError, WorkoutImportError
from .fatigue import MuscleFatigueRecord, compute_muscle_fatigue, ready_muscle_groups
from .gains_projector import (
    GainsProjection,
    GainsProjector,
    calculate_exercise_trends,
    compute_gains_projection,
    exercise_history,
)
from .models import Exercise, Workout, WorkoutSet
from .muscle_groups import get_muscle_group
from .one_rep_max import OneRepMaxFormula, calculate_1rm, calculate_all_1rm, calculate_volume
from .personal_records import PersonalRecordSet, RecordValue, compute_all_prs, records_set_in_workout
from .recommender import TrainingRecommender
from .stats import build_training_summary, compute_overall_stats, monthly_workout_counts
from .streaks import (
    StreakRecord,
    calculate_workout_frequency,
    compute_streak,
    predict_next_workout_date,
)

__all__ = [
    'Exercise',
    'GainsProjection',
    'GainsProjector',
    'ImportReport',
    'MergeResult',
    'MissingColumnsError',
    'MuscleFatigueRecord',
    'NoValidWorkoutDataError',
    'OneRepMaxFormula',
    'PersonalRecordSet',
    'RecordValue',
    'StreakRecord',
    'TrainingRecommender',
    'Workout',
    'WorkoutImportError',
    'WorkoutSet',
    'build_training_summary',
    'calculate_1rm',
    'calculate_all_1rm',
    'calculate_exercise_trends',
    'calculate_volume',
    'calculate_workout_frequency',
    'compute_all_prs',
    'compute_gains_projection',
    'compute_muscle_fatigue',
    'compute_overall_stats',
    'compute_streak',
    'exercise_history',
    'get_muscle_group',
    'ingest',
    'ingest_with_report',
    'merge_workouts',
    'monthly_workout_counts',
    'parse_strong_csv',
    'parse_strong_csv_with_report',
    'predict_next_workout_date',
    'ready_muscle_groups',
    'records_set_in_workout',
]
