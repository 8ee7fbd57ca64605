"""
Gains Projection Service
Projects future estimated 1RM for each regularly trained exercise

CONCEPTS:
1. Time Series - every workout containing the exercise is one data point
2. Trend Estimation - average weekly e1RM change from first to last session
3. Diminishing Returns - each projected week gains 95% of the week before
"""

import pandas as pd
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from .dates import effective_timestamp, format_date
from .models import Workout
from .muscle_groups import get_muscle_group
from .personal_records import PersonalRecordSet

HISTORY_COLUMNS = [
    'workout_date',
    'max_weight',
    'avg_weight',
    'total_volume',
    'estimated_1rm',
    'set_count',
    'rep_count',
]


@dataclass
class GainsProjection:
    exercise_name: str
    muscle_group: str
    week: int
    projected_e1rm: float
    improvement: float
    improvement_percentage: float

    def to_dict(self) -> Dict:
        return asdict(self)


def exercise_history(workouts: Iterable[Workout], exercise_name: str) -> pd.DataFrame:
    """
    One row per workout that includes the exercise, oldest first.

    Weight, e1RM and rep figures only count sets with both weight and
    reps; avg_weight divides by every logged set.
    """
    rows = []
    for workout in workouts:
        exercise = workout.find_exercise(exercise_name)
        if exercise is None:
            continue

        working_sets = [s for s in exercise.sets if s.is_working_set]
        rows.append({
            'workout_date': effective_timestamp(workout),
            'max_weight': max((s.weight for s in working_sets), default=0.0),
            'avg_weight': (
                sum(s.weight for s in working_sets) / len(exercise.sets)
                if exercise.sets else 0.0
            ),
            'total_volume': exercise.total_volume,
            'estimated_1rm': max((s.e1rm for s in working_sets), default=0.0),
            'set_count': len(exercise.sets),
            'rep_count': sum(s.reps for s in working_sets),
        })

    df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    # mergesort keeps same-timestamp sessions in collection order
    return df.sort_values('workout_date', kind='mergesort').reset_index(drop=True)


def _percent_change(first: float, last: float) -> float:
    if first <= 0:
        return 0.0
    return (last - first) / first * 100


def calculate_exercise_trends(workouts: Iterable[Workout], exercise_name: str) -> Optional[Dict]:
    """
    Progress series for one exercise, ready for charting.

    Returns None when the exercise was never performed. Progress
    percentages compare the first and last session and need two sessions.
    """
    df = exercise_history(workouts, exercise_name)
    if df.empty:
        return None

    trends = {
        'exercise': exercise_name,
        'dates': [format_date(d, 'MM/DD/YYYY') for d in df['workout_date']],
        'max_weight': df['max_weight'].tolist(),
        'avg_weight': df['avg_weight'].tolist(),
        'total_volume': df['total_volume'].tolist(),
        'max_e1rm': df['estimated_1rm'].tolist(),
        'set_count': df['set_count'].tolist(),
        'rep_count': df['rep_count'].tolist(),
        'progress_percentage': {'weight': None, 'volume': None, 'e1rm': None},
    }

    if len(df) >= 2:
        first, last = df.iloc[0], df.iloc[-1]
        trends['progress_percentage'] = {
            'weight': _percent_change(first['max_weight'], last['max_weight']),
            'volume': _percent_change(first['total_volume'], last['total_volume']),
            'e1rm': _percent_change(first['estimated_1rm'], last['estimated_1rm']),
        }

    return trends


class GainsProjector:
    """
    Projects weekly e1RM for the next few weeks.

    An exercise is projected only when it has been trained at least three
    times, has a positive e1RM record and is trending upwards. Stagnant or
    declining exercises are left out rather than projected flat.
    """

    MIN_WORKOUTS = 3
    MIN_OCCURRENCES = 3
    MIN_TREND_POINTS = 3

    def __init__(self, weeks: int = 12, diminishing_factor: float = 0.95):
        self.weeks = weeks
        self.diminishing_factor = diminishing_factor

    @staticmethod
    def weekly_improvement(history: pd.DataFrame) -> float:
        """Average e1RM change per week between the first and last session"""
        first, last = history.iloc[0], history.iloc[-1]
        days_between = (last['workout_date'] - first['workout_date']).total_seconds() / 86400
        weeks_between = max(1, round(days_between / 7))
        return (last['estimated_1rm'] - first['estimated_1rm']) / weeks_between

    def project_exercise(self, exercise_name: str, current_pr: float,
                         weekly_gain: float) -> List[GainsProjection]:
        """Week-by-week projection starting from the current e1RM record"""
        projections = []
        muscle_group = get_muscle_group(exercise_name)
        projected = current_pr
        rate = weekly_gain

        for week in range(1, self.weeks + 1):
            projected += rate
            rate *= self.diminishing_factor

            improvement = projected - current_pr
            projections.append(GainsProjection(
                exercise_name=exercise_name,
                muscle_group=muscle_group,
                week=week,
                projected_e1rm=round(projected, 1),
                improvement=round(improvement, 1),
                improvement_percentage=round(improvement / current_pr * 100, 1),
            ))

        return projections

    def project(self, workouts: Iterable[Workout],
                prs: Mapping[str, PersonalRecordSet]) -> List[GainsProjection]:
        """
        Project every qualifying exercise.

        Returns:
            Projections ordered by week, then by improvement percentage
            (largest first) within a week
        """
        workouts = list(workouts)
        if len(workouts) < self.MIN_WORKOUTS or not prs:
            return []

        occurrences = Counter(ex.name for w in workouts for ex in w.exercises)
        projections = []

        for exercise_name, count in occurrences.items():
            if count < self.MIN_OCCURRENCES:
                continue

            history = exercise_history(workouts, exercise_name)
            if len(history) < self.MIN_TREND_POINTS:
                continue

            records = prs.get(exercise_name)
            current_pr = records.max_e1rm.value if records else 0
            if current_pr <= 0:
                continue

            weekly_gain = self.weekly_improvement(history)
            if weekly_gain <= 0:
                continue

            projections.extend(self.project_exercise(exercise_name, current_pr, weekly_gain))

        projections.sort(key=lambda p: (p.week, -p.improvement_percentage))
        return projections


def compute_gains_projection(workouts: Iterable[Workout],
                             prs: Mapping[str, PersonalRecordSet]) -> List[GainsProjection]:
    """Project gains with the default 12-week, 5%-decay model"""
    return GainsProjector().project(workouts, prs)
