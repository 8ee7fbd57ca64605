"""Pytest configuration and fixtures."""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

import pytest

from analytics.csv_import import REQUIRED_COLUMNS
from analytics.models import Exercise, Workout, WorkoutSet
from analytics.muscle_groups import get_muscle_group
from analytics.one_rep_max import calculate_1rm

STRONG_HEADER = ','.join(REQUIRED_COLUMNS)


def strong_row(date: str, exercise: str, set_order="1", weight="100", reps="5",
               workout_name="Workout", duration="1h 0m", notes="",
               workout_notes="", rpe="") -> str:
    """One data line of a Strong export, in header column order"""
    return ','.join(str(value) for value in (
        date, workout_name, duration, exercise, set_order, weight, reps,
        "0", "0", notes, workout_notes, rpe,
    ))


@pytest.fixture
def make_csv():
    """Build Strong CSV text from data lines."""
    def _make_csv(*rows: str, header: str = STRONG_HEADER) -> str:
        return '\n'.join([header, *rows]) + '\n'
    return _make_csv


@pytest.fixture
def row():
    """Build one Strong CSV data line."""
    return strong_row


@pytest.fixture
def make_workout():
    """
    Build a Workout directly.

    exercises maps exercise name -> list of (weight, reps) sets.
    """
    def _make_workout(timestamp: datetime,
                      exercises: Dict[str, List[Tuple[float, float]]],
                      name: str = "Workout",
                      workout_id: Optional[str] = None) -> Workout:
        date_key = timestamp.strftime('%Y-%m-%d %H:%M:%S')
        workout = Workout(
            id=workout_id or f"{date_key}-test",
            original_date_key=date_key,
            timestamp=timestamp,
            name=name,
            duration_seconds=3600,
            duration_string="1h 0m",
        )
        for exercise_name, sets in exercises.items():
            exercise = Exercise(name=exercise_name, muscle_group=get_muscle_group(exercise_name))
            for order, (weight, reps) in enumerate(sets, start=1):
                exercise.sets.append(WorkoutSet(
                    order=order,
                    weight=weight,
                    reps=reps,
                    e1rm=calculate_1rm(weight, reps),
                ))
            workout.exercises.append(exercise)
        return workout
    return _make_workout


@pytest.fixture
def now():
    """Fixed reference time for time-dependent calculations."""
    return datetime(2024, 3, 15, 12, 0, 0)
