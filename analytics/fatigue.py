"""
Muscle Fatigue & Recovery
Estimates how fatigued each muscle group is from the most recent workouts

Fatigue is a short-horizon signal: only the latest workouts count, and a
group with no recent training is treated as fully recovered.
"""

import numpy as np
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional

from .dates import effective_timestamp
from .models import Exercise, Workout
from .muscle_groups import RECOVERY_HOURS

# RPE assumed for every set, Strong exports rarely carry it per set
DEFAULT_RPE = 7

# Number of most recent workouts that contribute to fatigue
RECENT_WORKOUT_WINDOW = 10


@dataclass
class MuscleFatigueRecord:
    muscle_group: str
    recovery_hours: float
    fatigue_score: float = 0
    recovery_percentage: float = 100.0
    readiness: float = 100
    last_trained_date: Optional[datetime] = None
    hours_since_last_training: Optional[float] = None
    exercises_involved: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'muscle_group': self.muscle_group,
            'fatigue_score': self.fatigue_score,
            'recovery_percentage': round(self.recovery_percentage, 1),
            'readiness': self.readiness,
            'recovery_hours': self.recovery_hours,
            'last_trained_date': self.last_trained_date.isoformat() if self.last_trained_date else None,
            'hours_since_last_training': (
                round(self.hours_since_last_training, 1)
                if self.hours_since_last_training is not None else None
            ),
            'exercises_involved': list(self.exercises_involved),
        }


def _recovery_percentage(hours_since: float, recovery_hours: float) -> float:
    if recovery_hours <= 0:
        return 100.0
    return min(100.0, max(0.0, hours_since / recovery_hours * 100))


def _average_intensity(exercise: Exercise, default_rpe: float) -> float:
    if not exercise.sets:
        return 0.0
    return float(np.mean([s.e1rm / default_rpe for s in exercise.sets]))


def compute_muscle_fatigue(
    workouts: Iterable[Workout],
    now: Optional[datetime] = None,
    recovery_hours: Mapping[str, float] = RECOVERY_HOURS,
    default_rpe: float = DEFAULT_RPE,
    window: int = RECENT_WORKOUT_WINDOW,
) -> Dict[str, MuscleFatigueRecord]:
    """
    Calculate fatigue and recovery for every tracked muscle group.

    Each exercise in the recent window adds
        volume * (1 - recovery% / 100) * (avg intensity / 100)
    to its group's raw score, where avg intensity is the mean set e1RM
    divided by the default RPE. Raw scores are then scaled so the most
    fatigued group scores 100.

    Args:
        workouts: Workout collection, any order
        now: Reference time (defaults to the current time)
        recovery_hours: Full recovery time per muscle group
        default_rpe: RPE assumed for every set
        window: How many of the most recent workouts to consider

    Returns:
        Muscle group -> MuscleFatigueRecord; empty when there are no workouts
    """
    workouts = list(workouts)
    if not workouts:
        return {}

    now = now or datetime.now()

    records = {
        muscle: MuscleFatigueRecord(muscle_group=muscle, recovery_hours=hours)
        for muscle, hours in recovery_hours.items()
    }
    raw_scores = {muscle: 0.0 for muscle in records}

    recent_workouts = sorted(workouts, key=effective_timestamp, reverse=True)[:window]

    for workout in recent_workouts:
        workout_date = effective_timestamp(workout)
        hours_since = max(0.0, (now - workout_date).total_seconds() / 3600)

        for exercise in workout.exercises:
            record = records.get(exercise.muscle_group)
            if record is None:
                continue

            recovery = _recovery_percentage(hours_since, record.recovery_hours)
            intensity = _average_intensity(exercise, default_rpe)
            raw_scores[record.muscle_group] += (
                exercise.total_volume * (1 - recovery / 100) * (intensity / 100)
            )

            if record.last_trained_date is None or workout_date > record.last_trained_date:
                record.last_trained_date = workout_date
                record.hours_since_last_training = hours_since
                record.recovery_percentage = recovery

            if exercise.name not in record.exercises_involved:
                record.exercises_involved.append(exercise.name)

    max_fatigue = max(max(raw_scores.values()), 1)

    for muscle, record in records.items():
        score = min(100, round(raw_scores[muscle] / max_fatigue * 100))
        record.fatigue_score = score
        record.readiness = max(0, 100 - score)

    return records


def ready_muscle_groups(fatigue: Mapping[str, MuscleFatigueRecord], threshold: float = 90) -> List[str]:
    """Muscle groups recovered to at least the threshold, alphabetically"""
    return sorted(
        muscle for muscle, record in fatigue.items()
        if record.recovery_percentage >= threshold
    )
