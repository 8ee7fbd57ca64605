"""
Workout Data Model
Structured form of a Strong export: workouts, exercises and sets
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from .one_rep_max import calculate_volume


@dataclass
class WorkoutSet:
    """One performed set. Weights are pounds."""
    order: int
    weight: float = 0.0
    reps: float = 0.0
    distance: float = 0.0
    duration_seconds: float = 0.0
    notes: str = ''
    e1rm: float = 0.0
    volume: float = field(init=False)

    def __post_init__(self):
        self.volume = calculate_volume(self.weight, self.reps)

    @property
    def is_working_set(self) -> bool:
        """Sets with both weight and reps count towards records"""
        return self.weight > 0 and self.reps > 0

    def to_dict(self) -> Dict:
        return {
            'order': self.order,
            'weight': self.weight,
            'reps': self.reps,
            'distance': self.distance,
            'duration_seconds': self.duration_seconds,
            'notes': self.notes,
            'volume': self.volume,
            'e1rm': self.e1rm,
        }


@dataclass
class Exercise:
    """
    One exercise's sets within a single workout.

    The name is the raw logged name and is the join key across workouts.
    Aggregates are derived from the set list on every access.
    """
    name: str
    muscle_group: str
    sets: List[WorkoutSet] = field(default_factory=list)

    @property
    def max_weight(self) -> float:
        return max((s.weight for s in self.sets), default=0.0)

    @property
    def max_reps(self) -> float:
        return max((s.reps for s in self.sets), default=0.0)

    @property
    def max_e1rm(self) -> float:
        return max((s.e1rm for s in self.sets), default=0.0)

    @property
    def total_volume(self) -> float:
        return sum(s.volume for s in self.sets)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'muscle_group': self.muscle_group,
            'sets': [s.to_dict() for s in self.sets],
            'max_weight': self.max_weight,
            'max_reps': self.max_reps,
            'max_e1rm': self.max_e1rm,
            'total_volume': self.total_volume,
        }


@dataclass
class Workout:
    """
    One training session.

    original_date_key is the verbatim Date value from the export and is
    what identifies a workout when collections are merged.
    """
    id: str
    original_date_key: str
    timestamp: Optional[datetime]
    name: str
    duration_seconds: int = 0
    duration_string: str = ''
    exercises: List[Exercise] = field(default_factory=list)
    notes: str = ''
    rpe: Optional[float] = None
    source_file: str = ''
    uploaded_at: Optional[datetime] = None

    @property
    def total_volume(self) -> float:
        return sum(ex.total_volume for ex in self.exercises)

    @property
    def total_sets(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)

    def find_exercise(self, name: str) -> Optional[Exercise]:
        for exercise in self.exercises:
            if exercise.name == name:
                return exercise
        return None

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'original_date_key': self.original_date_key,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'name': self.name,
            'duration_seconds': self.duration_seconds,
            'duration_string': self.duration_string,
            'exercises': [ex.to_dict() for ex in self.exercises],
            'notes': self.notes,
            'rpe': self.rpe,
            'source_file': self.source_file,
            'uploaded_at': self.uploaded_at.isoformat() if self.uploaded_at else None,
            'total_volume': self.total_volume,
        }
