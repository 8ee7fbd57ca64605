"""
Personal Records
Best-ever values per exercise, rebuilt from the full workout history
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .dates import effective_timestamp, format_date
from .models import Workout


@dataclass
class RecordValue:
    """A record value and when it was set, plus the context of the set"""
    value: float = 0.0
    date: Optional[datetime] = None
    reps: Optional[float] = None
    weight: Optional[float] = None
    sets: Optional[int] = None

    def to_dict(self) -> Dict:
        record = {
            'value': self.value,
            'date': self.date.isoformat() if self.date else None,
        }
        for key in ('reps', 'weight', 'sets'):
            if getattr(self, key) is not None:
                record[key] = getattr(self, key)
        return record


@dataclass
class PersonalRecordSet:
    """
    Records for one exercise.

    rep_maxes maps a whole rep count to the heaviest weight lifted for
    exactly that many reps.
    """
    max_e1rm: RecordValue = field(default_factory=lambda: RecordValue(reps=0, weight=0))
    max_weight: RecordValue = field(default_factory=lambda: RecordValue(reps=0))
    max_reps: RecordValue = field(default_factory=lambda: RecordValue(weight=0))
    max_volume: RecordValue = field(default_factory=lambda: RecordValue(sets=0))
    rep_maxes: Dict[int, RecordValue] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            'max_e1rm': self.max_e1rm.to_dict(),
            'max_weight': self.max_weight.to_dict(),
            'max_reps': self.max_reps.to_dict(),
            'max_volume': self.max_volume.to_dict(),
            'rep_maxes': {
                f"{reps}RM": record.to_dict()
                for reps, record in sorted(self.rep_maxes.items())
            },
        }


def _whole_reps(reps: float) -> Optional[int]:
    if float(reps).is_integer():
        return int(reps)
    return None


def compute_all_prs(workouts: Iterable[Workout]) -> Dict[str, PersonalRecordSet]:
    """
    Calculate personal records for every exercise.

    Only sets with weight and reps count. A record is replaced only by a
    strictly better value, so ties keep the first one seen. Max volume is
    the best single-workout total for the exercise.

    Args:
        workouts: The complete workout collection

    Returns:
        Exercise name -> PersonalRecordSet
    """
    prs: Dict[str, PersonalRecordSet] = {}

    for workout in workouts:
        workout_date = effective_timestamp(workout)

        for exercise in workout.exercises:
            records = prs.setdefault(exercise.name, PersonalRecordSet())
            exercise_volume = 0.0
            exercise_sets = 0

            for s in exercise.sets:
                if not s.is_working_set:
                    continue

                exercise_volume += s.volume
                exercise_sets += 1

                if s.e1rm > records.max_e1rm.value:
                    records.max_e1rm = RecordValue(
                        value=s.e1rm, date=workout_date, reps=s.reps, weight=s.weight
                    )

                if s.weight > records.max_weight.value:
                    records.max_weight = RecordValue(value=s.weight, date=workout_date, reps=s.reps)

                if s.reps > records.max_reps.value:
                    records.max_reps = RecordValue(value=s.reps, date=workout_date, weight=s.weight)

                reps = _whole_reps(s.reps)
                if reps is not None:
                    current = records.rep_maxes.get(reps)
                    if current is None or s.weight > current.value:
                        records.rep_maxes[reps] = RecordValue(value=s.weight, date=workout_date)

            if exercise_volume > records.max_volume.value:
                records.max_volume = RecordValue(
                    value=exercise_volume, date=workout_date, sets=exercise_sets
                )

    return prs


def records_set_in_workout(workout: Workout, prs: Dict[str, PersonalRecordSet]) -> List[Dict]:
    """
    Records that were set during a given workout.

    A record belongs to the workout when its value matches a set in the
    workout and it was set on the same calendar day.
    """
    achieved = []
    workout_day = format_date(effective_timestamp(workout))

    for exercise in workout.exercises:
        records = prs.get(exercise.name)
        if records is None:
            continue

        seen_types = set()
        for s in exercise.sets:
            e1rm_record = records.max_e1rm
            if (s.e1rm > 0 and e1rm_record.date is not None
                    and e1rm_record.value == s.e1rm
                    and format_date(e1rm_record.date) == workout_day
                    and 'e1RM' not in seen_types):
                seen_types.add('e1RM')
                achieved.append({
                    'exercise': exercise.name,
                    'type': 'e1RM',
                    'value': round(s.e1rm, 1),
                    'weight': s.weight,
                    'reps': s.reps,
                })

            reps = _whole_reps(s.reps)
            rep_record = records.rep_maxes.get(reps) if reps is not None else None
            rep_type = f"{reps}RM"
            if (rep_record is not None and rep_record.value == s.weight
                    and format_date(rep_record.date) == workout_day
                    and rep_type not in seen_types):
                seen_types.add(rep_type)
                achieved.append({
                    'exercise': exercise.name,
                    'type': rep_type,
                    'value': s.weight,
                })

    return achieved
