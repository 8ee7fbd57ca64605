"""
Training Recommendations Service
Suggests what to train next from the lifter's own history

CONCEPTS DEMONSTRATED:
1. Rule-based Systems - Recovery thresholds decide what is trainable
2. Data-driven Recommendations - Templates mined from repeated workouts
3. Balancing Multiple Factors - Recovery, PR age and habitual sessions
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional

from .dates import effective_timestamp
from .fatigue import MuscleFatigueRecord, compute_muscle_fatigue, ready_muscle_groups
from .models import Workout
from .muscle_groups import get_muscle_group
from .personal_records import PersonalRecordSet
from .streaks import compute_streak, predict_next_workout_date

logger = logging.getLogger(__name__)


@dataclass
class WorkoutTemplate:
    """A distinct set of exercises the lifter has performed together"""
    exercises: List[str]
    count: int = 1
    workout_names: List[str] = field(default_factory=list)
    last_performed: Optional[datetime] = None
    muscle_groups: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'exercises': list(self.exercises),
            'count': self.count,
            'workout_names': list(self.workout_names),
            'last_performed': self.last_performed.isoformat() if self.last_performed else None,
            'muscle_groups': list(self.muscle_groups),
        }


class TrainingRecommender:
    """
    Generates workout suggestions based on:
    - Muscle group recovery
    - Workouts the lifter repeats
    - How long ago each e1RM record was set
    """

    # Recovery needed before a group counts as ready to train
    READY_RECOVERY = 90
    # Recovery needed before suggesting a PR attempt
    PR_ATTEMPT_RECOVERY = 85
    # Per-group recovery for a template's group to count as ready
    TEMPLATE_GROUP_RECOVERY = 80
    # Share of a template's groups that must be ready
    TEMPLATE_READY_SHARE = 0.7
    # Partially recovered groups keep their working weight
    MAINTAIN_RECOVERY = 70

    MIN_TEMPLATE_USES = 2
    MIN_DAYS_SINCE_PR = 7
    PROGRESSION = 1.025
    DELOAD = 0.9
    SETS_PER_EXERCISE = 3
    DEFAULT_REPS = 10

    MAX_TEMPLATES = 5
    MAX_PR_OPPORTUNITIES = 5
    MAX_SUGGESTED_WORKOUTS = 3
    EXERCISES_PER_GROUP = 2

    def find_templates(self, workouts: Iterable[Workout]) -> List[WorkoutTemplate]:
        """
        Group workouts by their exact exercise list.

        Returns:
            Templates used at least twice, most used first
        """
        templates: Dict[str, WorkoutTemplate] = {}

        for workout in workouts:
            exercises = sorted(ex.name for ex in workout.exercises)
            key = '|'.join(exercises)
            workout_date = effective_timestamp(workout)

            template = templates.get(key)
            if template is None:
                template = WorkoutTemplate(exercises=exercises, count=0, last_performed=workout_date)
                templates[key] = template

            template.count += 1
            if workout.name not in template.workout_names:
                template.workout_names.append(workout.name)
            if workout_date > template.last_performed:
                template.last_performed = workout_date
            for exercise in workout.exercises:
                if exercise.muscle_group not in template.muscle_groups:
                    template.muscle_groups.append(exercise.muscle_group)

        frequent = [t for t in templates.values() if t.count >= self.MIN_TEMPLATE_USES]
        return sorted(frequent, key=lambda t: t.count, reverse=True)

    def find_pr_opportunities(self,
                              prs: Mapping[str, PersonalRecordSet],
                              fatigue: Mapping[str, MuscleFatigueRecord],
                              now: datetime) -> List[Dict]:
        """Exercises whose e1RM record is at least a week old and whose group has recovered"""
        opportunities = []

        for exercise_name, records in prs.items():
            record = records.max_e1rm
            if record.date is None:
                continue

            days_since_pr = round((now - record.date).total_seconds() / 86400)
            if days_since_pr < self.MIN_DAYS_SINCE_PR:
                continue

            muscle_group = get_muscle_group(exercise_name)
            group_fatigue = fatigue.get(muscle_group)
            if group_fatigue is None or group_fatigue.recovery_percentage < self.PR_ATTEMPT_RECOVERY:
                continue

            opportunities.append({
                'exercise': exercise_name,
                'muscle_group': muscle_group,
                'current_pr': record.value,
                'days_since_pr': days_since_pr,
                'reps': record.reps,
                'weight': record.weight,
                'suggested_weight': round((record.weight or 0) * self.PROGRESSION),
                'suggested_reps': record.reps,
            })

        opportunities.sort(key=lambda o: o['days_since_pr'], reverse=True)
        return opportunities

    def _group_recovery(self, fatigue: Mapping[str, MuscleFatigueRecord], muscle_group: str) -> float:
        record = fatigue.get(muscle_group)
        # untracked groups (Cardio, Other) count as recovered
        if record is None:
            return 100.0
        return record.recovery_percentage

    def _is_template_ready(self, template: WorkoutTemplate,
                           fatigue: Mapping[str, MuscleFatigueRecord]) -> bool:
        ready = [
            muscle for muscle in template.muscle_groups
            if muscle in fatigue and fatigue[muscle].recovery_percentage >= self.TEMPLATE_GROUP_RECOVERY
        ]
        return len(ready) >= len(template.muscle_groups) * self.TEMPLATE_READY_SHARE

    def _suggest_exercise(self, exercise_name: str, records: PersonalRecordSet,
                          fatigue: Mapping[str, MuscleFatigueRecord]) -> Dict:
        muscle_group = get_muscle_group(exercise_name)
        max_weight = records.max_weight.value or 0
        recovery = self._group_recovery(fatigue, muscle_group)

        if recovery >= self.READY_RECOVERY:
            weight, notes = round(max_weight * self.PROGRESSION), 'Push for a new PR'
        elif recovery >= self.MAINTAIN_RECOVERY:
            weight, notes = max_weight, 'Maintain current level'
        else:
            weight, notes = round(max_weight * self.DELOAD), 'Light recovery workout'

        return {
            'exercise': exercise_name,
            'muscle_group': muscle_group,
            'sets': self.SETS_PER_EXERCISE,
            'suggested_weight': weight,
            'suggested_reps': records.max_e1rm.reps or self.DEFAULT_REPS,
            'notes': notes,
        }

    def _estimated_duration(self, exercise_count: int) -> str:
        # roughly 1.5 minutes per set plus a 5 minute warmup
        return f"{round(exercise_count * self.SETS_PER_EXERCISE * 1.5 + 5)}m"

    def suggest_from_templates(self, templates: List[WorkoutTemplate],
                               prs: Mapping[str, PersonalRecordSet],
                               fatigue: Mapping[str, MuscleFatigueRecord]) -> List[Dict]:
        """Repeat habitual workouts whose muscle groups are mostly recovered"""
        suitable = [t for t in templates if self._is_template_ready(t, fatigue)]

        suggestions = []
        for template in suitable[:self.MAX_SUGGESTED_WORKOUTS]:
            exercises = [
                self._suggest_exercise(name, prs[name], fatigue)
                for name in template.exercises
                if name in prs
            ]
            suggestions.append({
                'name': template.workout_names[0],
                'exercises': exercises,
                'muscle_groups': list(template.muscle_groups),
                'estimated_duration': self._estimated_duration(len(exercises)),
                'focus': (
                    f"{template.muscle_groups[0]} Focus"
                    if len(template.muscle_groups) == 1 else 'Full Body'
                ),
            })
        return suggestions

    def suggest_recovery_workout(self, ready_groups: List[str],
                                 prs: Mapping[str, PersonalRecordSet]) -> Optional[Dict]:
        """Build a workout from the strongest known exercises of each ready group"""
        exercises = []

        for muscle_group in ready_groups:
            candidates = [name for name in prs if get_muscle_group(name) == muscle_group]
            candidates.sort(key=lambda name: prs[name].max_e1rm.value, reverse=True)

            for name in candidates[:self.EXERCISES_PER_GROUP]:
                records = prs[name]
                exercises.append({
                    'exercise': name,
                    'muscle_group': muscle_group,
                    'sets': self.SETS_PER_EXERCISE,
                    'suggested_weight': records.max_weight.value or 0,
                    'suggested_reps': records.max_e1rm.reps or self.DEFAULT_REPS,
                    'notes': 'Focus on form and progression',
                })

        if not exercises:
            return None

        return {
            'name': 'Custom Recovery Workout',
            'exercises': exercises,
            'muscle_groups': list(ready_groups),
            'estimated_duration': self._estimated_duration(len(exercises)),
            'focus': (
                f"{ready_groups[0]} Recovery"
                if len(ready_groups) == 1 else 'Multi-Muscle Recovery'
            ),
        }

    def generate_suggestions(self, workouts: Iterable[Workout],
                             prs: Optional[Mapping[str, PersonalRecordSet]],
                             now: Optional[datetime] = None) -> Dict:
        """
        Recommend the next workout.

        Args:
            workouts: Workout collection, any order
            prs: Personal records for the same collection
            now: Reference time (defaults to the current time)

        Returns:
            Suggestion payload, or an error payload when there is nothing
            to base suggestions on
        """
        workouts = list(workouts)
        if not workouts or prs is None:
            return {'error': 'Insufficient data to generate suggestions'}

        now = now or datetime.now()

        fatigue = compute_muscle_fatigue(workouts, now=now)
        templates = self.find_templates(workouts)
        ready_groups = ready_muscle_groups(fatigue, threshold=self.READY_RECOVERY)
        opportunities = self.find_pr_opportunities(prs, fatigue, now)

        suggested_workouts = self.suggest_from_templates(templates, prs, fatigue)
        if not suggested_workouts and ready_groups:
            recovery_workout = self.suggest_recovery_workout(ready_groups, prs)
            if recovery_workout is not None:
                suggested_workouts.append(recovery_workout)

        logger.info(
            "Generated %d workout suggestions (%d templates, %d ready groups, %d PR opportunities)",
            len(suggested_workouts), len(templates), len(ready_groups), len(opportunities),
        )

        return {
            'next_workout_date': predict_next_workout_date(workouts, now=now),
            'muscle_fatigue': {muscle: record.to_dict() for muscle, record in fatigue.items()},
            'workout_templates': [t.to_dict() for t in templates[:self.MAX_TEMPLATES]],
            'ready_muscle_groups': ready_groups,
            'pr_opportunities': opportunities[:self.MAX_PR_OPPORTUNITIES],
            'streak': compute_streak(workouts, today=now).to_dict(),
            'suggested_workouts': suggested_workouts,
        }
