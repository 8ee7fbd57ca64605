"""
Workout Streaks & Scheduling
Consecutive-day streaks and a guess at the next training day
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Set, Union

from .dates import effective_timestamp, format_date
from .models import Workout

# How many recent workouts set the expected training cadence
CADENCE_WINDOW = 10

ONE_DAY = timedelta(days=1)


@dataclass
class StreakRecord:
    current: int = 0
    longest: int = 0
    last_workout_date: Optional[str] = None
    streak_dates: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'current': self.current,
            'longest': self.longest,
            'last_workout_date': self.last_workout_date,
            'streak_dates': list(self.streak_dates),
        }


def _as_date(value: Union[date, datetime, None]) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def workout_dates(workouts: Iterable[Workout]) -> Set[date]:
    """Distinct calendar days with at least one workout"""
    return {effective_timestamp(w).date() for w in workouts}


def compute_streak(workouts: Iterable[Workout], today: Union[date, datetime, None] = None) -> StreakRecord:
    """
    Calculate the current and longest run of consecutive workout days.

    The current streak is alive only if the last workout was yesterday or
    later (a workout dated after today still counts); it then extends backwards one day at a time from the day
    before that workout.
    """
    dates = workout_dates(workouts)
    if not dates:
        return StreakRecord()

    today = _as_date(today)
    last_workout = max(dates)

    current = 0
    streak_dates = []

    if last_workout >= today - ONE_DAY:
        current = 1
        streak_dates.append(last_workout)

        check_date = last_workout - ONE_DAY
        while check_date in dates:
            current += 1
            streak_dates.append(check_date)
            check_date -= ONE_DAY

    longest = current
    run = 0
    previous = None
    for day in sorted(dates):
        if previous is not None and (day - previous).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day

    return StreakRecord(
        current=current,
        longest=longest,
        last_workout_date=last_workout.isoformat(),
        streak_dates=[d.isoformat() for d in streak_dates],
    )


def predict_next_workout_date(workouts: Iterable[Workout], now: Optional[datetime] = None) -> str:
    """
    Predict the next workout day (YYYY-MM-DD) from recent training cadence.

    The average gap between the last few workouts, rounded to whole days
    and at least one, is added to the most recent workout. Stale
    predictions and thin histories fall back to tomorrow.
    """
    now = now or datetime.now()
    tomorrow = format_date(now + ONE_DAY)

    recent = sorted((effective_timestamp(w) for w in workouts), reverse=True)[:CADENCE_WINDOW]
    if len(recent) < 2:
        return tomorrow

    gaps = [
        (newer - older).total_seconds() / 86400
        for newer, older in zip(recent, recent[1:])
    ]
    average_days = max(1, int(round(float(np.mean(gaps)))))

    next_date = recent[0] + timedelta(days=average_days)
    if next_date < now:
        return tomorrow

    return format_date(next_date)


def calculate_workout_frequency(workouts: Iterable[Workout], days: int = 365,
                                today: Union[date, datetime, None] = None) -> List[Dict]:
    """
    Day-by-day training activity for a heat map.

    Covers every calendar day from `days` days ago through today; workouts
    outside that range are ignored. `level` is the workout count capped at 4.
    """
    workouts = list(workouts)
    if not workouts:
        return []

    today = _as_date(today)
    calendar = pd.date_range(end=today, periods=days + 1, freq='D')
    day_map = {
        day.date(): {'date': day.strftime('%Y-%m-%d'), 'count': 0, 'volume': 0.0, 'workouts': []}
        for day in calendar
    }

    for workout in workouts:
        entry = day_map.get(effective_timestamp(workout).date())
        if entry is None:
            continue

        volume = workout.total_volume
        entry['count'] += 1
        entry['volume'] += volume
        entry['workouts'].append({
            'id': workout.id,
            'name': workout.name,
            'volume': volume,
            'duration_seconds': workout.duration_seconds,
        })

    frequency = []
    for entry in day_map.values():
        entry['volume'] = round(entry['volume'])
        entry['level'] = min(4, entry['count'])
        frequency.append(entry)

    return frequency
