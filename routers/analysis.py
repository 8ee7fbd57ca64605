"""
Analysis Router
API endpoints for personal records, recovery, streaks and training statistics
"""

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query

from analytics import (
    calculate_exercise_trends,
    calculate_workout_frequency,
    compute_all_prs,
    compute_muscle_fatigue,
    compute_overall_stats,
    compute_streak,
    monthly_workout_counts,
    ready_muscle_groups,
)
from store import WorkoutStore, get_store

router = APIRouter(prefix="/analysis", tags=["Analysis"])


@router.get("/records")
async def get_personal_records(store: WorkoutStore = Depends(get_store)):
    """
    Personal records for every exercise.

    Includes max e1RM, max weight, max reps, best single-workout volume
    and rep maxes (heaviest weight for an exact rep count).
    """
    prs = compute_all_prs(store.workouts)
    return {
        "exercise_count": len(prs),
        "records": {name: records.to_dict() for name, records in sorted(prs.items())}
    }


@router.get("/records/{exercise_name}")
async def get_exercise_records(
    exercise_name: str,
    store: WorkoutStore = Depends(get_store)
):
    """
    Personal records for one exercise.

    - **exercise_name**: Exercise name exactly as it appears in the export
    """
    prs = compute_all_prs(store.workouts)
    if exercise_name not in prs:
        raise HTTPException(status_code=404, detail="Exercise not found")

    return {
        "exercise": exercise_name,
        "records": prs[exercise_name].to_dict()
    }


@router.get("/fatigue")
async def get_muscle_fatigue(
    ready_threshold: float = Query(default=90, ge=0, le=100),
    store: WorkoutStore = Depends(get_store)
):
    """
    Fatigue and recovery for each muscle group.

    Fatigue scores are relative: the most fatigued group scores 100.

    - **ready_threshold**: Recovery percentage at which a group counts as ready
    """
    fatigue = compute_muscle_fatigue(store.workouts, now=datetime.now())
    return {
        "muscle_groups": {muscle: record.to_dict() for muscle, record in fatigue.items()},
        "ready_muscle_groups": ready_muscle_groups(fatigue, threshold=ready_threshold)
    }


@router.get("/streak")
async def get_workout_streak(store: WorkoutStore = Depends(get_store)):
    """Current and longest run of consecutive training days"""
    return compute_streak(store.workouts).to_dict()


@router.get("/stats")
async def get_overall_stats(store: WorkoutStore = Depends(get_store)):
    """Totals, averages, exercise frequency and muscle group distribution"""
    workouts = store.workouts
    stats = compute_overall_stats(workouts)
    stats["workouts_per_month"] = monthly_workout_counts(workouts)
    return stats


@router.get("/frequency")
async def get_workout_frequency(
    days: int = Query(default=365, ge=7, le=730),
    store: WorkoutStore = Depends(get_store)
):
    """
    Daily workout counts and volume for a calendar heat map.

    - **days**: How many days back from today to cover (7-730)
    """
    return {
        "days": days,
        "frequency": calculate_workout_frequency(store.workouts, days=days)
    }


@router.get("/trends/{exercise_name}")
async def get_exercise_trends(
    exercise_name: str,
    store: WorkoutStore = Depends(get_store)
):
    """
    Session-by-session progress for one exercise.

    - **exercise_name**: Exercise name exactly as it appears in the export
    """
    trends = calculate_exercise_trends(store.workouts, exercise_name)
    if trends is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return trends
