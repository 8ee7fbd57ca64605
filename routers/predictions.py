"""
Predictions Router
API endpoints for gains projection, scheduling and 1RM estimates
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from analytics import (
    GainsProjector,
    OneRepMaxFormula,
    calculate_1rm,
    calculate_all_1rm,
    compute_all_prs,
    predict_next_workout_date,
)
from analytics.dates import effective_timestamp, format_date
from store import WorkoutStore, get_store

router = APIRouter(prefix="/predictions", tags=["Predictions"])


@router.get("/gains")
async def project_gains(
    weeks: int = Query(default=12, ge=1, le=52),
    exercise: Optional[str] = Query(default=None, description="Only return this exercise"),
    store: WorkoutStore = Depends(get_store)
):
    """
    Project estimated 1RM week by week.

    Each exercise trained at least 3 times with an upward trend is
    projected from its current e1RM record; weekly gains shrink by 5%
    each week.

    - **weeks**: How many weeks ahead to project (1-52)
    - **exercise**: Restrict the result to one exercise
    """
    workouts = store.workouts
    prs = compute_all_prs(workouts)
    projections = GainsProjector(weeks=weeks).project(workouts, prs)

    if exercise is not None:
        projections = [p for p in projections if p.exercise_name == exercise]

    return {
        "weeks": weeks,
        "exercises_projected": len({p.exercise_name for p in projections}),
        "projections": [p.to_dict() for p in projections]
    }


@router.get("/next-workout")
async def predict_next_workout(store: WorkoutStore = Depends(get_store)):
    """
    Predict the next training day from recent workout spacing.
    """
    workouts = store.workouts
    last_workout = max((effective_timestamp(w) for w in workouts), default=None)

    return {
        "next_workout_date": predict_next_workout_date(workouts),
        "last_workout_date": format_date(last_workout) if last_workout else None,
        "workouts_considered": min(len(workouts), 10)
    }


@router.get("/1rm/calculate")
async def calculate_one_rep_max(
    weight: float = Query(..., gt=0),
    reps: float = Query(..., gt=0),
    formula: str = Query(
        default="EPLEY",
        pattern="(?i)^(brzycki|epley|lombardi|mayhew|oconner|wathan|average)$"
    )
):
    """
    Calculate estimated 1RM using various formulas.

    - **weight**: Weight lifted
    - **reps**: Number of reps completed
    - **formula**: Formula to use (brzycki, epley, lombardi, mayhew, oconner, wathan, average)
    """
    all_formulas = {
        name: round(value, 1)
        for name, value in calculate_all_1rm(weight, reps).items()
    }

    if formula.lower() == 'average':
        result = round(sum(all_formulas.values()) / len(all_formulas), 1)
        formula_name = 'average'
    else:
        selected = OneRepMaxFormula.resolve(formula)
        result = round(calculate_1rm(weight, reps, selected), 1)
        formula_name = selected.value

    response = {
        "weight": weight,
        "reps": reps,
        "formula": formula_name,
        "estimated_1rm": result,
        "all_formulas": all_formulas
    }
    if reps == 1:
        response["note"] = "1 rep = actual 1RM"
    return response
