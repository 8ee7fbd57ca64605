"""
Recommendations Router
API endpoints for training recommendations
"""

from fastapi import APIRouter, Depends

from analytics import TrainingRecommender, build_training_summary, compute_all_prs
from store import WorkoutStore, get_store

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


@router.get("/next-workout")
async def get_next_workout_recommendation(store: WorkoutStore = Depends(get_store)):
    """
    Get suggestions for your next workout.

    Considers:
    - Which muscle groups have recovered
    - Workouts you repeat regularly
    - Exercises where a new PR is worth attempting
    """
    workouts = store.workouts
    recommender = TrainingRecommender()
    return recommender.generate_suggestions(workouts, compute_all_prs(workouts))


@router.get("/summary")
async def get_training_summary(store: WorkoutStore = Depends(get_store)):
    """
    Compact summary of recent training.

    Recent workouts, strongest lifts, recently trained muscle groups and
    machines used, for tools that suggest workouts.
    """
    workouts = store.workouts
    return build_training_summary(workouts, compute_all_prs(workouts))
