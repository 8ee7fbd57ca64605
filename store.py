"""
Workout Store
Holds the merged workout collection in memory for the API process
"""

import logging
import threading
from typing import List

from analytics import MergeResult, Workout, merge_workouts

logger = logging.getLogger(__name__)


class WorkoutStore:
    """
    Process-local workout collection, newest first.

    Nothing is written to disk; restarting the service starts empty.
    """

    def __init__(self):
        self._workouts: List[Workout] = []
        self._lock = threading.Lock()

    @property
    def workouts(self) -> List[Workout]:
        with self._lock:
            return list(self._workouts)

    def merge(self, incoming: List[Workout]) -> MergeResult:
        with self._lock:
            result = merge_workouts(self._workouts, incoming)
            self._workouts = result.workouts
        logger.info(
            "Merged upload: %d new workouts, %d duplicates skipped (%d total)",
            result.new_count, result.skipped_count, len(result.workouts),
        )
        return result

    def clear(self) -> int:
        with self._lock:
            removed = len(self._workouts)
            self._workouts = []
        logger.info("Cleared %d workouts", removed)
        return removed


_store = WorkoutStore()


def get_store() -> WorkoutStore:
    """
    Dependency that provides the workout store.

    Usage:
        @router.get("/items")
        def get_items(store: WorkoutStore = Depends(get_store)):
            ...
    """
    return _store
