"""
Import Errors
Raised when an uploaded export cannot be turned into workouts
"""

from typing import Iterable


class WorkoutImportError(ValueError):
    """Base class for problems with an uploaded workout export"""


class MissingColumnsError(WorkoutImportError):
    """The CSV header lacks columns the Strong export always has"""

    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(f"CSV is missing required columns: {', '.join(self.missing)}")


class NoValidWorkoutDataError(WorkoutImportError):
    """A non-empty file produced zero workouts"""

    def __init__(self, source_file: str = ""):
        self.source_file = source_file
        label = f" in {source_file}" if source_file else ""
        super().__init__(f"No valid workout data found{label}.")
