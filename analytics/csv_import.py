"""
Strong CSV Importer
Parses a Strong app CSV export into Workout objects and merges
new uploads into an existing collection without duplicating sessions.

Export layout (one row per set):
    Date,Workout Name,Duration,Exercise Name,Set Order,Weight,Reps,
    Distance,Seconds,Notes,Workout Notes,RPE
"""

import csv
import logging
import math
import re
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .dates import effective_timestamp, parse_csv_date, parse_duration_to_seconds
from .exceptions import MissingColumnsError, NoValidWorkoutDataError
from .models import Exercise, Workout, WorkoutSet
from .muscle_groups import get_muscle_group
from .one_rep_max import DEFAULT_FORMULA, OneRepMaxFormula, calculate_1rm

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = (
    'Date',
    'Workout Name',
    'Duration',
    'Exercise Name',
    'Set Order',
    'Weight',
    'Reps',
    'Distance',
    'Seconds',
    'Notes',
    'Workout Notes',
    'RPE',
)

# Strong logs rest timers as rows of their own
REST_TIMER = 'Rest Timer'


@dataclass
class ImportReport:
    """What happened to the rows of one uploaded file"""
    source_file: str = ''
    rows_read: int = 0
    malformed_rows: int = 0
    annotation_rows: int = 0
    invalid_date_rows: int = 0
    workouts_parsed: int = 0

    @property
    def rows_skipped(self) -> int:
        return self.malformed_rows + self.invalid_date_rows

    def to_dict(self) -> Dict:
        report = asdict(self)
        report['rows_skipped'] = self.rows_skipped
        return report


@dataclass
class MergeResult:
    """A merged workout collection, newest first"""
    workouts: List[Workout]
    new_count: int
    skipped_count: int


# ============================================
# Parsing Functions
# ============================================
def split_lines(csv_text: str) -> List[str]:
    """Split on CRLF or LF, dropping lines that are blank once trimmed"""
    return [line for line in re.split(r'\r\n|\n', csv_text or '') if line.strip()]


def parse_csv_line(line: str) -> List[str]:
    """
    Split one CSV line into trimmed fields.

    Quoted fields may contain commas, and a doubled quote inside a quoted
    field stands for one literal quote.

    Raises:
        csv.Error: The line cannot be read as CSV
    """
    values = next(csv.reader([line], strict=True, skipinitialspace=True), [])
    return [value.strip() for value in values]


def _parse_number(value: str) -> float:
    """float(value), or 0 for blanks, garbage and negatives"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) and number > 0 else 0.0


def _parse_optional_number(value: str) -> Optional[float]:
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_set_order(value: str) -> int:
    """Leading integer of the Set Order column (warmup markers become 0)"""
    match = re.match(r'\s*(-?\d+)', value or '')
    return int(match.group(1)) if match else 0


def _new_workout_id(date_key: str) -> str:
    return f"{date_key}-{uuid.uuid4().hex[:9]}"


def _column_index(headers: List[str]) -> Dict[str, int]:
    index = {}
    for position, header in enumerate(headers):
        index.setdefault(header, position)
    return index


def parse_strong_csv_with_report(
    csv_text: str,
    source_file: str = '',
    formula: Union[OneRepMaxFormula, str] = DEFAULT_FORMULA,
) -> Tuple[List[Workout], ImportReport]:
    """
    Parse a Strong export into workouts, in the order they appear.

    Malformed rows and rows with unparseable dates are skipped and
    counted; they never abort the parse.

    Args:
        csv_text: Decoded CSV file contents
        source_file: Label recorded on every workout
        formula: 1RM formula used for each set's e1RM

    Returns:
        (workouts, report)

    Raises:
        MissingColumnsError: The header lacks a required column
    """
    report = ImportReport(source_file=source_file)
    lines = split_lines(csv_text)

    if len(lines) < 2:
        return [], report

    try:
        headers = parse_csv_line(lines[0].lstrip('\ufeff'))
    except csv.Error:
        headers = []
    missing = set(REQUIRED_COLUMNS) - set(headers)
    if missing:
        raise MissingColumnsError(missing)

    column = _column_index(headers)
    uploaded_at = datetime.now()

    workouts: Dict[str, Workout] = {}
    exercises: Dict[str, Dict[str, Exercise]] = {}
    rejected_dates = set()

    for line_number, line in enumerate(lines[1:], start=2):
        report.rows_read += 1

        try:
            values = parse_csv_line(line)
        except csv.Error as e:
            report.malformed_rows += 1
            logger.warning("Skipping unreadable CSV line %d in %r: %s", line_number, source_file, e)
            continue

        if len(values) != len(headers):
            report.malformed_rows += 1
            logger.warning(
                "Skipping malformed CSV line %d in %r: expected %d fields, got %d",
                line_number, source_file, len(headers), len(values),
            )
            continue

        row = {name: values[position] for name, position in column.items()}

        if row['Set Order'] == REST_TIMER or not row['Exercise Name']:
            report.annotation_rows += 1
            continue

        date_key = row['Date']
        if date_key in rejected_dates:
            report.invalid_date_rows += 1
            continue

        workout = workouts.get(date_key)
        if workout is None:
            timestamp = parse_csv_date(date_key)
            if timestamp is None:
                logger.warning(
                    "Skipping workout with unparseable date %r (line %d in %r)",
                    date_key, line_number, source_file,
                )
                rejected_dates.add(date_key)
                report.invalid_date_rows += 1
                continue

            workout = Workout(
                id=_new_workout_id(date_key),
                original_date_key=date_key,
                timestamp=timestamp,
                name=row['Workout Name'],
                duration_seconds=parse_duration_to_seconds(row['Duration']),
                duration_string=row['Duration'],
                notes=row['Workout Notes'] or '',
                rpe=_parse_optional_number(row['RPE']),
                source_file=source_file,
                uploaded_at=uploaded_at,
            )
            workouts[date_key] = workout
            exercises[date_key] = {}

        exercise_name = row['Exercise Name']
        exercise = exercises[date_key].get(exercise_name)
        if exercise is None:
            exercise = Exercise(name=exercise_name, muscle_group=get_muscle_group(exercise_name))
            exercises[date_key][exercise_name] = exercise
            workout.exercises.append(exercise)

        weight = _parse_number(row['Weight'])
        reps = _parse_number(row['Reps'])
        exercise.sets.append(WorkoutSet(
            order=_parse_set_order(row['Set Order']),
            weight=weight,
            reps=reps,
            distance=_parse_number(row['Distance']),
            duration_seconds=_parse_number(row['Seconds']),
            notes=row['Notes'] or '',
            e1rm=calculate_1rm(weight, reps, formula),
        ))

    for workout in workouts.values():
        for exercise in workout.exercises:
            exercise.sets.sort(key=lambda s: s.order)

    report.workouts_parsed = len(workouts)
    logger.info(
        "Parsed %d workouts from %r (%d rows, %d malformed, %d with invalid dates)",
        report.workouts_parsed, source_file, report.rows_read,
        report.malformed_rows, report.invalid_date_rows,
    )

    return list(workouts.values()), report


def parse_strong_csv(
    csv_text: str,
    source_file: str = '',
    formula: Union[OneRepMaxFormula, str] = DEFAULT_FORMULA,
) -> List[Workout]:
    """Parse a Strong export; see parse_strong_csv_with_report"""
    workouts, _ = parse_strong_csv_with_report(csv_text, source_file, formula)
    return workouts


def ingest_with_report(
    csv_text: str,
    source_file: str = '',
    formula: Union[OneRepMaxFormula, str] = DEFAULT_FORMULA,
) -> Tuple[List[Workout], ImportReport]:
    """
    Parse an uploaded export for a caller that needs workouts back.

    Only a blank file yields no workouts without an error.

    Raises:
        MissingColumnsError: The header lacks a required column
        NoValidWorkoutDataError: The file is not blank but no workout
            survived, including a file that is only a header
    """
    workouts, report = parse_strong_csv_with_report(csv_text, source_file, formula)
    if not workouts and (csv_text or '').strip():
        raise NoValidWorkoutDataError(source_file)
    return workouts, report


def ingest(
    csv_text: str,
    source_file: str = '',
    formula: Union[OneRepMaxFormula, str] = DEFAULT_FORMULA,
) -> List[Workout]:
    """Parse an uploaded export; see ingest_with_report"""
    workouts, _ = ingest_with_report(csv_text, source_file, formula)
    return workouts


# ============================================
# Merge Functions
# ============================================
def merge_workouts(existing: Iterable[Workout], incoming: Iterable[Workout]) -> MergeResult:
    """
    Add newly parsed workouts to a collection.

    A workout is new only if no workout already in the collection (or
    accepted earlier from this batch) has the same source date string.
    The merged list is sorted newest first.
    """
    merged = list(existing)
    seen_dates = {w.original_date_key for w in merged}
    new_count = 0
    skipped_count = 0

    for workout in incoming:
        if workout.original_date_key in seen_dates:
            skipped_count += 1
            continue
        seen_dates.add(workout.original_date_key)
        merged.append(workout)
        new_count += 1

    merged.sort(key=effective_timestamp, reverse=True)

    return MergeResult(workouts=merged, new_count=new_count, skipped_count=skipped_count)


def sort_newest_first(workouts: Iterable[Workout]) -> List[Workout]:
    return sorted(workouts, key=effective_timestamp, reverse=True)
