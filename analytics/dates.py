"""
Duration and Date Helpers
Parsing and formatting for the values found in a Strong export
"""

import math
import re
from datetime import date, datetime
from typing import Optional, Union

# Strong writes every workout date as "YYYY-MM-DD HH:MM:SS"
CSV_DATE_PATTERN = re.compile(
    r'^(\d{4})-(\d{1,2})-(\d{1,2})[ T](\d{1,2}):(\d{2}):(\d{2})$'
)

DATE_FORMATS = {
    'YYYY-MM': '%Y-%m',
    'YYYY-MM-DD': '%Y-%m-%d',
    'MM/DD': '%m/%d',
    'MM/DD/YYYY': '%m/%d/%Y',
    'MM/DD HH:mm': '%m/%d %H:%M',
    'Month DD, YYYY': '%B {day}, %Y',
    'Month DD, YYYY HH:mm': '%B {day}, %Y %H:%M',
}


def parse_duration_to_seconds(duration_str) -> int:
    """
    Parse a Strong duration like "1h 5m" or "45m 30s" into seconds.

    Returns 0 for empty or non-string input.
    """
    if not duration_str or not isinstance(duration_str, str):
        return 0

    total_seconds = 0
    hours = re.search(r'(\d+)\s*h', duration_str)
    minutes = re.search(r'(\d+)\s*m', duration_str)
    seconds = re.search(r'(\d+)\s*s', duration_str)

    if hours:
        total_seconds += int(hours.group(1)) * 3600
    if minutes:
        total_seconds += int(minutes.group(1)) * 60
    if seconds:
        total_seconds += int(seconds.group(1))

    return total_seconds


def format_duration(total_seconds) -> str:
    """Format seconds as "1h 5m", "45m" or "30s" ("N/A" for nothing)"""
    if total_seconds is None or (isinstance(total_seconds, float) and math.isnan(total_seconds)):
        return "N/A"
    total_seconds = int(total_seconds)
    if total_seconds == 0:
        return "N/A"

    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if seconds > 0 and hours == 0 and minutes == 0:
        parts.append(f"{seconds}s")

    return ' '.join(parts) or "0s"


def parse_csv_date(date_str) -> Optional[datetime]:
    """
    Parse a "YYYY-MM-DD HH:MM:SS" date into a datetime.

    The string is split into its calendar components explicitly, so the
    result never depends on locale. Anything that does not match, or that
    names an impossible instant (month 13, Feb 30), returns None.
    """
    if not isinstance(date_str, str):
        return None

    match = CSV_DATE_PATTERN.match(date_str.strip())
    if not match:
        return None

    year, month, day, hour, minute, second = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None


def format_date(value: Union[datetime, date, str], fmt: str = 'YYYY-MM-DD') -> str:
    """
    Format a date for display.

    Args:
        value: datetime, date, or a Strong date string
        fmt: One of the keys of DATE_FORMATS

    Raises:
        ValueError: Unknown format or a string that is not a Strong date
    """
    if fmt not in DATE_FORMATS:
        raise ValueError(f"Unknown date format: {fmt}")

    if isinstance(value, str):
        parsed = parse_csv_date(value)
        if parsed is None:
            raise ValueError(f"Invalid date: {value!r}")
        value = parsed
    elif not isinstance(value, date):
        raise ValueError(f"Invalid date: {value!r}")

    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)

    # %-d is not portable, so the unpadded day is substituted by hand
    pattern = DATE_FORMATS[fmt].replace('{day}', str(value.day))
    return value.strftime(pattern)


def effective_timestamp(workout) -> datetime:
    """
    The moment a workout happened.

    Uses the parsed timestamp, falling back to re-parsing the source date
    string for workouts restored without one. Workouts with neither sort
    before everything else.
    """
    if workout.timestamp is not None:
        return workout.timestamp
    parsed = parse_csv_date(workout.original_date_key)
    return parsed if parsed is not None else datetime.min
