"""Tests for streaks, next-workout prediction and the activity heat map."""

from datetime import date, datetime, timedelta

import pytest

from analytics.streaks import (
    calculate_workout_frequency,
    compute_streak,
    predict_next_workout_date,
)

TODAY = date(2024, 3, 15)


@pytest.fixture
def workouts_on(make_workout):
    """Build one small workout per given date (at 18:00)."""
    def _workouts_on(*days: date):
        return [
            make_workout(datetime(d.year, d.month, d.day, 18, 0), {"Squat (Barbell)": [(100, 5)]})
            for d in days
        ]
    return _workouts_on


class TestComputeStreak:
    """Tests for consecutive-day streaks."""

    def test_three_days_ending_today(self, workouts_on):
        workouts = workouts_on(TODAY - timedelta(days=2), TODAY - timedelta(days=1), TODAY)
        streak = compute_streak(workouts, today=TODAY)

        assert streak.current == 3
        assert streak.longest >= 3
        assert streak.last_workout_date == "2024-03-15"
        assert streak.streak_dates == ["2024-03-15", "2024-03-14", "2024-03-13"]

    def test_streak_ending_yesterday_is_alive(self, workouts_on):
        workouts = workouts_on(TODAY - timedelta(days=2), TODAY - timedelta(days=1))
        assert compute_streak(workouts, today=TODAY).current == 2

    def test_streak_broken_two_days_ago(self, workouts_on):
        workouts = workouts_on(TODAY - timedelta(days=3), TODAY - timedelta(days=2))
        streak = compute_streak(workouts, today=TODAY)

        assert streak.current == 0
        assert streak.longest == 2
        assert streak.streak_dates == []

    def test_longest_from_history(self, workouts_on):
        workouts = workouts_on(
            date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3), date(2024, 3, 4),
            date(2024, 3, 10),
            TODAY,
        )
        streak = compute_streak(workouts, today=TODAY)
        assert streak.current == 1
        assert streak.longest == 4

    def test_two_workouts_same_day_count_once(self, make_workout):
        workouts = [
            make_workout(datetime(2024, 3, 15, 7, 0), {"Squat": [(100, 5)]}),
            make_workout(datetime(2024, 3, 15, 19, 0), {"Squat": [(100, 5)]}),
            make_workout(datetime(2024, 3, 14, 19, 0), {"Squat": [(100, 5)]}),
        ]
        streak = compute_streak(workouts, today=TODAY)
        assert streak.current == 2
        assert streak.longest == 2

    def test_workout_dated_after_today_keeps_streak(self, workouts_on):
        """An export stamped ahead of the local clock still counts as current."""
        workouts = workouts_on(TODAY, TODAY + timedelta(days=1))
        streak = compute_streak(workouts, today=TODAY)

        assert streak.current == 2
        assert streak.streak_dates == ["2024-03-16", "2024-03-15"]

    def test_accepts_datetime_today(self, workouts_on):
        workouts = workouts_on(TODAY)
        assert compute_streak(workouts, today=datetime(2024, 3, 15, 23, 59)).current == 1

    def test_empty(self):
        streak = compute_streak([], today=TODAY)
        assert streak.current == 0
        assert streak.longest == 0
        assert streak.last_workout_date is None


class TestPredictNextWorkoutDate:
    """Tests for cadence-based scheduling."""

    def test_average_gap_added_to_last_workout(self, make_workout, now):
        workouts = [
            make_workout(now - timedelta(days=days), {"Squat": [(100, 5)]})
            for days in (1, 4, 7, 10)
        ]
        assert predict_next_workout_date(workouts, now=now) == "2024-03-17"

    def test_gap_rounds_and_is_at_least_one_day(self, make_workout, now):
        workouts = [
            make_workout(now - timedelta(hours=hours), {"Squat": [(100, 5)]})
            for hours in (1, 3, 5)
        ]
        assert predict_next_workout_date(workouts, now=now) == "2024-03-16"

    def test_single_workout_means_tomorrow(self, make_workout, now):
        workouts = [make_workout(now - timedelta(days=1), {"Squat": [(100, 5)]})]
        assert predict_next_workout_date(workouts, now=now) == "2024-03-16"

    def test_stale_prediction_means_tomorrow(self, make_workout, now):
        workouts = [
            make_workout(now - timedelta(days=days), {"Squat": [(100, 5)]})
            for days in (30, 32, 34)
        ]
        assert predict_next_workout_date(workouts, now=now) == "2024-03-16"

    def test_empty(self, now):
        assert predict_next_workout_date([], now=now) == "2024-03-16"

    def test_only_recent_cadence_counts(self, make_workout, now):
        recent = [
            make_workout(now - timedelta(days=days), {"Squat": [(100, 5)]})
            for days in range(1, 11)
        ]
        ancient = [make_workout(now - timedelta(days=400), {"Squat": [(100, 5)]})]
        assert predict_next_workout_date(recent + ancient, now=now) == "2024-03-15"


class TestCalculateWorkoutFrequency:
    """Tests for the daily activity heat map."""

    def test_covers_range_inclusive(self, workouts_on):
        frequency = calculate_workout_frequency(workouts_on(TODAY), days=7, today=TODAY)
        assert len(frequency) == 8
        assert frequency[0]["date"] == "2024-03-08"
        assert frequency[-1]["date"] == "2024-03-15"

    def test_counts_and_levels(self, make_workout):
        workouts = [
            make_workout(datetime(2024, 3, 14, 7, 0), {"Squat": [(100, 5)]}, workout_id="a"),
            make_workout(datetime(2024, 3, 14, 19, 0), {"Squat": [(100, 5), (100, 5)]}, workout_id="b"),
            make_workout(datetime(2024, 1, 1, 19, 0), {"Squat": [(100, 5)]}, workout_id="old"),
        ]
        frequency = calculate_workout_frequency(workouts, days=7, today=TODAY)
        by_date = {entry["date"]: entry for entry in frequency}

        day = by_date["2024-03-14"]
        assert day["count"] == 2
        assert day["level"] == 2
        assert day["volume"] == 1500
        assert [w["id"] for w in day["workouts"]] == ["a", "b"]
        assert by_date["2024-03-13"]["level"] == 0
        assert sum(entry["count"] for entry in frequency) == 2

    def test_level_caps_at_four(self, make_workout):
        workouts = [
            make_workout(datetime(2024, 3, 15, hour, 0), {"Squat": [(100, 5)]}, workout_id=str(hour))
            for hour in range(6, 12)
        ]
        frequency = calculate_workout_frequency(workouts, days=7, today=TODAY)
        assert frequency[-1]["count"] == 6
        assert frequency[-1]["level"] == 4

    def test_empty(self):
        assert calculate_workout_frequency([], today=TODAY) == []
