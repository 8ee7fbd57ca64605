"""Tests for overall statistics and the training summary."""

from datetime import datetime

import pytest

from analytics.personal_records import compute_all_prs
from analytics.stats import (
    build_training_summary,
    compute_overall_stats,
    monthly_workout_counts,
)


@pytest.fixture
def collection(make_workout):
    return [
        make_workout(datetime(2024, 1, 5, 18, 0), {
            "Bench Press (Barbell)": [(100, 5), (100, 5)],
            "Running (Treadmill)": [(0, 0)],
        }, name="Push"),
        make_workout(datetime(2024, 2, 10, 18, 0), {
            "Squat (Barbell)": [(200, 5)],
            "Leg Extension (Machine)": [(80, 10)],
        }, name="Legs"),
        make_workout(datetime(2024, 2, 20, 18, 0), {
            "Bench Press (Barbell)": [(105, 5)],
        }, name="Push"),
    ]


class TestComputeOverallStats:
    """Tests for collection-wide totals and averages."""

    def test_totals(self, collection):
        stats = compute_overall_stats(collection)

        assert stats["total_workouts"] == 3
        assert stats["total_exercises"] == 5
        assert stats["total_sets"] == 6
        assert stats["total_reps"] == 30
        assert stats["total_volume"] == 3325
        assert stats["total_duration"] == 3 * 3600

    def test_averages(self, collection):
        stats = compute_overall_stats(collection)

        assert stats["avg_workout_duration"] == 3600
        assert stats["avg_exercises_per_workout"] == pytest.approx(5 / 3)
        assert stats["avg_sets_per_exercise"] == pytest.approx(1.2)
        assert stats["avg_volume_per_workout"] == 1108

    def test_muscle_group_distribution(self, collection):
        distribution = compute_overall_stats(collection)["muscle_group_distribution"]

        assert distribution == [
            {"name": "Chest", "count": 2, "percentage": 40},
            {"name": "Quads", "count": 2, "percentage": 40},
            {"name": "Cardio", "count": 1, "percentage": 20},
        ]

    def test_exercise_frequency(self, collection):
        frequency = compute_overall_stats(collection)["exercise_frequency"]

        assert list(frequency.items()) == [
            ("Bench Press (Barbell)", 2),
            ("Running (Treadmill)", 1),
            ("Squat (Barbell)", 1),
            ("Leg Extension (Machine)", 1),
        ]

    def test_fractional_reps_kept(self, make_workout):
        stats = compute_overall_stats([
            make_workout(datetime(2024, 1, 1), {"Squat (Barbell)": [(100, 5.5)]}),
        ])
        assert stats["total_reps"] == 5.5

    def test_empty(self):
        stats = compute_overall_stats([])

        assert stats["total_workouts"] == 0
        assert stats["avg_workout_duration"] == 0
        assert stats["muscle_group_distribution"] == []
        assert stats["exercise_frequency"] == {}


class TestMonthlyWorkoutCounts:
    """Tests for workouts per calendar month."""

    def test_counts_in_month_order(self, collection):
        assert list(monthly_workout_counts(reversed(collection)).items()) == [
            ("2024-01", 1),
            ("2024-02", 2),
        ]

    def test_empty(self):
        assert monthly_workout_counts([]) == {}


class TestBuildTrainingSummary:
    """Tests for the plain-data training summary."""

    def test_recent_workouts_newest_first(self, collection):
        summary = build_training_summary(collection, compute_all_prs(collection), recent_count=2)
        recent = summary["recent_workouts"]

        assert [w["date"] for w in recent] == ["2024-02-20", "2024-02-10"]
        assert recent[0]["exercises"] == [
            {"name": "Bench Press (Barbell)", "sets": "5 reps @ 105.0 lbs"},
        ]
        assert recent[1]["exercises"][1]["sets"] == "10 reps @ 80.0 lbs"

    def test_set_lines_joined(self, collection):
        summary = build_training_summary(collection, compute_all_prs(collection))
        oldest = summary["recent_workouts"][-1]
        assert oldest["exercises"][0]["sets"] == "5 reps @ 100.0 lbs, 5 reps @ 100.0 lbs"

    def test_top_records_strongest_first(self, collection):
        summary = build_training_summary(collection, compute_all_prs(collection), top_records=2)
        records = summary["top_records"]

        assert [r["exercise"] for r in records] == ["Squat (Barbell)", "Bench Press (Barbell)"]
        assert records[0]["description"].startswith("Squat (Barbell): Max e1RM ")
        assert records[0]["description"].endswith(" lbs")

    def test_recent_muscle_groups_skip_cardio(self, collection):
        summary = build_training_summary(collection, compute_all_prs(collection))
        assert summary["recent_muscle_groups"] == ["Chest", "Quads"]

    def test_machines(self, collection):
        summary = build_training_summary(collection, compute_all_prs(collection))
        assert summary["machines"] == ["Leg Extension (Machine)"]

    def test_empty(self):
        summary = build_training_summary([], {})
        assert summary == {
            "recent_workouts": [],
            "top_records": [],
            "recent_muscle_groups": [],
            "machines": [],
        }
