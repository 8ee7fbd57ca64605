"""Tests for exercise name to muscle group mapping."""

import pytest

from analytics.muscle_groups import (
    EXERCISE_MUSCLE_GROUPS,
    MUSCLE_GROUP_KEYWORDS,
    MUSCLE_GROUPS,
    NON_STRENGTH_GROUPS,
    RECOVERY_HOURS,
    get_muscle_group,
    is_machine_exercise,
)


class TestGetMuscleGroup:
    """Tests for muscle group detection."""

    @pytest.mark.parametrize("name,expected", [
        ("Bench Press (Barbell)", "Chest"),
        ("Lat Pulldown (Machine)", "Back"),
        ("Leg Extension (Machine)", "Quads"),
        ("Hip Thrust", "Glutes"),
        ("Plank", "Core"),
    ])
    def test_exact_names(self, name, expected):
        assert get_muscle_group(name) == expected

    @pytest.mark.parametrize("name,expected", [
        ("Squat (Barbell)", "Quads"),
        ("Deadlift (Barbell)", "Hamstrings"),
        ("Overhead Press (Dumbbell)", "Shoulders"),
        ("Hammer Curl (Dumbbell)", "Biceps"),
    ])
    def test_known_name_as_substring(self, name, expected):
        assert get_muscle_group(name) == expected

    @pytest.mark.parametrize("name,expected", [
        ("Bicep Curl (Cable)", "Biceps"),
        ("Triceps Dip", "Triceps"),
        ("Lateral Raise (Dumbbell)", "Shoulders"),
        ("Seated Cable Row", "Back"),
        ("Bulgarian Split Squat Lunge", "Quads"),
        ("Standing Calf Raise (Machine)", "Calves"),
        ("Cable Glute Bridge", "Glutes"),
        ("Decline Crunch", "Core"),
    ])
    def test_keyword_fallback(self, name, expected):
        assert get_muscle_group(name) == expected

    def test_generic_press_is_chest(self):
        assert get_muscle_group("Floor Press (Dumbbell)") == "Chest"

    def test_leg_press_is_not_chest(self):
        assert get_muscle_group("Leg Press (Sled)") == "Quads"

    def test_unknown(self):
        assert get_muscle_group("Farmer's Walk") == "Other"
        assert get_muscle_group("") == "Other"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            EXERCISE_MUSCLE_GROUPS["New Exercise"] = "Chest"


class TestMuscleGroupVocabulary:
    """Every tag the classifier can produce belongs to MUSCLE_GROUPS."""

    def test_table_values(self):
        assert set(EXERCISE_MUSCLE_GROUPS.values()) <= set(MUSCLE_GROUPS)

    def test_keyword_groups(self):
        assert {group for group, _ in MUSCLE_GROUP_KEYWORDS} <= set(MUSCLE_GROUPS)

    def test_recovery_and_summary_groups(self):
        assert set(RECOVERY_HOURS) <= set(MUSCLE_GROUPS)
        assert NON_STRENGTH_GROUPS <= set(MUSCLE_GROUPS)

    @pytest.mark.parametrize("name", ["Bench Press (Barbell)", "Seated Cable Row", "Farmer's Walk", ""])
    def test_classification_in_vocabulary(self, name):
        assert get_muscle_group(name) in MUSCLE_GROUPS


class TestRecoveryHours:
    """Tests for recovery constants."""

    def test_large_groups_need_longest(self):
        assert RECOVERY_HOURS["Quads"] == 72
        assert RECOVERY_HOURS["Hamstrings"] == 72

    def test_small_groups_recover_fastest(self):
        assert RECOVERY_HOURS["Calves"] == 24
        assert RECOVERY_HOURS["Core"] == 24

    def test_cardio_not_tracked(self):
        assert "Cardio" not in RECOVERY_HOURS
        assert "Other" not in RECOVERY_HOURS


class TestIsMachineExercise:
    """Tests for machine detection."""

    def test_machine(self):
        assert is_machine_exercise("Chest Press (Machine)")

    def test_free_weight(self):
        assert not is_machine_exercise("Bench Press (Barbell)")
