"""
Muscle Group Detection
Maps Strong exercise names to the muscle group they mostly train
"""

from types import MappingProxyType

# ============================================
# Exercise Name Mapping
# ============================================
# Strong's built-in exercise names, checked exactly and then as substrings

EXERCISE_MUSCLE_GROUPS = MappingProxyType({
    # Chest
    'Chest Press (Machine)': 'Chest',
    'Chest Fly': 'Chest',
    'Incline Dumbbell Press': 'Chest',
    'Push-up': 'Chest',
    'Bench Press (Barbell)': 'Chest',

    # Back
    'Lat Pulldown (Machine)': 'Back',
    'Seated Row (Machine)': 'Back',
    'MTS Row': 'Back',
    'Pull-up': 'Back',
    'Bent Over Row': 'Back',
    'T-Bar Row': 'Back',

    # Shoulders
    'Shoulder Press (Machine)': 'Shoulders',
    'Lateral Raise (Machine)': 'Shoulders',
    'Reverse Fly (Machine)': 'Shoulders',
    'Overhead Press': 'Shoulders',
    'Arnold Press': 'Shoulders',

    # Legs
    'Seated Leg Curl (Machine)': 'Hamstrings',
    'Lying Leg Curl (Machine)': 'Hamstrings',
    'Leg Extension (Machine)': 'Quads',
    'Seated Leg Press (Machine)': 'Quads',
    'Squat': 'Quads',
    'Hack Squat': 'Quads',
    'Deadlift': 'Hamstrings',
    'Romanian Deadlift': 'Hamstrings',
    'Calf Extension Machine': 'Calves',
    'Seated Calf Raise': 'Calves',
    'Hip Adductor (Machine)': 'Adductors',
    'Hip Abductor (Machine)': 'Abductors',
    'Glute Kickback (Machine)': 'Glutes',
    'Hip Thrust': 'Glutes',

    # Arms
    'Bicep Curl (Machine)': 'Biceps',
    'Preacher Curl (Machine)': 'Biceps',
    'Triceps Press Machine': 'Triceps',
    'Triceps Extension (Machine)': 'Triceps',
    'Dumbbell Bicep Curl': 'Biceps',
    'Hammer Curl': 'Biceps',
    'Tricep Pushdown': 'Triceps',
    'Overhead Tricep Extension': 'Triceps',

    # Cardio / Core
    'Running (Treadmill)': 'Cardio',
    'Cycling': 'Cardio',
    'Elliptical': 'Cardio',
    'Plank': 'Core',
    'Crunches': 'Core',
    'Leg Raise': 'Core',
})

MUSCLE_GROUPS = (
    'Chest', 'Back', 'Shoulders', 'Biceps', 'Triceps', 'Quads', 'Hamstrings',
    'Calves', 'Glutes', 'Core', 'Adductors', 'Abductors', 'Cardio', 'Other',
)

# Hours a muscle group needs to fully recover after training
RECOVERY_HOURS = MappingProxyType({
    'Chest': 48,
    'Back': 48,
    'Shoulders': 48,
    'Biceps': 48,
    'Triceps': 48,
    'Quads': 72,
    'Hamstrings': 72,
    'Calves': 24,
    'Glutes': 48,
    'Core': 24,
})

# Groups left out of strength summaries
NON_STRENGTH_GROUPS = frozenset({'Cardio', 'Other'})

# Keyword fallbacks, checked in order after the name table.
# Chest also claims any "press" that is not a leg or shoulder press.
MUSCLE_GROUP_KEYWORDS = (
    ('Biceps', ('curl',)),
    ('Triceps', ('tricep',)),
    ('Chest', ('chest',)),
    ('Shoulders', ('shoulder', 'deltoid', 'lateral raise')),
    ('Back', ('row', 'pulldown', 'lat ')),
    ('Quads', ('squat', 'lunge', 'leg press', 'quad')),
    ('Hamstrings', ('hamstring', 'deadlift')),
    ('Calves', ('calf', 'calves')),
    ('Glutes', ('glute',)),
    ('Core', ('abs', 'crunch', 'plank')),
)


def _is_chest_press(name_lower: str) -> bool:
    return 'press' in name_lower and 'leg' not in name_lower and 'shoulder' not in name_lower


def get_muscle_group(exercise_name: str) -> str:
    """Guess the muscle group of an exercise from its name"""
    if not exercise_name:
        return 'Other'

    if exercise_name in EXERCISE_MUSCLE_GROUPS:
        return EXERCISE_MUSCLE_GROUPS[exercise_name]

    name_lower = exercise_name.lower()

    for known_name, muscle_group in EXERCISE_MUSCLE_GROUPS.items():
        if known_name.lower() in name_lower:
            return muscle_group

    for muscle_group, keywords in MUSCLE_GROUP_KEYWORDS:
        if any(keyword in name_lower for keyword in keywords):
            return muscle_group
        if muscle_group == 'Chest' and _is_chest_press(name_lower):
            return muscle_group

    return 'Other'


def is_machine_exercise(exercise_name: str) -> bool:
    """Strong marks machine variants with a "(Machine)" suffix"""
    return '(machine)' in exercise_name.lower()
