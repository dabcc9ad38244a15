"""Grading, attendance and listing policy constants."""

GOOD_STANDING_PERCENTAGE = 75
DEFAULT_PASS_PERCENTAGE = 40

GPA_DECIMALS = 2
MAX_GRADE_POINT = 10

# Highest grade first; a percentage earns the first grade whose floor it reaches.
# D spans [pass mark, 40): empty at the default pass mark, 33-40 when PASS_PERCENTAGE=33.
GRADE_THRESHOLDS: tuple[tuple[str, float], ...] = (
    ("O", 90),
    ("A+", 80),
    ("A", 70),
    ("B+", 60),
    ("B", 50),
    ("C", 40),
    ("D", DEFAULT_PASS_PERCENTAGE),
)
FAIL_GRADE = "F"

GRADE_POINTS: dict[str, int] = {
    "O": 10,
    "A+": 10,
    "A": 9,
    "B+": 8,
    "B": 7,
    "C+": 6,
    "C": 5,
    "D": 4,
    "F": 0,
}

DEFAULT_LEAVE_LIST_LIMIT = 200
