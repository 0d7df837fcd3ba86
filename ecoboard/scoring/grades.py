"""Letter grades for composite scores."""

from typing import List, Literal, Tuple


ScoreDirection = Literal["lower_is_better", "higher_is_better"]

# (minimum score, grade), checked top-down with >=
GRADE_THRESHOLDS: List[Tuple[float, str]] = [
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (75, "B+"),
    (70, "B"),
    (65, "B-"),
    (60, "C+"),
    (55, "C"),
    (50, "C-"),
    (45, "D+"),
    (40, "D"),
]
FAILING_GRADE = "F"

GRADE_ORDER: List[str] = [g for _, g in GRADE_THRESHOLDS] + [FAILING_GRADE]


def classify_grade(score: float) -> str:
    """Map a higher-is-better score in [0, 100] to a letter grade."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return FAILING_GRADE


def display_score(composite: float, direction: ScoreDirection = "lower_is_better") -> float:
    """
    Convert a stored composite to the higher-is-better display scale.

    Stored composites are lower-is-better; this is the only place the
    inversion happens.
    """
    if direction == "lower_is_better":
        return 100.0 - composite
    return composite


def grade_for_composite(composite: float, direction: ScoreDirection = "lower_is_better") -> str:
    return classify_grade(display_score(composite, direction))


def grade_band(grade: str) -> str:
    """Letter family of a grade ("A-" -> "A"); unknown grades map to "?"."""
    if not grade:
        return "?"
    letter = grade[0].upper()
    return letter if letter in "ABCDF" else "?"
