"""
Grade derivation.
"""

# Lower bound (inclusive) -> grade, checked top down
GRADE_BOUNDARIES: tuple[tuple[float, str], ...] = (
    (70, "A"),
    (60, "B"),
    (50, "C"),
    (45, "D"),
    (40, "E"),
)
FAIL_GRADE = "F"


def derive_grade(score: float) -> str:
    """Letter grade for a 0-100 score: >=70 A, >=60 B, >=50 C, >=45 D, >=40 E, else F."""
    for lower_bound, grade in GRADE_BOUNDARIES:
        if score >= lower_bound:
            return grade
    return FAIL_GRADE
