"""
Unit tests for grade derivation.
"""

import pytest

from ictreg.modules.results.grading import derive_grade


class TestDeriveGrade:
    """Boundaries are inclusive lower bounds."""

    @pytest.mark.parametrize(
        ("score", "grade"),
        [
            (100, "A"),
            (70, "A"),
            (69, "B"),
            (60, "B"),
            (59.5, "C"),
            (50, "C"),
            (45, "D"),
            (44, "E"),
            (40, "E"),
            (39, "F"),
            (0, "F"),
        ],
    )
    def test_boundaries(self, score, grade):
        assert derive_grade(score) == grade
