from typing import Tuple

from schemas import Grade

# Upper bounds (exclusive) in ascending order; first match wins
GRADE_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (0.5, 'A+'),
    (1.0, 'A'),
    (2.0, 'B'),
    (3.0, 'C'),
    (4.0, 'D'),
)
WORST_GRADE = 'F'
GRADES = tuple(g for _, g in GRADE_THRESHOLDS) + (WORST_GRADE,)

GRADE_COLORS = {
    'A+': 'text-green-600',
    'A': 'text-green-500',
    'B': 'text-yellow-500',
    'C': 'text-orange-500',
    'D': 'text-red-500',
    'F': 'text-red-600',
}
DEFAULT_GRADE_COLOR = 'text-gray-500'

# Podium shading for ranking positions 1..7
RANKING_COLORS = (
    'bg-green-700', 'bg-green-600', 'bg-green-500', 'bg-green-400',
    'bg-green-300', 'bg-green-200', 'bg-green-100',
)
DEFAULT_RANKING_COLOR = 'bg-gray-200 text-gray-800'


def classify(grams: float) -> Grade:
    """
    Map an emissions value to a letter grade.

    The same thresholds apply to every emissions model even though their
    outputs are not unit-comparable.
    """
    for bound, grade in GRADE_THRESHOLDS:
        if grams < bound:
            return grade
    return WORST_GRADE


def grade_rank(grade: str) -> int:
    """0 for the best grade, 5 for the worst."""
    return GRADES.index(grade)


def grade_color(grade: str) -> str:
    return GRADE_COLORS.get(grade, DEFAULT_GRADE_COLOR)


def ranking_color(position: int) -> str:
    if 1 <= position <= len(RANKING_COLORS):
        return RANKING_COLORS[position - 1]
    return DEFAULT_RANKING_COLOR
