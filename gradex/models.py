"""
Data models shared by the grading, aggregation and history modules.

All of them are frozen: a calculation never mutates what it is given, and a
result is never edited after it is produced.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .config import DISPLAY_PRECISION
from .grading import GradeResult, GradeScale, classify_score, round_half_up


@dataclass(frozen=True)
class ScoredCourse:
    """
    One recorded course grade.

    The letter grade is not stored. It is always derived from ``score`` so
    it can never go stale when the score changes; use ``with_score`` to
    record a new score.

    Attributes:
        code: Course code, e.g. "MTH101" (unique within a semester)
        units: Credit units
        score: Numeric score, 0-100
        title, level, semester: display-only fields
    """
    code: str
    units: int
    score: float
    title: str = ""
    level: str = ""
    semester: str = ""

    def grade(self, scale: Optional[GradeScale] = None) -> GradeResult:
        return classify_score(self.score, scale)

    def with_score(self, score: float) -> "ScoredCourse":
        return replace(self, score=score)


@dataclass(frozen=True)
class PriorCumulativeState:
    """Academic history before the semester being aggregated."""
    cumulative_cgpa: float = 0.0
    cumulative_units: int = 0

    @property
    def has_history(self) -> bool:
        return self.cumulative_units > 0


NO_PRIOR = PriorCumulativeState(0.0, 0)


@dataclass(frozen=True)
class CourseBreakdownEntry:
    code: str
    units: int
    score: float
    letter: str
    grade_point: float
    weighted_points: float
    carryover: bool


@dataclass(frozen=True)
class AggregationResult:
    scale: str
    semester_units: int
    semester_points: float
    semester_gpa: float
    prior_cgpa: float
    prior_units: int
    prior_points: float
    cumulative_points: float
    cumulative_units: int
    cumulative_cgpa: float
    breakdown: Tuple[CourseBreakdownEntry, ...] = field(default_factory=tuple)
    steps: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def semester_gpa_display(self) -> float:
        return round_half_up(self.semester_gpa, DISPLAY_PRECISION)

    @property
    def cumulative_cgpa_display(self) -> float:
        return round_half_up(self.cumulative_cgpa, DISPLAY_PRECISION)

    @property
    def carryovers(self) -> Tuple[CourseBreakdownEntry, ...]:
        return tuple(entry for entry in self.breakdown if entry.carryover)

    def as_prior(self) -> PriorCumulativeState:
        """Cumulative state to seed the next semester's aggregation."""
        return PriorCumulativeState(self.cumulative_cgpa, self.cumulative_units)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scale": self.scale,
            "semester_units": self.semester_units,
            "semester_points": self.semester_points,
            "semester_gpa": self.semester_gpa,
            "semester_gpa_display": self.semester_gpa_display,
            "prior_cgpa": self.prior_cgpa,
            "prior_units": self.prior_units,
            "prior_points": self.prior_points,
            "cumulative_points": self.cumulative_points,
            "cumulative_units": self.cumulative_units,
            "cumulative_cgpa": self.cumulative_cgpa,
            "cumulative_cgpa_display": self.cumulative_cgpa_display,
            "carryovers": [entry.code for entry in self.carryovers],
            "breakdown": [
                {
                    "code": e.code,
                    "units": e.units,
                    "score": e.score,
                    "letter": e.letter,
                    "grade_point": e.grade_point,
                    "weighted_points": e.weighted_points,
                    "carryover": e.carryover,
                }
                for e in self.breakdown
            ],
            "steps": list(self.steps),
        }
