import logging
from typing import List, Optional, Sequence

import numpy as np

from .config import DISPLAY_PRECISION, INTERMEDIATE_PRECISION, SCORE_CEILING, SCORE_FLOOR
from .grading import UNN_5_POINT, GradeScale, is_carryover, round_half_up
from .models import (
    NO_PRIOR,
    AggregationResult,
    CourseBreakdownEntry,
    PriorCumulativeState,
    ScoredCourse,
)

logger = logging.getLogger(__name__)


def _keep(x: float) -> float:
    return round_half_up(x, INTERMEDIATE_PRECISION)


def _fmt(x: float) -> str:
    text = f"{x:.{INTERMEDIATE_PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _course_line(course: ScoredCourse, entry: CourseBreakdownEntry) -> str:
    score = f"{course.score:g}"
    if course.score < SCORE_FLOOR or course.score > SCORE_CEILING:
        clamped = min(max(course.score, SCORE_FLOOR), SCORE_CEILING)
        score += f" (clamped to {clamped:g})"

    line = (
        f"{entry.code}: score {score} -> {entry.letter} ({entry.grade_point:.1f} points); "
        f"{entry.units} units x {entry.grade_point:.1f} = {_fmt(entry.weighted_points)}"
    )
    if entry.units == 0:
        line += " (zero units, no effect)"
    if entry.carryover:
        line += " [carryover]"
    return line


# ------------------------
# Core logic
# ------------------------
def aggregate(
    courses: Sequence[ScoredCourse],
    prior: PriorCumulativeState = NO_PRIOR,
    scale: Optional[GradeScale] = None,
) -> AggregationResult:
    """
    Semester GPA and new CGPA for ``courses`` on top of ``prior``.

    Every arithmetic step is written to ``result.steps`` in the order it is
    performed. Empty input and zero units give 0, never an error.
    """
    scale = scale or UNN_5_POINT
    steps: List[str] = [f"Grade scale: {scale.describe()}"]

    # ---- Per-course conversion ----
    breakdown: List[CourseBreakdownEntry] = []
    for course in courses:
        grade = course.grade(scale)
        if course.units == 0:
            logger.warning("Course %s has zero units; it will not affect the GPA", course.code)
        entry = CourseBreakdownEntry(
            code=course.code,
            units=course.units,
            score=course.score,
            letter=grade.letter,
            grade_point=grade.points,
            weighted_points=course.units * grade.points,
            carryover=grade.band == scale.lowest,
        )
        breakdown.append(entry)
        steps.append(_course_line(course, entry))

    if not breakdown:
        steps.append("No courses recorded for this semester.")
        if not prior.has_history:
            steps.append("Nothing to compute: no courses and no prior history.")

    # ---- Semester totals ----
    weighted = np.array([e.weighted_points for e in breakdown], dtype=float)
    semester_units = int(sum(e.units for e in breakdown))
    semester_points = _keep(float(weighted.sum()))
    steps.append(f"Semester totals: {semester_units} units, {_fmt(semester_points)} weighted points")

    if semester_units == 0:
        semester_gpa = 0.0
        steps.append("Semester GPA = 0 (no units this semester)")
    else:
        semester_gpa = _keep(semester_points / semester_units)
        steps.append(
            f"Semester GPA = {_fmt(semester_points)} / {semester_units} = {_fmt(semester_gpa)} "
            f"(displayed {round_half_up(semester_gpa, DISPLAY_PRECISION):.2f})"
        )

    # ---- Prior weighted points ----
    if prior.has_history:
        prior_cgpa = float(prior.cumulative_cgpa)
        prior_units = int(prior.cumulative_units)
        prior_points = _keep(prior_cgpa * prior_units)
        steps.append(f"Prior weighted points = {_fmt(prior_cgpa)} x {prior_units} = {_fmt(prior_points)}")
    else:
        prior_cgpa, prior_units, prior_points = 0.0, 0, 0.0
        steps.append("No prior history (0 units): prior weighted points = 0")

    # ---- New cumulative totals ----
    cumulative_points = _keep(prior_points + semester_points)
    cumulative_units = prior_units + semester_units
    steps.append(
        f"Cumulative weighted points = {_fmt(prior_points)} + {_fmt(semester_points)} = {_fmt(cumulative_points)}"
    )
    steps.append(f"Cumulative units = {prior_units} + {semester_units} = {cumulative_units}")

    # ---- New CGPA ----
    if cumulative_units == 0:
        cumulative_cgpa = 0.0
        steps.append("CGPA = 0 (no units recorded)")
    elif semester_units == 0:
        # Prior CGPA passes through as given, not re-rounded
        cumulative_cgpa = prior_cgpa
        steps.append(
            f"CGPA unchanged = {prior_cgpa} (no units this semester, "
            f"displayed {round_half_up(cumulative_cgpa, DISPLAY_PRECISION):.2f})"
        )
    else:
        cumulative_cgpa = _keep(cumulative_points / cumulative_units)
        steps.append(
            f"CGPA = {_fmt(cumulative_points)} / {cumulative_units} = {_fmt(cumulative_cgpa)} "
            f"(displayed {round_half_up(cumulative_cgpa, DISPLAY_PRECISION):.2f})"
        )

    logger.debug(
        "Aggregated %d courses: GPA %s over %d units, CGPA %s over %d units",
        len(breakdown), semester_gpa, semester_units, cumulative_cgpa, cumulative_units,
    )

    return AggregationResult(
        scale=scale.name,
        semester_units=semester_units,
        semester_points=semester_points,
        semester_gpa=semester_gpa,
        prior_cgpa=prior_cgpa,
        prior_units=prior_units,
        prior_points=prior_points,
        cumulative_points=cumulative_points,
        cumulative_units=cumulative_units,
        cumulative_cgpa=cumulative_cgpa,
        breakdown=tuple(breakdown),
        steps=tuple(steps),
    )


def calculate_gpa(courses: Sequence[ScoredCourse], scale: Optional[GradeScale] = None) -> float:
    """GPA of ``courses`` alone, i.e. aggregate() with no prior history."""
    return aggregate(courses, NO_PRIOR, scale).semester_gpa


def carryover_courses(
    courses: Sequence[ScoredCourse], scale: Optional[GradeScale] = None
) -> List[ScoredCourse]:
    return [c for c in courses if is_carryover(c.score, scale)]
